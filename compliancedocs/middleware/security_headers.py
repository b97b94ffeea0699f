"""Security headers middleware (raw ASGI).

The interactive API docs load scripts and styles from a CDN, so they get a
relaxed Content-Security-Policy; every other response gets "default-src 'none'".
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


def SecurityHeadersMiddleware(
    app: Callable,
    headers: dict[str, str] | None = None,
    hsts: bool = False,
) -> Callable:
    """Add security headers unless the endpoint already set them. HSTS only when hsts is True."""
    resolved = dict(headers if headers is not None else DEFAULT_HEADERS)
    if hsts:
        resolved["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    base = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]
    docs = [h for h in base if h[0] != b"content-security-policy"]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        extra = docs if scope.get("path", "").startswith(DOCS_PATHS) else base

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in extra if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
