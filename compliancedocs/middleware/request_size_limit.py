"""Request body size limit middleware (raw ASGI).

Rejects oversized bodies with 413 before the endpoint parses them: up front
from Content-Length, otherwise while counting streamed chunks. The limit is
MAX_UPLOAD_SIZE plus a small allowance for multipart framing and form fields;
the file store enforces the exact per-file limit.
"""

import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)

MULTIPART_OVERHEAD = 1024 * 1024


def _content_length(scope: dict) -> int | None:
    for k, v in scope.get("headers", []):
        if k.lower() == b"content-length":
            try:
                return int(v)
            except ValueError:
                return None
    return None


async def _send_413(send: Callable, max_bytes: int) -> None:
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes},
        }
    ).encode()
    await send(
        {
            "type": "http.response.start",
            "status": 413,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(
    app: Callable, max_upload_size: int, overhead: int = MULTIPART_OVERHEAD
) -> Callable:
    """Enforce max_upload_size + overhead bytes per request body.

    For streamed bodies the 413 is sent as soon as the limit is crossed; the
    app then sees a client disconnect and anything it sends is dropped.
    """
    max_bytes = max_upload_size + overhead

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        declared = _content_length(scope)
        if declared is not None and declared > max_bytes:
            await _send_413(send, max_bytes)
            return

        received = 0
        response_started = False
        rejected = False

        async def counting_receive() -> dict:
            nonlocal received, rejected
            if rejected:
                return {"type": "http.disconnect"}
            message = await receive()
            if message["type"] == "http.request" and not response_started:
                received += len(message.get("body", b""))
                if received > max_bytes:
                    rejected = True
                    await _send_413(send, max_bytes)
                    return {"type": "http.disconnect"}
            return message

        async def guarded_send(message: dict) -> None:
            nonlocal response_started
            if rejected:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await app(scope, counting_receive, guarded_send)
        except Exception:
            if not rejected:
                raise
            logger.info(
                "Rejected %s %s: body exceeded %d bytes",
                scope.get("method"),
                scope.get("path"),
                max_bytes,
            )

    return asgi_app
