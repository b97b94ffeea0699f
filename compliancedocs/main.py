"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
See compliancedocs.core.lifespan and compliancedocs.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from compliancedocs.api.router import api_router
from compliancedocs.core.config import get_settings
from compliancedocs.core.exception_handlers import register_exception_handlers
from compliancedocs.core.lifespan import create_lifespan
from compliancedocs.core.limiter import configure_limiter
from compliancedocs.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = configure_limiter(settings.rate_limit_enabled)

    register_exception_handlers(app)

    # Last added = outermost: size limit -> request ID -> security headers -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", settings.request_id_header],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=not settings.debug)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(
        RequestSizeLimitMiddleware, max_upload_size=settings.max_upload_size
    )

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
