"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from bfhl_api.api.routes import bfhl_router, health_router
from bfhl_api.core.config import settings
from bfhl_api.core.exception_handlers import setup_exception_handlers
from bfhl_api.core.logging import configure_logging
from bfhl_api.core.middleware import request_id_middleware
from bfhl_api.core.rate_limit import rate_limit_middleware
from bfhl_api.core.service_identity import warn_if_unconfigured


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Middleware order (outermost first): CORS, request id, rate limit.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)
    warn_if_unconfigured()

    app = FastAPI(
        title="BFHL API",
        description=(
            "Single-endpoint API: POST /bfhl accepts exactly one of fibonacci, "
            "prime, lcm, hcf or AI and answers with a uniform JSON envelope."
        ),
        version="1.0.0",
    )

    # Last added runs first.
    app.add_middleware(BaseHTTPMiddleware, dispatch=rate_limit_middleware)
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.log.request_id_header, "X-Error-Code", "Retry-After"],
    )

    setup_exception_handlers(app)

    app.include_router(bfhl_router)
    app.include_router(health_router)

    return app
