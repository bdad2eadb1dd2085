"""
FastAPI Application Factory

Creates and configures the report gateway application.
"""

from typing import Any, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from apre.config import get_settings
from apre.errors import register_exception_handlers
from apre.serving.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from apre.serving.api.routes import (
    health_router,
    customer_feedback_router,
    sales_router,
)

settings = get_settings()


def create_api_app(lifespan: Optional[Callable[[FastAPI], Any]] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        lifespan: Optional lifespan handler managing the database client

    Returns:
        Configured FastAPI app instance
    """
    prefix = settings.api_prefix.rstrip("/")

    app = FastAPI(
        title="APRE Reporting API",
        description="Canned business reports over customer feedback and sales",
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix=prefix, tags=["Health"])
    app.include_router(
        customer_feedback_router,
        prefix=f"{prefix}/reports/customer-feedback",
        tags=["Customer Feedback"],
    )
    app.include_router(sales_router, prefix=f"{prefix}/reports/sales", tags=["Sales"])

    @app.get(f"{prefix}/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": "APRE Reporting API",
            "version": settings.version,
            "environment": settings.app_env,
            "documentation": "/docs" if settings.is_development else None,
        }

    return app
