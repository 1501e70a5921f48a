"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from fira.platform.config.core_setting import settings
from fira.platform.exception.exception_handlers import register_exception_handlers
from fira.service.notification.driving_adapter.http_controller.notification_controller import (
    router as notification_router,
)
from fira.service.payment.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from fira.service.ticketing.driving_adapter.http_controller.event_controller import (
    router as event_router,
)
from fira.service.ticketing.driving_adapter.http_controller.ticket_controller import (
    router as ticket_router,
)
from fira.service.venue_booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from fira.service.venue_booking.driving_adapter.http_controller.venue_controller import (
    router as venue_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]] | None = None,
    title_suffix: str = '',
    description: str = 'Event and venue marketplace',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(event_router, prefix='/api/event', tags=['event'])
    app.include_router(ticket_router, prefix='/api/ticket', tags=['ticket'])
    app.include_router(payment_router, prefix='/api/payment', tags=['payment'])
    app.include_router(notification_router, prefix='/api/notification', tags=['notification'])
    app.include_router(booking_router, prefix='/api/booking', tags=['booking'])
    app.include_router(venue_router, prefix='/api/venue', tags=['venue'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
