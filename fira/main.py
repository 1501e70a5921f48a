"""
FIRA Marketplace API

Run with: uvicorn fira.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from fira.platform.app_factory import create_app
from fira.platform.config.core_setting import settings
from fira.platform.config.di import cleanup, container
from fira.platform.config.wire_modules import WIRE_MODULES
from fira.platform.database.orm_db_setting import dispose_engine, get_engine
from fira.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [FIRA] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [FIRA] Dependency injection wired')

    get_engine()
    Logger.base.info('🗄️  [FIRA] Database engine ready')

    if not settings.payment_gateway_configured:
        Logger.base.warning('⚠️  [FIRA] Razorpay keys missing; paid checkouts will answer 503')

    Logger.base.info('✅ [FIRA] Ready to serve requests')
    yield

    Logger.base.info('🛑 [FIRA] Shutting down...')
    try:
        await cleanup()
        Logger.base.info('💳 [FIRA] Payment gateway client closed')
    except Exception as e:
        Logger.base.error(f'❌ [FIRA] Failed to close payment gateway client: {e}')

    await dispose_engine()
    Logger.base.info('🗄️  [FIRA] Database engine disposed')

    container.unwire()
    Logger.base.info('👋 [FIRA] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
