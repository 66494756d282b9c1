"""
Production FastAPI Application

Pricing engine: quote API for the booking workflow and UI, coupon commit API for the
booking workflow.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.asyncpg_setting import close_all_asyncpg_pools, get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Pricing Engine] Starting up...')

    tracing = TracingConfig(service_name='pricing-engine')
    tracing.setup()
    Logger.base.info('📊 [Pricing Engine] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Pricing Engine] Dependency injection wired')

    use_postgres = settings.PRICING_STORE_BACKEND == 'postgres'
    if use_postgres:
        tracing.instrument_asyncpg()
        # Eager initialization (fail-fast)
        await get_asyncpg_pool()
        Logger.base.info('🏊 [Pricing Engine] Asyncpg pool initialized')
    else:
        Logger.base.warning('🧪 [Pricing Engine] Using in-memory store backend')

    Logger.base.info('✅ [Pricing Engine] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Pricing Engine] Shutting down...')

    if use_postgres:
        await close_all_asyncpg_pools()
        Logger.base.info('🏊 [Pricing Engine] Asyncpg pools closed')

    # Flush remaining spans
    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Pricing Engine] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
