"""
Production FastAPI Application

Marketplace API plus the background reservation sweeper.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.marketplace.driving_adapter.reservation_sweeper import ReservationSweeper


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Marketplace] Starting up...')

    tracing = TracingConfig(service_name='marketplace-service')
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Marketplace] Dependency injection wired')

    await create_db_and_tables()
    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Marketplace] Database ready + instrumented')

    async with anyio.create_task_group() as tg:
        ReservationSweeper().start(task_group=tg)
        Logger.base.info('✅ [Marketplace] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Marketplace] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engine()
    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Marketplace] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
