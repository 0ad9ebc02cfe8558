"""
Test-specific FastAPI Application

Same routers and middleware as production, without tracing export and
without the background reservation sweeper.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🧪 [Test App] Starting up...')

    # Fresh in-memory database for this client's event loop
    await create_db_and_tables()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('✅ [Test App] Startup complete (no sweeper)')

    yield

    await dispose_engine()
    container.unwire()
    Logger.base.info('👋 [Test App] Shutdown complete')


app = create_app(
    lifespan=lifespan_for_tests,
    title_suffix=' (Test)',
    description='Test Application - no background sweeper',
    service_name='test-marketplace-service',
)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
