"""
Conftest for pure unit tests - no database, no FastAPI app.

Use cases run against a unit of work whose repositories are AsyncMocks.
"""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.marketplace.driven_adapter.state.inventory_lock_impl import InventoryLockImpl


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.event_repo = AsyncMock()
        self.order_repo = AsyncMock()
        self.organizer_repo = AsyncMock()
        self.commission_settings_repo = AsyncMock()
        self.commits = 0
        self.rollbacks = 0

    async def _commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def inventory_lock() -> InventoryLockImpl:
    return InventoryLockImpl(timeout_seconds=0.5)


@pytest.fixture
def upcoming_date() -> date:
    """Use cases read the wall clock, so their events must lie in the real future"""
    return date.today() + timedelta(days=30)
