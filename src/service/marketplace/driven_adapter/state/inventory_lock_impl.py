"""
In-process inventory lock registry

One anyio.Lock per inventory key. Acquisition is bounded by fail_after so a
hot event answers BusyError instead of queueing requests indefinitely.
Multi-process deployments additionally rely on the row lock taken by
IEventRepo.get_by_id(for_update=True).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

import anyio

from src.platform.exception.exceptions import BusyError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock


class InventoryLockImpl(IInventoryLock):
    def __init__(self, *, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[str, anyio.Lock] = {}

    def _lock_for(self, key: str) -> anyio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = anyio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, *, key: str) -> AsyncIterator[None]:
        lock = self._lock_for(key)
        try:
            with anyio.fail_after(self.timeout_seconds):
                await lock.acquire()
        except TimeoutError:
            Logger.base.warning(f'🔒 [INVENTORY] Lock {key} busy for {self.timeout_seconds}s')
            raise BusyError(f'Inventory for {key} is busy, please retry')

        try:
            yield
        finally:
            lock.release()
