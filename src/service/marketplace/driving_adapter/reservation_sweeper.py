"""
Reservation Sweeper

Periodic driver for ExpireReservationsUseCase, started in the application
lifespan task group and stopped by cancelling that group.
"""

import anyio
from anyio.abc import TaskGroup

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.expire_reservations_use_case import (
    ExpireReservationsUseCase,
)


class ReservationSweeper:
    def __init__(self, *, interval_seconds: float = settings.RESERVATION_SWEEP_INTERVAL_SECONDS):
        self.interval_seconds = interval_seconds

    def _use_case(self) -> ExpireReservationsUseCase:
        return ExpireReservationsUseCase(
            uow=container.unit_of_work(), inventory_lock=container.inventory_lock()
        )

    async def sweep_once(self) -> int:
        expired = await self._use_case().expire_overdue()
        return len(expired)

    async def run(self) -> None:
        Logger.base.info(
            f'🧹 [SWEEPER] Started, expiring unpaid reservations every {self.interval_seconds}s'
        )
        while True:
            try:
                await self.sweep_once()
            except CustomBaseError as e:
                Logger.base.error(f'❌ [SWEEPER] Sweep failed: {e.message}')
            await anyio.sleep(self.interval_seconds)

    def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self.run)
