from decimal import Decimal
from typing import Dict, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.commission_settings_entity import CommissionSettings


class UpdateCommissionSettingsUseCase:
    """New rates apply to events created afterwards; existing events keep their captured rate"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update(
        self, *, default_rate: Decimal, category_rates: Optional[Dict[str, Decimal]] = None
    ) -> CommissionSettings:
        commission_settings = CommissionSettings.create(
            default_rate=default_rate, category_rates=category_rates
        )
        async with self.uow:
            await self.uow.commission_settings_repo.save(settings=commission_settings)
            await self.uow.commit()
        return commission_settings
