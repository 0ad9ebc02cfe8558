from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import settings as app_settings
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import as_utc
from src.service.marketplace.app.interface.i_commission_settings_repo import (
    ICommissionSettingsRepo,
)
from src.service.marketplace.domain.entity.commission_settings_entity import CommissionSettings
from src.service.marketplace.driven_adapter.model.commission_settings_model import (
    CommissionSettingsModel,
)


_SINGLETON_ID = 1


class CommissionSettingsRepoImpl(ICommissionSettingsRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get(self) -> CommissionSettings:
        model = await self.session.get(CommissionSettingsModel, _SINGLETON_ID)
        if model is None:
            return CommissionSettings.create(
                default_rate=app_settings.DEFAULT_COMMISSION_RATE,
                category_rates=app_settings.CATEGORY_COMMISSION_RATES,
            )
        return CommissionSettings(
            default_rate=model.default_rate,
            category_rates={key: Decimal(value) for key, value in model.category_rates.items()},
            updated_at=as_utc(model.updated_at) if model.updated_at else None,
        )

    @Logger.io
    async def save(self, *, settings: CommissionSettings) -> CommissionSettings:
        model = await self.session.get(CommissionSettingsModel, _SINGLETON_ID)
        if model is None:
            model = CommissionSettingsModel(id=_SINGLETON_ID)
            self.session.add(model)
        model.default_rate = settings.default_rate
        model.category_rates = {key: str(value) for key, value in settings.category_rates.items()}
        model.updated_at = settings.updated_at
        await self.session.flush()
        return settings
