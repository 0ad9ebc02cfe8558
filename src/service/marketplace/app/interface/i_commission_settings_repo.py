from abc import ABC, abstractmethod

from src.service.marketplace.domain.entity.commission_settings_entity import CommissionSettings


class ICommissionSettingsRepo(ABC):
    @abstractmethod
    async def get(self) -> CommissionSettings:
        """Current settings; falls back to the configured defaults"""
        pass

    @abstractmethod
    async def save(self, *, settings: CommissionSettings) -> CommissionSettings:
        pass
