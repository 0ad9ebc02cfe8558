from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field

from src.service.marketplace.domain.entity.commission_settings_entity import CommissionSettings


class CommissionSettingsRequest(BaseModel):
    default_rate: Decimal = Field(ge=0, le=100)
    category_rates: Dict[str, Decimal] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            'example': {
                'default_rate': '5',
                'category_rates': {'music': '5', 'theater': '4', 'sports': '6', 'conference': '5'},
            }
        }


class CommissionSettingsResponse(BaseModel):
    default_rate: Decimal
    category_rates: Dict[str, Decimal]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, settings: CommissionSettings) -> 'CommissionSettingsResponse':
        return cls(
            default_rate=settings.default_rate,
            category_rates=dict(settings.category_rates),
            updated_at=settings.updated_at,
        )
