"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.marketplace.driven_adapter.model.commission_settings_model import (
    CommissionSettingsModel,
)
from src.service.marketplace.driven_adapter.model.event_model import (
    EventModel,
    TicketBatchModel,
    TicketTypeModel,
)
from src.service.marketplace.driven_adapter.model.order_model import OrderModel
from src.service.marketplace.driven_adapter.model.organizer_model import (
    OrganizerModel,
    OrganizerRequestModel,
)

__all__ = [
    'CommissionSettingsModel',
    'EventModel',
    'OrderModel',
    'OrganizerModel',
    'OrganizerRequestModel',
    'TicketBatchModel',
    'TicketTypeModel',
]
