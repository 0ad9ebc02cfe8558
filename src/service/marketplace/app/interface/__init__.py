"""Application layer interfaces (Ports)"""

from src.service.marketplace.app.interface.i_commission_settings_repo import (
    ICommissionSettingsRepo,
)
from src.service.marketplace.app.interface.i_event_repo import IEventRepo
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock
from src.service.marketplace.app.interface.i_order_repo import IOrderRepo
from src.service.marketplace.app.interface.i_organizer_repo import IOrganizerRepo
from src.service.marketplace.app.interface.i_refund_payout_gateway import IRefundPayoutGateway

__all__ = [
    'ICommissionSettingsRepo',
    'IEventRepo',
    'IInventoryLock',
    'IOrderRepo',
    'IOrganizerRepo',
    'IRefundPayoutGateway',
]
