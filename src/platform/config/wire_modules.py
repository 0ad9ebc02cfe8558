"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.marketplace.app.command import (
    add_batch_use_case,
    add_ticket_type_use_case,
    cancel_reservation_use_case,
    check_in_use_case,
    confirm_payment_use_case,
    create_event_use_case,
    expire_reservations_use_case,
    request_refund_use_case,
    reserve_tickets_use_case,
    resolve_refund_use_case,
    review_event_use_case,
    review_organizer_request_use_case,
    submit_organizer_request_use_case,
    update_commission_settings_use_case,
    update_event_visibility_use_case,
    update_organizer_status_use_case,
)
from src.service.marketplace.app.query import (
    get_commission_settings_use_case,
    get_event_report_use_case,
    get_order_use_case,
    get_platform_report_use_case,
    list_events_use_case,
    list_organizers_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    # Catalog
    create_event_use_case,
    add_ticket_type_use_case,
    add_batch_use_case,
    review_event_use_case,
    update_event_visibility_use_case,
    list_events_use_case,
    # Orders
    reserve_tickets_use_case,
    confirm_payment_use_case,
    cancel_reservation_use_case,
    expire_reservations_use_case,
    check_in_use_case,
    request_refund_use_case,
    resolve_refund_use_case,
    get_order_use_case,
    get_event_report_use_case,
    get_platform_report_use_case,
    # Organizers & platform settings
    submit_organizer_request_use_case,
    review_organizer_request_use_case,
    update_organizer_status_use_case,
    list_organizers_use_case,
    update_commission_settings_use_case,
    get_commission_settings_use_case,
]
