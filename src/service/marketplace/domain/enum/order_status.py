from enum import StrEnum


class OrderStatus(StrEnum):
    RESERVED = 'reserved'
    CONFIRMED = 'confirmed'
    USED = 'used'
    REFUND_REQUESTED = 'refund_requested'
    REFUND_APPROVED = 'refund_approved'
    REFUND_REJECTED = 'refund_rejected'
    EXPIRED = 'expired'
    CANCELLED = 'cancelled'


class RefundStatus(StrEnum):
    NONE = 'none'
    REQUESTED = 'requested'
    APPROVED = 'approved'
    REJECTED = 'rejected'


# Orders whose money stays with the organizer
PAID_STATUSES = frozenset(
    {
        OrderStatus.CONFIRMED,
        OrderStatus.USED,
        OrderStatus.REFUND_REQUESTED,
        OrderStatus.REFUND_REJECTED,
    }
)

# Orders that still hold inventory
HOLDING_STATUSES = PAID_STATUSES | {OrderStatus.RESERVED}
