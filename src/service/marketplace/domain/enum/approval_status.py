from enum import StrEnum


class ApprovalStatus(StrEnum):
    """Moderation outcome shared by events and organizer requests"""

    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
