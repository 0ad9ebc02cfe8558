"""Marketplace Domain Enums"""

from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.enum.order_status import OrderStatus, RefundStatus
from src.service.marketplace.domain.enum.user_role import UserRole

__all__ = ['ApprovalStatus', 'OrderStatus', 'RefundStatus', 'UserRole']
