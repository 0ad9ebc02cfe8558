"""
Role checks on the caller identity forwarded by the upstream gateway

Identity is asserted in the `X-User-Id` / `X-User-Role` headers; this layer only
answers "may this caller do this", it does not authenticate anyone.
"""

from typing import Optional

from fastapi import Depends, Header
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError, ValidationError
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.user_role import UserRole


class RoleAuthStrategy:
    @staticmethod
    def can_manage_events(caller: Caller) -> bool:
        return caller.role in (UserRole.ORGANIZER, UserRole.ADMIN)

    @staticmethod
    def can_check_in(caller: Caller) -> bool:
        return caller.role in (UserRole.STAFF, UserRole.ADMIN)

    @staticmethod
    def is_admin(caller: Caller) -> bool:
        return caller.role == UserRole.ADMIN


async def get_current_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Caller:
    user_id = x_user_id.strip() if x_user_id and x_user_id.strip() else None
    if not x_user_role:
        return Caller(user_id=user_id)
    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError:
        raise ValidationError(f'Unknown role {x_user_role}') from None
    if user_id is None and role != UserRole.USER:
        raise ForbiddenError('A privileged role needs a user id')
    return Caller(user_id=user_id, role=role)


async def require_signed_in(caller: Caller = Depends(get_current_caller)) -> Caller:
    if caller.is_anonymous:
        raise ForbiddenError('Sign in to perform this action')
    return caller


async def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={'user.id': caller.user_id or '', 'user.role': caller.role.value},
    ):
        if not RoleAuthStrategy.is_admin(caller):
            raise ForbiddenError('Only admins can perform this action')
        return caller


async def require_staff(caller: Caller = Depends(get_current_caller)) -> Caller:
    if not RoleAuthStrategy.can_check_in(caller):
        raise ForbiddenError('Only staff can check in tickets')
    return caller


async def require_organizer_or_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    if not RoleAuthStrategy.can_manage_events(caller):
        raise ForbiddenError('Only organizers and admins can perform this action')
    return caller
