from typing import Optional

import attrs

from src.service.marketplace.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class Caller:
    """Authenticated principal of a request; identity comes from the upstream gateway"""

    user_id: Optional[str]
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    def owns(self, owner_id: Optional[str]) -> bool:
        return owner_id is not None and self.user_id == owner_id
