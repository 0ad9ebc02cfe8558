from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.marketplace.domain.entity.organizer_entity import Organizer, OrganizerRequest
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus


class IOrganizerRepo(ABC):
    """Organizer applications and the organizer records created from approved ones"""

    @abstractmethod
    async def get_request(self, *, request_id: str) -> Optional[OrganizerRequest]:
        pass

    @abstractmethod
    async def save_request(self, *, request: OrganizerRequest) -> OrganizerRequest:
        pass

    @abstractmethod
    async def list_requests(
        self, *, status: Optional[ApprovalStatus] = None, user_id: Optional[str] = None
    ) -> List[OrganizerRequest]:
        pass

    @abstractmethod
    async def get_organizer(self, *, organizer_id: str) -> Optional[Organizer]:
        pass

    @abstractmethod
    async def get_organizer_by_user_id(self, *, user_id: str) -> Optional[Organizer]:
        pass

    @abstractmethod
    async def save_organizer(self, *, organizer: Organizer) -> Organizer:
        pass

    @abstractmethod
    async def list_organizers(self) -> List[Organizer]:
        pass
