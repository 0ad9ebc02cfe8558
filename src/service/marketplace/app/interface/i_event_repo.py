from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus


class IEventRepo(ABC):
    """Stores the Event aggregate with its ticket types and batches as one unit"""

    @abstractmethod
    async def get_by_id(self, *, event_id: str, for_update: bool = False) -> Optional[Event]:
        """
        Load the full aggregate

        Args:
            event_id: Event id
            for_update: Take a row lock on the event until the transaction ends
        """
        pass

    @abstractmethod
    async def save(self, *, event: Event) -> Event:
        """Insert or update the event row and every ticket type / batch row under it"""
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        status: Optional[ApprovalStatus] = None,
        organizer_id: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Event]:
        """
        List events, soonest date first

        Args:
            status: Only events in this moderation status
            organizer_id: Only events owned by this organizer
            category: Case-insensitive category match
            search: Case-insensitive substring of title or description
        """
        pass
