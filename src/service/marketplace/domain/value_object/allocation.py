from typing import Optional

import attrs


@attrs.frozen
class Allocation:
    """
    Record of stock taken by one reservation

    ticket_type_id and batch_id name the exact counter that was decremented,
    so a release puts the tickets back where they came from.
    """

    event_id: str
    quantity: int
    ticket_type_id: Optional[str] = None
    batch_id: Optional[str] = None

    @property
    def lock_key(self) -> str:
        return inventory_lock_key(event_id=self.event_id)


def inventory_lock_key(*, event_id: str) -> str:
    # Every counter cascades into the event totals, so one event is one writer
    return f'event:{event_id}'
