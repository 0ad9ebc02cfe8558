from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class IInventoryLock(ABC):
    """
    Serializes reserve / release on the inventory counters of one event

    Keys come from Allocation.lock_key (one per event: batch and ticket type
    changes cascade into the event totals). Acquisition is bounded; on timeout
    BusyError is raised.
    """

    @abstractmethod
    def hold(self, *, key: str) -> AbstractAsyncContextManager[None]:
        pass
