"""
Unit of Work Pattern - one database session and transaction per business operation

Architecture:
- UoW owns the session lifecycle and commit/rollback
- Repositories are created per UoW and share its session
- Use cases coordinate several repositories inside one `async with uow:` block

Anything not committed before the block exits is rolled back.
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import Database


if TYPE_CHECKING:
    from src.service.marketplace.app.interface.i_commission_settings_repo import (
        ICommissionSettingsRepo,
    )
    from src.service.marketplace.app.interface.i_event_repo import IEventRepo
    from src.service.marketplace.app.interface.i_order_repo import IOrderRepo
    from src.service.marketplace.app.interface.i_organizer_repo import IOrganizerRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            event = await uow.event_repo.get_by_id(event_id=..., for_update=True)
            ...
            await uow.event_repo.save(event=event)
            await uow.commit()
    """

    event_repo: IEventRepo
    order_repo: IOrderRepo
    organizer_repo: IOrganizerRepo
    commission_settings_repo: ICommissionSettingsRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, *, database: Database) -> None:
        self.database = database
        self.session: Optional[AsyncSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.marketplace.driven_adapter.repo.commission_settings_repo_impl import (
            CommissionSettingsRepoImpl,
        )
        from src.service.marketplace.driven_adapter.repo.event_repo_impl import EventRepoImpl
        from src.service.marketplace.driven_adapter.repo.order_repo_impl import OrderRepoImpl
        from src.service.marketplace.driven_adapter.repo.organizer_repo_impl import (
            OrganizerRepoImpl,
        )

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.database.session())

        # Repositories share the UoW session
        self.event_repo = EventRepoImpl(session=self.session)
        self.order_repo = OrderRepoImpl(session=self.session)
        self.organizer_repo = OrganizerRepoImpl(session=self.session)
        self.commission_settings_repo = CommissionSettingsRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
            self._exit_stack = None
            self.session = None

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside of `async with`')
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
