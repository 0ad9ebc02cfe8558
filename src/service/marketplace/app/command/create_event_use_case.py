from datetime import date, time
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.user_role import UserRole
from src.service.marketplace.domain.value_object.money import Money


class CreateEventUseCase:
    """
    Create a catalog event in `pending` moderation status

    - Organizers must hold an active organizer record and own the new event
    - Admins may create events on behalf of the platform (no owner)
    - The commission rate for the event's category is captured at creation
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_event(
        self,
        *,
        caller: Caller,
        title: str,
        event_date: date,
        location: str,
        price: Decimal,
        total_tickets: int,
        available_tickets: Optional[int] = None,
        description: str = '',
        event_time: Optional[time] = None,
        category: str = '',
        image: str = '',
    ) -> Event:
        async with self.uow:
            organizer = None
            if caller.role == UserRole.ORGANIZER:
                organizer = await self.uow.organizer_repo.get_organizer_by_user_id(
                    user_id=caller.user_id or ''
                )
                if organizer is None:
                    raise ForbiddenError('Only approved organizers can create events')
                if not organizer.is_active:
                    raise ForbiddenError('Suspended organizers cannot create events')
            elif not caller.is_admin:
                raise ForbiddenError('Only organizers and admins can create events')

            commission_settings = await self.uow.commission_settings_repo.get()
            event = Event.create(
                title=title,
                event_date=event_date,
                location=location,
                price=Money(price),
                total_tickets=total_tickets,
                available_tickets=available_tickets,
                description=description,
                event_time=event_time,
                category=category,
                image=image,
                organizer_id=organizer.user_id if organizer else None,
                commission_rate=commission_settings.rate_for(category),
            )
            await self.uow.event_repo.save(event=event)

            if organizer is not None:
                await self.uow.organizer_repo.save_organizer(
                    organizer=organizer.record_event_created()
                )

            await self.uow.commit()

        Logger.base.info(f'🎫 [EVENT] Created {event.title} ({event.id}) pending review')
        return event
