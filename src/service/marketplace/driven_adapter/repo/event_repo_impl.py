"""
Event Repository Implementation - SQLAlchemy

The aggregate maps onto three tables (event, ticket_type, ticket_batch);
save() upserts all of them inside the caller's transaction.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import as_utc
from src.service.marketplace.app.interface.i_event_repo import IEventRepo
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.entity.ticket_type_entity import TicketType
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.value_object.money import Money
from src.service.marketplace.driven_adapter.model.event_model import (
    EventModel,
    TicketBatchModel,
    TicketTypeModel,
)


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    return as_utc(value) if value is not None else None


class EventRepoImpl(IEventRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _model_to_batch(model: TicketBatchModel) -> TicketBatch:
        return TicketBatch(
            id=model.id,
            name=model.name,
            price=Money(model.price),
            quantity=model.quantity,
            available_quantity=model.available_quantity,
            start_at=model.start_at,
            end_at=model.end_at,
            sequence=model.sequence,
        )

    @classmethod
    def _model_to_ticket_type(cls, model: TicketTypeModel) -> TicketType:
        return TicketType(
            id=model.id,
            name=model.name,
            price=Money(model.price),
            total_tickets=model.total_tickets,
            available_tickets=model.available_tickets,
            description=model.description,
            allow_half_price=model.allow_half_price,
            batches=[cls._model_to_batch(batch) for batch in model.batches],
        )

    @classmethod
    def _model_to_entity(cls, model: EventModel) -> Event:
        return Event(
            id=model.id,
            title=model.title,
            description=model.description,
            event_date=model.event_date,
            event_time=model.event_time,
            location=model.location,
            category=model.category,
            image=model.image,
            price=Money(model.price),
            total_tickets=model.total_tickets,
            available_tickets=model.available_tickets,
            organizer_id=model.organizer_id,
            status=ApprovalStatus(model.status) if model.status else None,
            rejection_reason=model.rejection_reason,
            is_visible=model.is_visible,
            commission_rate=model.commission_rate,
            ticket_types=[cls._model_to_ticket_type(t) for t in model.ticket_types],
            created_at=_utc(model.created_at),
            updated_at=_utc(model.updated_at),
        )

    @staticmethod
    def _apply_event(model: EventModel, event: Event) -> None:
        model.title = event.title
        model.description = event.description
        model.event_date = event.event_date
        model.event_time = event.event_time
        model.location = event.location
        model.category = event.category
        model.image = event.image
        model.price = event.price.amount
        model.total_tickets = event.total_tickets
        model.available_tickets = event.available_tickets
        model.organizer_id = event.organizer_id
        model.status = event.status.value if event.status else None
        model.rejection_reason = event.rejection_reason
        model.is_visible = event.is_visible
        model.commission_rate = event.commission_rate
        model.created_at = event.created_at
        model.updated_at = event.updated_at

    @staticmethod
    def _apply_ticket_type(model: TicketTypeModel, ticket_type: TicketType, position: int) -> None:
        model.position = position
        model.name = ticket_type.name
        model.description = ticket_type.description
        model.price = ticket_type.price.amount
        model.total_tickets = ticket_type.total_tickets
        model.available_tickets = ticket_type.available_tickets
        model.allow_half_price = ticket_type.allow_half_price

    @staticmethod
    def _apply_batch(model: TicketBatchModel, batch: TicketBatch) -> None:
        model.sequence = batch.sequence
        model.name = batch.name
        model.price = batch.price.amount
        model.quantity = batch.quantity
        model.available_quantity = batch.available_quantity
        model.start_at = batch.start_at
        model.end_at = batch.end_at

    @Logger.io
    async def get_by_id(self, *, event_id: str, for_update: bool = False) -> Optional[Event]:
        stmt = select(EventModel).where(EventModel.id == event_id)
        if for_update:
            # Rendered as FOR UPDATE on PostgreSQL; SQLite serializes writers anyway
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def save(self, *, event: Event) -> Event:
        model = await self.session.get(EventModel, event.id)
        if model is None:
            model = EventModel(id=event.id, ticket_types=[])
            self.session.add(model)
        self._apply_event(model, event)

        existing_types = {t.id: t for t in model.ticket_types}
        for position, ticket_type in enumerate(event.ticket_types):
            type_model = existing_types.get(ticket_type.id)
            if type_model is None:
                type_model = TicketTypeModel(id=ticket_type.id, batches=[])
                model.ticket_types.append(type_model)
            self._apply_ticket_type(type_model, ticket_type, position)

            existing_batches = {b.id: b for b in type_model.batches}
            for batch in ticket_type.batches:
                batch_model = existing_batches.get(batch.id)
                if batch_model is None:
                    batch_model = TicketBatchModel(id=batch.id)
                    type_model.batches.append(batch_model)
                self._apply_batch(batch_model, batch)

        await self.session.flush()
        return event

    @Logger.io
    async def list_events(
        self,
        *,
        status: Optional[ApprovalStatus] = None,
        organizer_id: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Event]:
        stmt = select(EventModel)
        if status is not None:
            stmt = stmt.where(EventModel.status == status.value)
        if organizer_id is not None:
            stmt = stmt.where(EventModel.organizer_id == organizer_id)
        if category:
            stmt = stmt.where(func.lower(EventModel.category) == category.strip().lower())
        if search:
            pattern = f'%{search.strip().lower()}%'
            stmt = stmt.where(
                or_(
                    func.lower(EventModel.title).like(pattern),
                    func.lower(EventModel.description).like(pattern),
                )
            )
        stmt = stmt.order_by(EventModel.event_date, EventModel.title)

        result = await self.session.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]
