from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.entity.ticket_type_entity import TicketType


class EventCreateRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'title': 'Summer Festival',
                'description': 'Three stages, one weekend',
                'date': '2026-12-20',
                'time': '18:00',
                'location': 'Riverside Park',
                'category': 'music',
                'price': '150.00',
                'total_tickets': 500,
            }
        },
    )

    title: str
    description: str = ''
    event_date: date = Field(alias='date')
    event_time: Optional[time] = Field(default=None, alias='time')
    location: str
    category: str = ''
    image: str = ''
    price: Decimal = Field(ge=0)
    total_tickets: int
    available_tickets: Optional[int] = None


class TicketTypeCreateRequest(BaseModel):
    name: str
    description: str = ''
    price: Decimal = Field(ge=0)
    total_tickets: int
    available_tickets: Optional[int] = None
    allow_half_price: bool = False


class BatchCreateRequest(BaseModel):
    name: str
    price: Decimal = Field(ge=0)
    quantity: int
    available_quantity: Optional[int] = None
    start_at: datetime
    end_at: datetime


class VisibilityRequest(BaseModel):
    is_visible: bool


class RejectRequest(BaseModel):
    reason: str = ''


class BatchResponse(BaseModel):
    id: str
    name: str
    price: str
    quantity: int
    available_quantity: int
    start_at: datetime
    end_at: datetime
    sequence: int

    @classmethod
    def from_entity(cls, batch: TicketBatch) -> 'BatchResponse':
        return cls(
            id=batch.id,
            name=batch.name,
            price=str(batch.price),
            quantity=batch.quantity,
            available_quantity=batch.available_quantity,
            start_at=batch.start_at,
            end_at=batch.end_at,
            sequence=batch.sequence,
        )


class TicketTypeResponse(BaseModel):
    id: str
    name: str
    description: str
    price: str
    total_tickets: int
    available_tickets: int
    allow_half_price: bool
    batches: List[BatchResponse]

    @classmethod
    def from_entity(cls, ticket_type: TicketType) -> 'TicketTypeResponse':
        return cls(
            id=ticket_type.id,
            name=ticket_type.name,
            description=ticket_type.description,
            price=str(ticket_type.price),
            total_tickets=ticket_type.total_tickets,
            available_tickets=ticket_type.available_tickets,
            allow_half_price=ticket_type.allow_half_price,
            batches=[BatchResponse.from_entity(batch) for batch in ticket_type.batches],
        )


class EventResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    event_date: date = Field(alias='date')
    event_time: Optional[time] = Field(default=None, alias='time')
    location: str
    category: str
    image: str
    price: str
    total_tickets: int
    available_tickets: int
    status: Optional[str]
    is_visible: bool
    organizer_id: Optional[str]
    rejection_reason: Optional[str]
    commission_rate: Decimal
    ticket_types: List[TicketTypeResponse]

    @classmethod
    def from_entity(cls, event: Event) -> 'EventResponse':
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            event_date=event.event_date,
            event_time=event.event_time,
            location=event.location,
            category=event.category,
            image=event.image,
            price=str(event.price),
            total_tickets=event.total_tickets,
            available_tickets=event.available_tickets,
            status=event.status.value if event.status else None,
            is_visible=event.is_visible,
            organizer_id=event.organizer_id,
            rejection_reason=event.rejection_reason,
            commission_rate=event.commission_rate,
            ticket_types=[TicketTypeResponse.from_entity(t) for t in event.ticket_types],
        )
