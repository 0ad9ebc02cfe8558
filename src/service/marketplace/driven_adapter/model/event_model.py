from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


MONEY = Numeric(14, 4)


class EventModel(Base):
    __tablename__ = 'event'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default='', nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    event_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(64), default='', nullable=False, index=True)
    image: Mapped[str] = mapped_column(String(512), default='', nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    available_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    organizer_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    status: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    commission_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    ticket_types: Mapped[List['TicketTypeModel']] = relationship(
        back_populates='event',
        cascade='all, delete-orphan',
        order_by='TicketTypeModel.position',
        lazy='selectin',
    )


class TicketTypeModel(Base):
    __tablename__ = 'ticket_type'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('event.id', ondelete='CASCADE'), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, default='', nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    available_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    allow_half_price: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    event: Mapped[EventModel] = relationship(back_populates='ticket_types')
    batches: Mapped[List['TicketBatchModel']] = relationship(
        back_populates='ticket_type',
        cascade='all, delete-orphan',
        order_by='TicketBatchModel.sequence',
        lazy='selectin',
    )


class TicketBatchModel(Base):
    __tablename__ = 'ticket_batch'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    ticket_type_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('ticket_type.id', ondelete='CASCADE'), nullable=False, index=True
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    available_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    ticket_type: Mapped[TicketTypeModel] = relationship(back_populates='batches')
