from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.service.marketplace.driven_adapter.model.event_model import MONEY


class OrderModel(Base):
    __tablename__ = 'ticket_order'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    purchase_id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('event.id'), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    ticket_type_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    ticket_type_name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    batch_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    half_price: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    service_fee_rate: Mapped[Decimal] = mapped_column(Numeric(6, 4), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    service_fee: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_paid: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    buyer: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    refund_status: Mapped[str] = mapped_column(String(20), nullable=False)
    refund_request_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    refund_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    refund_amount: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    refund_rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    confirmed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
