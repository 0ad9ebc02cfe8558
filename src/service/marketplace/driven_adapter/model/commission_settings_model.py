from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, DateTime, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class CommissionSettingsModel(Base):
    """Single-row table; id is always 1"""

    __tablename__ = 'commission_settings'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    default_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    # category -> rate as string, JSON has no decimal type
    category_rates: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
