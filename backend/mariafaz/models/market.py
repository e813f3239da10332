"""Market reference data — seasonality curves and local events."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from mariafaz.database import Base


class Seasonality(Base):
    __tablename__ = "dim_seasonality"
    __table_args__ = (UniqueConstraint("market_id", "month", name="uq_seasonality_market_month"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    market_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    month: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-12
    factor: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("1.00"))
    weekend_premium: Mapped[Decimal | None] = mapped_column(Numeric(4, 2))
    season_type: Mapped[str | None] = mapped_column(String(10))  # high | mid | low
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class MarketEvent(Base):
    __tablename__ = "dim_event"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    market_id: Mapped[str] = mapped_column(String(50), nullable=False, default="all")  # market or "all"
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    impact_score: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-10
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
