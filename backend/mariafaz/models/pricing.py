"""Dynamic pricing recommendations, one row per property and stay date."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, Numeric, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from mariafaz.database import Base


class PricingRecommendation(Base):
    __tablename__ = "fact_pricing_recommendations"
    __table_args__ = (UniqueConstraint("property_id", "date", name="uq_pricing_property_date"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("dim_property.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    suggested_price: Mapped[int] = mapped_column(Integer, nullable=False)
    day_of_week_factor: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("1"))
    seasonality_factor: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("1"))
    event_factor: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("1"))
    competitor_factor: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("1"))
    occupancy_factor: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("1"))
    lead_time_factor: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("1"))
    relevant_events: Mapped[list] = mapped_column(JSON().with_variant(JSONB(), "postgresql"), default=list)
    was_applied: Mapped[bool | None] = mapped_column(Boolean)
    applied_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    actual_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
