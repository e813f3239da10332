"""Properties and their daily performance KPIs."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Numeric, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from mariafaz.database import Base


class Property(Base):
    __tablename__ = "dim_property"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200))
    market_id: Mapped[str | None] = mapped_column(String(50))
    property_type: Mapped[str | None] = mapped_column(String(50))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_system: Mapped[bool] = mapped_column(Boolean, default=False)  # internal benchmark listings
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class KpiDaily(Base):
    __tablename__ = "kpi_daily"
    __table_args__ = (UniqueConstraint("property_id", "date", name="uq_kpi_daily_property_date"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("dim_property.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    occupancy_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 4))  # 0.0-1.0
    adr: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    revpar: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))


class KpiCompSetDaily(Base):
    __tablename__ = "kpi_comp_set_daily"
    __table_args__ = (UniqueConstraint("property_id", "date", name="uq_kpi_comp_set_property_date"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("dim_property.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    ari: Mapped[Decimal | None] = mapped_column(Numeric(6, 3))  # average rate index
    mpi: Mapped[Decimal | None] = mapped_column(Numeric(6, 3))  # market penetration index
    rgi: Mapped[Decimal | None] = mapped_column(Numeric(6, 3))  # revenue generation index
