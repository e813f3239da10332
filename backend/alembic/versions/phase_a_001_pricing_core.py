"""Phase A: properties, KPIs, market reference data, pricing recommendations

Revision ID: phase_a_001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision = "phase_a_001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- dim_property ---
    op.create_table(
        "dim_property",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(300), nullable=False),
        sa.Column("location", sa.String(200)),
        sa.Column("market_id", sa.String(50)),
        sa.Column("property_type", sa.String(50)),
        sa.Column("is_active", sa.Boolean, server_default="true"),
        sa.Column("is_system", sa.Boolean, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- dim_seasonality ---
    op.create_table(
        "dim_seasonality",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("market_id", sa.String(50), nullable=False),
        sa.Column("month", sa.Integer, nullable=False),
        sa.Column("factor", sa.Numeric(4, 2), nullable=False, server_default="1.00"),
        sa.Column("weekend_premium", sa.Numeric(4, 2)),
        sa.Column("season_type", sa.String(10)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("market_id", "month", name="uq_seasonality_market_month"),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="ck_seasonality_month"),
        sa.CheckConstraint("factor > 0", name="ck_seasonality_factor_positive"),
    )
    op.create_index("idx_seasonality_market", "dim_seasonality", ["market_id"])

    # --- dim_event ---
    op.create_table(
        "dim_event",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("market_id", sa.String(50), nullable=False, server_default="all"),
        sa.Column("name", sa.String(300), nullable=False),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("location", sa.String(200)),
        sa.Column("description", sa.Text),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("impact_score", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("impact_score BETWEEN 1 AND 10", name="ck_event_impact_score"),
    )
    op.create_index("idx_event_dates", "dim_event", ["start_date", "end_date"])

    # --- kpi_daily ---
    op.create_table(
        "kpi_daily",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("property_id", UUID(as_uuid=True), sa.ForeignKey("dim_property.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("occupancy_rate", sa.Numeric(5, 4)),
        sa.Column("adr", sa.Numeric(10, 2)),
        sa.Column("revpar", sa.Numeric(10, 2)),
        sa.UniqueConstraint("property_id", "date", name="uq_kpi_daily_property_date"),
    )

    # --- kpi_comp_set_daily ---
    op.create_table(
        "kpi_comp_set_daily",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("property_id", UUID(as_uuid=True), sa.ForeignKey("dim_property.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("ari", sa.Numeric(6, 3)),
        sa.Column("mpi", sa.Numeric(6, 3)),
        sa.Column("rgi", sa.Numeric(6, 3)),
        sa.UniqueConstraint("property_id", "date", name="uq_kpi_comp_set_property_date"),
    )

    # --- fact_pricing_recommendations ---
    op.create_table(
        "fact_pricing_recommendations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("property_id", UUID(as_uuid=True), sa.ForeignKey("dim_property.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("suggested_price", sa.Integer, nullable=False),
        sa.Column("day_of_week_factor", sa.Numeric(6, 4), server_default="1"),
        sa.Column("seasonality_factor", sa.Numeric(6, 4), server_default="1"),
        sa.Column("event_factor", sa.Numeric(6, 4), server_default="1"),
        sa.Column("competitor_factor", sa.Numeric(6, 4), server_default="1"),
        sa.Column("occupancy_factor", sa.Numeric(6, 4), server_default="1"),
        sa.Column("lead_time_factor", sa.Numeric(6, 4), server_default="1"),
        sa.Column("relevant_events", JSONB, server_default="[]"),
        sa.Column("was_applied", sa.Boolean),
        sa.Column("applied_at", sa.DateTime(timezone=True)),
        sa.Column("actual_price", sa.Numeric(10, 2)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("property_id", "date", name="uq_pricing_property_date"),
    )
    op.create_index("idx_pricing_property", "fact_pricing_recommendations", ["property_id"])


def downgrade() -> None:
    op.drop_table("fact_pricing_recommendations")
    op.drop_table("kpi_comp_set_daily")
    op.drop_table("kpi_daily")
    op.drop_table("dim_event")
    op.drop_table("dim_seasonality")
    op.drop_table("dim_property")
