"""Recommendation persister — upsert keyed by (property_id, date)."""

import logging
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from mariafaz.models.pricing import PricingRecommendation
from mariafaz.services.pricing.composer import PriceQuote, PricingFactors

logger = logging.getLogger(__name__)

_UPSERT_COLUMNS = (
    "base_price",
    "suggested_price",
    "day_of_week_factor",
    "seasonality_factor",
    "event_factor",
    "competitor_factor",
    "occupancy_factor",
    "lead_time_factor",
    "relevant_events",
)


def _insert_for(db: AsyncSession):
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert
    return postgresql.insert


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


async def upsert_recommendation(
    db: AsyncSession,
    property_id: uuid.UUID,
    target_date: date,
    quote: PriceQuote,
    factors: PricingFactors,
    relevant_events: list[dict],
) -> PricingRecommendation:
    """Write the latest recommendation for the key, overwriting any previous one.

    Application bookkeeping (was_applied, applied_at, actual_price) is left
    untouched on conflict. Database errors propagate to the caller.
    """
    values = {
        "property_id": property_id,
        "date": target_date,
        "base_price": _decimal(quote.base_price),
        "suggested_price": quote.suggested_price,
        **{name: _decimal(value) for name, value in factors.to_dict().items()},
        "relevant_events": relevant_events,
    }

    insert = _insert_for(db)
    stmt = insert(PricingRecommendation).values(id=uuid.uuid4(), **values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[PricingRecommendation.property_id, PricingRecommendation.date],
        set_={
            **{name: stmt.excluded[name] for name in _UPSERT_COLUMNS},
            "updated_at": func.now(),
        },
    )
    await db.execute(stmt)
    await db.commit()

    result = await db.execute(
        select(PricingRecommendation).where(
            PricingRecommendation.property_id == property_id,
            PricingRecommendation.date == target_date,
        ).execution_options(populate_existing=True)
    )
    recommendation = result.scalar_one()
    logger.debug(f"Upserted recommendation {recommendation.id} for {property_id} on {target_date}")
    return recommendation
