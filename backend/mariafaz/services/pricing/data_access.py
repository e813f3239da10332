"""Pricing data access — fetches the market signals each factor needs."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mariafaz.models.market import MarketEvent, Seasonality
from mariafaz.models.property import KpiCompSetDaily, KpiDaily
from mariafaz.services.pricing.config import OCCUPANCY
from mariafaz.services.pricing.factors import EventRecord, SeasonalityRecord

logger = logging.getLogger(__name__)


@dataclass
class MarketSignals:
    """Raw inputs for the factor resolvers. None means the fetch failed."""
    seasonality: SeasonalityRecord | None = None
    events: list[EventRecord] | None = field(default_factory=list)
    ari: float | None = None
    occupancy_rates: list[float | None] | None = field(default_factory=list)


def _float_or_none(value) -> float | None:
    return float(value) if value is not None else None


class PricingDataAdapter:
    """Reads seasonality, events, ARI and occupancy, each in its own session.

    The four reads are independent, so they run concurrently. A failed read
    degrades to "no data" for that factor instead of failing the quote.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def fetch_signals(
        self, property_id: uuid.UUID, market_id: str, target_date: date
    ) -> MarketSignals:
        names = ("seasonality", "events", "ari", "occupancy_rates")
        results = await asyncio.gather(
            self.get_seasonality(market_id, target_date.month),
            self.get_events(target_date),
            self.get_latest_ari(property_id),
            self.get_recent_occupancy(property_id),
            return_exceptions=True,
        )

        values = {}
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.warning(f"Pricing signal '{name}' unavailable for property {property_id}: {result}")
                values[name] = None
            else:
                values[name] = result
        return MarketSignals(**values)

    async def get_seasonality(self, market_id: str, month: int) -> SeasonalityRecord | None:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Seasonality).where(
                    Seasonality.market_id == market_id.lower(),
                    Seasonality.month == month,
                )
            )
            row = result.scalar_one_or_none()
        if not row:
            return None
        return SeasonalityRecord(
            market_id=row.market_id,
            month=row.month,
            factor=float(row.factor),
            weekend_premium=_float_or_none(row.weekend_premium),
        )

    async def get_events(self, target_date: date) -> list[EventRecord]:
        """All events running on the date; market filtering happens in the resolver."""
        async with self.session_factory() as db:
            result = await db.execute(
                select(MarketEvent).where(
                    MarketEvent.start_date <= target_date,
                    MarketEvent.end_date >= target_date,
                )
            )
            rows = result.scalars().all()
        return [
            EventRecord(
                market_id=r.market_id,
                name=r.name,
                event_type=r.event_type,
                start_date=r.start_date,
                end_date=r.end_date,
                impact_score=int(r.impact_score or 0),
            )
            for r in rows
        ]

    async def get_latest_ari(self, property_id: uuid.UUID) -> float | None:
        async with self.session_factory() as db:
            result = await db.execute(
                select(KpiCompSetDaily.ari)
                .where(KpiCompSetDaily.property_id == property_id)
                .order_by(KpiCompSetDaily.date.desc())
                .limit(1)
            )
            ari = result.scalar_one_or_none()
        return _float_or_none(ari)

    async def get_recent_occupancy(self, property_id: uuid.UUID) -> list[float | None]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(KpiDaily.occupancy_rate)
                .where(KpiDaily.property_id == property_id)
                .order_by(KpiDaily.date.desc())
                .limit(OCCUPANCY.window_days)
            )
            rates = result.scalars().all()
        return [_float_or_none(r) for r in rates]
