"""Seed script for the Maria Faz development database — market reference data."""

import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select

from mariafaz.database import async_session_factory
from mariafaz.models.market import MarketEvent, Seasonality

# ── Seasonality ────────────────────────────────────────────────────────────────

# month -> (season_type, factor, weekend_premium)
SEASON_CURVES = {
    "sintra": {
        1: ("low", "0.80", "0.15"), 2: ("low", "0.85", "0.15"), 3: ("low", "0.90", "0.20"),
        4: ("mid", "1.05", "0.25"), 5: ("mid", "1.10", "0.25"), 6: ("high", "1.25", "0.30"),
        7: ("high", "1.35", "0.30"), 8: ("high", "1.40", "0.30"), 9: ("high", "1.20", "0.30"),
        10: ("mid", "1.00", "0.25"), 11: ("low", "0.85", "0.15"), 12: ("mid", "1.00", "0.20"),
    },
    "lisboa": {
        1: ("low", "0.85", "0.10"), 2: ("low", "0.85", "0.10"), 3: ("mid", "0.95", "0.15"),
        4: ("mid", "1.10", "0.20"), 5: ("mid", "1.15", "0.20"), 6: ("high", "1.30", "0.25"),
        7: ("high", "1.35", "0.25"), 8: ("high", "1.35", "0.25"), 9: ("high", "1.25", "0.20"),
        10: ("mid", "1.10", "0.20"), 11: ("mid", "1.00", "0.15"), 12: ("mid", "1.05", "0.15"),
    },
    "porto": {
        1: ("low", "0.80", "0.15"), 2: ("low", "0.80", "0.15"), 3: ("low", "0.90", "0.15"),
        4: ("mid", "1.05", "0.20"), 5: ("mid", "1.10", "0.20"), 6: ("high", "1.30", "0.25"),
        7: ("high", "1.30", "0.25"), 8: ("high", "1.30", "0.25"), 9: ("high", "1.15", "0.20"),
        10: ("mid", "1.00", "0.20"), 11: ("low", "0.85", "0.15"), 12: ("mid", "0.95", "0.15"),
    },
    "algarve": {
        1: ("low", "0.65", "0.05"), 2: ("low", "0.70", "0.05"), 3: ("low", "0.80", "0.10"),
        4: ("mid", "0.95", "0.15"), 5: ("mid", "1.05", "0.15"), 6: ("high", "1.35", "0.20"),
        7: ("high", "1.60", "0.20"), 8: ("high", "1.70", "0.20"), 9: ("high", "1.30", "0.15"),
        10: ("mid", "0.95", "0.10"), 11: ("low", "0.70", "0.05"), 12: ("low", "0.75", "0.10"),
    },
}

# ── Events ─────────────────────────────────────────────────────────────────────

# (market_id, name, event_type, location, (start_month, start_day), (end_month, end_day), impact)
EVENTS = [
    ("lisboa", "Santo António", "festival", "Lisboa", (6, 12), (6, 13), 9),
    ("porto", "São João", "festival", "Porto", (6, 23), (6, 24), 9),
    ("sintra", "Festival de Sintra", "cultural", "Sintra", (6, 5), (6, 21), 5),
    ("lisboa", "Web Summit", "conference", "Lisboa", (11, 9), (11, 12), 8),
    ("algarve", "Festival F", "concert", "Faro", (9, 3), (9, 5), 6),
    ("all", "Páscoa", "holiday", None, (4, 3), (4, 6), 6),
    ("all", "Passagem de Ano", "holiday", None, (12, 30), (12, 31), 8),
]


async def seed() -> None:
    async with async_session_factory() as db:
        existing = await db.execute(select(func.count(Seasonality.id)))
        if existing.scalar():
            print("Seasonality already seeded — skipping")
            return

        for market_id, curve in SEASON_CURVES.items():
            for month, (season_type, factor, weekend_premium) in curve.items():
                db.add(Seasonality(
                    market_id=market_id,
                    month=month,
                    factor=Decimal(factor),
                    weekend_premium=Decimal(weekend_premium),
                    season_type=season_type,
                ))

        year = date.today().year
        for y in (year, year + 1):
            for market_id, name, event_type, location, start, end, impact in EVENTS:
                db.add(MarketEvent(
                    market_id=market_id,
                    name=name,
                    event_type=event_type,
                    location=location,
                    start_date=date(y, *start),
                    end_date=date(y, *end),
                    impact_score=impact,
                ))

        await db.commit()
        print(f"Seeded seasonality for {len(SEASON_CURVES)} markets and {len(EVENTS) * 2} events")


if __name__ == "__main__":
    asyncio.run(seed())
