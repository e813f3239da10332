"""KPI service — portfolio-wide performance and market positioning."""

import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mariafaz.models.property import KpiCompSetDaily, KpiDaily, Property

logger = logging.getLogger(__name__)

ROLLING_WINDOW_DAYS = 7

# RGI floor for each market position, checked top-down
MARKET_POSITIONS = (
    ("leader", 1.15),
    ("competitive", 0.95),
    ("lagging", 0.75),
)


def market_position(rgi: float | None) -> str:
    """Classify a property by its revenue generation index."""
    if not rgi:
        return "competitive"
    for position, floor in MARKET_POSITIONS:
        if rgi >= floor:
            return position
    return "distressed"


def _num(value) -> float | None:
    # Zero KPIs come from empty ingest days and read as "no data"
    return float(value) if value else None


def _rolling_avg(rows: list, attr: str) -> float | None:
    if not rows:
        return None
    return sum(float(getattr(r, attr) or 0) for r in rows) / len(rows)


def _mean(values: list[float], count: int) -> float:
    return sum(values) / (count or 1)


class KpiService:
    """Aggregates daily and comp-set KPIs for the admin dashboard."""

    async def get_all_kpis(self, db: AsyncSession) -> dict:
        props_result = await db.execute(select(Property).where(Property.is_active == True))
        properties = props_result.scalars().all()

        daily_result = await db.execute(select(KpiDaily).order_by(KpiDaily.date.desc()))
        daily_by_property: dict = defaultdict(list)
        for row in daily_result.scalars().all():
            daily_by_property[row.property_id].append(row)

        comp_result = await db.execute(select(KpiCompSetDaily).order_by(KpiCompSetDaily.date.desc()))
        latest_comp: dict = {}
        for row in comp_result.scalars().all():
            latest_comp.setdefault(row.property_id, row)

        property_kpis = [
            self._property_kpis(p, daily_by_property.get(p.id, []), latest_comp.get(p.id))
            for p in properties
        ]
        logger.info(f"Aggregated KPIs for {len(property_kpis)} active properties")

        return {
            "success": True,
            "summary": self._summarize(property_kpis),
            "properties": property_kpis,
        }

    @staticmethod
    def _property_kpis(prop: Property, daily: list[KpiDaily], comp: KpiCompSetDaily | None) -> dict:
        latest = daily[0] if daily else None
        last_week = daily[:ROLLING_WINDOW_DAYS]
        rgi = _num(comp.rgi) if comp else None

        return {
            "property_id": str(prop.id),
            "property_name": prop.name,
            "location": prop.location,
            "property_type": prop.property_type,
            "is_system": prop.is_system,
            "latest_date": latest.date.isoformat() if latest else None,
            "adr": _num(latest.adr) if latest else None,
            "occupancy_rate": _num(latest.occupancy_rate) if latest else None,
            "revpar": _num(latest.revpar) if latest else None,
            "ari": _num(comp.ari) if comp else None,
            "mpi": _num(comp.mpi) if comp else None,
            "rgi": rgi,
            "market_position": market_position(rgi),
            "avg_adr_7d": _rolling_avg(last_week, "adr"),
            "avg_occupancy_7d": _rolling_avg(last_week, "occupancy_rate"),
            "avg_revpar_7d": _rolling_avg(last_week, "revpar"),
        }

    @staticmethod
    def _summarize(property_kpis: list[dict]) -> dict:
        """Portfolio averages over client properties (benchmark listings excluded)."""
        active = [p for p in property_kpis if not p["is_system"]]
        n = len(active)
        positions = [p["market_position"] for p in active]

        return {
            "total_properties": n,
            "avg_adr": _mean([p["adr"] or 0 for p in active], n),
            "avg_occupancy": _mean([p["occupancy_rate"] or 0 for p in active], n),
            "avg_revpar": _mean([p["revpar"] or 0 for p in active], n),
            # Unknown RGI counts as at-market
            "avg_rgi": _mean([p["rgi"] or 1 for p in active], n),
            "leaders": positions.count("leader"),
            "competitive": positions.count("competitive"),
            "lagging": positions.count("lagging"),
            "distressed": positions.count("distressed"),
        }


kpi_service = KpiService()
