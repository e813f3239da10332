"""Smart alert service — flags properties and dates that need pricing attention."""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mariafaz.models.market import MarketEvent
from mariafaz.models.property import KpiCompSetDaily, KpiDaily, Property

logger = logging.getLogger(__name__)

LOOKAHEAD_DAYS = 7

RGI_WARNING = 0.9
RGI_CRITICAL = 0.7
OCCUPANCY_WARNING = 0.5
OCCUPANCY_CRITICAL = 0.3
EVENT_CRITICAL_IMPACT = 8
EVENT_WARNING_IMPACT = 5

SEVERITY_ORDER = {"critical": 0, "warning": 1, "info": 2}


def event_severity(impact_score: int) -> str:
    if impact_score >= EVENT_CRITICAL_IMPACT:
        return "critical"
    if impact_score >= EVENT_WARNING_IMPACT:
        return "warning"
    return "info"


def _sort_key(alert: dict) -> tuple:
    return (SEVERITY_ORDER[alert["severity"]], alert.get("date") or alert["created_at"])


class SmartAlertService:
    """Generates on-demand alerts for the admin dashboard."""

    async def get_alerts(self, db: AsyncSession, now: datetime | None = None) -> dict:
        now = now or datetime.now(timezone.utc)
        today = now.date()
        horizon = today + timedelta(days=LOOKAHEAD_DAYS)
        created_at = now.isoformat()

        props_result = await db.execute(select(Property).where(Property.is_active == True))
        properties = props_result.scalars().all()
        names = {p.id: p.name for p in properties}

        alerts: list[dict] = []
        alerts.extend(await self._rgi_alerts(db, properties, created_at))
        alerts.extend(await self._event_alerts(db, today, horizon, created_at))
        alerts.extend(await self._occupancy_alerts(db, names, today, horizon, created_at))

        alerts.sort(key=_sort_key)
        logger.info(f"Generated {len(alerts)} alerts")

        return {
            "success": True,
            "alerts": alerts,
            "summary": {
                "total": len(alerts),
                "critical": sum(1 for a in alerts if a["severity"] == "critical"),
                "warning": sum(1 for a in alerts if a["severity"] == "warning"),
                "info": sum(1 for a in alerts if a["severity"] == "info"),
            },
        }

    async def _rgi_alerts(self, db: AsyncSession, properties: list[Property], created_at: str) -> list[dict]:
        """Properties whose latest RGI is below market."""
        result = await db.execute(
            select(KpiCompSetDaily)
            .where(KpiCompSetDaily.rgi.is_not(None))
            .order_by(KpiCompSetDaily.date.desc())
        )
        latest: dict = {}
        for row in result.scalars().all():
            latest.setdefault(row.property_id, row)

        alerts = []
        for prop in properties:
            row = latest.get(prop.id)
            if not row:
                continue
            rgi = float(row.rgi)
            if rgi >= RGI_WARNING:
                continue
            alerts.append({
                "id": f"rgi_{prop.id}",
                "type": "rgi_low",
                "severity": "critical" if rgi < RGI_CRITICAL else "warning",
                "title": f"Low RGI: {prop.name}",
                "message": (
                    f"RGI of {rgi * 100:.1f}% is below market. "
                    f"Consider adjusting prices or improving the listing."
                ),
                "property_id": str(prop.id),
                "property_name": prop.name,
                "value": rgi,
                "threshold": RGI_WARNING,
                "date": row.date.isoformat(),
                "created_at": created_at,
            })
        return alerts

    async def _event_alerts(self, db: AsyncSession, today: date, horizon: date, created_at: str) -> list[dict]:
        """Events starting within the lookahead window."""
        result = await db.execute(
            select(MarketEvent)
            .where(MarketEvent.start_date >= today, MarketEvent.start_date <= horizon)
            .order_by(MarketEvent.start_date.asc())
        )

        alerts = []
        for event in result.scalars().all():
            days_until = (event.start_date - today).days
            plural = "" if days_until == 1 else "s"
            alerts.append({
                "id": f"event_{event.id}",
                "type": "event_upcoming",
                "severity": event_severity(event.impact_score),
                "title": f"Event in {days_until} day{plural}: {event.name}",
                "message": (
                    f"{event.event_type} in {event.location or event.market_id} "
                    f"({event.start_date.isoformat()} - {event.end_date.isoformat()}). "
                    f"Impact: {event.impact_score}/10. Review dynamic prices."
                ),
                "event_id": str(event.id),
                "event_name": event.name,
                "value": event.impact_score,
                "date": event.start_date.isoformat(),
                "created_at": created_at,
            })
        return alerts

    async def _occupancy_alerts(
        self, db: AsyncSession, names: dict, today: date, horizon: date, created_at: str
    ) -> list[dict]:
        """Properties with weak forward occupancy over the lookahead window."""
        result = await db.execute(
            select(KpiDaily.property_id, KpiDaily.occupancy_rate).where(
                KpiDaily.date >= today,
                KpiDaily.date <= horizon,
                KpiDaily.occupancy_rate.is_not(None),
            )
        )
        rates_by_property: dict = defaultdict(list)
        for property_id, rate in result.all():
            rates_by_property[property_id].append(float(rate))

        alerts = []
        for property_id, rates in rates_by_property.items():
            avg = sum(rates) / len(rates)
            if avg >= OCCUPANCY_WARNING:
                continue
            name = names.get(property_id, "Unknown")
            alerts.append({
                "id": f"occ_{property_id}",
                "type": "occupancy_low",
                "severity": "critical" if avg < OCCUPANCY_CRITICAL else "warning",
                "title": f"Low occupancy: {name}",
                "message": (
                    f"Average of {avg * 100:.1f}% over the next {LOOKAHEAD_DAYS} days. "
                    f"Consider promotions or a price adjustment."
                ),
                "property_id": str(property_id),
                "property_name": name,
                "value": avg,
                "threshold": OCCUPANCY_WARNING,
                "created_at": created_at,
            })
        return alerts


smart_alert_service = SmartAlertService()
