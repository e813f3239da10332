"""Pricing service — validates requests and runs the dynamic pricing pipeline."""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mariafaz.config import settings
from mariafaz.models.pricing import PricingRecommendation
from mariafaz.services.pricing.composer import PricingFactors, compose, round_price
from mariafaz.services.pricing.config import SUMMARY
from mariafaz.services.pricing.data_access import PricingDataAdapter
from mariafaz.services.pricing.factors import (
    days_until,
    resolve_competitor,
    resolve_day_of_week,
    resolve_event,
    resolve_lead_time,
    resolve_occupancy,
    resolve_seasonality,
)
from mariafaz.services.pricing.persister import upsert_recommendation

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: property_id, base_price, target_date"


class PricingValidationError(ValueError):
    """Request rejected before any data is read."""


class RecommendationNotFound(LookupError):
    pass


@dataclass(frozen=True)
class PricingRequest:
    property_id: uuid.UUID
    base_price: float
    target_date: date
    market_id: str


def _parse_uuid(value) -> uuid.UUID:
    try:
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
    except ValueError:
        raise PricingValidationError("property_id must be a valid UUID")


def _parse_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise PricingValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def build_request(
    property_id,
    base_price,
    target_date,
    market_id: str | None = None,
    today: date | None = None,
) -> PricingRequest:
    """Validate raw input into a PricingRequest.

    A zero base price counts as missing, matching the required-fields check
    the dashboard and simulator already rely on.
    """
    if not property_id or not base_price or not target_date:
        raise PricingValidationError(MISSING_FIELDS_MESSAGE)

    try:
        price = float(base_price)
    except (TypeError, ValueError):
        raise PricingValidationError("base_price must be a number")
    if not math.isfinite(price):
        raise PricingValidationError("base_price must be a number")
    if price <= 0:
        raise PricingValidationError("base_price must be greater than 0")

    stay_date = _parse_date(target_date, "target_date")
    today = today or date.today()
    if stay_date < today and not settings.pricing_allow_past_dates:
        raise PricingValidationError("target_date cannot be in the past")

    return PricingRequest(
        property_id=_parse_uuid(property_id),
        base_price=price,
        target_date=stay_date,
        market_id=market_id or settings.default_market_id,
    )


def _recommendation_to_dict(rec: PricingRecommendation) -> dict:
    return {
        "id": str(rec.id),
        "property_id": str(rec.property_id),
        "date": rec.date.isoformat(),
        "base_price": float(rec.base_price),
        "suggested_price": rec.suggested_price,
        "day_of_week_factor": float(rec.day_of_week_factor),
        "seasonality_factor": float(rec.seasonality_factor),
        "event_factor": float(rec.event_factor),
        "competitor_factor": float(rec.competitor_factor),
        "occupancy_factor": float(rec.occupancy_factor),
        "lead_time_factor": float(rec.lead_time_factor),
        "relevant_events": rec.relevant_events or [],
        "was_applied": rec.was_applied,
        "applied_at": rec.applied_at.isoformat() if rec.applied_at else None,
        "actual_price": float(rec.actual_price) if rec.actual_price is not None else None,
        "created_at": rec.created_at.isoformat() if rec.created_at else None,
        "updated_at": rec.updated_at.isoformat() if rec.updated_at else None,
    }


class PricingService:
    """Computes, stores and reports dynamic price recommendations."""

    async def calculate(
        self,
        db: AsyncSession,
        request: PricingRequest,
        session_factory: async_sessionmaker[AsyncSession],
        today: date | None = None,
    ) -> dict:
        """Quote one stay date and upsert the recommendation."""
        today = today or date.today()
        logger.info(f"Calculating dynamic price for property {request.property_id} on {request.target_date}")

        adapter = PricingDataAdapter(session_factory)
        signals = await adapter.fetch_signals(request.property_id, request.market_id, request.target_date)

        event_factor, relevant_events = resolve_event(signals.events, request.target_date, request.market_id)
        factors = PricingFactors.resolve(
            day_of_week=resolve_day_of_week(request.target_date, signals.seasonality),
            seasonality=resolve_seasonality(signals.seasonality),
            event=event_factor,
            competitor=resolve_competitor(signals.ari),
            occupancy=resolve_occupancy(signals.occupancy_rates),
            lead_time=resolve_lead_time(days_until(request.target_date, today)),
        )
        quote = compose(request.base_price, factors)

        await upsert_recommendation(
            db,
            property_id=request.property_id,
            target_date=request.target_date,
            quote=quote,
            factors=factors,
            relevant_events=relevant_events,
        )

        logger.info(
            f"Price calculated: {quote.base_price} -> {quote.suggested_price} "
            f"(factors: {factors.to_dict()})"
        )

        return {
            "success": True,
            "base_price": quote.base_price,
            "suggested_price": quote.suggested_price,
            "price_change_percent": quote.price_change_percent,
            "factors": factors.to_dict(),
            "relevant_events": relevant_events,
            "market_id": request.market_id,
            "target_date": request.target_date.isoformat(),
        }

    async def calculate_range(
        self,
        db: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        property_id,
        base_price,
        start_date,
        end_date,
        market_id: str | None = None,
        today: date | None = None,
    ) -> list[dict]:
        """Quote every night from start_date to end_date inclusive, in order."""
        if not start_date or not end_date:
            raise PricingValidationError("Missing required fields: start_date, end_date")

        start = _parse_date(start_date, "start_date")
        end = _parse_date(end_date, "end_date")
        if end < start:
            raise PricingValidationError("end_date must not be before start_date")
        nights = (end - start).days + 1
        if nights > settings.pricing_max_range_days:
            raise PricingValidationError(
                f"Date range too long: {nights} days (max {settings.pricing_max_range_days})"
            )

        # Validate once up front so a bad request fails before any write
        requests = [
            build_request(property_id, base_price, start + timedelta(days=offset), market_id, today=today)
            for offset in range(nights)
        ]

        results = []
        for req in requests:
            results.append(await self.calculate(db, req, session_factory, today=today))
        return results

    async def list_recommendations(
        self,
        db: AsyncSession,
        property_id,
        start: date | None = None,
        end: date | None = None,
    ) -> list[dict]:
        query = select(PricingRecommendation).where(
            PricingRecommendation.property_id == _parse_uuid(property_id)
        )
        if start:
            query = query.where(PricingRecommendation.date >= start)
        if end:
            query = query.where(PricingRecommendation.date <= end)
        query = query.order_by(PricingRecommendation.date.asc())

        result = await db.execute(query)
        return [_recommendation_to_dict(r) for r in result.scalars().all()]

    async def apply_recommendation(
        self, db: AsyncSession, recommendation_id: uuid.UUID, actual_price: float
    ) -> dict:
        """Record that the owner published a price for this recommendation."""
        if actual_price is None or not math.isfinite(actual_price) or actual_price <= 0:
            raise PricingValidationError("actual_price must be greater than 0")

        result = await db.execute(
            select(PricingRecommendation).where(PricingRecommendation.id == recommendation_id)
        )
        rec = result.scalar_one_or_none()
        if not rec:
            raise RecommendationNotFound(f"Recommendation {recommendation_id} not found")

        rec.was_applied = True
        rec.applied_at = datetime.now(timezone.utc)
        rec.actual_price = Decimal(str(actual_price))
        await db.commit()
        await db.refresh(rec)

        logger.info(f"Recommendation {rec.id} applied at {actual_price} (suggested {rec.suggested_price})")
        return _recommendation_to_dict(rec)

    async def get_summary(self, db: AsyncSession, property_id, today: date | None = None) -> dict | None:
        """Aggregate the next 30 days of recommendations for a property."""
        today = today or date.today()
        recs = await self.list_recommendations(
            db, property_id, start=today, end=today + timedelta(days=SUMMARY.days)
        )
        if not recs:
            return None

        count = len(recs)
        avg_suggested = sum(r["suggested_price"] for r in recs) / count
        avg_base = sum(r["base_price"] for r in recs) / count
        applied = sum(1 for r in recs if r["was_applied"])

        return {
            "total_recommendations": count,
            "avg_suggested_price": round_price(avg_suggested),
            "avg_base_price": round_price(avg_base),
            "avg_price_change": f"{(avg_suggested - avg_base) / avg_base * 100:.1f}",
            "applied_count": applied,
            "application_rate": round_price(applied / count * 100),
            "highest_price": max(r["suggested_price"] for r in recs),
            "lowest_price": min(r["suggested_price"] for r in recs),
            "event_days": sum(1 for r in recs if r["event_factor"] > 1),
            "weekend_days": sum(1 for r in recs if r["day_of_week_factor"] > 1),
        }


pricing_service = PricingService()
