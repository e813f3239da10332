"""Pricing router — dynamic price calculation and recommendation history."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mariafaz.database import get_db, get_session_factory
from mariafaz.schemas.pricing import ApplyRecommendationRequest, CalculatePriceRequest, CalculateRangeRequest
from mariafaz.services.pricing_service import (
    PricingValidationError,
    RecommendationNotFound,
    build_request,
    pricing_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/calculate")
async def calculate_price(
    req: CalculatePriceRequest,
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    """Calculate and store the dynamic price for one stay date."""
    try:
        pricing_request = build_request(req.property_id, req.base_price, req.target_date, req.market_id)
    except PricingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await pricing_service.calculate(db, pricing_request, session_factory)
    except Exception as e:
        logger.error(f"Error calculating dynamic price for {req.property_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/calculate-range")
async def calculate_price_range(
    req: CalculateRangeRequest,
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    """Calculate and store dynamic prices for every night in a date range."""
    try:
        results = await pricing_service.calculate_range(
            db,
            session_factory,
            property_id=req.property_id,
            base_price=req.base_price,
            start_date=req.start_date,
            end_date=req.end_date,
            market_id=req.market_id,
        )
    except PricingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating price range for {req.property_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"results": results, "count": len(results)}


@router.get("/recommendations/{property_id}")
async def list_recommendations(
    property_id: uuid.UUID,
    start: date | None = Query(None, description="First stay date (YYYY-MM-DD)"),
    end: date | None = Query(None, description="Last stay date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
):
    """Stored recommendations for a property, ordered by stay date."""
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must be before end")

    recommendations = await pricing_service.list_recommendations(db, property_id, start, end)
    return {"recommendations": recommendations, "count": len(recommendations)}


@router.post("/recommendations/{recommendation_id}/apply")
async def apply_recommendation(
    recommendation_id: uuid.UUID,
    req: ApplyRecommendationRequest,
    db: AsyncSession = Depends(get_db),
):
    """Mark a recommendation as applied with the price actually published."""
    try:
        return await pricing_service.apply_recommendation(db, recommendation_id, req.actual_price)
    except PricingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecommendationNotFound:
        raise HTTPException(status_code=404, detail="Recommendation not found")


@router.get("/summary/{property_id}")
async def get_pricing_summary(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Next-30-days pricing summary for a property."""
    summary = await pricing_service.get_summary(db, property_id)
    return {"property_id": str(property_id), "summary": summary}
