"""Admin router — portfolio KPIs and smart alerts."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from mariafaz.database import get_db
from mariafaz.dependencies import CurrentUser, get_current_admin
from mariafaz.services.kpi_service import kpi_service
from mariafaz.services.smart_alert_service import smart_alert_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/kpis")
async def get_all_kpis(
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(get_current_admin),
):
    """Latest and 7-day KPIs for every active property, plus a portfolio summary."""
    logger.info(f"Admin {admin.email or admin.id} requesting all KPIs")
    try:
        return await kpi_service.get_all_kpis(db)
    except Exception as e:
        logger.error(f"Error fetching all KPIs: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/alerts")
async def get_smart_alerts(
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(get_current_admin),
):
    """Low RGI, upcoming events and weak forward occupancy, most severe first."""
    try:
        return await smart_alert_service.get_alerts(db)
    except Exception as e:
        logger.error(f"Error generating alerts: {e}")
        raise HTTPException(status_code=500, detail=str(e))
