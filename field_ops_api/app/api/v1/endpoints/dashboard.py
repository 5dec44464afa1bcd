"""
Dashboard endpoints for API v1.

Both routes are read-only and recompute their figures on each call.
Any method other than GET on these paths is answered with 405.
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from ....services.dashboard_service import DashboardService

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def dashboard_overview() -> Dict[str, Any]:
    """Return counters, monthly supply figures, recent activities and chart series."""
    return await DashboardService.overview()


@router.get("/alerts", response_model=List[Dict[str, Any]])
async def dashboard_alerts() -> List[Dict[str, Any]]:
    """Return up to ten operational alerts, critical first."""
    return await DashboardService.alerts()
