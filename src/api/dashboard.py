"""Dashboard API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user_id, get_dashboard_service
from src.schemas.dashboard import DashboardStats
from src.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    user_id: Annotated[str, Depends(get_current_user_id)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    """Get pantry totals, breakdowns and expiry alerts for the user."""
    return dashboard_service.get_stats(user_id)
