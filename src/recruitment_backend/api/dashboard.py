"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal
from recruitment_backend.core.database import get_db
from recruitment_backend.schemas.dashboard import DashboardStats
from recruitment_backend.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Counters for the caller's dashboard, computed per role."""
    return DashboardService().stats(db, principal)
