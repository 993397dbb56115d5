from fastapi import APIRouter, Depends
from sqlmodel import Session

from siteadmin.core.middleware import AuthContext, admin_middleware
from siteadmin.db.session import get_session
from siteadmin.services.dashboard import DashboardService, DashboardStats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    ctx: AuthContext = Depends(admin_middleware),
    session: Session = Depends(get_session),
):
    """Get dashboard statistics"""
    return DashboardService(session).get_stats()
