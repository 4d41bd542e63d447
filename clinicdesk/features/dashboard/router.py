# Dashboard Feature - Router

from fastapi import APIRouter, Depends
from clinicdesk.features.auth.dependencies import get_current_doctor_id
from clinicdesk.features.dashboard.schemas import DashboardStatsResponse
from clinicdesk.features.dashboard.service import DashboardService


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(doctor_id: str = Depends(get_current_doctor_id)):
    """
    Get dashboard statistics for the current doctor.

    Returns:
    - Appointments today
    - Appointments this week (Sunday to Saturday)
    - Total patients
    - Upcoming scheduled or confirmed appointments

    Requires authentication.
    """
    return await DashboardService.get_dashboard_stats(doctor_id)
