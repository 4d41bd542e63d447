# Dashboard Feature - Schemas

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    """Response schema for dashboard statistics."""
    today_appointments: int
    week_appointments: int
    total_patients: int
    pending_follow_ups: int

    class Config:
        json_schema_extra = {
            "example": {
                "today_appointments": 6,
                "week_appointments": 23,
                "total_patients": 140,
                "pending_follow_ups": 31,
            }
        }
