# Dashboard Feature - Service

from typing import Optional
from datetime import datetime
from beanie.operators import In
from clinicdesk.features.dashboard.schemas import DashboardStatsResponse
from clinicdesk.features.appointments.models import Appointment, AppointmentStatus, APPOINTMENTS
from clinicdesk.features.patients.models import PATIENTS
from clinicdesk.shared.dates import FAR_FUTURE, today, week_bounds
from clinicdesk.shared.scoping import scoped_find
from clinicdesk.core.logging import logger


class DashboardService:
    """Service for dashboard statistics."""

    @staticmethod
    async def get_dashboard_stats(
        doctor_id: str,
        now: Optional[datetime] = None
    ) -> DashboardStatsResponse:
        """
        Get dashboard statistics for a doctor.

        Appointment dates are calendar days, so every appointment dated today
        counts regardless of its time. The day and week are computed once
        from ``now`` and reused by every counter.

        Args:
            doctor_id: The doctor ID
            now: Reference time (defaults to the server's local clock)

        Returns:
            DashboardStatsResponse with aggregated statistics
        """
        current_day = today(now)
        week_start, week_end = week_bounds(current_day)

        today_appointments = await scoped_find(
            APPOINTMENTS, doctor_id,
            Appointment.date == current_day
        ).count()

        week_appointments = await scoped_find(
            APPOINTMENTS, doctor_id,
            Appointment.date >= week_start,
            Appointment.date <= week_end
        ).count()

        total_patients = await scoped_find(PATIENTS, doctor_id).count()

        pending_follow_ups = await scoped_find(
            APPOINTMENTS, doctor_id,
            In(Appointment.status, [AppointmentStatus.SCHEDULED, AppointmentStatus.CONFIRMED]),
            Appointment.date >= current_day,
            Appointment.date <= FAR_FUTURE
        ).count()

        logger.debug(f"Dashboard stats computed for {current_day}")

        return DashboardStatsResponse(
            today_appointments=today_appointments,
            week_appointments=week_appointments,
            total_patients=total_patients,
            pending_follow_ups=pending_follow_ups,
        )
