"""Dashboard counters."""

from datetime import date, datetime

from clinicdesk.features.appointments.models import Appointment, AppointmentStatus
from clinicdesk.features.dashboard.service import DashboardService

from conftest import auth_headers, make_patient


async def _book(doctor, patient, day, time="09:00", status=AppointmentStatus.SCHEDULED):
    await Appointment(
        doctor_id=str(doctor.id),
        patient_id=str(patient.id),
        date=day,
        time=time,
        status=status,
    ).insert()


async def test_appointment_early_today_counts_late_at_night(doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    await _book(doctor_a, patient, date(2024, 5, 15), "00:05")

    stats = await DashboardService.get_dashboard_stats(
        str(doctor_a.id), now=datetime(2024, 5, 15, 23, 59, 59)
    )

    assert stats.today_appointments == 1


async def test_counters(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "a@x.com")
    await make_patient(doctor_a, "b@x.com")
    foreign = await make_patient(doctor_b, "c@x.com")

    # Wednesday 15 May 2024; the week runs Sunday 12 to Saturday 18
    await _book(doctor_a, patient, date(2024, 5, 15), "10:00")
    await _book(doctor_a, patient, date(2024, 5, 15), "11:00", AppointmentStatus.COMPLETED)
    await _book(doctor_a, patient, date(2024, 5, 12), "10:00", AppointmentStatus.COMPLETED)
    await _book(doctor_a, patient, date(2024, 5, 18), "10:00", AppointmentStatus.CONFIRMED)
    await _book(doctor_a, patient, date(2024, 5, 11), "10:00")
    await _book(doctor_a, patient, date(2024, 5, 19), "10:00", AppointmentStatus.CANCELLED)
    await _book(doctor_a, patient, date(2025, 1, 1), "10:00")
    await _book(doctor_b, foreign, date(2024, 5, 15), "10:00")

    stats = await DashboardService.get_dashboard_stats(
        str(doctor_a.id), now=datetime(2024, 5, 15, 8, 0)
    )

    assert stats.today_appointments == 2
    assert stats.week_appointments == 4
    assert stats.total_patients == 2
    # scheduled/confirmed from today on: 15th 10:00, 18th, 2025-01-01
    assert stats.pending_follow_ups == 3


async def test_stats_endpoint(client, doctor_a):
    await make_patient(doctor_a, "a@x.com")

    response = await client.get("/api/dashboard/stats", headers=auth_headers(doctor_a))

    assert response.status_code == 200
    assert response.json()["total_patients"] == 1
    assert set(response.json()) == {
        "today_appointments",
        "week_appointments",
        "total_patients",
        "pending_follow_ups",
    }
