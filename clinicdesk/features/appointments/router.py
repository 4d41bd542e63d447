# Appointments Feature - Router

from typing import List, Optional
from datetime import date as date_type
from fastapi import APIRouter, Depends, Query, status
from clinicdesk.features.appointments.models import AppointmentStatus
from clinicdesk.features.appointments.schemas import (
    CreateAppointmentRequest,
    UpdateAppointmentRequest,
    AppointmentResponse,
)
from clinicdesk.features.appointments.service import AppointmentService
from clinicdesk.features.auth.dependencies import get_current_doctor_id
from clinicdesk.shared.dates import parse_local_date
from clinicdesk.shared.exceptions import BadRequestException
from clinicdesk.shared.schemas import MessageResponse, PaginatedResponse


router = APIRouter(prefix="/appointments", tags=["Appointments"])


def _date_param(value: Optional[str]) -> Optional[date_type]:
    if not value:
        return None
    try:
        return parse_local_date(value)
    except ValueError as e:
        raise BadRequestException(str(e))


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    request: CreateAppointmentRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    Book an appointment for one of the current doctor's patients.

    Another doctor's patient id is reported as not found.
    """
    return await AppointmentService.create_appointment(doctor_id, request)


@router.get("", response_model=PaginatedResponse[AppointmentResponse])
async def list_appointments(
    date: Optional[str] = Query(None, description="Single day, YYYY-MM-DD"),
    patient_id: Optional[str] = None,
    status: Optional[AppointmentStatus] = None,
    start_date: Optional[str] = Query(None, description="Range start, YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="Range end (inclusive), YYYY-MM-DD"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    List the current doctor's appointments ordered by date and time.

    The date range is only applied when both ends are given.
    """
    appointments, total = await AppointmentService.get_appointments(
        doctor_id,
        on_date=_date_param(date),
        patient_id=patient_id,
        status=status,
        start_date=_date_param(start_date),
        end_date=_date_param(end_date),
        page=page,
        limit=limit,
    )
    return PaginatedResponse[AppointmentResponse](
        data=appointments,
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/patient/{patient_id}", response_model=List[AppointmentResponse])
async def list_patient_appointments(
    patient_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """All appointments of one patient."""
    return await AppointmentService.get_appointments_for_patient(patient_id, doctor_id)


@router.get("/date/{day}", response_model=List[AppointmentResponse])
async def list_appointments_on_date(
    day: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Appointments on one calendar day (YYYY-MM-DD), by time."""
    return await AppointmentService.get_appointments_for_date(_date_param(day), doctor_id)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Get a single appointment."""
    return await AppointmentService.get_appointment_response(appointment_id, doctor_id)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    request: UpdateAppointmentRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Reschedule or otherwise update an appointment."""
    return await AppointmentService.update_appointment(appointment_id, doctor_id, request)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Cancel and remove an appointment."""
    await AppointmentService.delete_appointment(appointment_id, doctor_id)
    return MessageResponse(message="Appointment deleted successfully")
