# Appointments Feature - Service

from typing import Dict, List, Optional, Tuple
from datetime import date
from beanie import PydanticObjectId
from beanie.operators import In
from clinicdesk.features.appointments.models import Appointment, AppointmentStatus, APPOINTMENTS
from clinicdesk.features.appointments.schemas import (
    CreateAppointmentRequest,
    UpdateAppointmentRequest,
    AppointmentResponse,
)
from clinicdesk.features.patients.models import Patient, PATIENTS
from clinicdesk.core.logging import logger
from clinicdesk.shared.scoping import get_owned, scoped_find, paginate


class AppointmentService:
    """Service class for appointment operations."""

    @staticmethod
    def appointment_to_response(appointment: Appointment, patient_name: str = "") -> AppointmentResponse:
        """Convert Appointment document to response schema."""
        return AppointmentResponse(
            id=str(appointment.id),
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
            patient_name=patient_name,
            date=appointment.date,
            time=appointment.time,
            duration=appointment.duration,
            type=appointment.type,
            status=appointment.status,
            notes=appointment.notes,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    @staticmethod
    async def to_responses(appointments: List[Appointment], doctor_id: str) -> List[AppointmentResponse]:
        """Convert appointments to responses, loading patient names in one query."""
        names: Dict[str, str] = {}
        patient_ids = {a.patient_id for a in appointments}

        if patient_ids:
            patients = await scoped_find(
                PATIENTS, doctor_id, In(Patient.id, [PydanticObjectId(pid) for pid in patient_ids])
            ).to_list()
            names = {str(p.id): p.name for p in patients}

        return [
            AppointmentService.appointment_to_response(a, names.get(a.patient_id, ""))
            for a in appointments
        ]

    @staticmethod
    async def create_appointment(
        doctor_id: str,
        request: CreateAppointmentRequest
    ) -> AppointmentResponse:
        """
        Create an appointment for one of the doctor's patients.

        The patient is re-checked against the caller even though the payload
        has already been validated, so another doctor's patient is NotFound.
        """
        patient = await get_owned(PATIENTS, request.patient_id, doctor_id)

        appointment = Appointment(
            doctor_id=doctor_id,
            **request.model_dump(exclude={"patient_id"}),
            patient_id=str(patient.id),
        )
        await appointment.insert()

        logger.info(
            f"Created appointment {appointment.id} for patient {patient.id} "
            f"on {appointment.date} {appointment.time}"
        )

        return AppointmentService.appointment_to_response(appointment, patient.name)

    @staticmethod
    async def get_appointments(
        doctor_id: str,
        on_date: Optional[date] = None,
        patient_id: Optional[str] = None,
        status: Optional[AppointmentStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[AppointmentResponse], int]:
        """
        List the doctor's appointments ordered by date then time.

        Each filter is only applied when given; the date range needs both ends
        and is inclusive.

        Returns:
            Tuple of (appointments on the page, total matching appointments)
        """
        filters = []
        if on_date:
            filters.append(Appointment.date == on_date)
        if patient_id:
            filters.append(Appointment.patient_id == patient_id)
        if status:
            filters.append(Appointment.status == status)
        if start_date and end_date:
            filters.append(Appointment.date >= start_date)
            filters.append(Appointment.date <= end_date)

        query = scoped_find(APPOINTMENTS, doctor_id, *filters).sort(
            +Appointment.date, +Appointment.time
        )
        appointments, total = await paginate(query, page, limit)

        return await AppointmentService.to_responses(appointments, doctor_id), total

    @staticmethod
    async def get_appointments_for_patient(patient_id: str, doctor_id: str) -> List[AppointmentResponse]:
        """All appointments of one of the doctor's patients."""
        patient = await get_owned(PATIENTS, patient_id, doctor_id)

        appointments = await scoped_find(
            APPOINTMENTS, doctor_id, Appointment.patient_id == str(patient.id)
        ).sort(+Appointment.date, +Appointment.time).to_list()

        return [AppointmentService.appointment_to_response(a, patient.name) for a in appointments]

    @staticmethod
    async def get_appointments_for_date(day: date, doctor_id: str) -> List[AppointmentResponse]:
        """The doctor's appointments on one calendar day, by time."""
        appointments = await scoped_find(
            APPOINTMENTS, doctor_id, Appointment.date == day
        ).sort(+Appointment.time).to_list()

        return await AppointmentService.to_responses(appointments, doctor_id)

    @staticmethod
    async def get_appointment(appointment_id: str, doctor_id: str) -> Appointment:
        """Get one of the doctor's appointments."""
        return await get_owned(APPOINTMENTS, appointment_id, doctor_id)

    @staticmethod
    async def get_appointment_response(appointment_id: str, doctor_id: str) -> AppointmentResponse:
        """Get one of the doctor's appointments with the patient name."""
        appointment = await AppointmentService.get_appointment(appointment_id, doctor_id)
        responses = await AppointmentService.to_responses([appointment], doctor_id)
        return responses[0]

    @staticmethod
    async def update_appointment(
        appointment_id: str,
        doctor_id: str,
        request: UpdateAppointmentRequest
    ) -> AppointmentResponse:
        """
        Partially update an appointment.

        Moving the appointment to another patient re-checks that patient's owner.
        """
        appointment = await AppointmentService.get_appointment(appointment_id, doctor_id)

        update_dict = request.model_dump(exclude_unset=True)

        if update_dict.get("patient_id") is not None:
            patient = await get_owned(PATIENTS, update_dict["patient_id"], doctor_id)
            update_dict["patient_id"] = str(patient.id)

        for field, value in update_dict.items():
            if value is not None:
                setattr(appointment, field, value)

        appointment.update_timestamp()
        await appointment.save()

        logger.info(f"Updated appointment {appointment_id}")

        return await AppointmentService.get_appointment_response(appointment_id, doctor_id)

    @staticmethod
    async def delete_appointment(appointment_id: str, doctor_id: str) -> None:
        """Delete one of the doctor's appointments."""
        appointment = await AppointmentService.get_appointment(appointment_id, doctor_id)
        await appointment.delete()

        logger.info(f"Deleted appointment {appointment_id}")
