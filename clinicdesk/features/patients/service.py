# Patient Management Feature - Service

import re
from typing import List, Optional, Tuple
from beanie.operators import In, Or, RegEx
from pymongo.errors import DuplicateKeyError
from clinicdesk.features.patients.models import Patient, PATIENTS
from clinicdesk.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
    PatientDetailResponse,
)
from clinicdesk.features.appointments.models import Appointment, APPOINTMENTS
from clinicdesk.features.appointments.service import AppointmentService
from clinicdesk.features.medical_records.models import MedicalRecord, MedicalRecordFile, MEDICAL_RECORDS
from clinicdesk.features.medical_records.service import MedicalRecordService
from clinicdesk.core.logging import logger
from clinicdesk.shared.exceptions import ConflictException
from clinicdesk.shared.scoping import get_owned, scoped_find, paginate


class PatientService:
    """Service class for patient management operations."""

    @staticmethod
    async def create_patient(doctor_id: str, request: CreatePatientRequest) -> Patient:
        """Create a new patient owned by ``doctor_id``."""
        # Email is unique across all doctors
        existing_patient = await Patient.find_one(Patient.email == request.email)
        if existing_patient:
            raise ConflictException("A patient with this email already exists")

        patient = Patient(doctor_id=doctor_id, **request.model_dump())
        try:
            await patient.insert()
        except DuplicateKeyError:
            # Lost a race with a concurrent create; the unique index decides
            raise ConflictException("A patient with this email already exists")

        logger.info(f"Created patient {patient.id} for doctor {doctor_id}")
        return patient

    @staticmethod
    async def get_patients(
        doctor_id: str,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Patient], int]:
        """
        List the doctor's patients, newest first.

        Args:
            doctor_id: Owning doctor
            search: Case-insensitive substring of name, email or phone
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (patients on the page, total matching patients)
        """
        filters = []
        if search:
            pattern = re.escape(search)
            filters.append(Or(
                RegEx(Patient.name, pattern, "i"),
                RegEx(Patient.email, pattern, "i"),
                RegEx(Patient.phone, pattern, "i"),
            ))

        query = scoped_find(PATIENTS, doctor_id, *filters).sort(-Patient.created_at)
        return await paginate(query, page, limit)

    @staticmethod
    async def get_patient(patient_id: str, doctor_id: str) -> Patient:
        """Get one of the doctor's patients by id."""
        return await get_owned(PATIENTS, patient_id, doctor_id)

    @staticmethod
    async def get_patient_detail(patient_id: str, doctor_id: str) -> PatientDetailResponse:
        """Get a patient together with their appointments and medical records."""
        patient = await PatientService.get_patient(patient_id, doctor_id)

        appointments = await scoped_find(
            APPOINTMENTS, doctor_id, Appointment.patient_id == str(patient.id)
        ).sort(+Appointment.date, +Appointment.time).to_list()

        records = await MedicalRecordService.get_records_for_patient(str(patient.id), doctor_id)

        response = PatientService.patient_to_response(patient)
        return PatientDetailResponse(
            **response.model_dump(),
            appointments=[
                AppointmentService.appointment_to_response(a, patient.name) for a in appointments
            ],
            medical_records=records,
        )

    @staticmethod
    async def update_patient(
        patient_id: str,
        doctor_id: str,
        request: UpdatePatientRequest
    ) -> Patient:
        """Update patient information. Only provided fields are changed."""
        patient = await PatientService.get_patient(patient_id, doctor_id)

        update_dict = request.model_dump(exclude_unset=True)

        new_email = update_dict.get("email")
        if new_email and new_email != patient.email:
            if await Patient.find_one(Patient.email == new_email):
                raise ConflictException("A patient with this email already exists")

        for field, value in update_dict.items():
            if value is not None:
                setattr(patient, field, value)

        patient.update_timestamp()
        try:
            await patient.save()
        except DuplicateKeyError:
            raise ConflictException("A patient with this email already exists")

        logger.info(f"Updated patient {patient_id}")
        return patient

    @staticmethod
    async def delete_patient(patient_id: str, doctor_id: str) -> None:
        """
        Permanently delete a patient and everything that hangs off them.

        This includes:
        - All appointments for the patient
        - All medical records for the patient
        - All files attached to those medical records
        """
        patient = await PatientService.get_patient(patient_id, doctor_id)

        logger.info(f"Starting cascade deletion for patient {patient_id}")

        # 1. Files of the patient's medical records
        records_query = scoped_find(
            MEDICAL_RECORDS, doctor_id, MedicalRecord.patient_id == str(patient.id)
        )
        records = await records_query.to_list()
        record_ids = [str(record.id) for record in records]

        deleted_files_count = 0
        if record_ids:
            deleted_files_count = await MedicalRecordFile.find(
                In(MedicalRecordFile.medical_record_id, record_ids)
            ).count()
            await MedicalRecordFile.find(
                In(MedicalRecordFile.medical_record_id, record_ids)
            ).delete()

        # 2. Medical records
        await records_query.delete()

        # 3. Appointments
        appointments_query = scoped_find(
            APPOINTMENTS, doctor_id, Appointment.patient_id == str(patient.id)
        )
        deleted_appointments_count = await appointments_query.count()
        await appointments_query.delete()

        # 4. The patient record itself
        await patient.delete()

        logger.info(
            f"Permanently deleted patient {patient_id} and all related data: "
            f"{deleted_appointments_count} appointments, {len(record_ids)} medical records, "
            f"{deleted_files_count} files"
        )

    @staticmethod
    def patient_to_response(patient: Patient) -> PatientResponse:
        """Convert Patient model to response schema."""
        return PatientResponse(
            id=str(patient.id),
            doctor_id=patient.doctor_id,
            name=patient.name,
            email=patient.email,
            phone=patient.phone,
            date_of_birth=patient.date_of_birth,
            address=patient.address,
            notes=patient.notes,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )
