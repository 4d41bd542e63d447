# Patient Management Feature - Router

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from clinicdesk.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientRequest,
    PatientResponse,
    PatientDetailResponse,
)
from clinicdesk.features.patients.service import PatientService
from clinicdesk.features.auth.dependencies import get_current_doctor_id
from clinicdesk.shared.schemas import MessageResponse, PaginatedResponse


router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: CreatePatientRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    Create a new patient for the current doctor.

    Patient email must be unique.
    """
    patient = await PatientService.create_patient(doctor_id, request)
    return PatientService.patient_to_response(patient)


@router.get("", response_model=PaginatedResponse[PatientResponse])
async def list_patients(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    List the current doctor's patients, newest first.

    - **search**: Case-insensitive match on name, email or phone
    - **page** / **limit**: Pagination
    """
    patients, total = await PatientService.get_patients(
        doctor_id, search=search, page=page, limit=limit
    )
    return PaginatedResponse[PatientResponse](
        data=[PatientService.patient_to_response(p) for p in patients],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{patient_id}", response_model=PatientDetailResponse)
async def get_patient(
    patient_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Get a patient with their appointments and medical records."""
    return await PatientService.get_patient_detail(patient_id, doctor_id)


@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: str,
    request: UpdatePatientRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Update patient information."""
    patient = await PatientService.update_patient(patient_id, doctor_id, request)
    return PatientService.patient_to_response(patient)


@router.delete("/{patient_id}", response_model=MessageResponse)
async def delete_patient(
    patient_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    Permanently delete a patient.

    Also removes the patient's appointments, medical records and their files.
    """
    await PatientService.delete_patient(patient_id, doctor_id)
    return MessageResponse(message="Patient deleted successfully")
