# Medical Records Feature - Router

from typing import List
from urllib.parse import quote
from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from clinicdesk.features.medical_records.schemas import (
    CreateMedicalRecordRequest,
    UpdateMedicalRecordRequest,
    RenameFileRequest,
    MedicalRecordResponse,
    MedicalRecordFileResponse,
)
from clinicdesk.features.medical_records.service import MedicalRecordService
from clinicdesk.features.medical_records.files_service import MedicalRecordFileService
from clinicdesk.features.auth.dependencies import get_current_doctor_id
from clinicdesk.shared.schemas import MessageResponse


router = APIRouter(prefix="/medical-records", tags=["Medical Records"])


# ============== Records ==============

@router.post(
    "/patient/{patient_id}",
    response_model=MedicalRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_medical_record(
    patient_id: str,
    request: CreateMedicalRecordRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Add a medical record to one of the current doctor's patients."""
    return await MedicalRecordService.create_record(patient_id, doctor_id, request)


@router.get("/patient/{patient_id}", response_model=List[MedicalRecordResponse])
async def list_patient_medical_records(
    patient_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """A patient's medical records, newest first, with attached file metadata."""
    return await MedicalRecordService.get_records_for_patient(patient_id, doctor_id)


@router.get("/{record_id}", response_model=MedicalRecordResponse)
async def get_medical_record(
    record_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Get a single medical record."""
    return await MedicalRecordService.get_record_response(record_id, doctor_id)


@router.patch("/{record_id}", response_model=MedicalRecordResponse)
async def update_medical_record(
    record_id: str,
    request: UpdateMedicalRecordRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Update a medical record."""
    return await MedicalRecordService.update_record(record_id, doctor_id, request)


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_medical_record(
    record_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Delete a medical record together with its attached files."""
    await MedicalRecordService.delete_record(record_id, doctor_id)
    return MessageResponse(message="Medical record deleted successfully")


# ============== Attached Files ==============

@router.post(
    "/{record_id}/files/upload",
    response_model=MedicalRecordFileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    record_id: str,
    file: UploadFile = File(...),
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    Attach a file to a medical record.

    - **file**: PDF, image, Word, Excel or plain text, max 10MB
    """
    stored = await MedicalRecordFileService.upload_files(record_id, doctor_id, [file])
    return MedicalRecordService.file_to_response(stored[0])


@router.post(
    "/{record_id}/files/upload-multiple",
    response_model=List[MedicalRecordFileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_files(
    record_id: str,
    files: List[UploadFile] = File(...),
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Attach up to 5 files to a medical record in one request."""
    stored = await MedicalRecordFileService.upload_files(record_id, doctor_id, files)
    return [MedicalRecordService.file_to_response(f) for f in stored]


@router.get("/{record_id}/files", response_model=List[MedicalRecordFileResponse])
async def list_files(
    record_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Metadata of a record's files, most recently uploaded first."""
    files = await MedicalRecordFileService.get_files(record_id, doctor_id)
    return [MedicalRecordService.file_to_response(f) for f in files]


@router.get("/{record_id}/files/file/{file_id}")
async def download_file(
    record_id: str,
    file_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Download the raw content of an attached file."""
    content, file = await MedicalRecordFileService.get_file_content(record_id, file_id, doctor_id)
    return Response(
        content=content,
        media_type=file.mime_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(file.original_name)}",
        },
    )


@router.patch("/{record_id}/files/file/{file_id}/rename", response_model=MedicalRecordFileResponse)
async def rename_file(
    record_id: str,
    file_id: str,
    request: RenameFileRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Rename an attached file."""
    file = await MedicalRecordFileService.rename_file(record_id, file_id, doctor_id, request.new_name)
    return MedicalRecordService.file_to_response(file)


@router.delete("/{record_id}/files/file/{file_id}", response_model=MessageResponse)
async def delete_file(
    record_id: str,
    file_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Remove an attached file."""
    await MedicalRecordFileService.delete_file(record_id, file_id, doctor_id)
    return MessageResponse(message="File deleted successfully")
