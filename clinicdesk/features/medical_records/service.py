# Medical Records Feature - Service

from typing import Dict, List
from beanie.operators import In
from clinicdesk.features.medical_records.models import (
    MedicalRecord,
    MedicalRecordFile,
    MEDICAL_RECORDS,
)
from clinicdesk.features.medical_records.schemas import (
    CreateMedicalRecordRequest,
    UpdateMedicalRecordRequest,
    MedicalRecordResponse,
    MedicalRecordFileResponse,
)
from clinicdesk.features.patients.models import PATIENTS
from clinicdesk.core.logging import logger
from clinicdesk.shared.scoping import get_owned, scoped_find


class MedicalRecordService:
    """Service class for medical record operations."""

    @staticmethod
    def file_to_response(file: MedicalRecordFile) -> MedicalRecordFileResponse:
        """Convert file document to metadata response (no content)."""
        return MedicalRecordFileResponse(
            id=str(file.id),
            medical_record_id=file.medical_record_id,
            original_name=file.original_name,
            mime_type=file.mime_type,
            file_size=file.file_size,
            uploaded_at=file.uploaded_at,
        )

    @staticmethod
    def record_to_response(
        record: MedicalRecord,
        files: List[MedicalRecordFile] = None
    ) -> MedicalRecordResponse:
        """Convert MedicalRecord document to response schema."""
        return MedicalRecordResponse(
            id=str(record.id),
            doctor_id=record.doctor_id,
            patient_id=record.patient_id,
            date=record.date,
            diagnosis=record.diagnosis,
            treatment=record.treatment,
            notes=record.notes,
            attachments=record.attachments or [],
            files=[MedicalRecordService.file_to_response(f) for f in files or []],
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    async def _files_by_record(record_ids: List[str]) -> Dict[str, List[MedicalRecordFile]]:
        """File metadata for a set of records, newest upload first."""
        grouped: Dict[str, List[MedicalRecordFile]] = {rid: [] for rid in record_ids}
        if not record_ids:
            return grouped

        files = await MedicalRecordFile.find(
            In(MedicalRecordFile.medical_record_id, record_ids)
        ).sort(-MedicalRecordFile.uploaded_at).to_list()

        for file in files:
            grouped[file.medical_record_id].append(file)
        return grouped

    @staticmethod
    async def create_record(
        patient_id: str,
        doctor_id: str,
        request: CreateMedicalRecordRequest
    ) -> MedicalRecordResponse:
        """Create a medical record for one of the doctor's patients."""
        patient = await get_owned(PATIENTS, patient_id, doctor_id)

        record = MedicalRecord(
            doctor_id=doctor_id,
            patient_id=str(patient.id),
            **request.model_dump(),
        )
        await record.insert()

        logger.info(f"Created medical record {record.id} for patient {patient.id}")

        return MedicalRecordService.record_to_response(record)

    @staticmethod
    async def get_records_for_patient(patient_id: str, doctor_id: str) -> List[MedicalRecordResponse]:
        """All medical records of one of the doctor's patients, newest date first, with file metadata."""
        patient = await get_owned(PATIENTS, patient_id, doctor_id)

        records = await scoped_find(
            MEDICAL_RECORDS, doctor_id, MedicalRecord.patient_id == str(patient.id)
        ).sort(-MedicalRecord.date).to_list()

        files = await MedicalRecordService._files_by_record([str(r.id) for r in records])

        return [
            MedicalRecordService.record_to_response(r, files[str(r.id)])
            for r in records
        ]

    @staticmethod
    async def get_record(record_id: str, doctor_id: str) -> MedicalRecord:
        """Get one of the doctor's medical records."""
        return await get_owned(MEDICAL_RECORDS, record_id, doctor_id)

    @staticmethod
    async def get_record_response(record_id: str, doctor_id: str) -> MedicalRecordResponse:
        """Get one of the doctor's medical records with file metadata."""
        record = await MedicalRecordService.get_record(record_id, doctor_id)
        files = await MedicalRecordService._files_by_record([str(record.id)])
        return MedicalRecordService.record_to_response(record, files[str(record.id)])

    @staticmethod
    async def update_record(
        record_id: str,
        doctor_id: str,
        request: UpdateMedicalRecordRequest
    ) -> MedicalRecordResponse:
        """Partially update a medical record."""
        record = await MedicalRecordService.get_record(record_id, doctor_id)

        for field, value in request.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(record, field, value)

        record.update_timestamp()
        await record.save()

        logger.info(f"Updated medical record {record_id}")

        return await MedicalRecordService.get_record_response(record_id, doctor_id)

    @staticmethod
    async def delete_record(record_id: str, doctor_id: str) -> None:
        """Delete a medical record and its attached files."""
        record = await MedicalRecordService.get_record(record_id, doctor_id)

        files_query = MedicalRecordFile.find(
            MedicalRecordFile.medical_record_id == str(record.id)
        )
        deleted_files_count = await files_query.count()
        await files_query.delete()

        await record.delete()

        logger.info(f"Deleted medical record {record_id} and {deleted_files_count} files")
