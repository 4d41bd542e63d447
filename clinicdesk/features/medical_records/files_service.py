# Medical Records Feature - Attached Files Service

import base64
from typing import List, Tuple
from fastapi import UploadFile
from clinicdesk.config import settings
from clinicdesk.features.medical_records.models import (
    MedicalRecordFile,
    MEDICAL_RECORDS,
    MEDICAL_RECORD_FILES,
)
from clinicdesk.core.logging import logger
from clinicdesk.shared.exceptions import BadRequestException
from clinicdesk.shared.scoping import get_owned, get_owned_child


ALLOWED_MIME_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
}


class MedicalRecordFileService:
    """
    Service for files attached to medical records.

    Files carry no owner of their own: every operation first resolves the
    parent record through the ownership check, then the file within it.
    """

    @staticmethod
    async def _read_validated(file: UploadFile) -> bytes:
        """Read an upload, enforcing the MIME allow-list and size limit."""
        if not file.filename:
            raise BadRequestException("No file provided")

        if file.content_type not in ALLOWED_MIME_TYPES:
            raise BadRequestException(
                "Invalid file type. Allowed types: PDF, Images, Word, Excel, Text"
            )

        # One byte past the limit is enough to reject without buffering the rest
        content = await file.read(settings.MAX_UPLOAD_SIZE_BYTES + 1)
        if len(content) > settings.MAX_UPLOAD_SIZE_BYTES:
            max_mb = settings.MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
            raise BadRequestException(f"File too large. Maximum size is {max_mb}MB")

        return content

    @staticmethod
    async def upload_files(
        record_id: str,
        doctor_id: str,
        files: List[UploadFile]
    ) -> List[MedicalRecordFile]:
        """
        Attach one or more files to one of the doctor's medical records.

        All files are validated before any is stored.
        """
        record = await get_owned(MEDICAL_RECORDS, record_id, doctor_id)

        if not files:
            raise BadRequestException("No file provided")
        if len(files) > settings.MAX_FILES_PER_UPLOAD:
            raise BadRequestException(
                f"Too many files. Maximum is {settings.MAX_FILES_PER_UPLOAD} per upload"
            )

        contents = [await MedicalRecordFileService._read_validated(f) for f in files]

        stored = []
        for file, content in zip(files, contents):
            document = MedicalRecordFile(
                medical_record_id=str(record.id),
                original_name=file.filename,
                mime_type=file.content_type,
                file_size=len(content),
                file_data=base64.b64encode(content).decode("ascii"),
            )
            await document.insert()
            stored.append(document)

        logger.info(f"Uploaded {len(stored)} file(s) to medical record {record.id}")
        return stored

    @staticmethod
    async def get_files(record_id: str, doctor_id: str) -> List[MedicalRecordFile]:
        """File metadata of one of the doctor's medical records, newest first."""
        record = await get_owned(MEDICAL_RECORDS, record_id, doctor_id)

        return await MedicalRecordFile.find(
            MedicalRecordFile.medical_record_id == str(record.id)
        ).sort(-MedicalRecordFile.uploaded_at).to_list()

    @staticmethod
    async def get_file(record_id: str, file_id: str, doctor_id: str) -> MedicalRecordFile:
        """Get a file of one of the doctor's medical records."""
        return await get_owned_child(MEDICAL_RECORD_FILES, record_id, file_id, doctor_id)

    @staticmethod
    async def get_file_content(record_id: str, file_id: str, doctor_id: str) -> Tuple[bytes, MedicalRecordFile]:
        """Decoded file content for download."""
        file = await MedicalRecordFileService.get_file(record_id, file_id, doctor_id)
        return base64.b64decode(file.file_data), file

    @staticmethod
    async def rename_file(record_id: str, file_id: str, doctor_id: str, new_name: str) -> MedicalRecordFile:
        """Change the display name of an attached file."""
        file = await MedicalRecordFileService.get_file(record_id, file_id, doctor_id)
        file.original_name = new_name
        await file.save()

        logger.info(f"Renamed file {file_id}")
        return file

    @staticmethod
    async def delete_file(record_id: str, file_id: str, doctor_id: str) -> None:
        """Remove an attached file."""
        file = await MedicalRecordFileService.get_file(record_id, file_id, doctor_id)
        await file.delete()

        logger.info(f"Deleted file {file_id} from medical record {record_id}")
