"""Medical record endpoints and attached files."""

from datetime import date

import pytest

from clinicdesk.config import settings
from clinicdesk.features.medical_records.files_service import MedicalRecordFileService
from clinicdesk.features.medical_records.models import MedicalRecord, MedicalRecordFile
from clinicdesk.shared.exceptions import BadRequestException

from conftest import auth_headers, make_patient


async def _record(doctor, patient, day=date(2024, 1, 15), diagnosis="Caries"):
    record = MedicalRecord(
        doctor_id=str(doctor.id),
        patient_id=str(patient.id),
        date=day,
        diagnosis=diagnosis,
        treatment="Filling",
    )
    await record.insert()
    return record


async def test_create_record_for_own_patient(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")

    response = await client.post(
        f"/api/medical-records/patient/{patient.id}",
        json={"date": "2024-01-15", "diagnosis": "Caries", "treatment": "Filling"},
        headers=auth_headers(doctor_a),
    )

    body = response.json()
    assert response.status_code == 201
    assert body["date"] == "2024-01-15"
    assert body["attachments"] == []
    assert body["files"] == []


async def test_create_record_for_foreign_patient_is_404(client, doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "a@x.com")

    response = await client.post(
        f"/api/medical-records/patient/{patient.id}",
        json={"date": "2024-01-15", "diagnosis": "Caries", "treatment": "Filling"},
        headers=auth_headers(doctor_b),
    )

    assert response.status_code == 404


async def test_diagnosis_length_limit(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")

    response = await client.post(
        f"/api/medical-records/patient/{patient.id}",
        json={"date": "2024-01-15", "diagnosis": "x" * 501, "treatment": "Filling"},
        headers=auth_headers(doctor_a),
    )

    assert response.status_code == 422


async def test_list_records_newest_first(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    await _record(doctor_a, patient, date(2023, 3, 1), "Old")
    await _record(doctor_a, patient, date(2024, 3, 1), "New")

    response = await client.get(
        f"/api/medical-records/patient/{patient.id}", headers=auth_headers(doctor_a)
    )

    assert [r["diagnosis"] for r in response.json()] == ["New", "Old"]


async def test_update_record(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)

    response = await client.patch(
        f"/api/medical-records/{record.id}",
        json={"treatment": "Crown"},
        headers=auth_headers(doctor_a),
    )

    body = response.json()
    assert body["treatment"] == "Crown"
    assert body["diagnosis"] == "Caries"


async def test_upload_list_download_rename_delete_file(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)
    headers = auth_headers(doctor_a)
    base = f"/api/medical-records/{record.id}/files"

    response = await client.post(
        f"{base}/upload",
        files={"file": ("report.pdf", b"%PDF-1.4 test", "application/pdf")},
        headers=headers,
    )
    assert response.status_code == 201
    uploaded = response.json()
    assert uploaded["original_name"] == "report.pdf"
    assert uploaded["file_size"] == len(b"%PDF-1.4 test")
    assert "file_data" not in uploaded

    response = await client.get(base, headers=headers)
    assert [f["id"] for f in response.json()] == [uploaded["id"]]

    response = await client.get(f"{base}/file/{uploaded['id']}", headers=headers)
    assert response.status_code == 200
    assert response.content == b"%PDF-1.4 test"
    assert response.headers["content-type"] == "application/pdf"
    assert "report.pdf" in response.headers["content-disposition"]

    response = await client.patch(
        f"{base}/file/{uploaded['id']}/rename", json={"new_name": "scan.pdf"}, headers=headers
    )
    assert response.json()["original_name"] == "scan.pdf"

    response = await client.delete(f"{base}/file/{uploaded['id']}", headers=headers)
    assert response.status_code == 200
    assert await MedicalRecordFile.find_all().count() == 0


async def test_upload_multiple(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)

    response = await client.post(
        f"/api/medical-records/{record.id}/files/upload-multiple",
        files=[
            ("files", ("a.png", b"\x89PNG", "image/png")),
            ("files", ("b.txt", b"notes", "text/plain")),
        ],
        headers=auth_headers(doctor_a),
    )

    assert response.status_code == 201
    assert sorted(f["original_name"] for f in response.json()) == ["a.png", "b.txt"]


async def test_upload_rejects_too_many_files(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)

    response = await client.post(
        f"/api/medical-records/{record.id}/files/upload-multiple",
        files=[("files", (f"{i}.txt", b"x", "text/plain")) for i in range(6)],
        headers=auth_headers(doctor_a),
    )

    assert response.status_code == 400
    assert await MedicalRecordFile.find_all().count() == 0


async def test_upload_rejects_disallowed_type(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)

    response = await client.post(
        f"/api/medical-records/{record.id}/files/upload",
        files={"file": ("run.exe", b"MZ", "application/x-msdownload")},
        headers=auth_headers(doctor_a),
    )

    assert response.status_code == 400


async def test_upload_rejects_oversized_file(client, doctor_a, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_BYTES", 4)
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)

    response = await client.post(
        f"/api/medical-records/{record.id}/files/upload",
        files={"file": ("big.txt", b"12345", "text/plain")},
        headers=auth_headers(doctor_a),
    )

    assert response.status_code == 400


async def test_upload_size_limit_boundaries(client, doctor_a, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_BYTES", 4)
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)
    url = f"/api/medical-records/{record.id}/files/upload"

    response = await client.post(
        url, files={"file": ("big.txt", b"x" * 1000, "text/plain")}, headers=auth_headers(doctor_a)
    )
    assert response.status_code == 400

    response = await client.post(
        url, files={"file": ("fits.txt", b"1234", "text/plain")}, headers=auth_headers(doctor_a)
    )
    assert response.status_code == 201
    assert response.json()["file_size"] == 4


class _Upload:
    """Records how much the service asks to read."""

    filename = "big.txt"
    content_type = "text/plain"

    def __init__(self, size):
        self.data = b"x" * size
        self.requested = []

    async def read(self, size=-1):
        self.requested.append(size)
        return self.data if size < 0 else self.data[:size]


async def test_upload_reads_at_most_one_byte_past_limit(monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_BYTES", 4)
    upload = _Upload(1000)

    with pytest.raises(BadRequestException):
        await MedicalRecordFileService._read_validated(upload)

    assert upload.requested == [5]


async def test_files_of_foreign_record_are_404(client, doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)
    file = MedicalRecordFile(
        medical_record_id=str(record.id), original_name="x.png",
        mime_type="image/png", file_size=3, file_data="AQID",
    )
    await file.insert()
    headers = auth_headers(doctor_b)
    base = f"/api/medical-records/{record.id}/files"

    assert (await client.get(base, headers=headers)).status_code == 404
    assert (await client.get(f"{base}/file/{file.id}", headers=headers)).status_code == 404
    assert (await client.delete(f"{base}/file/{file.id}", headers=headers)).status_code == 404
    response = await client.post(
        f"{base}/upload", files={"file": ("a.txt", b"x", "text/plain")}, headers=headers
    )
    assert response.status_code == 404


async def test_delete_record_removes_its_files(client, doctor_a):
    patient = await make_patient(doctor_a, "a@x.com")
    record = await _record(doctor_a, patient)
    kept = await _record(doctor_a, patient)
    for parent in (record, kept):
        await MedicalRecordFile(
            medical_record_id=str(parent.id), original_name="x.png",
            mime_type="image/png", file_size=3, file_data="AQID",
        ).insert()

    response = await client.delete(f"/api/medical-records/{record.id}", headers=auth_headers(doctor_a))

    assert response.status_code == 200
    assert await MedicalRecord.get(record.id) is None
    remaining = await MedicalRecordFile.find_all().to_list()
    assert [f.medical_record_id for f in remaining] == [str(kept.id)]
