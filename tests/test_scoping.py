"""Tenant isolation through the ownership and scoped query helpers."""

from datetime import date

import pytest

from clinicdesk.features.appointments.models import Appointment, APPOINTMENTS
from clinicdesk.features.appointments.schemas import UpdateAppointmentRequest
from clinicdesk.features.appointments.service import AppointmentService
from clinicdesk.features.medical_records.models import (
    MedicalRecord,
    MedicalRecordFile,
    MEDICAL_RECORDS,
    MEDICAL_RECORD_FILES,
)
from clinicdesk.features.medical_records.files_service import MedicalRecordFileService
from clinicdesk.features.medical_records.schemas import UpdateMedicalRecordRequest
from clinicdesk.features.medical_records.service import MedicalRecordService
from clinicdesk.features.notifications.models import Notification, NOTIFICATIONS
from clinicdesk.features.patients.models import Patient, PATIENTS
from clinicdesk.features.patients.schemas import UpdatePatientRequest
from clinicdesk.features.patients.service import PatientService
from clinicdesk.shared.exceptions import NotFoundException
from clinicdesk.shared.scoping import get_owned, get_owned_child, paginate, scoped_find

from conftest import make_patient


async def _make_record(doctor_id: str, patient: Patient) -> MedicalRecord:
    record = MedicalRecord(
        doctor_id=doctor_id,
        patient_id=str(patient.id),
        date=date(2024, 1, 15),
        diagnosis="Caries",
        treatment="Filling",
    )
    await record.insert()
    return record


async def _make_file(record: MedicalRecord, name: str = "xray.png") -> MedicalRecordFile:
    file = MedicalRecordFile(
        medical_record_id=str(record.id),
        original_name=name,
        mime_type="image/png",
        file_size=3,
        file_data="AQID",
    )
    await file.insert()
    return file


async def test_get_owned_returns_own_document(doctor_a):
    patient = await make_patient(doctor_a, "p1@mail.com")

    found = await get_owned(PATIENTS, str(patient.id), str(doctor_a.id))

    assert found.id == patient.id


async def test_other_doctors_document_is_not_found(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "p1@mail.com")

    with pytest.raises(NotFoundException) as exc:
        await get_owned(PATIENTS, str(patient.id), str(doctor_b.id))

    assert exc.value.status_code == 404
    assert exc.value.detail == "Patient not found"


async def test_missing_and_foreign_ids_are_indistinguishable(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "p1@mail.com")

    with pytest.raises(NotFoundException) as foreign:
        await get_owned(PATIENTS, str(patient.id), str(doctor_b.id))
    with pytest.raises(NotFoundException) as missing:
        await get_owned(PATIENTS, "65a0c2f1e4b0a1b2c3d4e5f6", str(doctor_b.id))

    assert foreign.value.detail == missing.value.detail


@pytest.mark.parametrize("bad_id", ["not-an-id", "123", ""])
async def test_malformed_id_is_not_found(doctor_a, bad_id):
    with pytest.raises(NotFoundException):
        await get_owned(APPOINTMENTS, bad_id, str(doctor_a.id))


async def test_patient_isolation_for_get_update_delete(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "p1@mail.com")
    pid, other = str(patient.id), str(doctor_b.id)

    with pytest.raises(NotFoundException):
        await PatientService.get_patient(pid, other)
    with pytest.raises(NotFoundException):
        await PatientService.update_patient(pid, other, UpdatePatientRequest(name="Hijacked"))
    with pytest.raises(NotFoundException):
        await PatientService.delete_patient(pid, other)

    unchanged = await Patient.get(patient.id)
    assert unchanged.name == "Sarah Johnson"


async def test_appointment_isolation_for_get_update_delete(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "p1@mail.com")
    appointment = Appointment(
        doctor_id=str(doctor_a.id),
        patient_id=str(patient.id),
        date=date(2024, 5, 1),
        time="09:00",
    )
    await appointment.insert()
    aid, other = str(appointment.id), str(doctor_b.id)

    with pytest.raises(NotFoundException):
        await AppointmentService.get_appointment(aid, other)
    with pytest.raises(NotFoundException):
        await AppointmentService.update_appointment(aid, other, UpdateAppointmentRequest(notes="x"))
    with pytest.raises(NotFoundException):
        await AppointmentService.delete_appointment(aid, other)

    assert await Appointment.get(appointment.id) is not None


async def test_medical_record_isolation_for_get_update_delete(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "p1@mail.com")
    record = await _make_record(str(doctor_a.id), patient)
    rid, other = str(record.id), str(doctor_b.id)

    with pytest.raises(NotFoundException):
        await MedicalRecordService.get_record(rid, other)
    with pytest.raises(NotFoundException):
        await MedicalRecordService.update_record(rid, other, UpdateMedicalRecordRequest(notes="x"))
    with pytest.raises(NotFoundException):
        await MedicalRecordService.delete_record(rid, other)

    assert await MedicalRecord.get(record.id) is not None


async def test_file_of_foreign_record_is_not_found(doctor_a, doctor_b):
    patient = await make_patient(doctor_a, "p1@mail.com")
    record = await _make_record(str(doctor_a.id), patient)
    file = await _make_file(record)

    found = await get_owned(MEDICAL_RECORD_FILES, str(file.id), str(doctor_a.id))
    assert found.id == file.id

    with pytest.raises(NotFoundException) as exc:
        await get_owned(MEDICAL_RECORD_FILES, str(file.id), str(doctor_b.id))
    assert exc.value.detail == "File not found"

    with pytest.raises(NotFoundException):
        await get_owned_child(MEDICAL_RECORD_FILES, str(record.id), str(file.id), str(doctor_b.id))


async def test_file_under_wrong_record_is_not_found(doctor_a):
    patient = await make_patient(doctor_a, "p1@mail.com")
    record = await _make_record(str(doctor_a.id), patient)
    other_record = await _make_record(str(doctor_a.id), patient)
    file = await _make_file(record)

    child = await get_owned_child(
        MEDICAL_RECORD_FILES, str(record.id), str(file.id), str(doctor_a.id)
    )
    assert child.id == file.id

    with pytest.raises(NotFoundException):
        await get_owned_child(
            MEDICAL_RECORD_FILES, str(other_record.id), str(file.id), str(doctor_a.id)
        )


async def test_file_resolves_only_through_owner_of_its_record(doctor_a, doctor_b):
    patient = await make_patient(doctor_b, "p2@mail.com")
    foreign_record = await _make_record(str(doctor_b.id), patient)
    own_record = await _make_record(str(doctor_a.id), await make_patient(doctor_a, "p1@mail.com"))
    file = await _make_file(foreign_record)

    found = await MedicalRecordFileService.get_file(str(foreign_record.id), str(file.id), str(doctor_b.id))
    assert found.id == file.id

    for record_id in (str(foreign_record.id), str(own_record.id)):
        with pytest.raises(NotFoundException):
            await MedicalRecordFileService.get_file(record_id, str(file.id), str(doctor_a.id))
    with pytest.raises(NotFoundException):
        await get_owned(MEDICAL_RECORD_FILES, str(file.id), str(doctor_a.id))


async def test_notification_isolation_and_system_rows(doctor_a, doctor_b):
    own = Notification(doctor_id=str(doctor_a.id), title="Mine", message="m")
    system = Notification(doctor_id=None, title="Maintenance", message="m")
    await own.insert()
    await system.insert()

    with pytest.raises(NotFoundException):
        await get_owned(NOTIFICATIONS, str(own.id), str(doctor_b.id))
    with pytest.raises(NotFoundException):
        await get_owned(NOTIFICATIONS, str(system.id), str(doctor_a.id))

    visible = await scoped_find(NOTIFICATIONS, str(doctor_a.id)).to_list()
    assert [n.id for n in visible] == [own.id]


async def test_scoped_find_only_returns_callers_rows(doctor_a, doctor_b):
    await make_patient(doctor_a, "a1@mail.com")
    await make_patient(doctor_a, "a2@mail.com")
    await make_patient(doctor_b, "b1@mail.com")

    mine = await scoped_find(PATIENTS, str(doctor_a.id)).to_list()
    theirs = await scoped_find(PATIENTS, str(doctor_b.id), Patient.email == "a1@mail.com").to_list()

    assert {p.email for p in mine} == {"a1@mail.com", "a2@mail.com"}
    assert theirs == []


@pytest.mark.parametrize("page,limit,expected_len", [(1, 10, 7), (1, 3, 3), (3, 3, 1), (4, 3, 0)])
async def test_paginate_total_ignores_page_bounds(doctor_a, doctor_b, page, limit, expected_len):
    for i in range(7):
        await make_patient(doctor_a, f"a{i}@mail.com")
    await make_patient(doctor_b, "b@mail.com")

    items, total = await paginate(scoped_find(PATIENTS, str(doctor_a.id)), page, limit)

    assert total == 7
    assert len(items) == expected_len
    assert len(items) <= limit
