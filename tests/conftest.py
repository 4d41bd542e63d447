"""Shared fixtures: an in-memory Beanie database per test and an HTTP client."""

import pytest
from beanie import init_beanie
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from clinicdesk.database import DOCUMENT_MODELS
from clinicdesk.features.auth.models import User
from clinicdesk.features.auth.service import AuthService
from clinicdesk.features.patients.models import Patient
from clinicdesk.main import app


@pytest.fixture(autouse=True)
async def database():
    client = AsyncMongoMockClient()
    await init_beanie(
        database=client["clinicdesk_test"],
        document_models=DOCUMENT_MODELS,
    )
    yield client


@pytest.fixture
async def client():
    # ASGITransport does not run the lifespan, so no real MongoDB connection is made
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def make_doctor(email: str, name: str = "Dr. Test", role: str = "doctor") -> User:
    user = User(name=name, email=email, role=role)
    await user.insert()
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {AuthService.create_token(user)}"}


async def make_patient(doctor: User, email: str, name: str = "Sarah Johnson", **fields) -> Patient:
    patient = Patient(
        doctor_id=str(doctor.id),
        name=name,
        email=email,
        phone=fields.pop("phone", "+1-555-0123"),
        **fields,
    )
    await patient.insert()
    return patient


@pytest.fixture
async def doctor_a() -> User:
    return await make_doctor("house@clinic.com", name="Dr. House")


@pytest.fixture
async def doctor_b() -> User:
    return await make_doctor("wilson@clinic.com", name="Dr. Wilson")


@pytest.fixture
async def admin() -> User:
    return await make_doctor("admin@clinic.com", name="Admin", role="admin")
