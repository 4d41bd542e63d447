"""MongoDB database connection manager."""

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from typing import Optional

from clinicdesk.config import settings
from clinicdesk.core.logging import logger
from clinicdesk.features.auth.models import User
from clinicdesk.features.patients.models import Patient
from clinicdesk.features.appointments.models import Appointment
from clinicdesk.features.medical_records.models import MedicalRecord, MedicalRecordFile
from clinicdesk.features.notifications.models import Notification


DOCUMENT_MODELS = [
    User,
    Patient,
    Appointment,
    MedicalRecord,
    MedicalRecordFile,
    Notification,
]


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB and initialize Beanie."""
        cls.client = AsyncIOMotorClient(settings.MONGODB_URL)

        await init_beanie(
            database=cls.client[settings.DATABASE_NAME],
            document_models=DOCUMENT_MODELS,
        )

        logger.info(f"Connected to MongoDB database: {settings.DATABASE_NAME}")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            logger.info("Closed MongoDB connection")
