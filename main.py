"""ClinicDesk - medical practice scheduling backend."""

import uvicorn

from clinicdesk.config import settings
from clinicdesk.main import app  # noqa: F401


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )
