# Patient Management Feature

from clinicdesk.features.patients.models import Patient, PATIENTS

__all__ = ["Patient", "PATIENTS"]
