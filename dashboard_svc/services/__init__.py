"""
Service layer for business logic.

Note: the dashboard package is not re-exported here to avoid circular imports.
Import it directly:
- from services.dashboard import DashboardService
"""
from services.patient_service import PatientService
from services.record_loader import LoadState, RecordLoader

__all__ = [
    "PatientService",
    "RecordLoader",
    "LoadState",
]
