"""
FastAPI Dependency Injection configuration for the dashboard service.

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    Service Layer (PatientService, DashboardService)
         ↓ Depends()
    RecordServiceClient
         ↓ RecordServiceConfig (from Settings)
    Remote record service

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_record_service_client] = lambda: test_client
"""
import logging

from fastapi import Depends

from clients.record_service_client import RecordServiceClient
from core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def get_app_settings() -> Settings:
    """Get the cached application settings."""
    return get_settings()


def get_record_service_client(
    settings: Settings = Depends(get_app_settings),
) -> RecordServiceClient:
    """Get a RecordServiceClient built from the explicit record service config."""
    return RecordServiceClient(config=settings.record_service_config)


def get_patient_service(
    record_client: RecordServiceClient = Depends(get_record_service_client),
) -> "PatientService":
    """
    Get a PatientService with the record service client injected.

    Note:
        Import here to avoid circular imports with services.
    """
    from services import PatientService

    return PatientService(record_client=record_client)


def get_dashboard_service() -> "DashboardService":
    """
    Get a DashboardService instance.

    DashboardService is stateless and needs no injected collaborators.
    """
    from services.dashboard import DashboardService

    return DashboardService()
