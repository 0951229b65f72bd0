"""
Service layer for patient record retrieval.

Architecture:
    API Layer (routers) → PatientService → RecordLoader → RecordServiceClient → record service

Dependency Injection:
    PatientService receives its client via constructor injection.
    Use core.dependencies.get_patient_service() in routers with Depends().
"""
import logging
from typing import Any, Dict, List

from clients.record_service_client import RecordServiceClient
from schemas.patient_record import PatientRecord
from services.patient_lookup import PatientLookup, find_patient
from services.record_loader import RecordLoader

logger = logging.getLogger(__name__)


class PatientService:
    """
    Loads patient records and selects one by name.

    Every call starts a new render cycle: one RecordLoader, one fetch.
    """

    def __init__(self, record_client: RecordServiceClient):
        """
        Args:
            record_client: Client for the record service.
                           Injected via core.dependencies.get_patient_service().
        """
        self._client = record_client

    def new_loader(self) -> RecordLoader:
        """Create the loader for one render cycle."""
        return RecordLoader(self._client)

    async def get_patients(self) -> List[Dict[str, Any]]:
        """
        Fetch all patient records as raw dicts.

        Raises:
            RecordServiceError: If the fetch fails
        """
        return await self.new_loader().load()

    async def lookup_patient(self, name: str) -> PatientLookup:
        """
        Fetch the records and look up one patient by exact name.

        Raises:
            RecordServiceError: If the fetch fails or the matched record cannot be read
        """
        records = await self.get_patients()
        return find_patient(records, name)

    async def get_patient(self, name: str) -> PatientRecord:
        """
        Fetch the records and return the named patient.

        Raises:
            RecordServiceError: If the fetch fails or the record cannot be read
            PatientNotFoundError: If no record carries this name
        """
        lookup = await self.lookup_patient(name)
        if not lookup.found:
            logger.warning(f"Patient not found: {name}")
        return lookup.require()
