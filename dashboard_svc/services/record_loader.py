"""
Asynchronous load of patient records with an explicit state machine.

    IDLE --load()--> LOADING --success--> LOADED(records)
                             --failure--> FAILED(error)

Records are kept as the raw dicts the record service sent; only the record
a caller selects is parsed (see services.patient_lookup).

A loader performs exactly one fetch. A failed load stays FAILED; recovering
means starting a new render cycle with a new loader.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from clients.record_service_client import RecordServiceClient
from core.exceptions import DashboardError

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Lifecycle of a RecordLoader."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class RecordLoader:
    """
    Loads the patient record list once and tracks the outcome.

    Usage:
        loader = RecordLoader(client)
        records = await loader.load()
        loader.state  # LoadState.LOADED
    """

    def __init__(self, client: RecordServiceClient):
        self._client = client
        self._state = LoadState.IDLE
        self._records: Optional[List[Dict[str, Any]]] = None
        self._error: Optional[DashboardError] = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def records(self) -> List[Dict[str, Any]]:
        """
        The loaded records.

        Raises:
            RuntimeError: If the loader is not in LOADED state
        """
        if self._state is not LoadState.LOADED or self._records is None:
            raise RuntimeError(f"Records are not available in state '{self._state.value}'")
        return self._records

    @property
    def error(self) -> Optional[DashboardError]:
        """The failure cause when FAILED, otherwise None."""
        return self._error

    async def load(self) -> List[Dict[str, Any]]:
        """
        Fetch the patient records.

        Returns:
            The raw record dicts, in the order the record service sent them

        Raises:
            RuntimeError: If load() was already called on this loader
            RecordServiceError: If the fetch fails or the body is not a JSON array
        """
        if self._state is not LoadState.IDLE:
            raise RuntimeError(f"RecordLoader already used (state '{self._state.value}')")

        self._state = LoadState.LOADING
        try:
            records = await self._client.fetch_records()
        except DashboardError as e:
            self._fail(e)
            raise

        self._records = records
        self._state = LoadState.LOADED
        logger.info("Patient records loaded", extra={"count": len(records)})
        return records

    def _fail(self, error: DashboardError) -> None:
        self._error = error
        self._state = LoadState.FAILED
        logger.error(f"Loading patient records failed: {error.detail}", extra={"status_code": error.status_code})
