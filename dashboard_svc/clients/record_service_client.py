"""
HTTP client for the remote patient record service.
Performs the single authenticated GET that returns the list of patient records.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from core.config import RecordServiceConfig
from core.exceptions import (
    RecordServiceError,
    RecordServiceResponseError,
    RecordServiceUnavailableError,
)

logger = logging.getLogger(__name__)


class RecordServiceClient:
    """Client for the patient record endpoint."""

    def __init__(
        self,
        config: RecordServiceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: Endpoint URL, basic-auth credentials and timeout.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        self._config = config
        self._transport = transport

    @property
    def endpoint_url(self) -> str:
        return self._config.endpoint_url

    def _headers(self) -> Dict[str, str]:
        # Authorization is added by httpx.BasicAuth
        return {"Content-Type": "application/json"}

    async def fetch_records(self) -> List[Dict[str, Any]]:
        """
        Fetch all patient records.

        Returns:
            The decoded JSON array of patient record dicts

        Raises:
            RecordServiceError: For non-2xx responses
            RecordServiceUnavailableError: For connection errors and timeouts
            RecordServiceResponseError: If the body is not a JSON array
        """
        url = self._config.endpoint_url

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                auth=httpx.BasicAuth(self._config.username, self._config.password),
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers=self._headers())
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            error_msg = f"Record service error {e.response.status_code}"
            logger.error(error_msg, extra={"url": url, "status_code": e.response.status_code})
            raise RecordServiceError(
                detail=f"HTTP error! Status: {e.response.status_code}",
                upstream_status=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            error_msg = f"Request error: {e}"
            logger.error(error_msg, extra={"url": url})
            raise RecordServiceUnavailableError(detail=error_msg) from e
        except ValueError as e:
            logger.error("Record service returned invalid JSON", extra={"url": url})
            raise RecordServiceResponseError(detail="Record service returned invalid JSON") from e

        if not isinstance(payload, list):
            logger.error(
                "Record service returned unexpected payload",
                extra={"url": url, "payload_type": type(payload).__name__},
            )
            raise RecordServiceResponseError(detail="Expected a JSON array of patient records")

        logger.info("Fetched patient records", extra={"url": url, "count": len(payload)})
        return payload
