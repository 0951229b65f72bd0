"""
Shared exception classes and error handling utilities for the dashboard service.

This module provides:
- Custom exception hierarchy for domain-specific errors
- Consistent error response formatting
- Exception handlers for FastAPI integration

Usage:
    from core.exceptions import PatientNotFoundError, RecordServiceError

    # In service layer - raise domain exceptions
    raise PatientNotFoundError(patient_name="Jessica Taylor")

    # In FastAPI - register handlers via setup_exception_handlers(app)
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================

class DashboardError(Exception):
    """
    Base exception for all dashboard domain errors.

    Provides consistent error structure with status code and detail message.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        """
        Initialize the exception.

        Args:
            detail: Human-readable error message. Uses class default if not provided.
            status_code: HTTP status code. Uses class default if not provided.
            **kwargs: Additional context to include in error response.
        """
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result: Dict[str, Any] = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


# =============================================================================
# PATIENT EXCEPTIONS
# =============================================================================

class PatientNotFoundError(DashboardError):
    """Raised when no fetched record carries the requested patient name."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Patient not found"

    def __init__(self, patient_name: Optional[str] = None, **kwargs: Any):
        detail = f"Patient '{patient_name}' not found" if patient_name else self.detail
        super().__init__(detail=detail, patient_name=patient_name, **kwargs)


# =============================================================================
# AGGREGATION EXCEPTIONS
# =============================================================================

class AggregationError(DashboardError):
    """Base exception for vital aggregation failures."""

    status_code = 422  # Unprocessable Content
    detail = "Cannot aggregate vital readings"


class EmptySeriesError(AggregationError, ValueError):
    """Raised when an average is requested over zero readings."""

    detail = "Cannot average an empty series of readings"


class UnknownLevelError(AggregationError, ValueError):
    """Raised when a reading carries a level outside the recognized labels."""

    detail = "Unrecognized vital level"

    def __init__(self, level: Any = None, **kwargs: Any):
        detail = f"Unrecognized vital level: {level!r}" if level is not None else self.detail
        super().__init__(detail=detail, level=level, **kwargs)


# =============================================================================
# RECORD SERVICE EXCEPTIONS
# =============================================================================

class RecordServiceError(DashboardError):
    """Raised when the remote record service call fails."""

    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "Record service error"


class RecordServiceUnavailableError(RecordServiceError):
    """Raised when the record service cannot be reached or times out."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Record service unavailable"


class RecordServiceResponseError(RecordServiceError):
    """Raised when the record service answers with a body that is not a JSON array."""

    detail = "Record service returned an unexpected response"


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def dashboard_exception_handler(
    request: Request,
    exc: DashboardError
) -> JSONResponse:
    """Log a DashboardError and return its standardized JSON error response."""
    logger.warning(
        f"DashboardError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(DashboardError, dashboard_exception_handler)
