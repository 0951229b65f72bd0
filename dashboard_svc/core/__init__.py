"""
Core module for application configuration, logging, and shared definitions.

This module provides:
- Settings: Application configuration via pydantic-settings
- Exceptions: Domain-specific exception classes with HTTP status codes
- Date utilities: Parsing and "Month D, YYYY" formatting
- Vital registry: Vital sign definitions loaded from vitals.yaml

Dependency injection functions live in core.dependencies and are imported
from there directly.
"""
from core.config import RecordServiceConfig, Settings, get_settings

from core.exceptions import (
    DashboardError,
    PatientNotFoundError,
    AggregationError,
    EmptySeriesError,
    UnknownLevelError,
    RecordServiceError,
    RecordServiceUnavailableError,
    RecordServiceResponseError,
    setup_exception_handlers,
)

from core.datetime_utils import parse_date, format_long_date

from core.vital_registry import VitalDefinition, get_vital, list_vitals, card_vitals

__all__ = [
    # Configuration
    "RecordServiceConfig",
    "Settings",
    "get_settings",
    # Exceptions
    "DashboardError",
    "PatientNotFoundError",
    "AggregationError",
    "EmptySeriesError",
    "UnknownLevelError",
    "RecordServiceError",
    "RecordServiceUnavailableError",
    "RecordServiceResponseError",
    "setup_exception_handlers",
    # Dates
    "parse_date",
    "format_long_date",
    # Vital registry
    "VitalDefinition",
    "get_vital",
    "list_vitals",
    "card_vitals",
]
