"""
Tests for the dashboard exception hierarchy (core/exceptions.py).
"""
import importlib.util
import warnings
from pathlib import Path

import pytest

from core import exceptions
from core.exceptions import (
    AggregationError,
    DashboardError,
    EmptySeriesError,
    PatientNotFoundError,
    RecordServiceError,
    RecordServiceResponseError,
    RecordServiceUnavailableError,
    UnknownLevelError,
)


@pytest.mark.parametrize("error_class, status_code", [
    (DashboardError, 500),
    (PatientNotFoundError, 404),
    (AggregationError, 422),
    (EmptySeriesError, 422),
    (UnknownLevelError, 422),
    (RecordServiceError, 502),
    (RecordServiceResponseError, 502),
    (RecordServiceUnavailableError, 503),
])
def test_status_codes(error_class, status_code):
    assert error_class().status_code == status_code


def test_aggregation_errors_are_value_errors():
    assert issubclass(EmptySeriesError, ValueError)
    assert issubclass(UnknownLevelError, ValueError)


def test_to_dict():
    error = RecordServiceError(detail="HTTP error! Status: 401", upstream_status=401)
    assert error.to_dict() == {"detail": "HTTP error! Status: 401", "context": {"upstream_status": 401}}


def test_to_dict_without_context():
    assert RecordServiceError().to_dict() == {"detail": "Record service error"}


def test_module_imports_without_deprecation_warnings():
    """Loading a fresh copy of the module must not touch deprecated status constants."""
    path = Path(exceptions.__file__)
    spec = importlib.util.spec_from_file_location("exceptions_fresh_copy", path)
    module = importlib.util.module_from_spec(spec)

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        spec.loader.exec_module(module)

    assert module.AggregationError.status_code == 422
