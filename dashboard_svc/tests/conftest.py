"""
Shared pytest fixtures for dashboard tests.

Key patterns:

1. No network: the record service is replaced by httpx.MockTransport
2. DI Override: app.dependency_overrides injects the test client and settings
3. Factories: history entries and records are built from small dicts

Fixture Hierarchy:
    make_entry → make_record → records_payload → record_transport → test_app → client
"""
import os

# Set required config before importing config modules
os.environ.setdefault("RECORD_SERVICE_URL", "http://records.test/api/patients")

import httpx
import pytest
from fastapi.testclient import TestClient

from clients.record_service_client import RecordServiceClient
from core import dependencies as deps
from core.config import RecordServiceConfig, Settings

TEST_URL = "http://records.test/api/patients"
TEST_USERNAME = "coalition"
TEST_PASSWORD = "skills-test"
TEST_PATIENT = "Jessica Taylor"

MONTHS = [
    "March", "February", "January", "December", "November", "October",
    "September", "August", "July", "June", "May", "April",
]


@pytest.fixture
def make_entry():
    """Factory for a raw history entry dict with sensible defaults."""
    def _make(
        month: str = "March",
        year: int = 2024,
        heart_rate=(72, "Normal"),
        respiratory_rate=(16, "Normal"),
        temperature=(98.6, "Normal"),
        systolic=(120, "Normal"),
        diastolic=(80, "Normal"),
    ) -> dict:
        return {
            "month": month,
            "year": year,
            "heart_rate": {"value": heart_rate[0], "levels": heart_rate[1]},
            "respiratory_rate": {"value": respiratory_rate[0], "levels": respiratory_rate[1]},
            "temperature": {"value": temperature[0], "levels": temperature[1]},
            "blood_pressure": {
                "systolic": {"value": systolic[0], "levels": systolic[1]},
                "diastolic": {"value": diastolic[0], "levels": diastolic[1]},
            },
        }
    return _make


@pytest.fixture
def make_history(make_entry):
    """
    Factory for a newest-first history of n entries.

    Entry i (0 = newest) has systolic 100 + i and diastolic 60 + i, so
    positions are easy to assert after reversing.
    """
    def _make(n: int) -> list:
        return [
            make_entry(
                month=MONTHS[i % 12],
                year=2024 - (i + 9) // 12,
                systolic=(100 + i, "Normal"),
                diastolic=(60 + i, "Normal"),
            )
            for i in range(n)
        ]
    return _make


@pytest.fixture
def make_record(make_history):
    """Factory for a raw patient record dict."""
    def _make(name: str = TEST_PATIENT, history=None, **overrides) -> dict:
        record = {
            "name": name,
            "gender": "Female",
            "age": 28,
            "date_of_birth": "08/23/1996",
            "phone_number": "(415) 555-1234",
            "emergency_contact": "(415) 555-5678",
            "insurance_type": "Sunrise Health Assurance",
            "profile_picture": "https://example.com/jessica.png",
            "diagnosis_history": make_history(8) if history is None else history,
            "diagnostic_list": [
                {"name": "Hypertension", "description": "Chronic high blood pressure", "status": "Under Observation"},
                {"name": "Asthma", "description": "Recurrent bronchial constriction", "status": "Inactive"},
            ],
            "lab_results": ["Blood Tests", "CT Scans", "X-Rays"],
        }
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def records_payload(make_record) -> list:
    """Record service response: two patients, the test patient second."""
    return [
        make_record(name="Emily Williams"),
        make_record(),
    ]


@pytest.fixture
def record_config() -> RecordServiceConfig:
    return RecordServiceConfig(endpoint_url=TEST_URL, username=TEST_USERNAME, password=TEST_PASSWORD)


@pytest.fixture
def captured_requests() -> list:
    """Requests seen by the mock record service."""
    return []


@pytest.fixture
def record_handler(records_payload, captured_requests):
    """
    Mock record service handler. Tests replace the response by setting
    handler.response to an httpx.Response or an exception instance.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        if isinstance(handler.response, Exception):
            raise handler.response
        return handler.response

    handler.response = httpx.Response(200, json=records_payload)
    return handler


@pytest.fixture
def record_client(record_config, record_handler) -> RecordServiceClient:
    """RecordServiceClient talking to the mock record service."""
    return RecordServiceClient(config=record_config, transport=httpx.MockTransport(record_handler))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        record_service_url=TEST_URL,
        record_service_username=TEST_USERNAME,
        record_service_password=TEST_PASSWORD,
        dashboard_patient_name=TEST_PATIENT,
        dashboard_window_size=6,
    )


@pytest.fixture
def test_app(test_settings, record_client):
    """
    Full application with the record service client and settings overridden.

    Uses the real routers, middleware and exception handlers.
    """
    from main import create_app

    app = create_app()
    app.dependency_overrides[deps.get_app_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_record_service_client] = lambda: record_client

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)
