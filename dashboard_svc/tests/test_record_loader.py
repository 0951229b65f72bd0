"""
Tests for RecordLoader (load state machine), find_patient and PatientService.
"""
import httpx
import pytest

from core.exceptions import (
    PatientNotFoundError,
    RecordServiceError,
    RecordServiceResponseError,
    RecordServiceUnavailableError,
)
from schemas.patient_record import PatientRecord
from services.patient_lookup import PatientLookup, find_patient
from services.patient_service import PatientService
from services.record_loader import LoadState, RecordLoader


# =============================================================================
# RECORD LOADER
# =============================================================================

def test_loader_starts_idle(record_client):
    loader = RecordLoader(record_client)
    assert loader.state is LoadState.IDLE
    assert loader.error is None
    with pytest.raises(RuntimeError):
        loader.records


@pytest.mark.asyncio
async def test_loader_success(record_client, records_payload):
    loader = RecordLoader(record_client)

    records = await loader.load()

    assert loader.state is LoadState.LOADED
    assert loader.records == records
    assert records == records_payload
    assert records[1]["name"] == "Jessica Taylor"
    assert loader.error is None


@pytest.mark.asyncio
async def test_loader_is_loading_during_fetch(record_client, record_handler, records_payload):
    loader = RecordLoader(record_client)
    seen_states = []

    def handler(request):
        seen_states.append(loader.state)
        return httpx.Response(200, json=records_payload)

    record_handler.response = None
    record_client._transport = httpx.MockTransport(handler)

    await loader.load()

    assert seen_states == [LoadState.LOADING]
    assert loader.state is LoadState.LOADED


@pytest.mark.asyncio
async def test_loader_failure_is_distinct_from_loading(record_client, record_handler):
    record_handler.response = httpx.Response(503, text="maintenance")
    loader = RecordLoader(record_client)

    with pytest.raises(RecordServiceError):
        await loader.load()

    assert loader.state is LoadState.FAILED
    assert isinstance(loader.error, RecordServiceError)
    with pytest.raises(RuntimeError):
        loader.records


@pytest.mark.asyncio
async def test_loader_connection_failure(record_client, record_handler):
    record_handler.response = httpx.ConnectError("Connection refused")
    loader = RecordLoader(record_client)

    with pytest.raises(RecordServiceUnavailableError):
        await loader.load()

    assert loader.state is LoadState.FAILED
    assert loader.error.status_code == 503


@pytest.mark.asyncio
async def test_loader_keeps_records_unparsed(record_client, record_handler, make_record):
    malformed = make_record(name="Emily Williams", history=[{"month": "March", "year": 2024}])
    record_handler.response = httpx.Response(200, json=[malformed, {"gender": "Female"}])
    loader = RecordLoader(record_client)

    records = await loader.load()

    assert loader.state is LoadState.LOADED
    assert records == [malformed, {"gender": "Female"}]


@pytest.mark.asyncio
async def test_loader_loads_once(record_client, captured_requests):
    loader = RecordLoader(record_client)
    await loader.load()

    with pytest.raises(RuntimeError):
        await loader.load()

    assert len(captured_requests) == 1


@pytest.mark.asyncio
async def test_failed_loader_does_not_retry(record_client, record_handler, captured_requests):
    record_handler.response = httpx.Response(500)
    loader = RecordLoader(record_client)

    with pytest.raises(RecordServiceError):
        await loader.load()
    with pytest.raises(RuntimeError):
        await loader.load()

    assert len(captured_requests) == 1


# =============================================================================
# PATIENT LOOKUP
# =============================================================================

def _records(*names):
    return [{"name": name} for name in names]


def test_find_patient_found():
    lookup = find_patient(_records("Emily Williams", "Jessica Taylor"), "Jessica Taylor")
    assert lookup.found
    assert isinstance(lookup.record, PatientRecord)
    assert lookup.require().name == "Jessica Taylor"


def test_find_patient_first_match_wins():
    records = [{"name": "Jessica Taylor", "gender": "Female"}, {"name": "Jessica Taylor", "gender": "Male"}]
    assert find_patient(records, "Jessica Taylor").record.gender == "Female"


def test_find_patient_is_exact():
    lookup = find_patient(_records("Jessica Taylor"), "jessica taylor")
    assert not lookup.found


def test_find_patient_not_found():
    lookup = find_patient(_records("Emily Williams"), "Jessica Taylor")
    assert lookup == PatientLookup(name="Jessica Taylor")
    assert lookup.record is None
    with pytest.raises(PatientNotFoundError) as exc_info:
        lookup.require()
    assert exc_info.value.status_code == 404
    assert exc_info.value.context["patient_name"] == "Jessica Taylor"


def test_find_patient_empty_list():
    assert not find_patient([], "Jessica Taylor").found


def test_find_patient_ignores_malformed_other_records(make_record):
    records = [
        make_record(name="Emily Williams", history=[{"month": "March", "year": 2024}]),
        {"gender": "Female"},
        "not a record",
        make_record(),
    ]

    lookup = find_patient(records, "Jessica Taylor")

    assert lookup.found
    assert len(lookup.record.diagnosis_history) == 8


def test_find_patient_malformed_match(make_record):
    records = [make_record(history=[{"month": "March", "year": 2024}])]

    with pytest.raises(RecordServiceResponseError) as exc_info:
        find_patient(records, "Jessica Taylor")

    assert exc_info.value.status_code == 502
    assert exc_info.value.context["errors"] > 0


# =============================================================================
# PATIENT SERVICE
# =============================================================================

@pytest.mark.asyncio
async def test_patient_service_get_patient(record_client):
    service = PatientService(record_client=record_client)
    record = await service.get_patient("Jessica Taylor")
    assert record.name == "Jessica Taylor"
    assert len(record.diagnosis_history) == 8


@pytest.mark.asyncio
async def test_patient_service_missing_patient(record_client):
    service = PatientService(record_client=record_client)
    with pytest.raises(PatientNotFoundError):
        await service.get_patient("Nobody")


@pytest.mark.asyncio
async def test_patient_service_fetches_per_call(record_client, captured_requests):
    service = PatientService(record_client=record_client)
    await service.lookup_patient("Jessica Taylor")
    await service.lookup_patient("Emily Williams")
    assert len(captured_requests) == 2
