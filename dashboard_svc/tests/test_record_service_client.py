"""
Unit tests for RecordServiceClient.
Tests the single authenticated GET against a mock record service (httpx.MockTransport).
"""
import base64

import httpx
import pytest

from core.exceptions import (
    RecordServiceError,
    RecordServiceResponseError,
    RecordServiceUnavailableError,
)


@pytest.mark.asyncio
async def test_fetch_records_success(record_client, records_payload):
    """Returns the decoded JSON array as sent."""
    result = await record_client.fetch_records()

    assert result == records_payload
    assert [r["name"] for r in result] == ["Emily Williams", "Jessica Taylor"]


@pytest.mark.asyncio
async def test_fetch_records_request_shape(record_client, record_config, captured_requests):
    """One GET with basic auth and a JSON content type."""
    await record_client.fetch_records()

    assert len(captured_requests) == 1
    request = captured_requests[0]
    assert request.method == "GET"
    assert str(request.url) == record_config.endpoint_url

    credentials = f"{record_config.username}:{record_config.password}"
    expected = base64.b64encode(credentials.encode()).decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_fetch_records_http_error(record_client, record_handler, captured_requests):
    """Non-2xx is a RecordServiceError carrying the upstream status; no retry."""
    record_handler.response = httpx.Response(401, text="Unauthorized")

    with pytest.raises(RecordServiceError) as exc_info:
        await record_client.fetch_records()

    assert exc_info.value.status_code == 502
    assert exc_info.value.context["upstream_status"] == 401
    assert "401" in exc_info.value.detail
    assert len(captured_requests) == 1


@pytest.mark.asyncio
async def test_fetch_records_server_error(record_client, record_handler):
    record_handler.response = httpx.Response(500, json={"error": "boom"})

    with pytest.raises(RecordServiceError):
        await record_client.fetch_records()


@pytest.mark.asyncio
async def test_fetch_records_connection_error(record_client, record_handler):
    """Connection failures map to RecordServiceUnavailableError (503)."""
    record_handler.response = httpx.ConnectError("Connection refused")

    with pytest.raises(RecordServiceUnavailableError) as exc_info:
        await record_client.fetch_records()

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_fetch_records_timeout(record_client, record_handler):
    record_handler.response = httpx.ReadTimeout("timed out")

    with pytest.raises(RecordServiceUnavailableError):
        await record_client.fetch_records()


@pytest.mark.asyncio
async def test_fetch_records_invalid_json(record_client, record_handler):
    record_handler.response = httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(RecordServiceResponseError):
        await record_client.fetch_records()


@pytest.mark.asyncio
async def test_fetch_records_not_an_array(record_client, record_handler):
    record_handler.response = httpx.Response(200, json={"name": "Jessica Taylor"})

    with pytest.raises(RecordServiceResponseError) as exc_info:
        await record_client.fetch_records()

    assert "array" in exc_info.value.detail


@pytest.mark.asyncio
async def test_fetch_records_empty_array(record_client, record_handler):
    record_handler.response = httpx.Response(200, json=[])

    assert await record_client.fetch_records() == []
