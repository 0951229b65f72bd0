"""
HTTP clients for external services.
"""
from clients.record_service_client import RecordServiceClient

__all__ = ["RecordServiceClient"]
