"""
FastAPI dependencies for dependency injection.

This module provides:
- The record store backing both repositories
- A shared Vapi client with connection pooling
- Repository providers built on the store

Tests swap the store and the Vapi client through app.dependency_overrides;
the handlers never touch the JSON file or the network directly.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends

from vapi_sync.config import settings
from vapi_sync.repositories import (
    AssistantRepository,
    JsonFileStore,
    PhoneNumberRepository,
    RecordStore,
)
from vapi_sync.services.vapi_client import VapiClient

# ===== Storage =====


def get_store() -> RecordStore:
    """JSON file store at DATA_FILE. The file is re-read on every operation."""
    return JsonFileStore(settings.data_file)


StoreDep = Annotated[RecordStore, Depends(get_store)]


def get_assistant_repository(store: StoreDep) -> AssistantRepository:
    return AssistantRepository(store)


def get_phone_number_repository(store: StoreDep) -> PhoneNumberRepository:
    return PhoneNumberRepository(store)


AssistantRepositoryDep = Annotated[AssistantRepository, Depends(get_assistant_repository)]
PhoneNumberRepositoryDep = Annotated[PhoneNumberRepository, Depends(get_phone_number_repository)]

# ===== Vapi Client Management =====

# Global client instance for connection pooling
_vapi_client: VapiClient | None = None


async def get_vapi_client() -> AsyncGenerator[VapiClient, None]:
    """
    Dependency that provides the shared Vapi client.

    Created lazily on first use and reused across requests. Call
    close_vapi_client() in the app shutdown hook.
    """
    global _vapi_client

    if _vapi_client is None:
        _vapi_client = VapiClient()

    yield _vapi_client


async def close_vapi_client() -> None:
    """Close the shared Vapi client on application shutdown."""
    global _vapi_client
    if _vapi_client is not None:
        await _vapi_client.close()
        _vapi_client = None


VapiClientDep = Annotated[VapiClient, Depends(get_vapi_client)]
