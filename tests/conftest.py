"""
Pytest configuration and fixtures for test suite.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Set test environment variables before importing the app
os.environ["VAPI_API_KEY"] = "test_vapi_private_key"
os.environ["APP_ENV"] = "test"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "warning"

from fastapi.testclient import TestClient

from vapi_sync.core.deps import get_store, get_vapi_client
from vapi_sync.core.exceptions import RemoteProviderError
from vapi_sync.main import app
from vapi_sync.repositories import AssistantRepository, InMemoryStore, PhoneNumberRepository


class FakeVapiClient:
    """In-memory stand-in for VapiClient that records every call."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.failures: Dict[str, RemoteProviderError] = {}
        self.assistants: Dict[str, Dict[str, Any]] = {}
        self.phone_numbers: Dict[str, Dict[str, Any]] = {}
        self._counter = 0

    def fail(self, method: str, message: str = "Vapi is down", status_code: int = 500) -> None:
        self.failures[method] = RemoteProviderError(message, status_code=status_code)

    def calls_to(self, method: str) -> List[Dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def _record(self, method: str, **kwargs: Any) -> None:
        self.calls.append((method, kwargs))
        if method in self.failures:
            raise self.failures[method]

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    async def create_assistant(self, name: str, first_message: str, system_prompt: str) -> Dict[str, Any]:
        self._record("create_assistant", name=name, first_message=first_message, system_prompt=system_prompt)
        assistant = {"id": self._next_id("vapi-asst"), "name": name, "firstMessage": first_message}
        self.assistants[assistant["id"]] = assistant
        return assistant

    async def update_assistant(self, vapi_assistant_id: str, **fields: Any) -> Dict[str, Any]:
        self._record("update_assistant", vapi_assistant_id=vapi_assistant_id, **fields)
        return self.assistants.get(vapi_assistant_id, {"id": vapi_assistant_id})

    async def get_assistant(self, vapi_assistant_id: str) -> Dict[str, Any]:
        self._record("get_assistant", vapi_assistant_id=vapi_assistant_id)
        return self.assistants.get(vapi_assistant_id, {"id": vapi_assistant_id})

    async def delete_assistant(self, vapi_assistant_id: str) -> Dict[str, Any]:
        self._record("delete_assistant", vapi_assistant_id=vapi_assistant_id)
        return self.assistants.pop(vapi_assistant_id, {"id": vapi_assistant_id})

    async def create_phone_number(self, name: str, vapi_assistant_id: Optional[str] = None) -> Dict[str, Any]:
        self._record("create_phone_number", name=name, vapi_assistant_id=vapi_assistant_id)
        phone_number = {
            "id": self._next_id("vapi-phone"),
            "name": name,
            "number": "+12075550100",
            "assistantId": vapi_assistant_id,
        }
        self.phone_numbers[phone_number["id"]] = phone_number
        return phone_number

    async def update_phone_number(self, vapi_phone_number_id: str, vapi_assistant_id: Optional[str]) -> Dict[str, Any]:
        self._record(
            "update_phone_number",
            vapi_phone_number_id=vapi_phone_number_id,
            vapi_assistant_id=vapi_assistant_id,
        )
        return {"id": vapi_phone_number_id, "assistantId": vapi_assistant_id}

    async def get_phone_number(self, vapi_phone_number_id: str) -> Dict[str, Any]:
        self._record("get_phone_number", vapi_phone_number_id=vapi_phone_number_id)
        return self.phone_numbers.get(vapi_phone_number_id, {"id": vapi_phone_number_id})

    async def delete_phone_number(self, vapi_phone_number_id: str) -> Dict[str, Any]:
        self._record("delete_phone_number", vapi_phone_number_id=vapi_phone_number_id)
        return self.phone_numbers.pop(vapi_phone_number_id, {"id": vapi_phone_number_id})

    async def close(self) -> None:
        return None


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fake_vapi() -> FakeVapiClient:
    return FakeVapiClient()


@pytest.fixture
def client(store: InMemoryStore, fake_vapi: FakeVapiClient):
    """FastAPI test client wired to the in-memory store and fake Vapi client."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_vapi_client] = lambda: fake_vapi
    # Unhandled errors should come back as 500 responses, not raise in the test
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def assistants(store: InMemoryStore) -> AssistantRepository:
    return AssistantRepository(store)


@pytest.fixture
def phone_numbers(store: InMemoryStore) -> PhoneNumberRepository:
    return PhoneNumberRepository(store)


@pytest.fixture
def seed(store: InMemoryStore):
    """Write raw records straight into the store."""
    def _seed(assistants: List[Dict[str, Any]] = (), phone_numbers: List[Dict[str, Any]] = ()) -> None:
        document = store.load()
        document["assistants"].extend(assistants)
        document["phoneNumbers"].extend(phone_numbers)
        store.save(document)
    return _seed
