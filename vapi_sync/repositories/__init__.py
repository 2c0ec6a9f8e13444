from vapi_sync.repositories.assistant_repository import AssistantRepository
from vapi_sync.repositories.phone_number_repository import PhoneNumberRepository
from vapi_sync.repositories.store import InMemoryStore, JsonFileStore, RecordStore

__all__ = [
    "AssistantRepository",
    "PhoneNumberRepository",
    "RecordStore",
    "JsonFileStore",
    "InMemoryStore",
]
