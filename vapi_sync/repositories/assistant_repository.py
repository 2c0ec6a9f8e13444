from vapi_sync.models.domain.assistant import Assistant
from vapi_sync.repositories.base_repository import BaseRepository
from vapi_sync.repositories.store import ASSISTANTS, RecordStore


class AssistantRepository(BaseRepository[Assistant]):
    def __init__(self, store: RecordStore):
        super().__init__(store, Assistant, ASSISTANTS)
