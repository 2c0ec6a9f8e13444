from vapi_sync.models.domain.phone_number import PhoneNumber
from vapi_sync.repositories.base_repository import BaseRepository
from vapi_sync.repositories.store import PHONE_NUMBERS, RecordStore


class PhoneNumberRepository(BaseRepository[PhoneNumber]):
    def __init__(self, store: RecordStore):
        super().__init__(store, PhoneNumber, PHONE_NUMBERS)
