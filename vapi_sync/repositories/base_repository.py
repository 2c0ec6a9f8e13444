import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from vapi_sync.repositories.store import RecordStore

T = TypeVar('T', bound=BaseModel)

logger = logging.getLogger(__name__)

# Assigned by the repository, never taken from callers
_MANAGED_FIELDS = ("id", "createdAt")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class BaseRepository(Generic[T]):
    """
    CRUD over one named collection of a RecordStore.

    Every call re-reads the whole store; every mutation writes it back.
    Optional fields that are None are left out of the stored record.
    """

    def __init__(self, store: RecordStore, model: Type[T], collection: str):
        self.store = store
        self.model = model
        self.collection = collection

    def _to_record(self, entity: T) -> Dict[str, Any]:
        return entity.model_dump(exclude_none=True)

    async def get_all(self) -> List[T]:
        records = self.store.load()[self.collection]
        return [self.model.model_validate(record) for record in records]

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        for record in self.store.load()[self.collection]:
            if record.get("id") == entity_id:
                return self.model.model_validate(record)

        logger.debug(f"{self.model.__name__} with id {entity_id} not found")
        return None

    async def create(self, fields: Dict[str, Any]) -> T:
        document = self.store.load()

        values = {k: v for k, v in fields.items() if k not in _MANAGED_FIELDS}
        entity = self.model.model_validate({
            **values,
            "id": str(uuid.uuid4()),
            "createdAt": _utc_now_iso(),
        })

        document[self.collection].append(self._to_record(entity))
        self.store.save(document)

        logger.info(f"Created {self.model.__name__} with id {entity.id}")
        return entity

    async def update(self, entity_id: str, changes: Dict[str, Any]) -> Optional[T]:
        """
        Shallow-merge changes into the record. A change mapped to None
        removes that field.
        """
        document = self.store.load()
        records = document[self.collection]

        for index, record in enumerate(records):
            if record.get("id") != entity_id:
                continue

            merged = dict(record)
            for key, value in changes.items():
                if key in _MANAGED_FIELDS:
                    continue
                if value is None:
                    merged.pop(key, None)
                else:
                    merged[key] = value

            entity = self.model.model_validate(merged)
            records[index] = self._to_record(entity)
            self.store.save(document)

            logger.info(f"Updated {self.model.__name__} with id {entity_id}")
            return entity

        logger.warning(f"{self.model.__name__} with id {entity_id} not found for update")
        return None

    async def delete(self, entity_id: str) -> bool:
        document = self.store.load()
        records = document[self.collection]

        for index, record in enumerate(records):
            if record.get("id") == entity_id:
                del records[index]
                self.store.save(document)
                logger.info(f"Deleted {self.model.__name__} with id {entity_id}")
                return True

        return False
