"""
Backing stores for local records.

A store holds one document with two named record lists:

    {"assistants": [...], "phoneNumbers": [...]}

Repositories load the whole document before every operation and save the
whole document after every mutation. Nothing is locked: two concurrent
writers can overwrite each other's changes (last write wins).
"""

import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

ASSISTANTS = "assistants"
PHONE_NUMBERS = "phoneNumbers"
COLLECTIONS = (ASSISTANTS, PHONE_NUMBERS)

Document = Dict[str, List[Dict[str, Any]]]


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


class RecordStore(ABC):
    """Whole-document load/save capability used by the repositories."""

    @abstractmethod
    def load(self) -> Document:
        """Return the current document. Callers may mutate the result."""

    @abstractmethod
    def save(self, document: Document) -> None:
        """Replace the stored document."""


class JsonFileStore(RecordStore):
    """
    Stores the document as pretty-printed JSON in a single file.

    A missing file reads as empty collections. A file written by an older
    version without one of the collections gets that collection filled in.
    Saves go to a temp file in the same directory that is then renamed over
    the target, so readers never see a half-written file.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def load(self) -> Document:
        if not self.path.exists():
            return empty_document()

        with self.path.open("r", encoding="utf-8") as fh:
            parsed = json.load(fh)

        return {**empty_document(), **parsed}

    def save(self, document: Document) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with tmp:
                json.dump(document, tmp, indent=2)
            os.replace(tmp.name, self.path)
        except Exception:
            logger.error(f"Failed to write {self.path}")
            Path(tmp.name).unlink(missing_ok=True)
            raise


class InMemoryStore(RecordStore):
    """Keeps the document in memory. Copies on the way in and out."""

    def __init__(self, document: Document | None = None):
        self._document = {**empty_document(), **copy.deepcopy(document or {})}

    def load(self) -> Document:
        return copy.deepcopy(self._document)

    def save(self, document: Document) -> None:
        self._document = copy.deepcopy(document)
