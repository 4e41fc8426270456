"""
Persistence backends for the backlog document.

A backend stores and retrieves exactly one serialized Document. There is no
locking and no transaction support here: the store does whole-document
read-modify-write and callers serialize access (see lib/locking.py).
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from backlog.db.models import Document
from backlog.lib.validate import ValidationError, validate, validate_before_write

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Base class for persistence failures."""


class DocumentIOError(BackendError):
    """The database file could not be opened, read or written."""


class DocumentDecodeError(BackendError):
    """The database file is not a valid backlog document."""


class DocumentEncodeError(BackendError):
    """The in-memory document failed validation; nothing was written."""


class DocumentBackend(ABC):
    """Stores one Document."""

    @abstractmethod
    def read_document(self) -> Document:
        """Return the stored document.

        Raises:
            DocumentIOError, DocumentDecodeError
        """

    @abstractmethod
    def write_document(self, document: Document) -> None:
        """Replace the stored document.

        Raises:
            DocumentIOError, DocumentEncodeError
        """


def encode_document(document: Document) -> str:
    """Serialize a Document to the on-disk JSON text."""
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)


def decode_document(text: str, source: str = "<memory>") -> Document:
    """Parse and validate JSON text into a Document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentDecodeError(f"Invalid JSON in {source}: {e}") from e

    try:
        validate(data, "document")
        return Document.from_dict(data)
    except ValidationError as e:
        raise DocumentDecodeError(f"Malformed document in {source}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise DocumentDecodeError(f"Malformed document in {source}: {e!r}") from e


class JSONFileBackend(DocumentBackend):
    """Pretty-printed JSON file. The file is opened and closed per call."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JSONFileBackend({str(self.path)!r})"

    def read_document(self) -> Document:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentIOError(f"Cannot read database {self.path}: {e}") from e
        return decode_document(text, str(self.path))

    def write_document(self, document: Document) -> None:
        data = document.to_dict()
        try:
            validate_before_write(data, self.path)
        except ValidationError as e:
            raise DocumentEncodeError(str(e)) from e

        if not self.path.exists():
            # The store never creates a database implicitly; see initialize()
            raise DocumentIOError(f"Database {self.path} does not exist")

        try:
            self.path.write_text(encode_document(document), encoding="utf-8")
        except OSError as e:
            raise DocumentIOError(f"Cannot write database {self.path}: {e}") from e
        logger.debug(f"[DB] wrote {self.path} ({len(document.epics)} epics, {len(document.stories)} stories)")

    def initialize(self, force: bool = False) -> bool:
        """Create the file with an empty document.

        Returns False (and leaves the file alone) if it already exists and
        force is not set.
        """
        if self.path.exists() and not force:
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(encode_document(Document.empty()), encoding="utf-8")
        except OSError as e:
            raise DocumentIOError(f"Cannot create database {self.path}: {e}") from e
        logger.info(f"[DB] initialized empty database at {self.path}")
        return True


class InMemoryBackend(DocumentBackend):
    """Keeps a private copy of the last written document."""

    def __init__(self, document: Optional[Document] = None):
        self._document = copy.deepcopy(document) if document is not None else Document.empty()
        self.write_count = 0

    def read_document(self) -> Document:
        return copy.deepcopy(self._document)

    def write_document(self, document: Document) -> None:
        try:
            validate(document.to_dict(), "document")
        except ValidationError as e:
            raise DocumentEncodeError(str(e)) from e
        self._document = copy.deepcopy(document)
        self.write_count += 1

    def dump(self) -> str:
        """Serialized form of the stored document."""
        return encode_document(self._document)
