"""
Backlog persistence: the document model, storage backends and the
aggregate store that keeps epics and stories consistent.
"""

from backlog.db.models import (
    Document,
    Epic,
    ItemDetail,
    ItemId,
    ItemKind,
    ItemStatus,
    LastItem,
    Story,
)
from backlog.db.backends import (
    BackendError,
    DocumentBackend,
    DocumentDecodeError,
    DocumentEncodeError,
    DocumentIOError,
    InMemoryBackend,
    JSONFileBackend,
)
from backlog.db.store import BacklogStore, IntegrityError, ItemNotFound

__all__ = [
    "Document",
    "Epic",
    "ItemDetail",
    "ItemId",
    "ItemKind",
    "ItemStatus",
    "LastItem",
    "Story",
    "BackendError",
    "DocumentBackend",
    "DocumentDecodeError",
    "DocumentEncodeError",
    "DocumentIOError",
    "InMemoryBackend",
    "JSONFileBackend",
    "BacklogStore",
    "IntegrityError",
    "ItemNotFound",
]
