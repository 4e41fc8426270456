"""
Epic/story CRUD over the backlog document.

Every operation reads the whole document, applies one change in memory and
writes the whole document back. Validation happens before the write, so a
failed operation leaves the persisted document untouched.

The store does no locking. Two interleaved create calls would compute the
same next id; callers must serialize (the interactive session holds
lib.locking.database_lock for its lifetime).
"""

import logging
from pathlib import Path
from typing import Optional

from backlog.db.backends import DocumentBackend, JSONFileBackend
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

logger = logging.getLogger(__name__)


class ItemNotFound(Exception):
    """A referenced epic or story does not exist."""

    def __init__(self, kind: ItemKind, item_id: ItemId):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind.value} ID: {item_id} was not found")


class IntegrityError(RuntimeError):
    """The document contradicts what the caller asserted about it.

    Programming-error class: not expected in normal operation and not
    recovered by the interactive loop.
    """


class BacklogStore:
    """Aggregate store for epics and stories."""

    def __init__(self, backend: DocumentBackend):
        self.backend = backend

    @classmethod
    def from_path(cls, path: Path) -> "BacklogStore":
        return cls(JSONFileBackend(path))

    def read(self) -> Document:
        return self.backend.read_document()

    def create_epic(self, name: str, description: str) -> ItemId:
        doc = self.backend.read_document()

        epic_id = doc.next_epic_id()
        doc.epics[epic_id] = Epic(ItemDetail(epic_id, name, description, ItemStatus.OPEN))
        doc.last_item = LastItem.epic(epic_id)

        self.backend.write_document(doc)
        logger.info(f"[STORE] created epic {epic_id}")
        return epic_id

    def create_story(self, name: str, description: str, epic_id: Optional[ItemId] = None) -> ItemId:
        """Create a story, appending it to epic_id's list when given.

        Raises:
            ItemNotFound: epic_id given but no such epic (nothing written)
        """
        doc = self.backend.read_document()

        if epic_id is not None and epic_id not in doc.epics:
            logger.warning(f"[STORE] cannot create story: epic {epic_id} not found")
            raise ItemNotFound(ItemKind.EPIC, epic_id)

        story_id = doc.next_story_id()
        doc.stories[story_id] = Story(ItemDetail(story_id, name, description, ItemStatus.OPEN))
        doc.last_item = LastItem.story(story_id)

        if epic_id is not None:
            doc.epics[epic_id].stories.append(story_id)

        self.backend.write_document(doc)
        owner = f" in epic {epic_id}" if epic_id is not None else ""
        logger.info(f"[STORE] created story {story_id}{owner}")
        return story_id

    def delete_epic(self, epic_id: ItemId) -> None:
        """Delete an epic and every story it lists.

        Each owned story is removed with its own write, then the document
        is re-read and the epic removed in a final write.
        """
        doc = self.backend.read_document()

        epic = doc.epics.get(epic_id)
        if epic is None:
            logger.warning(f"[STORE] cannot delete epic {epic_id}: not found")
            raise ItemNotFound(ItemKind.EPIC, epic_id)

        for story_id in dict.fromkeys(epic.stories):
            if story_id not in doc.stories:
                logger.warning(f"[STORE] epic {epic_id} lists missing story {story_id}, skipping")
                continue
            self._delete_story(story_id, None)

        doc = self.backend.read_document()
        if doc.last_item.points_to(ItemKind.EPIC, epic_id):
            doc.last_item = LastItem.none()
        del doc.epics[epic_id]

        self.backend.write_document(doc)
        logger.info(f"[STORE] deleted epic {epic_id} ({len(epic.stories)} stories)")

    def delete_story(self, story_id: ItemId, epic_id: Optional[ItemId] = None) -> None:
        """Delete a story, removing it from epic_id's list when given.

        Without epic_id the story is removed from every epic listing it.

        Raises:
            ItemNotFound: epic_id given but missing, or story missing
            IntegrityError: story exists but epic_id does not list it
        """
        self._delete_story(story_id, epic_id)
        logger.info(f"[STORE] deleted story {story_id}")

    def _delete_story(self, story_id: ItemId, epic_id: Optional[ItemId]) -> None:
        doc = self.backend.read_document()

        if epic_id is not None and epic_id not in doc.epics:
            logger.warning(f"[STORE] cannot delete story {story_id}: epic {epic_id} not found")
            raise ItemNotFound(ItemKind.EPIC, epic_id)

        if story_id not in doc.stories:
            logger.warning(f"[STORE] cannot delete story {story_id}: not found")
            raise ItemNotFound(ItemKind.STORY, story_id)

        if epic_id is not None:
            members = doc.epics[epic_id].stories
            if story_id not in members:
                raise IntegrityError(f"Story {story_id} is not listed in epic {epic_id}")
            members.remove(story_id)
        else:
            owner = doc.owner_of(story_id)
            while owner is not None:
                doc.epics[owner].stories.remove(story_id)
                owner = doc.owner_of(story_id)

        if doc.last_item.points_to(ItemKind.STORY, story_id):
            doc.last_item = LastItem.none()
        del doc.stories[story_id]

        self.backend.write_document(doc)

    def update_epic_status(self, epic_id: ItemId, status: ItemStatus) -> None:
        doc = self.backend.read_document()

        epic = doc.epics.get(epic_id)
        if epic is None:
            logger.warning(f"[STORE] cannot update epic {epic_id}: not found")
            raise ItemNotFound(ItemKind.EPIC, epic_id)

        old = epic.detail.status
        epic.detail.status = status
        self.backend.write_document(doc)
        logger.info(f"[STORE] epic {epic_id}: {old.value} -> {status.value}")

    def update_story_status(self, story_id: ItemId, status: ItemStatus) -> None:
        doc = self.backend.read_document()

        story = doc.stories.get(story_id)
        if story is None:
            logger.warning(f"[STORE] cannot update story {story_id}: not found")
            raise ItemNotFound(ItemKind.STORY, story_id)

        old = story.detail.status
        story.detail.status = status
        self.backend.write_document(doc)
        logger.info(f"[STORE] story {story_id}: {old.value} -> {status.value}")
