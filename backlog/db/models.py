"""
Data models for the backlog document.

The whole backlog lives in one JSON document:

    {
      "last_item": {"type": "Epic", "id": 0},
      "epics":   {"0": {"detail": {...}, "stories": [0, 1]}},
      "stories": {"0": {"detail": {...}}, "1": {"detail": {...}}}
    }

to_dict()/from_dict() keep key order and value shapes stable so a document
read and written back without changes is byte-identical.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

ItemId = int


class ItemStatus(Enum):
    """Lifecycle status shared by epics and stories."""

    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @classmethod
    def _missing_(cls, value):
        # Older documents spelled Closed as "Canceled"
        if value == "Canceled":
            return cls.CLOSED
        return None


class ItemKind(Enum):
    EPIC = "Epic"
    STORY = "Story"


@dataclass
class ItemDetail:
    id: ItemId
    name: str
    description: str
    status: ItemStatus = ItemStatus.OPEN

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ItemDetail":
        raw_id = data["id"]
        if isinstance(raw_id, dict):
            raw_id = raw_id["0"]  # {"0": n} wrapper shape
        return cls(
            id=int(raw_id),
            name=data["name"],
            description=data["description"],
            status=ItemStatus(data["status"]),
        )


@dataclass
class Epic:
    """Top-level work item. `stories` is the authoritative membership list."""
    detail: ItemDetail
    stories: list[ItemId] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"detail": self.detail.to_dict(), "stories": list(self.stories)}

    @classmethod
    def from_dict(cls, data: dict) -> "Epic":
        return cls(
            detail=ItemDetail.from_dict(data["detail"]),
            stories=[int(s) for s in data.get("stories", [])],
        )


@dataclass
class Story:
    detail: ItemDetail

    def to_dict(self) -> dict:
        return {"detail": self.detail.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(detail=ItemDetail.from_dict(data["detail"]))


@dataclass(frozen=True)
class LastItem:
    """Marker for the most recently created item.

    kind is None for the empty marker. Advisory only: the referenced item
    may have been deleted since.
    """
    kind: Optional[ItemKind] = None
    id: Optional[ItemId] = None

    @classmethod
    def none(cls) -> "LastItem":
        return cls()

    @classmethod
    def epic(cls, item_id: ItemId) -> "LastItem":
        return cls(ItemKind.EPIC, item_id)

    @classmethod
    def story(cls, item_id: ItemId) -> "LastItem":
        return cls(ItemKind.STORY, item_id)

    @property
    def is_none(self) -> bool:
        return self.kind is None

    def points_to(self, kind: ItemKind, item_id: ItemId) -> bool:
        return self.kind == kind and self.id == item_id

    def to_dict(self) -> dict:
        if self.kind is None:
            return {"type": "None"}
        return {"type": self.kind.value, "id": self.id}

    @classmethod
    def from_dict(cls, data: dict) -> "LastItem":
        item_type = data["type"]
        if item_type == "None":
            return cls.none()
        raw_id = data["id"]
        if isinstance(raw_id, dict):
            raw_id = raw_id["0"]
        return cls(ItemKind(item_type), int(raw_id))


@dataclass
class Document:
    """The aggregate: every epic, every story and the last item marker."""
    last_item: LastItem = field(default_factory=LastItem.none)
    epics: dict[ItemId, Epic] = field(default_factory=dict)
    stories: dict[ItemId, Story] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "Document":
        return cls()

    def next_epic_id(self) -> ItemId:
        """1 + highest epic id, or 0 when there are no epics."""
        return max(self.epics) + 1 if self.epics else 0

    def next_story_id(self) -> ItemId:
        """1 + highest story id, or 0 when there are no stories."""
        return max(self.stories) + 1 if self.stories else 0

    def owner_of(self, story_id: ItemId) -> Optional[ItemId]:
        """Id of the first epic listing story_id, or None."""
        for epic_id, epic in self.epics.items():
            if story_id in epic.stories:
                return epic_id
        return None

    def orphan_stories(self) -> list[ItemId]:
        """Story ids not listed by any epic, in id order."""
        owned = {s for epic in self.epics.values() for s in epic.stories}
        return sorted(s for s in self.stories if s not in owned)

    def to_dict(self) -> dict:
        return {
            "last_item": self.last_item.to_dict(),
            "epics": {str(k): v.to_dict() for k, v in self.epics.items()},
            "stories": {str(k): v.to_dict() for k, v in self.stories.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        return cls(
            last_item=LastItem.from_dict(data["last_item"]),
            epics={int(k): Epic.from_dict(v) for k, v in data["epics"].items()},
            stories={int(k): Story.from_dict(v) for k, v in data["stories"].items()},
        )
