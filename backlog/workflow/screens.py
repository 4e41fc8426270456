"""
Screens of the interactive backlog.

A screen is plain data (which epic/story it shows). It renders itself from
a fresh read of the store and turns one line of user input into an Action.
The store is passed in on every call; screens hold no reference to it.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from backlog.db.backends import BackendError
from backlog.db.models import Document, ItemId, ItemStatus
from backlog.db.store import BacklogStore
from backlog.workflow import actions
from backlog.workflow.actions import Action


class ScreenRenderError(Exception):
    """A screen cannot be drawn (its item is gone, or the store failed)."""


class InvalidInput(Exception):
    """Input does not map to any action on the current screen."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        super().__init__(reason or f"No action for input '{text}'")


STATUS_LABELS = {
    ItemStatus.OPEN: "OPEN",
    ItemStatus.IN_PROGRESS: "IN PROGRESS",
    ItemStatus.RESOLVED: "RESOLVED",
    ItemStatus.CLOSED: "CLOSED",
}

# Legend entries per FSM trigger
TRIGGER_LABELS = {
    "exit": "[q] quit",
    "back": "[p] previous",
    "create_epic": "[c] create epic",
    "create_story": "[c] create story",
    "update_epic_status": "[u] update epic",
    "update_story_status": "[u] update story",
    "delete_epic": "[d] delete epic",
    "delete_story": "[d] delete story",
    "open_epic": "[:id:] navigate to epic",
    "open_story": "[:id:] navigate to story",
}


def _parse_id(text: str) -> Optional[ItemId]:
    if text.isascii() and text.isdigit():
        return int(text)
    return None


def _legend(console: Console, triggers: list[str], order: list[str]) -> None:
    labels = [TRIGGER_LABELS[t] for t in order if t in triggers]
    console.print()
    console.print(" | ".join(labels), markup=False, emoji=False)


@dataclass(frozen=True)
class Home:
    kind: ClassVar[str] = "home"
    legend_order: ClassVar[list[str]] = ["exit", "create_epic", "open_epic"]

    def render(self, store: BacklogStore, console: Console, triggers: list[str]) -> None:
        doc = _read(store)

        table = Table(title="EPICS", title_justify="left", expand=True)
        table.add_column("id", width=6)
        table.add_column("name", ratio=3)
        table.add_column("status", ratio=1)
        for epic_id in sorted(doc.epics):
            detail = doc.epics[epic_id].detail
            table.add_row(str(epic_id), escape(detail.name), STATUS_LABELS[detail.status])
        console.print(table)

        orphans = doc.orphan_stories()
        if orphans:
            loose = Table(title="STORIES WITHOUT AN EPIC", title_justify="left", expand=True)
            loose.add_column("id", width=6)
            loose.add_column("name", ratio=3)
            loose.add_column("status", ratio=1)
            for story_id in orphans:
                detail = doc.stories[story_id].detail
                loose.add_row(str(story_id), escape(detail.name), STATUS_LABELS[detail.status])
            console.print(loose)

        _legend(console, triggers, self.legend_order)

    def handle_input(self, store: BacklogStore, text: str) -> Optional[Action]:
        text = text.strip()
        if not text:
            return None
        key = text.lower()
        if key == "q":
            return actions.Exit()
        if key == "c":
            return actions.CreateEpic()

        epic_id = _parse_id(text)
        if epic_id is not None:
            if epic_id not in _read_for_input(store).epics:
                raise InvalidInput(text, f"Epic {epic_id} does not exist")
            return actions.NavigateToEpicDetail(epic_id)

        raise InvalidInput(text)


@dataclass(frozen=True)
class EpicDetail:
    epic_id: ItemId
    kind: ClassVar[str] = "epic_detail"
    legend_order: ClassVar[list[str]] = [
        "back", "update_epic_status", "delete_epic", "create_story", "open_story",
    ]

    def render(self, store: BacklogStore, console: Console, triggers: list[str]) -> None:
        doc = _read(store)
        epic = doc.epics.get(self.epic_id)
        if epic is None:
            raise ScreenRenderError(f"Epic {self.epic_id} no longer exists")

        detail = Table(title="EPIC", title_justify="left", expand=True)
        detail.add_column("id", width=6)
        detail.add_column("name", ratio=2)
        detail.add_column("description", ratio=4)
        detail.add_column("status", ratio=1)
        detail.add_row(
            str(self.epic_id), escape(epic.detail.name), escape(epic.detail.description),
            STATUS_LABELS[epic.detail.status],
        )
        console.print(detail)

        stories = Table(title="STORIES", title_justify="left", expand=True)
        stories.add_column("id", width=6)
        stories.add_column("name", ratio=3)
        stories.add_column("status", ratio=1)
        for story_id in epic.stories:
            story = doc.stories.get(story_id)
            if story is None:
                continue
            stories.add_row(str(story_id), escape(story.detail.name), STATUS_LABELS[story.detail.status])
        console.print(stories)

        _legend(console, triggers, self.legend_order)

    def handle_input(self, store: BacklogStore, text: str) -> Optional[Action]:
        text = text.strip()
        if not text:
            return None
        key = text.lower()
        if key == "p":
            return actions.NavigateToPreviousPage()
        if key == "u":
            return actions.UpdateEpicStatus(self.epic_id)
        if key == "d":
            return actions.DeleteEpic(self.epic_id)
        if key == "c":
            return actions.CreateStory(self.epic_id)

        story_id = _parse_id(text)
        if story_id is not None:
            epic = _read_for_input(store).epics.get(self.epic_id)
            if epic is None or story_id not in epic.stories:
                raise InvalidInput(text, f"Story {story_id} is not part of epic {self.epic_id}")
            return actions.NavigateToStoryDetail(self.epic_id, story_id)

        raise InvalidInput(text)


@dataclass(frozen=True)
class StoryDetail:
    epic_id: ItemId
    story_id: ItemId
    kind: ClassVar[str] = "story_detail"
    legend_order: ClassVar[list[str]] = ["back", "update_story_status", "delete_story"]

    def render(self, store: BacklogStore, console: Console, triggers: list[str]) -> None:
        doc = _read(store)
        story = doc.stories.get(self.story_id)
        if story is None:
            raise ScreenRenderError(f"Story {self.story_id} no longer exists")

        table = Table(title="STORY", title_justify="left", expand=True)
        table.add_column("id", width=6)
        table.add_column("name", ratio=2)
        table.add_column("description", ratio=4)
        table.add_column("status", ratio=1)
        table.add_row(
            str(self.story_id), escape(story.detail.name), escape(story.detail.description),
            STATUS_LABELS[story.detail.status],
        )
        console.print(table)

        _legend(console, triggers, self.legend_order)

    def handle_input(self, store: BacklogStore, text: str) -> Optional[Action]:
        text = text.strip()
        if not text:
            return None
        key = text.lower()
        if key == "p":
            return actions.NavigateToPreviousPage()
        if key == "u":
            return actions.UpdateStoryStatus(self.story_id)
        if key == "d":
            return actions.DeleteStory(self.epic_id, self.story_id)

        raise InvalidInput(text)


Screen = Union[Home, EpicDetail, StoryDetail]


def _read(store: BacklogStore) -> Document:
    try:
        return store.read()
    except BackendError as e:
        raise ScreenRenderError(str(e)) from e


def _read_for_input(store: BacklogStore) -> Document:
    try:
        return store.read()
    except BackendError as e:
        raise InvalidInput("", f"Cannot read backlog: {e}") from e
