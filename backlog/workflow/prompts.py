"""
Prompts the navigator uses to collect fields and confirmations.

The navigator takes a Prompts object at construction. ConsolePrompts reads
from stdin; ScriptedPrompts returns canned answers and records what was
asked, for tests and scripted runs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

from backlog.db.models import ItemStatus
from backlog.lib.tui import get_user_input

SEPARATOR = "-" * 28

STATUS_CHOICES = {
    "1": ItemStatus.OPEN,
    "2": ItemStatus.IN_PROGRESS,
    "3": ItemStatus.RESOLVED,
    "4": ItemStatus.CLOSED,
}


@dataclass
class ItemDraft:
    """Name and description typed in for a new epic or story."""
    name: str
    description: str


class Prompts(ABC):
    @abstractmethod
    def create_epic(self) -> ItemDraft:
        ...

    @abstractmethod
    def create_story(self) -> ItemDraft:
        ...

    @abstractmethod
    def confirm_delete_epic(self) -> bool:
        ...

    @abstractmethod
    def confirm_delete_story(self) -> bool:
        ...

    @abstractmethod
    def update_status(self) -> Optional[ItemStatus]:
        """Chosen status, or None if the user picked nothing valid."""


def parse_status_choice(text: str) -> Optional[ItemStatus]:
    return STATUS_CHOICES.get(text.strip())


def parse_confirmation(text: str) -> bool:
    return text.strip().lower() in ("y", "yes")


class ConsolePrompts(Prompts):
    """Line-based prompts on stdout/stdin."""

    def __init__(self, read_line: Callable[[], str] = get_user_input, write: Callable[[str], None] = print):
        self.read_line = read_line
        self.write = write

    def _ask(self, message: str) -> str:
        self.write(message)
        return self.read_line()

    def _draft(self, kind: str) -> ItemDraft:
        self.write(SEPARATOR)
        name = self._ask(f"{kind} Name: ").strip()
        description = self._ask("Description: ").strip()
        return ItemDraft(name, description)

    def create_epic(self) -> ItemDraft:
        return self._draft("Epic")

    def create_story(self) -> ItemDraft:
        return self._draft("Story")

    def confirm_delete_epic(self) -> bool:
        self.write(SEPARATOR)
        return parse_confirmation(self._ask(
            "Are you sure you want to delete this epic? "
            "All stories in this epic will also be deleted [y/N]: "
        ))

    def confirm_delete_story(self) -> bool:
        self.write(SEPARATOR)
        return parse_confirmation(self._ask("Are you sure you want to delete this story? [y/N]: "))

    def update_status(self) -> Optional[ItemStatus]:
        self.write(SEPARATOR)
        return parse_status_choice(self._ask(
            "New Status (1 - OPEN, 2 - IN-PROGRESS, 3 - RESOLVED, 4 - CLOSED): "
        ))


@dataclass
class ScriptedPrompts(Prompts):
    """Canned answers. Every prompt asked is appended to `asked`."""
    epic: ItemDraft = field(default_factory=lambda: ItemDraft("", ""))
    story: ItemDraft = field(default_factory=lambda: ItemDraft("", ""))
    delete_epic: bool = False
    delete_story: bool = False
    status: Optional[ItemStatus] = None
    asked: list[str] = field(default_factory=list)

    def create_epic(self) -> ItemDraft:
        self.asked.append("create_epic")
        return self.epic

    def create_story(self) -> ItemDraft:
        self.asked.append("create_story")
        return self.story

    def confirm_delete_epic(self) -> bool:
        self.asked.append("confirm_delete_epic")
        return self.delete_epic

    def confirm_delete_story(self) -> bool:
        self.asked.append("confirm_delete_story")
        return self.delete_story

    def update_status(self) -> Optional[ItemStatus]:
        self.asked.append("update_status")
        return self.status
