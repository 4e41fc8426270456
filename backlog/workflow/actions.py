"""Actions a screen can ask the navigator to perform.

The set is closed: Action is a Union of frozen dataclasses, and each class
names the ScreenFSM trigger it corresponds to.
"""

from dataclasses import dataclass
from typing import ClassVar, Union, get_args

from backlog.db.models import ItemId


@dataclass(frozen=True)
class NavigateToEpicDetail:
    epic_id: ItemId
    trigger: ClassVar[str] = "open_epic"


@dataclass(frozen=True)
class NavigateToStoryDetail:
    epic_id: ItemId
    story_id: ItemId
    trigger: ClassVar[str] = "open_story"


@dataclass(frozen=True)
class NavigateToPreviousPage:
    trigger: ClassVar[str] = "back"


@dataclass(frozen=True)
class CreateEpic:
    trigger: ClassVar[str] = "create_epic"


@dataclass(frozen=True)
class CreateStory:
    epic_id: ItemId
    trigger: ClassVar[str] = "create_story"


@dataclass(frozen=True)
class UpdateEpicStatus:
    epic_id: ItemId
    trigger: ClassVar[str] = "update_epic_status"


@dataclass(frozen=True)
class UpdateStoryStatus:
    story_id: ItemId
    trigger: ClassVar[str] = "update_story_status"


@dataclass(frozen=True)
class DeleteEpic:
    epic_id: ItemId
    trigger: ClassVar[str] = "delete_epic"


@dataclass(frozen=True)
class DeleteStory:
    epic_id: ItemId
    story_id: ItemId
    trigger: ClassVar[str] = "delete_story"


@dataclass(frozen=True)
class Exit:
    trigger: ClassVar[str] = "exit"


Action = Union[
    NavigateToEpicDetail,
    NavigateToStoryDetail,
    NavigateToPreviousPage,
    CreateEpic,
    CreateStory,
    UpdateEpicStatus,
    UpdateStoryStatus,
    DeleteEpic,
    DeleteStory,
    Exit,
]

ALL_ACTIONS = get_args(Action)
