"""
Page stack and action dispatcher for the interactive backlog.

Each Action maps to at most one BacklogStore call plus one change to the
page stack:

    CreateEpic / CreateStory            store create, stack unchanged
    UpdateEpicStatus / UpdateStoryStatus store update if a status was chosen
    DeleteEpic / DeleteStory            store delete if confirmed, then pop
    NavigateToEpicDetail / StoryDetail  push
    NavigateToPreviousPage              pop (no-op on an empty stack)
    Exit                                clear the stack

Deletes pop the page even when the user declines or the store call fails:
the page being left is the one that showed the item.
"""

import logging
from typing import Optional

from rich.console import Console
from transitions import MachineError

from backlog.db.backends import BackendError
from backlog.db.store import BacklogStore, ItemNotFound
from backlog.workflow import actions
from backlog.workflow.actions import Action
from backlog.workflow.fsm import ScreenFSM
from backlog.workflow.prompts import ConsolePrompts, Prompts
from backlog.workflow.screens import EpicDetail, Home, Screen, StoryDetail

logger = logging.getLogger(__name__)


class IllegalAction(Exception):
    """Action is not available from the current screen (strict mode)."""

    def __init__(self, screen: str, action: Action):
        self.screen = screen
        self.action = action
        super().__init__(f"{type(action).__name__} is not available from {screen}")


class ActionFailed(Exception):
    """A store call made on behalf of an action failed.

    The store error is chained as __cause__.
    """


class Navigator:
    """Owns the page stack. The store is shared with screens per call."""

    def __init__(self, store: BacklogStore, prompts: Optional[Prompts] = None, strict: bool = False):
        """
        Args:
            store: Backlog store every action goes through
            prompts: Field/confirmation prompts (stdin by default)
            strict: Reject actions the current screen does not offer
        """
        self.store = store
        self.prompts = prompts if prompts is not None else ConsolePrompts()
        self.strict = strict
        self.pages: list[Screen] = [Home()]
        self.fsm = ScreenFSM()

    def get_current_page(self) -> Optional[Screen]:
        return self.pages[-1] if self.pages else None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def is_finished(self) -> bool:
        return not self.pages

    def available_actions(self) -> list[str]:
        """FSM triggers legal from the current screen."""
        if not self.pages:
            return []
        return self.fsm.get_available_triggers()

    def render_current(self, console: Console) -> None:
        page = self.get_current_page()
        if page is not None:
            page.render(self.store, console, self.available_actions())

    def handle_input(self, text: str) -> Optional[Action]:
        """Translate a line of input on the current screen."""
        page = self.get_current_page()
        if page is None:
            return None
        return page.handle_input(self.store, text)

    def handle_action(self, action: Action) -> None:
        """Apply one action.

        Raises:
            IllegalAction: strict mode and the current screen does not offer it
            ActionFailed: the store call failed (stack changes still applied)
        """
        if self.strict:
            self._fire(action)

        try:
            self._dispatch(action)
        finally:
            self._sync()

    def _fire(self, action: Action) -> None:
        screen = self.fsm.state
        if not self.pages or not self.fsm.can(action.trigger):
            raise IllegalAction(screen, action)
        try:
            getattr(self.fsm, action.trigger)()
        except MachineError as e:
            raise IllegalAction(screen, action) from e

    def _sync(self) -> None:
        page = self.get_current_page()
        self.fsm.sync(page.kind if page is not None else "exited")

    def _pop(self) -> None:
        if self.pages:
            self.pages.pop()

    def _dispatch(self, action: Action) -> None:
        logger.debug(f"[NAV] {action}")

        if isinstance(action, actions.CreateEpic):
            draft = self.prompts.create_epic()
            try:
                self.store.create_epic(draft.name, draft.description)
            except BackendError as e:
                raise ActionFailed("Failed to create epic") from e

        elif isinstance(action, actions.CreateStory):
            draft = self.prompts.create_story()
            try:
                self.store.create_story(draft.name, draft.description, action.epic_id)
            except (ItemNotFound, BackendError) as e:
                raise ActionFailed("Failed to create story") from e

        elif isinstance(action, actions.UpdateEpicStatus):
            status = self.prompts.update_status()
            if status is not None:
                try:
                    self.store.update_epic_status(action.epic_id, status)
                except (ItemNotFound, BackendError) as e:
                    raise ActionFailed("Failed to update epic status") from e

        elif isinstance(action, actions.UpdateStoryStatus):
            status = self.prompts.update_status()
            if status is not None:
                try:
                    self.store.update_story_status(action.story_id, status)
                except (ItemNotFound, BackendError) as e:
                    raise ActionFailed("Failed to update story status") from e

        elif isinstance(action, actions.DeleteEpic):
            try:
                if self.prompts.confirm_delete_epic():
                    self.store.delete_epic(action.epic_id)
            except (ItemNotFound, BackendError) as e:
                raise ActionFailed("Failed to delete epic") from e
            finally:
                self._pop()

        elif isinstance(action, actions.DeleteStory):
            try:
                if self.prompts.confirm_delete_story():
                    self.store.delete_story(action.story_id, action.epic_id)
            except (ItemNotFound, BackendError) as e:
                raise ActionFailed("Failed to delete story") from e
            finally:
                self._pop()

        elif isinstance(action, actions.NavigateToEpicDetail):
            self.pages.append(EpicDetail(action.epic_id))

        elif isinstance(action, actions.NavigateToStoryDetail):
            self.pages.append(StoryDetail(action.epic_id, action.story_id))

        elif isinstance(action, actions.NavigateToPreviousPage):
            self._pop()

        elif isinstance(action, actions.Exit):
            self.pages.clear()

        else:
            raise TypeError(f"Unknown action: {action!r}")
