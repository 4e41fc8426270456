"""Tests for backlog.workflow.screens module."""

import io

import pytest
from rich.console import Console

from backlog.workflow import actions
from backlog.workflow.fsm import ScreenFSM
from backlog.workflow.screens import (
    EpicDetail,
    Home,
    InvalidInput,
    ScreenRenderError,
    StoryDetail,
)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def output(console) -> str:
    return console.file.getvalue()


@pytest.fixture
def seeded(store):
    """Epic 0 with story 0; epic 1 empty; story 1 without epic."""
    store.create_epic("Login", "Sign in flow")
    store.create_story("Add form", "Email and password", 0)
    store.create_epic("Billing", "")
    store.create_story("Loose end", "")
    return store


class TestHome:
    def test_quit_and_create(self, seeded):
        assert Home().handle_input(seeded, "q") == actions.Exit()
        assert Home().handle_input(seeded, " C ") == actions.CreateEpic()

    def test_existing_epic_id(self, seeded):
        assert Home().handle_input(seeded, "1") == actions.NavigateToEpicDetail(1)

    def test_unknown_epic_id(self, seeded):
        with pytest.raises(InvalidInput, match="Epic 9 does not exist"):
            Home().handle_input(seeded, "9")

    def test_empty_input_is_no_action(self, seeded):
        assert Home().handle_input(seeded, "   ") is None

    def test_garbage_input(self, seeded):
        with pytest.raises(InvalidInput):
            Home().handle_input(seeded, "zz")

    def test_render_lists_epics(self, seeded, console):
        Home().render(seeded, console, ScreenFSM().get_available_triggers())
        text = output(console)
        assert "Login" in text
        assert "Billing" in text
        assert "[q] quit" in text
        assert "[c] create epic" in text

    def test_render_lists_stories_without_epic(self, seeded, console):
        Home().render(seeded, console, [])
        text = output(console)
        assert "STORIES WITHOUT AN EPIC" in text
        assert "Loose end" in text
        assert "Add form" not in text

    def test_render_omits_empty_orphan_table(self, store, console):
        store.create_epic("Login", "")
        Home().render(store, console, [])
        assert "STORIES WITHOUT AN EPIC" not in output(console)

    def test_render_escapes_markup(self, store, console):
        store.create_epic("[bold]not markup[/bold]", "")
        Home().render(store, console, [])
        assert "[bold]not markup[/bold]" in output(console)


class TestEpicDetail:
    def test_keys(self, seeded):
        page = EpicDetail(0)
        assert page.handle_input(seeded, "p") == actions.NavigateToPreviousPage()
        assert page.handle_input(seeded, "u") == actions.UpdateEpicStatus(0)
        assert page.handle_input(seeded, "d") == actions.DeleteEpic(0)
        assert page.handle_input(seeded, "c") == actions.CreateStory(0)

    def test_story_of_this_epic(self, seeded):
        assert EpicDetail(0).handle_input(seeded, "0") == actions.NavigateToStoryDetail(0, 0)

    def test_story_of_no_epic_rejected(self, seeded):
        with pytest.raises(InvalidInput, match="not part of epic 0"):
            EpicDetail(0).handle_input(seeded, "1")

    def test_render(self, seeded, console):
        EpicDetail(0).render(seeded, console, ScreenFSM("epic_detail").get_available_triggers())
        text = output(console)
        assert "Sign in flow" in text
        assert "Add form" in text
        assert "Loose end" not in text
        assert "[d] delete epic" in text

    def test_render_missing_epic(self, seeded, console):
        with pytest.raises(ScreenRenderError, match="Epic 5 no longer exists"):
            EpicDetail(5).render(seeded, console, [])


class TestStoryDetail:
    def test_keys(self, seeded):
        page = StoryDetail(0, 0)
        assert page.handle_input(seeded, "P") == actions.NavigateToPreviousPage()
        assert page.handle_input(seeded, "u") == actions.UpdateStoryStatus(0)
        assert page.handle_input(seeded, "d") == actions.DeleteStory(0, 0)

    def test_no_create_on_story_page(self, seeded):
        with pytest.raises(InvalidInput):
            StoryDetail(0, 0).handle_input(seeded, "c")

    def test_render(self, seeded, console):
        StoryDetail(0, 0).render(seeded, console, ScreenFSM("story_detail").get_available_triggers())
        text = output(console)
        assert "Email and password" in text
        assert "OPEN" in text

    def test_render_missing_story(self, seeded, console):
        seeded.delete_story(0, 0)
        with pytest.raises(ScreenRenderError):
            StoryDetail(0, 0).render(seeded, console, [])


class TestBackendFailures:
    def test_render_wraps_backend_error(self, tmp_path, console):
        from backlog.db.store import BacklogStore

        store = BacklogStore.from_path(tmp_path / "missing.json")
        with pytest.raises(ScreenRenderError, match="Cannot read database"):
            Home().render(store, console, [])
