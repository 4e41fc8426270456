"""Tests for backlog.workflow.fsm module."""

import pytest

from backlog.workflow.actions import ALL_ACTIONS
from backlog.workflow.fsm import STATES, TRANSITIONS, ScreenFSM


class TestFSMDefinitions:
    def test_all_states_defined(self):
        assert set(STATES) == {"home", "epic_detail", "story_detail", "exited"}

    def test_every_action_has_a_trigger(self):
        """Each Action class names a trigger the FSM knows."""
        triggers = {t["trigger"] for t in TRANSITIONS}
        assert {a.trigger for a in ALL_ACTIONS} == triggers

    def test_exited_is_terminal(self):
        assert ScreenFSM("exited").get_available_triggers() == []


class TestFSMBasic:
    def test_initial_state(self):
        assert ScreenFSM().state == "home"

    def test_unknown_initial_defaults_to_home(self):
        assert ScreenFSM("bogus").state == "home"

    def test_drill_down_and_back(self):
        fsm = ScreenFSM()
        fsm.open_epic()
        assert fsm.state == "epic_detail"
        fsm.open_story()
        assert fsm.state == "story_detail"
        fsm.back()
        assert fsm.state == "epic_detail"
        fsm.back()
        assert fsm.state == "home"
        fsm.back()
        assert fsm.state == "exited"

    def test_internal_transitions_keep_state(self):
        fsm = ScreenFSM()
        fsm.create_epic()
        assert fsm.state == "home"

    def test_deletes_leave_the_screen(self):
        fsm = ScreenFSM("story_detail")
        fsm.delete_story()
        assert fsm.state == "epic_detail"
        fsm.delete_epic()
        assert fsm.state == "home"

    def test_home_triggers(self):
        assert set(ScreenFSM().get_available_triggers()) == {"open_epic", "create_epic", "back", "exit"}

    def test_mutations_limited_to_their_screen(self):
        fsm = ScreenFSM()
        assert fsm.can("create_epic") is True
        assert fsm.can("update_epic_status") is False
        assert fsm.can("delete_story") is False

    def test_invalid_trigger_raises(self):
        fsm = ScreenFSM()
        with pytest.raises(Exception):  # transitions raises MachineError
            fsm.delete_epic()

    def test_sync(self):
        fsm = ScreenFSM()
        fsm.sync("story_detail")
        assert fsm.state == "story_detail"
        assert fsm.can("update_story_status")

    def test_on_transition_callback(self):
        seen = []
        fsm = ScreenFSM(on_transition=lambda *args: seen.append(args))

        fsm.create_epic()
        fsm.open_epic()

        assert seen == [("home", "epic_detail", "open_epic")]
