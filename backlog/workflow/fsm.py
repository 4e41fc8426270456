"""Screen state machine using transitions library.

Encodes which actions are legal from each kind of screen, and where the
top of the page stack ends up afterwards. The navigator keeps one
ScreenFSM in sync with its stack.

Usage:
    from backlog.workflow.fsm import ScreenFSM

    fsm = ScreenFSM()
    fsm.open_epic()   # home -> epic_detail
    fsm.open_story()  # epic_detail -> story_detail
    fsm.back()        # story_detail -> epic_detail
"""

import logging
from typing import Callable

from transitions import Machine

logger = logging.getLogger(__name__)


STATES = [
    "home",
    "epic_detail",
    "story_detail",
    "exited",
]

# dest None is an internal transition: legal here, screen unchanged
TRANSITIONS = [
    # Home
    {"trigger": "open_epic", "source": "home", "dest": "epic_detail"},
    {"trigger": "create_epic", "source": "home", "dest": None},
    {"trigger": "back", "source": "home", "dest": "exited"},

    # Epic detail
    {"trigger": "open_story", "source": "epic_detail", "dest": "story_detail"},
    {"trigger": "create_story", "source": "epic_detail", "dest": None},
    {"trigger": "update_epic_status", "source": "epic_detail", "dest": None},
    {"trigger": "delete_epic", "source": "epic_detail", "dest": "home"},
    {"trigger": "back", "source": "epic_detail", "dest": "home"},

    # Story detail
    {"trigger": "update_story_status", "source": "story_detail", "dest": None},
    {"trigger": "delete_story", "source": "story_detail", "dest": "epic_detail"},
    {"trigger": "back", "source": "story_detail", "dest": "epic_detail"},

    # Anywhere
    {"trigger": "exit", "source": ["home", "epic_detail", "story_detail"], "dest": "exited"},
]


class ScreenFSM:
    """Tracks the kind of screen on top of the navigation stack."""

    def __init__(self, initial: str = "home", on_transition: Callable[[str, str, str], None] | None = None):
        """
        Args:
            initial: Screen kind to start on
            on_transition: callback(from_screen, to_screen, trigger) run when the screen kind changes
        """
        if initial not in STATES:
            logger.warning(f"[FSM] Unknown screen '{initial}', defaulting to 'home'")
            initial = "home"

        self.on_transition = on_transition
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial=initial,
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        from_state = event.transition.source
        to_state = event.transition.dest
        if to_state is None or from_state == to_state:
            return

        trigger = event.event.name
        logger.debug(f"[FSM] {from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    def sync(self, state: str) -> None:
        """Force the machine to match the actual top of the stack."""
        if self.state != state:
            logger.debug(f"[FSM] sync {self.state} -> {state}")
            self.machine.set_state(state)

    def can(self, trigger: str) -> bool:
        """True if the current screen offers this trigger."""
        return trigger in self.machine.get_triggers(self.state)

    def get_available_triggers(self) -> list[str]:
        """Triggers offered by the current screen, in definition order."""
        return self.machine.get_triggers(self.state)
