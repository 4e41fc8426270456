"""
backlog run - Interactive terminal session.

Each iteration clears the screen, renders the page on top of the stack,
reads one line and dispatches the resulting action. Recoverable errors are
reported and the loop waits for Enter. The session ends when the page
stack is empty.
"""

import logging
from typing import Callable

from rich.console import Console

from backlog.db.backends import BackendError
from backlog.db.store import BacklogStore
from backlog.lib.config import BacklogConfig
from backlog.lib.locking import LockTimeout, database_lock
from backlog.lib.tui import clear_screen, get_user_input, report_error, wait_for_key_press
from backlog.workflow import actions
from backlog.workflow.navigator import ActionFailed, IllegalAction, Navigator
from backlog.workflow.prompts import ConsolePrompts
from backlog.workflow.screens import InvalidInput, ScreenRenderError

logger = logging.getLogger(__name__)


def run_session(
    navigator: Navigator,
    console: Console,
    read_line: Callable[[], str] = get_user_input,
    clear: bool = True,
) -> int:
    """Drive the navigator until its page stack is empty.

    Returns the process exit code: 1 when the database became unreadable
    and the last page could not be rendered, 0 otherwise.
    """
    while not navigator.is_finished:
        if clear:
            clear_screen(console)

        try:
            navigator.render_current(console)
        except ScreenRenderError as e:
            report_error(console, "Error while rendering page", e)
            wait_for_key_press(console)
            # The page cannot be shown again; leave it
            navigator.handle_action(actions.NavigateToPreviousPage())
            if navigator.is_finished and isinstance(e.__cause__, BackendError):
                logger.error(f"[RUN] database unreadable, leaving session: {e.__cause__}")
                return 1
            continue

        try:
            line = read_line()
        except EOFError:
            logger.info("[RUN] end of input, leaving session")
            return 0

        try:
            action = navigator.handle_input(line)
        except InvalidInput as e:
            report_error(console, "Error while getting user input", e)
            wait_for_key_press(console)
            continue

        if action is None:
            continue

        try:
            navigator.handle_action(action)
        except (ActionFailed, IllegalAction) as e:
            logger.warning(f"[RUN] {e}: {e.__cause__}")
            report_error(console, "Error handling user input", e)
            wait_for_key_press(console)
        except EOFError:
            logger.info("[RUN] end of input during prompt, leaving session")
            return 0

    return 0


def cmd_run(args, config: BacklogConfig) -> int:
    """Open the database and run the interactive session."""
    console = Console()
    store = BacklogStore.from_path(config.db_path)

    # A database that cannot be opened at startup is fatal
    try:
        store.read()
    except BackendError as e:
        print(f"ERROR: {e}")
        print(f"  Create one with: backlog --db {config.db_path} init")
        return 2

    try:
        with database_lock(config.db_path, timeout=config.lock_timeout):
            navigator = Navigator(store, ConsolePrompts(), strict=True)
            return run_session(navigator, console, clear=config.clear_screen)
    except LockTimeout as e:
        print(f"ERROR: {e}")
        return 2
