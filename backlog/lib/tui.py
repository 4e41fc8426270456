"""Console helpers shared by the interactive session and prompts."""

from rich.console import Console


def get_user_input() -> str:
    """Read one line from stdin.

    Raises:
        EOFError: stdin closed
    """
    return input()


def wait_for_key_press(console: Console) -> None:
    """Block until Enter (or end of input)."""
    console.print("Press Enter to continue...", markup=False)
    try:
        input()
    except EOFError:
        pass


def clear_screen(console: Console) -> None:
    console.clear()


def report_error(console: Console, context: str, error: BaseException) -> None:
    console.print(f"[red]{context}:[/red] ", end="")
    console.print(str(error), markup=False)
    if error.__cause__ is not None:
        console.print(f"  caused by: {error.__cause__}", markup=False)
