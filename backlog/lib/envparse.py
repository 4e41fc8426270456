"""
Safe .env file parser for backlog.env.

Parses KEY=value lines without shell execution. Values that look like
shell expansion are rejected rather than silently taken literally.
"""

import re
from pathlib import Path

FORBIDDEN_PATTERNS = [
    r'`',           # backticks
    r'\$\(',        # command substitution
    r'\$\{',        # variable expansion
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


class EnvSyntaxError(ValueError):
    """Malformed line in an env file."""

    def __init__(self, path: Path, lineno: int, message: str):
        self.path = path
        self.lineno = lineno
        super().__init__(f"{path}:{lineno}: {message}")


def parse_env(text: str, path: Path = Path("<string>")) -> dict[str, str]:
    """
    Parse env text, return dict.

    Raises:
        EnvSyntaxError: if syntax invalid or forbidden pattern found
    """
    result = {}

    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()

        if not line or line.startswith('#'):
            continue

        if '=' not in line:
            raise EnvSyntaxError(path, lineno, "Invalid syntax (no '=')")

        key, _, value = line.partition('=')
        key = key.strip()
        value = value.strip()

        if not KEY_PATTERN.match(key):
            raise EnvSyntaxError(path, lineno, f"Invalid key '{key}'")

        # Strip quotes if present
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]

        for pattern in FORBIDDEN_PATTERNS:
            if re.search(pattern, value):
                raise EnvSyntaxError(path, lineno, f"Forbidden pattern in value of {key}")

        result[key] = value

    return result


def load_env(path: Path) -> dict[str, str]:
    """
    Parse env file at path.

    Raises:
        FileNotFoundError: if file doesn't exist
        EnvSyntaxError: if the file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {path}")
    return parse_env(path.read_text(), path)
