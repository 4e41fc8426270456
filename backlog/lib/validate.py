"""
JSON Schema checks for the backlog database.

The database is validated on every read and before every write, so a
document that does not match schemas/document.schema.json is never loaded
into models and never reaches disk.
"""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

# Report at most this many violations in one error message
MAX_REPORTED = 3


class ValidationError(Exception):
    """Data does not match a bundled schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(f"{schema_name}: {message}{where}")


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> jsonschema.Draft7Validator:
    schema_file = SCHEMAS_DIR / f"{schema_name}.schema.json"
    try:
        schema = json.loads(schema_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ValidationError(schema_name, f"no schema bundled at {schema_file}") from None
    return jsonschema.Draft7Validator(schema)


def _json_path(error: jsonschema.ValidationError) -> str:
    return "/".join(str(part) for part in error.absolute_path) or "(root)"


def validate(data: dict, schema_name: str = "document") -> None:
    """
    Check data against a bundled schema.

    All violations are collected; the first one (in document order) becomes
    the error path and up to MAX_REPORTED are listed in the message.

    Raises:
        ValidationError: data does not match
    """
    errors = sorted(_validator(schema_name).iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
    if not errors:
        return

    messages = [f"{_json_path(e)}: {e.message}" for e in errors[:MAX_REPORTED]]
    if len(errors) > MAX_REPORTED:
        messages.append(f"... {len(errors) - MAX_REPORTED} more")
    raise ValidationError(schema_name, "; ".join(messages), _json_path(errors[0]))


def validate_before_write(data: dict, filepath: Path, schema_name: str = "document") -> None:
    """
    Same as validate(), with the target file named in the error.

    Raises:
        ValidationError: data does not match; the caller must not write it
    """
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(schema_name, f"not writing {filepath}: {e}", e.path) from None
