"""Sprite manifest validation against the bundled JSON Schema."""

from __future__ import annotations

import json
from functools import cache
from pathlib import Path

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "manifest.schema.json"


@cache
def manifest_validator() -> Draft202012Validator:
    """The manifest schema, read and checked once per process."""
    schema = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def manifest_errors(data: object) -> list[str]:
    """Every schema violation in *data*, as ``path: message`` strings."""
    return [
        f"{error.json_path}: {error.message}"
        for error in sorted(manifest_validator().iter_errors(data), key=lambda e: e.json_path)
    ]


def validate_manifest_json(data: object) -> None:
    """Validate either manifest layout (clip rows or ``"row-col"`` cells).

    Raises
    ------
    jsonschema.ValidationError
        The most relevant violation when the data does not conform.
    """
    error = best_match(manifest_validator().iter_errors(data))
    if error is not None:
        raise error
