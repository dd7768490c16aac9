"""Validation for generated SB metadata.

This module checks assembled metadata in two ways: structurally,
against the JSON Schema bundled in data/metadata.schema.json, and
physically, by re-hashing every declared ingredient on disk.
"""

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from jsonschema.validators import validator_for

from .ingredient import compute_ingredient
from .types import Metadata

SCHEMA_FILENAME = "metadata.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the bundled SB metadata schema from package data.

    Raises:
        FileNotFoundError: If the schema is not installed with the package
        json.JSONDecodeError: If the schema is not valid JSON
    """
    text = resources.files("rc2sb").joinpath("data", SCHEMA_FILENAME).read_text(encoding="utf-8")
    return json.loads(text)  # type: ignore[no-any-return]


@lru_cache(maxsize=1)
def _schema_validator() -> Any:
    schema = load_schema()
    cls = validator_for(schema)
    cls.check_schema(schema)
    return cls(schema)


def error_location(error: ValidationError) -> str:
    """Render where a validation error occurred, e.g. 'type -> flavorType -> name'."""
    return " -> ".join(str(p) for p in error.path) or "root"


def validate_metadata(metadata: Metadata) -> None:
    """Validate metadata against the SB schema.

    Raises:
        ValidationError: If the metadata doesn't conform to the schema
    """
    _schema_validator().validate(metadata)


def validate_metadata_with_error_details(metadata: Metadata) -> tuple[bool, str | None]:
    """Validate metadata, reporting the failure as a message instead of raising.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_metadata(metadata)
    except ValidationError as e:
        return False, f"Validation error at {error_location(e)}: {e.message}"
    return True, None


def verify_ingredients(metadata: Metadata, out_dir: Path) -> list[str]:
    """Check that every declared ingredient matches the file on disk.

    Also checks that each code in ``currentScope`` is carried by at
    least one ingredient's own scope.

    Args:
        metadata: Generated metadata record
        out_dir: Root of the SB output directory

    Returns:
        List of problem descriptions; empty when consistent
    """
    problems: list[str] = []
    out_dir = Path(out_dir)

    for key, declared in sorted(metadata["ingredients"].items()):
        path = out_dir / key
        if not path.is_file():
            problems.append(f"{key}: file missing")
            continue

        actual = compute_ingredient(path)
        if actual["size"] != declared["size"]:
            problems.append(f"{key}: size on disk {actual['size']} != declared {declared['size']}")

        md5 = actual["checksum"]["md5"]
        if md5 != declared["checksum"]["md5"]:
            problems.append(f"{key}: md5 on disk {md5} != declared {declared['checksum']['md5']}")

    scoped_codes = {
        code
        for ingredient in metadata["ingredients"].values()
        for code in ingredient.get("scope", {})
    }
    current_scope = metadata["type"]["flavorType"].get("currentScope", {})
    for code in sorted(current_scope):
        if code not in scoped_codes:
            problems.append(f"currentScope {code}: no ingredient carries this scope")

    return problems
