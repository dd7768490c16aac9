"""Ingredient computation for relocated files.

This module computes the checksum, size and MIME type recorded for
every file listed under ``ingredients`` in SB metadata. It must only be
called once a file's final bytes are on disk, since rewritten content
is what gets hashed.
"""

import hashlib
from pathlib import Path

from ..errors import FileOperationError
from .types import Ingredient, Scope

# Extension (lowercase, with dot) -> MIME type
MIME_TYPES = {
    ".md": "text/markdown",
    ".usfm": "text/plain",
    ".tsv": "text/tab-separated-values",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",
    ".json": "application/json",
    ".txt": "text/plain",
}

# Unknown extensions are labelled as markdown, matching published burritos
DEFAULT_MIME_TYPE = "text/markdown"

_CHUNK_SIZE = 64 * 1024


def mime_type_for_ext(ext: str) -> str:
    """Return the MIME type for a file extension.

    Args:
        ext: Extension including the leading dot (case-insensitive)

    Returns:
        MIME type string; DEFAULT_MIME_TYPE for unrecognized extensions
    """
    return MIME_TYPES.get(ext.lower(), DEFAULT_MIME_TYPE)


def compute_ingredient(file_path: Path) -> Ingredient:
    """Compute the ingredient entry (MD5, size, MIME type) for a file.

    Args:
        file_path: Path to the file as written in the output bundle

    Returns:
        Ingredient without a scope

    Raises:
        FileOperationError: If the file cannot be read
    """
    file_path = Path(file_path)
    digest = hashlib.md5()
    size = 0

    try:
        with file_path.open("rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
                size += len(chunk)
    except OSError as e:
        raise FileOperationError("reading", file_path, e.strerror or e) from e

    return Ingredient(
        checksum={"md5": digest.hexdigest()},
        mimeType=mime_type_for_ext(file_path.suffix),
        size=size,
    )


def compute_ingredient_with_scope(file_path: Path, scope: Scope | None) -> Ingredient:
    """Compute the ingredient entry for a file and attach a scope.

    An empty or missing scope is left out of the entry entirely.
    """
    ingredient = compute_ingredient(file_path)
    if scope:
        ingredient["scope"] = {code: list(refs) for code, refs in scope.items()}
    return ingredient
