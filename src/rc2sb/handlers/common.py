"""Copy helpers shared by every subject handler.

Files are always copied first and hashed second, so an ingredient
describes the bytes in the output bundle rather than the source.
"""

import logging
import os
import shutil
from importlib import resources
from pathlib import Path

from ..errors import FileOperationError, ManifestError
from ..sb.ingredient import compute_ingredient_with_scope
from ..sb.types import Ingredient, Metadata, Scope

logger = logging.getLogger(__name__)

INGREDIENTS_DIR = "ingredients"
LICENSE_FILENAME = "LICENSE.md"
LICENSE_INGREDIENT_KEY = f"{INGREDIENTS_DIR}/{LICENSE_FILENAME}"

# Bundle infrastructure copied to the output root, never listed as ingredients
ROOT_FILES = ("README.md", ".gitignore")
ROOT_DIRS = (".gitea", ".github")


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ManifestError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ManifestError(f"project path {path} escapes the resource container {base_dir}")


def resolve_project_path(in_dir: Path, project_path: str) -> Path:
    """Resolve a manifest project path against the RC root.

    Args:
        in_dir: Root of the RC checkout
        project_path: Path as declared in the manifest, e.g. './01-GEN.usfm'

    Returns:
        Absolute-or-relative path inside in_dir

    Raises:
        ManifestError: If the path points outside in_dir
    """
    relative = project_path.removeprefix("./") or "."
    path = Path(in_dir) / relative
    validate_path_safety(path, Path(in_dir))
    return path


def strip_prefix(filename: str, prefix: str) -> str:
    """Remove a fixed prefix token, e.g. 'tn_GEN.tsv' -> 'GEN.tsv'."""
    return filename.removeprefix(prefix)


def extract_book_code(filename: str) -> str:
    """Return the book code of a numbered USFM filename.

    Example:
        >>> extract_book_code("01-GEN.usfm")
        'GEN'
        >>> extract_book_code("GEN.usfm")
        'GEN'
    """
    stem = Path(filename).stem
    _, sep, code = stem.partition("-")
    return code if sep else stem


def copy_file(src: Path, dst: Path) -> None:
    """Copy a file, creating parent directories as needed.

    Raises:
        FileOperationError: If the copy fails
    """
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
    except OSError as e:
        raise FileOperationError("copying", src, e.strerror or e) from e


def copy_and_compute_ingredient(
    src: Path, out_dir: Path, ingredient_key: str, scope: Scope | None = None
) -> Ingredient:
    """Copy a file to ``out_dir/ingredient_key`` and describe the copy.

    Args:
        src: Source file
        out_dir: Root of the SB output
        ingredient_key: Output-relative path using forward slashes
        scope: Optional book scope for the ingredient

    Returns:
        Ingredient computed from the destination file
    """
    dst = Path(out_dir) / ingredient_key
    copy_file(Path(src), dst)
    return compute_ingredient_with_scope(dst, scope)


def copy_tree_to_ingredients(
    src_dir: Path, out_dir: Path, dest_prefix: str, metadata: Metadata
) -> int:
    """Recursively copy a directory into the output and record every file.

    Files are visited in sorted order so that repeated runs produce the
    same output.

    Args:
        src_dir: Directory to copy
        out_dir: Root of the SB output
        dest_prefix: Output-relative prefix, e.g. 'ingredients/payload'
        metadata: Record whose ingredients map receives the entries

    Returns:
        Number of files copied
    """
    src_dir = Path(src_dir)
    if not src_dir.is_dir():
        raise FileOperationError("copying", src_dir, "directory not found")

    count = 0
    for dirpath, dirnames, filenames in os.walk(src_dir):
        dirnames.sort()
        for filename in sorted(filenames):
            file_path = Path(dirpath) / filename
            relative = file_path.relative_to(src_dir).as_posix()
            key = f"{dest_prefix}/{relative}"
            metadata["ingredients"][key] = copy_and_compute_ingredient(file_path, out_dir, key)
            count += 1

    return count


def copy_common_root_files(in_dir: Path, out_dir: Path) -> None:
    """Copy README.md, .gitignore, .gitea/ and .github/ to the output root.

    Missing entries are skipped. These files are not ingredients, and
    ``.git/`` is never copied.
    """
    in_dir = Path(in_dir)
    out_dir = Path(out_dir)

    for name in ROOT_FILES:
        src = in_dir / name
        if src.is_file():
            copy_file(src, out_dir / name)

    for name in ROOT_DIRS:
        src = in_dir / name
        if not src.is_dir():
            continue
        try:
            shutil.copytree(src, out_dir / name, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            raise FileOperationError("copying", src, str(e)) from e


def default_license_text() -> bytes:
    """Return the bundled CC BY-SA 4.0 license used when an RC has none."""
    return resources.files("rc2sb").joinpath("data", LICENSE_FILENAME).read_bytes()


def _write_license(in_dir: Path, dst: Path) -> None:
    src = Path(in_dir) / LICENSE_FILENAME
    if src.is_file():
        copy_file(src, dst)
        return

    logger.debug("No %s in %s, using the default license", LICENSE_FILENAME, in_dir)
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_bytes(default_license_text())
    except OSError as e:
        raise FileOperationError("writing", dst, e.strerror or e) from e


def copy_license_to_root(in_dir: Path, out_dir: Path) -> None:
    """Write LICENSE.md at the output root, falling back to the default."""
    _write_license(in_dir, Path(out_dir) / LICENSE_FILENAME)


def copy_license_ingredient(in_dir: Path, out_dir: Path) -> Ingredient:
    """Write ``ingredients/LICENSE.md``, falling back to the default.

    Returns:
        Ingredient for the written license
    """
    dst = Path(out_dir) / LICENSE_INGREDIENT_KEY
    _write_license(in_dir, dst)
    return compute_ingredient_with_scope(dst, None)


def finish_bundle(in_dir: Path, out_dir: Path, metadata: Metadata) -> None:
    """Copy root infrastructure and the license; record the license ingredient.

    Every handler calls this once its content has been relocated.
    """
    copy_common_root_files(in_dir, out_dir)
    copy_license_to_root(in_dir, out_dir)
    metadata["ingredients"][LICENSE_INGREDIENT_KEY] = copy_license_ingredient(in_dir, out_dir)
