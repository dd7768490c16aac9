"""Localized book names from USFM header markers.

A USFM file declares its book's names near the top of the file:
``\\toc1`` (long), ``\\toc2`` (short) and ``\\toc3`` (abbreviation),
with ``\\mt1``/``\\mt`` and ``\\h`` as fallbacks for the long and short
names. Only the header is read.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .catalog import code_from_project_id

logger = logging.getLogger(__name__)

# Markers only ever appear in the header
HEADER_LINES = 20

MARKERS = ("\\toc1", "\\toc2", "\\toc3", "\\h", "\\mt1", "\\mt")


@dataclass(frozen=True)
class LocalizedBookNames:
    """Book names extracted from USFM markup. Empty means not present."""

    long: str = ""
    short: str = ""
    abbr: str = ""


def extract_marker(line: str, marker: str) -> str:
    """Return the value following a marker at the start of a line.

    The marker must be followed by a space (or be the whole line), so
    ``\\mt`` does not match a ``\\mt1`` line.

    Example:
        >>> extract_marker("\\\\toc2 Genesis", "\\\\toc2")
        'Genesis'
    """
    if not (line.startswith(marker + " ") or line == marker):
        return ""
    return line[len(marker):].strip()


def parse_usfm_book_names(file_path: Path) -> LocalizedBookNames | None:
    """Read the localized book names from a USFM file's header.

    Args:
        file_path: Path to a .usfm file

    Returns:
        The names found, or None if the file is unreadable or has no
        usable markers
    """
    found: dict[str, str] = {}

    try:
        with Path(file_path).open("r", encoding="utf-8-sig") as f:
            for line_number, raw_line in enumerate(f):
                if line_number >= HEADER_LINES:
                    break
                line = raw_line.strip()
                if not line.startswith("\\"):
                    continue

                for marker in MARKERS:
                    value = extract_marker(line, marker)
                    if value:
                        found[marker] = value
                        break
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read book names from %s: %s", file_path, e)
        return None

    # \mt only counts when there is no \mt1
    title = found.get("\\mt1") or found.get("\\mt", "")
    long_name = found.get("\\toc1") or title
    short_name = found.get("\\toc2") or found.get("\\h", "")
    abbr = found.get("\\toc3", "")

    if not (long_name or short_name or abbr):
        return None

    return LocalizedBookNames(long=long_name, short=short_name, abbr=abbr)


def find_usfm_file(usfm_dir: Path, book_id: str) -> Path | None:
    """Find the USFM file for a book in a directory.

    Looks for ``NN-CODE.usfm`` first, then ``CODE.usfm``, then the
    lowercase ``NN-code.usfm`` variant.

    Args:
        usfm_dir: Directory holding USFM files (e.g. a checkout of en_ult)
        book_id: Project identifier such as 'gen'

    Returns:
        Path of the first match, or None
    """
    usfm_dir = Path(usfm_dir)
    code = code_from_project_id(book_id)

    matches = sorted(usfm_dir.glob(f"*-{code}.usfm"))
    if matches:
        return matches[0]

    direct = usfm_dir / f"{code}.usfm"
    if direct.is_file():
        return direct

    matches = sorted(usfm_dir.glob(f"*-{code.lower()}.usfm"))
    if matches:
        return matches[0]

    return None
