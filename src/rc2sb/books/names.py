"""Localized book-name resolution.

Names come from up to three sources, tried in order per slot:

- ``markup``: values read from the book's USFM header (see usfm.py)
- ``title``: the project's declared title from the manifest
- the canonical English names from the book catalog

English is the universal fallback, so the ``en`` bucket always holds a
full set of names. For English output, markup values replace the
canonical ones in that single bucket. For any other language, markup
and title values go into a separate bucket and ``en`` stays canonical.
"""

from ..sb.types import LocalizedName
from .catalog import BookInfo, by_id, localized_name_key
from .usfm import LocalizedBookNames

ENGLISH = "en"

SLOTS = ("abbr", "short", "long")

# Sources tried per slot, highest priority first. The canonical name is
# always the last resort and is handled separately.
LOCALIZED_PRIORITY: dict[str, tuple[str, ...]] = {
    "long": ("markup", "title"),
    "short": ("markup", "title"),
    "abbr": ("markup",),
}

# In the English bucket the project title never replaces a canonical name
ENGLISH_PRIORITY: dict[str, tuple[str, ...]] = {
    "long": ("markup",),
    "short": ("markup",),
    "abbr": ("markup",),
}


def _canonical(book: BookInfo) -> LocalizedName:
    return {
        "abbr": {ENGLISH: book.abbr},
        "short": {ENGLISH: book.short},
        "long": {ENGLISH: book.long},
    }


def _first_candidate(
    slot: str,
    priority: dict[str, tuple[str, ...]],
    markup_names: LocalizedBookNames | None,
    project_title: str,
) -> str:
    for source in priority[slot]:
        if source == "markup" and markup_names is not None:
            value = getattr(markup_names, slot)
        elif source == "title":
            value = project_title
        else:
            value = ""
        if value:
            return value
    return ""


def localized_name_entry(book_id: str) -> tuple[str, LocalizedName | None]:
    """Return the canonical English names for a book.

    Returns:
        ``(key, names)``, or ``("", None)`` for an unrecognized identifier
    """
    book = by_id(book_id)
    if book is None:
        return "", None
    return localized_name_key(book), _canonical(book)


def resolve_localized_name(
    book_id: str,
    language: str,
    project_title: str = "",
    markup_names: LocalizedBookNames | None = None,
) -> tuple[str, LocalizedName | None]:
    """Resolve the display names of a book for a target language.

    Args:
        book_id: Project identifier such as 'gen'
        language: Target language tag, e.g. 'hi'
        project_title: Title declared for the project in the manifest
        markup_names: Names parsed from the book's USFM header, if any

    Returns:
        ``(key, names)`` where key is e.g. 'book-gen', or ``("", None)``
        when the identifier is not a recognized book. No entry is ever
        made up for an unknown book.

    Example:
        >>> key, names = resolve_localized_name("gen", "hi", "उत्पत्ति")
        >>> names["long"]
        {'en': 'The Book of Genesis', 'hi': 'उत्पत्ति'}
    """
    book = by_id(book_id)
    if book is None:
        return "", None

    names = _canonical(book)
    if language == ENGLISH:
        bucket, priority = ENGLISH, ENGLISH_PRIORITY
    else:
        bucket, priority = language, LOCALIZED_PRIORITY

    for slot in SLOTS:
        value = _first_candidate(slot, priority, markup_names, project_title)
        if value:
            names[slot][bucket] = value  # type: ignore[literal-required]

    return localized_name_key(book), names
