"""Bible book catalog and localized book names."""

from .catalog import (
    ALL_BOOKS,
    BookInfo,
    by_code,
    by_id,
    code_from_project_id,
    is_book_id,
    localized_name_key,
)
from .names import localized_name_entry, resolve_localized_name
from .usfm import LocalizedBookNames, find_usfm_file, parse_usfm_book_names

__all__ = [
    "ALL_BOOKS",
    "BookInfo",
    "LocalizedBookNames",
    "by_code",
    "by_id",
    "code_from_project_id",
    "find_usfm_file",
    "is_book_id",
    "localized_name_entry",
    "localized_name_key",
    "parse_usfm_book_names",
    "resolve_localized_name",
]
