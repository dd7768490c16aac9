"""Handler interface and the helpers shared by subject handlers."""

from .base import Handler, HandlerOptions, check_cancelled, set_current_scope
from .common import (
    INGREDIENTS_DIR,
    LICENSE_INGREDIENT_KEY,
    copy_and_compute_ingredient,
    copy_common_root_files,
    copy_license_ingredient,
    copy_license_to_root,
    copy_tree_to_ingredients,
    extract_book_code,
    finish_bundle,
    resolve_project_path,
    strip_prefix,
)
from .payload import PayloadLink, PayloadResolver, resolve_payload_source, rewrite_line

__all__ = [
    "INGREDIENTS_DIR",
    "LICENSE_INGREDIENT_KEY",
    "Handler",
    "HandlerOptions",
    "PayloadLink",
    "PayloadResolver",
    "check_cancelled",
    "copy_and_compute_ingredient",
    "copy_common_root_files",
    "copy_license_ingredient",
    "copy_license_to_root",
    "copy_tree_to_ingredients",
    "extract_book_code",
    "finish_bundle",
    "resolve_payload_source",
    "rewrite_line",
    "set_current_scope",
]
