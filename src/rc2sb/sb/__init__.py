"""Scripture Burrito (SB) metadata support.

This package contains the metadata type definitions, the shared
metadata builder, ingredient computation and schema validation
used by every conversion handler.
"""

from .ingredient import compute_ingredient, compute_ingredient_with_scope, mime_type_for_ext
from .metadata import (
    BURRITO_TRUCK,
    METADATA_FILENAME,
    UW_BURRITOS,
    build_base_metadata,
    build_copyright,
    new_metadata,
    write_metadata,
)
from .types import Ingredient, LocalizedName, Metadata, Scope
from .validator import validate_metadata, validate_metadata_with_error_details, verify_ingredients

__all__ = [
    "BURRITO_TRUCK",
    "METADATA_FILENAME",
    "UW_BURRITOS",
    "Ingredient",
    "LocalizedName",
    "Metadata",
    "Scope",
    "build_base_metadata",
    "build_copyright",
    "compute_ingredient",
    "compute_ingredient_with_scope",
    "mime_type_for_ext",
    "new_metadata",
    "validate_metadata",
    "validate_metadata_with_error_details",
    "verify_ingredients",
    "write_metadata",
]
