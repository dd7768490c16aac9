"""rc2sb - Resource Container to Scripture Burrito converter.

This package converts unfoldingWord Resource Containers (RC) into
Scripture Burrito (SB) directories: it relocates the content files,
computes their ingredient checksums and writes ``metadata.json``.
"""

# Defined before the imports below; rc2sb.sb.metadata reads it
__version__ = "0.1.0"

# Core library interface
from .pipeline import ConversionOptions, ConversionPipeline, ConversionResult, convert
from .registry import HandlerRegistry
from .handlers import Handler, HandlerOptions

# Errors
from .errors import (
    ConversionCancelled,
    ConversionError,
    FileOperationError,
    ManifestError,
    MetadataValidationError,
    UnsupportedSubjectError,
)

# Utilities
from .rc import Manifest, load_manifest
from .sb import validate_metadata, validate_metadata_with_error_details, verify_ingredients

__all__ = [
    "__version__",
    # Primary library interface
    "ConversionOptions",
    "ConversionPipeline",
    "ConversionResult",
    "HandlerRegistry",
    "Handler",
    "HandlerOptions",
    "convert",
    # Errors
    "ConversionCancelled",
    "ConversionError",
    "FileOperationError",
    "ManifestError",
    "MetadataValidationError",
    "UnsupportedSubjectError",
    # Utilities
    "Manifest",
    "load_manifest",
    "validate_metadata",
    "validate_metadata_with_error_details",
    "verify_ingredients",
]
