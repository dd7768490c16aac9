"""Resource Container (RC) manifest model.

This package parses the source bundle's manifest.yaml into
immutable dataclasses consumed by the conversion handlers.
"""

from .manifest import (
    MANIFEST_FILENAME,
    Checking,
    DublinCore,
    Language,
    Manifest,
    Project,
    SourceRef,
    load_manifest,
)

__all__ = [
    "MANIFEST_FILENAME",
    "Checking",
    "DublinCore",
    "Language",
    "Manifest",
    "Project",
    "SourceRef",
    "load_manifest",
]
