"""TSV Translation Words Links handler.

Like the other book TSV handlers, but TW article links are rewritten
to point into a bundled Translation Words payload when one is found.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from ..handlers.base import HandlerOptions
from ..handlers.payload import PayloadResolver
from ..rc.manifest import Manifest
from ..sb.types import Metadata
from .tsv import ProjectCopier, TSVBookHandler

if TYPE_CHECKING:
    from ..registry import HandlerRegistry


class TWLHandler(TSVBookHandler):
    """TSV Translation Words Links -> parascriptural/x-bcvarticles."""

    subject = "TSV Translation Words Links"
    abbreviation = "TW"
    flavor = {"name": "x-bcvarticles"}
    prefix = "twl_"

    def prepare(
        self, manifest: Manifest, in_dir: Path, out_dir: Path, options: HandlerOptions, metadata: Metadata
    ) -> ProjectCopier:
        resolver = PayloadResolver.detect(in_dir, manifest.language.identifier, options.payload_path)
        resolver.copy_payload(out_dir, metadata)
        return resolver.copy_tsv


def register(registry: "HandlerRegistry") -> None:
    registry.register(TWLHandler())
