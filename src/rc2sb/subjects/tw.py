"""Translation Words handler."""

import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import FileOperationError
from ..handlers.base import Handler, HandlerOptions, check_cancelled
from ..handlers.common import INGREDIENTS_DIR, copy_tree_to_ingredients, finish_bundle
from ..rc.manifest import Manifest
from ..sb.types import Metadata

if TYPE_CHECKING:
    from ..registry import HandlerRegistry

# Articles live in bible/{kt,names,other}/*.md next to bible/config.yaml
ARTICLES_DIR = "bible"


class TWHandler(Handler):
    """Converts a Translation Words RC to a peripheral/x-peripheralArticles burrito.

    The ``bible/`` tree is copied as-is to ``ingredients/``, so
    ``bible/kt/god.md`` becomes ``ingredients/kt/god.md``.
    """

    subject = "Translation Words"
    abbreviation = "TW"
    flavor_type = "peripheral"
    flavor = {"name": "x-peripheralArticles"}

    def convert(
        self,
        manifest: Manifest,
        in_dir: Path,
        out_dir: Path,
        options: HandlerOptions,
        cancel_event: threading.Event | None = None,
    ) -> Metadata:
        check_cancelled(cancel_event)

        metadata = self.build_metadata(manifest)

        articles_dir = Path(in_dir) / ARTICLES_DIR
        if not articles_dir.is_dir():
            raise FileOperationError("copying", articles_dir, "directory not found")
        copy_tree_to_ingredients(articles_dir, out_dir, INGREDIENTS_DIR, metadata)

        finish_bundle(in_dir, out_dir, metadata)
        return metadata


def register(registry: "HandlerRegistry") -> None:
    registry.register(TWHandler())
