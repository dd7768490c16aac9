"""Translation Academy handler."""

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ..handlers.base import Handler, HandlerOptions, check_cancelled
from ..handlers.common import INGREDIENTS_DIR, copy_tree_to_ingredients, finish_bundle, resolve_project_path
from ..rc.manifest import Manifest
from ..sb.types import Metadata

if TYPE_CHECKING:
    from ..registry import HandlerRegistry

logger = logging.getLogger(__name__)


class TAHandler(Handler):
    """Converts a Translation Academy RC to a peripheral/x-peripheralArticles burrito.

    Each project (intro, process, translate, checking) is a directory of
    modules, copied to ``ingredients/<project id>/``.
    """

    subject = "Translation Academy"
    abbreviation = "TA"
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

        for project in manifest.projects:
            check_cancelled(cancel_event)

            project_dir = resolve_project_path(in_dir, project.identifier)
            if not project_dir.is_dir():
                logger.warning("Skipping %s: directory not found", project.identifier)
                continue

            copy_tree_to_ingredients(project_dir, out_dir, f"{INGREDIENTS_DIR}/{project.identifier}", metadata)

        finish_bundle(in_dir, out_dir, metadata)
        return metadata


def register(registry: "HandlerRegistry") -> None:
    registry.register(TAHandler())
