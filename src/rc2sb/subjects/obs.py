"""Open Bible Stories handler."""

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import FileOperationError
from ..handlers.base import Handler, HandlerOptions, check_cancelled
from ..handlers.common import (
    INGREDIENTS_DIR,
    copy_and_compute_ingredient,
    copy_tree_to_ingredients,
    finish_bundle,
    resolve_project_path,
)
from ..rc.manifest import Manifest
from ..sb.metadata import BURRITO_TRUCK
from ..sb.types import Metadata

if TYPE_CHECKING:
    from ..registry import HandlerRegistry

logger = logging.getLogger(__name__)

CONTENT_PREFIX = f"{INGREDIENTS_DIR}/content"
DEFAULT_CONTENT_PATH = "content"

# Root files that are repository infrastructure rather than stories
EXCLUDED_ROOT_FILES = {"README.md", "LICENSE.md", ".gitignore"}


def is_excluded_root_entry(path: Path) -> bool:
    """Return True for root entries that are not OBS content.

    Dot-directories (.git, .gitea, .github), YAML metadata files
    (manifest.yaml, media.yaml) and README/LICENSE/.gitignore are
    excluded.
    """
    if path.is_dir():
        return path.name.startswith(".")
    if path.suffix in (".yaml", ".yml"):
        return True
    return path.name in EXCLUDED_ROOT_FILES


class OBSHandler(Handler):
    """Converts an OBS RC (markdown stories) to a gloss/textStories burrito."""

    subject = "Open Bible Stories"
    id_authority = BURRITO_TRUCK
    abbreviation = "OBS"
    flavor_type = "gloss"
    flavor = {"name": "textStories"}
    narrative_copyright = True

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

        content_path = DEFAULT_CONTENT_PATH
        if manifest.projects and manifest.projects[0].relative_path:
            content_path = manifest.projects[0].relative_path
        logger.debug("OBS content path: %s", content_path)

        if content_path == ".":
            self._copy_root_content(in_dir, out_dir, metadata)
        else:
            content_dir = resolve_project_path(in_dir, content_path)
            if not content_dir.is_dir():
                raise FileOperationError("copying", content_dir, "content directory not found")
            copy_tree_to_ingredients(content_dir, out_dir, CONTENT_PREFIX, metadata)

        finish_bundle(in_dir, out_dir, metadata)
        return metadata

    def _copy_root_content(self, in_dir: Path, out_dir: Path, metadata: Metadata) -> None:
        """Copy stories kept directly in the RC root to ingredients/content/."""
        out_resolved = Path(out_dir).resolve()
        for entry in sorted(Path(in_dir).iterdir()):
            if is_excluded_root_entry(entry) or entry.resolve() == out_resolved:
                continue

            if entry.is_dir():
                copy_tree_to_ingredients(entry, out_dir, f"{CONTENT_PREFIX}/{entry.name}", metadata)
            else:
                key = f"{CONTENT_PREFIX}/{entry.name}"
                metadata["ingredients"][key] = copy_and_compute_ingredient(entry, out_dir, key)


def register(registry: "HandlerRegistry") -> None:
    registry.register(OBSHandler())
