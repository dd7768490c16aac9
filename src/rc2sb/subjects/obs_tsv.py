"""TSV handlers for the OBS helps (study/translation notes and questions).

These RCs hold a single TSV file covering all of Open Bible Stories,
e.g. ``sn_OBS.tsv``. The prefix is dropped in the burrito.
"""

import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ManifestError
from ..handlers.base import Handler, HandlerOptions, check_cancelled
from ..handlers.common import (
    INGREDIENTS_DIR,
    copy_and_compute_ingredient,
    finish_bundle,
    resolve_project_path,
    strip_prefix,
)
from ..rc.manifest import Manifest
from ..sb.metadata import BURRITO_TRUCK
from ..sb.types import Flavor, LocalizedName, Metadata

if TYPE_CHECKING:
    from ..registry import HandlerRegistry

OBS_NAME_KEY = "book-obs"


def obs_localized_names() -> dict[str, LocalizedName]:
    return {
        OBS_NAME_KEY: {
            "abbr": {"en": "OBS"},
            "short": {"en": "OBS"},
            "long": {"en": "OBS"},
        }
    }


class OBSTSVHandler(Handler):
    """Converts one OBS TSV variant to a peripheral burrito."""

    id_authority = BURRITO_TRUCK
    flavor_type = "peripheral"

    def __init__(self, subject: str, flavor_name: str, abbreviation: str, prefix: str):
        """Initialize the handler.

        Args:
            subject: RC subject, e.g. 'TSV OBS Study Notes'
            flavor_name: SB flavor, e.g. 'x-obsnotes'
            abbreviation: Identification abbreviation, e.g. 'OBSSN'
            prefix: Filename prefix to drop, e.g. 'sn_'
        """
        self.subject = subject
        self.flavor: Flavor = {"name": flavor_name}
        self.abbreviation = abbreviation
        self.prefix = prefix

    def convert(
        self,
        manifest: Manifest,
        in_dir: Path,
        out_dir: Path,
        options: HandlerOptions,
        cancel_event: threading.Event | None = None,
    ) -> Metadata:
        check_cancelled(cancel_event)

        if not manifest.projects:
            raise ManifestError(f"no projects found in manifest for {self.subject}")

        metadata = self.build_metadata(manifest)
        metadata["localizedNames"] = obs_localized_names()

        src = resolve_project_path(in_dir, manifest.projects[0].path)
        key = f"{INGREDIENTS_DIR}/{strip_prefix(src.name, self.prefix)}"
        metadata["ingredients"][key] = copy_and_compute_ingredient(src, out_dir, key)

        finish_bundle(in_dir, out_dir, metadata)
        return metadata


def register(registry: "HandlerRegistry") -> None:
    registry.register(OBSTSVHandler("TSV OBS Study Notes", "x-obsnotes", "OBSSN", "sn_"))
    registry.register(OBSTSVHandler("TSV OBS Study Questions", "x-obsquestions", "OBSSQ", "sq_"))
    registry.register(OBSTSVHandler("TSV OBS Translation Notes", "x-obsnotes", "OBSTN", "tn_"))
    registry.register(OBSTSVHandler("TSV OBS Translation Questions", "x-obsquestions", "OBSTQ", "tq_"))
