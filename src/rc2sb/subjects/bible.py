"""USFM Bible handlers.

One handler class serves every USFM-based subject ("Aligned Bible",
"Bible", "Hebrew Old Testament", "Greek New Testament"). The
abbreviation comes from the manifest identifier, e.g. 'ult' -> 'ULT'.
"""

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ..books import code_from_project_id, is_book_id, parse_usfm_book_names, resolve_localized_name
from ..handlers.base import Handler, HandlerOptions, check_cancelled, set_current_scope
from ..handlers.common import (
    INGREDIENTS_DIR,
    copy_and_compute_ingredient,
    extract_book_code,
    finish_bundle,
    resolve_project_path,
)
from ..rc.manifest import Manifest
from ..sb.types import Metadata, Scope

if TYPE_CHECKING:
    from ..registry import HandlerRegistry

logger = logging.getLogger(__name__)

BIBLE_SUBJECTS = (
    "Aligned Bible",
    "Bible",
    "Hebrew Old Testament",
    "Greek New Testament",
)


class BibleHandler(Handler):
    """Converts a USFM Bible RC to a scripture/textTranslation burrito."""

    flavor_type = "scripture"
    flavor = {
        "name": "textTranslation",
        "usfmVersion": "3.0",
        "translationType": "revision",
        "audience": "common",
        "projectType": "standard",
    }

    def __init__(self, subject: str):
        """Initialize the handler.

        Args:
            subject: RC subject this instance is registered under
        """
        self.subject = subject

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
        language = manifest.language.identifier
        current_scope: Scope = {}

        for project in manifest.projects:
            check_cancelled(cancel_event)

            src = resolve_project_path(in_dir, project.path)
            if not src.is_file():
                logger.warning("Skipping %s: %s not found", project.identifier, project.path)
                continue

            # "01-GEN.usfm" -> "GEN.usfm"
            key = f"{INGREDIENTS_DIR}/{extract_book_code(src.name)}.usfm"

            book_id = project.identifier.lower()
            scope: Scope | None = None
            if is_book_id(book_id):
                code = code_from_project_id(book_id)
                scope = {code: []}
                current_scope[code] = []

                name_key, names = resolve_localized_name(
                    book_id, language, project.title, parse_usfm_book_names(src)
                )
                if names is not None:
                    metadata["localizedNames"][name_key] = names
            else:
                logger.debug("%s is not a Bible book; no scope recorded", project.identifier)

            metadata["ingredients"][key] = copy_and_compute_ingredient(src, out_dir, key, scope)

        set_current_scope(metadata, current_scope)
        finish_bundle(in_dir, out_dir, metadata)
        return metadata


def register(registry: "HandlerRegistry") -> None:
    for subject in BIBLE_SUBJECTS:
        registry.register(BibleHandler(subject))
