"""Book-keyed TSV handlers (Translation Notes and Translation Questions).

Each project is one book's TSV file, named with a resource prefix such
as ``tn_GEN.tsv``. The prefix is dropped in the burrito.
"""

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..books import code_from_project_id, find_usfm_file, parse_usfm_book_names, resolve_localized_name
from ..books.usfm import LocalizedBookNames
from ..handlers.base import Handler, HandlerOptions, check_cancelled, set_current_scope
from ..handlers.common import (
    INGREDIENTS_DIR,
    copy_and_compute_ingredient,
    finish_bundle,
    resolve_project_path,
    strip_prefix,
)
from ..rc.manifest import Manifest
from ..sb.types import Ingredient, Metadata, Scope

if TYPE_CHECKING:
    from ..registry import HandlerRegistry

logger = logging.getLogger(__name__)

# (src, out_dir, ingredient_key, scope) -> Ingredient
ProjectCopier = Callable[[Path, Path, str, Scope], Ingredient]


def markup_names_for(usfm_path: Path | None, book_id: str) -> LocalizedBookNames | None:
    """Read a book's names from an external USFM directory, if one is given."""
    if usfm_path is None:
        return None
    usfm_file = find_usfm_file(usfm_path, book_id)
    if usfm_file is None:
        logger.debug("No USFM file for %s in %s", book_id, usfm_path)
        return None
    return parse_usfm_book_names(usfm_file)


class TSVBookHandler(Handler):
    """Base for handlers whose projects are one TSV file per book.

    Subclasses set ``subject``, ``abbreviation``, ``flavor`` and
    ``prefix``, and may override prepare().
    """

    flavor_type = "parascriptural"
    prefix: str = ""

    def prepare(
        self, manifest: Manifest, in_dir: Path, out_dir: Path, options: HandlerOptions, metadata: Metadata
    ) -> ProjectCopier:
        """Run before the projects are copied.

        Returns:
            Function used to relocate each book's TSV file
        """
        return copy_and_compute_ingredient

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

        copy_project = self.prepare(manifest, in_dir, out_dir, options, metadata)

        for project in manifest.projects:
            check_cancelled(cancel_event)

            src = resolve_project_path(in_dir, project.path)
            if not src.is_file():
                logger.warning("Skipping %s: %s not found", project.identifier, project.path)
                continue

            key = f"{INGREDIENTS_DIR}/{strip_prefix(src.name, self.prefix)}"

            book_id = project.identifier.lower()
            code = code_from_project_id(book_id)
            scope: Scope = {code: []}
            current_scope[code] = []

            name_key, names = resolve_localized_name(
                book_id, language, project.title, markup_names_for(options.usfm_path, book_id)
            )
            if names is not None:
                metadata["localizedNames"][name_key] = names

            metadata["ingredients"][key] = copy_project(src, out_dir, key, scope)

        set_current_scope(metadata, current_scope)
        finish_bundle(in_dir, out_dir, metadata)
        return metadata


class TNHandler(TSVBookHandler):
    """TSV Translation Notes -> parascriptural/x-bcvnotes."""

    subject = "TSV Translation Notes"
    abbreviation = "TN"
    flavor = {"name": "x-bcvnotes"}
    prefix = "tn_"


class TQHandler(TSVBookHandler):
    """TSV Translation Questions -> parascriptural/x-bcvquestions."""

    subject = "TSV Translation Questions"
    abbreviation = "TQ"
    flavor = {"name": "x-bcvquestions"}
    prefix = "tq_"


def register(registry: "HandlerRegistry") -> None:
    registry.register(TNHandler())
    registry.register(TQHandler())
