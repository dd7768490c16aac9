"""Translation Words payload for TWL conversion.

A TWL row ends with a link such as ``rc://*/tw/dict/bible/kt/god``.
When a Translation Words checkout is available, its ``bible/`` tree is
bundled under ``ingredients/payload/`` and each link is rewritten to
the relative path of the bundled article, ``./payload/kt/god.md``.
Without a payload the TSV files are copied unchanged.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from ..errors import FileOperationError
from ..sb.ingredient import compute_ingredient_with_scope
from ..sb.types import Ingredient, Metadata, Scope
from .common import INGREDIENTS_DIR, copy_and_compute_ingredient, copy_tree_to_ingredients

logger = logging.getLogger(__name__)

PAYLOAD_PREFIX = f"{INGREDIENTS_DIR}/payload"
ARTICLE_EXT = ".md"

# The TWLink column: a TW article link forming the last column of a row.
# TSV files are rewritten as bytes, whatever their encoding.
TW_LINK_COLUMN_PATTERN = re.compile(rb"\trc://[^/\t]+/tw/dict/bible/([^/\t]+)/([^\t]+)$")


@dataclass(frozen=True)
class PayloadLink:
    """A Translation Words article referenced from a TWL row."""

    category: str
    article: str

    @classmethod
    def from_match(cls, match: "re.Match[bytes]") -> "PayloadLink":
        # Undecodable bytes round-trip to the same file name
        return cls(os.fsdecode(match.group(1)), os.fsdecode(match.group(2)))

    @property
    def relative_path(self) -> str:
        """Path of the article relative to the TSV file, e.g. './payload/kt/god.md'."""
        return f"./payload/{self.category}/{self.article}{ARTICLE_EXT}"

    def exists_in(self, bible_dir: Path) -> bool:
        """Return True if the article file exists in a TW ``bible/`` directory."""
        return (bible_dir / self.category / f"{self.article}{ARTICLE_EXT}").is_file()


def _split_terminator(line: bytes) -> tuple[bytes, bytes]:
    for terminator in (b"\r\n", b"\n", b"\r"):
        if line.endswith(terminator):
            return line[: -len(terminator)], terminator
    return line, b""


def rewrite_line(line: bytes) -> tuple[bytes, list[PayloadLink]]:
    """Rewrite the TWLink column of one TSV line.

    The line terminator (``\\n``, ``\\r\\n`` or ``\\r``), if any, is kept
    as is. Lines without a link in the last column, including already
    rewritten ones, are returned unchanged.

    Returns:
        Tuple of (rewritten line, links that were rewritten)

    Example:
        >>> rewrite_line(b"GEN\\t1:1\\trc://*/tw/dict/bible/kt/god\\n")
        (b'GEN\\t1:1\\t./payload/kt/god.md\\n', [PayloadLink(category='kt', article='god')])
    """
    body, terminator = _split_terminator(line)
    match = TW_LINK_COLUMN_PATTERN.search(body)
    if match is None:
        return line, []

    path = b"./payload/" + match.group(1) + b"/" + match.group(2) + ARTICLE_EXT.encode()
    return body[: match.start()] + b"\t" + path + terminator, [PayloadLink.from_match(match)]


def resolve_payload_source(
    in_dir: Path, language: str, payload_path: Path | None = None
) -> Path | None:
    """Select the TW ``bible/`` directory to bundle, if any.

    An explicit payload path wins. Otherwise ``<lang>_tw/`` inside the
    RC checkout is used when present.

    Args:
        in_dir: Root of the TWL checkout
        language: Language identifier from the manifest
        payload_path: Root of a TW checkout given by the caller

    Returns:
        Path of the ``bible/`` directory, or None when there is no payload
    """
    if payload_path is not None:
        candidate = Path(payload_path) / "bible"
        if candidate.is_dir():
            return candidate
        logger.warning("Payload path %s has no bible/ directory; TW links will not be rewritten", payload_path)
        return None

    candidate = Path(in_dir) / f"{language}_tw" / "bible"
    if candidate.is_dir():
        logger.debug("Using auto-detected payload %s", candidate)
        return candidate

    return None


def copy_tsv_with_link_rewrite(
    src: Path, out_dir: Path, ingredient_key: str, scope: Scope | None = None
) -> tuple[Ingredient, list[PayloadLink]]:
    """Copy a TWL TSV file, rewriting TW links to payload paths.

    The file is handled as bytes, so content in any encoding is
    relocated. The ingredient is computed from the rewritten file.

    Args:
        src: Source TSV file
        out_dir: Root of the SB output
        ingredient_key: Output-relative destination path
        scope: Optional book scope for the ingredient

    Returns:
        Tuple of (ingredient, links that were rewritten)

    Raises:
        FileOperationError: If reading or writing fails
    """
    dst = Path(out_dir) / ingredient_key

    try:
        data = Path(src).read_bytes()
    except OSError as e:
        raise FileOperationError("reading", src, e.strerror or e) from e

    links: list[PayloadLink] = []
    rewritten: list[bytes] = []
    for line in data.splitlines(keepends=True):
        new_line, line_links = rewrite_line(line)
        rewritten.append(new_line)
        links.extend(line_links)

    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_bytes(b"".join(rewritten))
    except OSError as e:
        raise FileOperationError("writing", dst, e.strerror or e) from e

    return compute_ingredient_with_scope(dst, scope), links


class PayloadResolver:
    """Bundles a TW payload and routes TWL files through link rewriting.

    Example:
        >>> resolver = PayloadResolver.detect(in_dir, "en", options.payload_path)
        >>> resolver.copy_payload(out_dir, metadata)
        >>> ingredient = resolver.copy_tsv(src, out_dir, "ingredients/GEN.tsv", scope)
    """

    def __init__(self, source: Path | None):
        """Initialize the resolver.

        Args:
            source: TW ``bible/`` directory, or None for no payload
        """
        self.source = source

    @classmethod
    def detect(cls, in_dir: Path, language: str, payload_path: Path | None = None) -> "PayloadResolver":
        """Create a resolver using resolve_payload_source()."""
        return cls(resolve_payload_source(in_dir, language, payload_path))

    def copy_payload(self, out_dir: Path, metadata: Metadata) -> int:
        """Copy the payload tree to ``ingredients/payload/``.

        Returns:
            Number of payload files copied; 0 without a payload
        """
        if self.source is None:
            return 0
        count = copy_tree_to_ingredients(self.source, out_dir, PAYLOAD_PREFIX, metadata)
        logger.info("Bundled %d payload files from %s", count, self.source)
        return count

    def copy_tsv(
        self, src: Path, out_dir: Path, ingredient_key: str, scope: Scope | None = None
    ) -> Ingredient:
        """Copy one TWL file, rewriting links when a payload is bundled.

        Links that point at articles missing from the payload are still
        rewritten, and logged as a warning.
        """
        if self.source is None:
            return copy_and_compute_ingredient(src, out_dir, ingredient_key, scope)

        ingredient, links = copy_tsv_with_link_rewrite(src, out_dir, ingredient_key, scope)

        missing = sorted({link for link in links if not link.exists_in(self.source)}, key=str)
        if missing:
            logger.warning(
                "%s: %d TW links not found in payload (e.g. %s)",
                ingredient_key,
                len(missing),
                missing[0].relative_path,
            )
        return ingredient
