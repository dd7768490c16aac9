"""Resource Container manifest model and loader.

This module parses an RC ``manifest.yaml`` into immutable dataclasses.
Only the fields the converters consume are typed strictly; everything
else is carried as plain strings so that unusual manifests still load.
"""

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.yaml"


def _as_str(value: Any) -> str:
    """Coerce a YAML scalar to a string.

    Unquoted dates load as ``datetime.date`` and bare numbers as ints,
    so they are normalized back to their textual form.
    """
    if value is None:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _as_str_list(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(_as_str(v) for v in value)
    return (_as_str(value),)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_mapping(value: Any, context: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"parsing {MANIFEST_FILENAME}: '{context}' must be a mapping")
    return value


@dataclass(frozen=True)
class Language:
    """Language descriptor from ``dublin_core.language``."""

    identifier: str = ""
    title: str = ""
    direction: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Language":
        return cls(
            identifier=_as_str(data.get("identifier")),
            title=_as_str(data.get("title")),
            direction=_as_str(data.get("direction")),
        )


@dataclass(frozen=True)
class SourceRef:
    """A ``dublin_core.source`` entry."""

    identifier: str = ""
    language: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceRef":
        return cls(
            identifier=_as_str(data.get("identifier")),
            language=_as_str(data.get("language")),
            version=_as_str(data.get("version")),
        )


@dataclass(frozen=True)
class DublinCore:
    """The ``dublin_core`` block of an RC manifest.

    Attributes:
        subject: Content type; selects the conversion handler
        identifier: Resource identifier (e.g. 'ult', 'tn', 'obs')
        issued: Issue date string; only its first four characters are used
        language: Language descriptor
    """

    conformsto: str = ""
    contributor: tuple[str, ...] = ()
    creator: str = ""
    description: str = ""
    format: str = ""
    identifier: str = ""
    issued: str = ""
    language: Language = field(default_factory=Language)
    modified: str = ""
    publisher: str = ""
    relation: tuple[str, ...] = ()
    rights: str = ""
    source: tuple[SourceRef, ...] = ()
    subject: str = ""
    title: str = ""
    type: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DublinCore":
        sources = data.get("source") or []
        return cls(
            conformsto=_as_str(data.get("conformsto")),
            contributor=_as_str_list(data.get("contributor")),
            creator=_as_str(data.get("creator")),
            description=_as_str(data.get("description")),
            format=_as_str(data.get("format")),
            identifier=_as_str(data.get("identifier")),
            issued=_as_str(data.get("issued")),
            language=Language.from_dict(_as_mapping(data.get("language"), "language")),
            modified=_as_str(data.get("modified")),
            publisher=_as_str(data.get("publisher")),
            relation=_as_str_list(data.get("relation")),
            rights=_as_str(data.get("rights")),
            source=tuple(SourceRef.from_dict(s) for s in sources if isinstance(s, dict)),
            subject=_as_str(data.get("subject")),
            title=_as_str(data.get("title")),
            type=_as_str(data.get("type")),
            version=_as_str(data.get("version")),
        )


@dataclass(frozen=True)
class Checking:
    """The ``checking`` block of an RC manifest."""

    checking_entity: tuple[str, ...] = ()
    checking_level: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Checking":
        return cls(
            checking_entity=_as_str_list(data.get("checking_entity")),
            checking_level=_as_str(data.get("checking_level")),
        )


@dataclass(frozen=True)
class Project:
    """One content unit declared in the manifest's ``projects`` list.

    Attributes:
        identifier: Project id; a book id such as 'gen' for scripture-based types
        path: Path of the project's file or directory, relative to the bundle
        sort: Sort key
        title: Display title, possibly localized
    """

    identifier: str = ""
    path: str = ""
    sort: int = 0
    title: str = ""
    versification: str = ""
    categories: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        return cls(
            identifier=_as_str(data.get("identifier")),
            path=_as_str(data.get("path")),
            sort=_as_int(data.get("sort")),
            title=_as_str(data.get("title")),
            versification=_as_str(data.get("versification")),
            categories=_as_str_list(data.get("categories")),
        )

    @property
    def relative_path(self) -> str:
        """The project path with any leading './' removed."""
        return self.path.removeprefix("./")


@dataclass(frozen=True)
class Manifest:
    """Top-level RC manifest."""

    dublin_core: DublinCore = field(default_factory=DublinCore)
    checking: Checking = field(default_factory=Checking)
    projects: tuple[Project, ...] = ()

    @property
    def subject(self) -> str:
        return self.dublin_core.subject

    @property
    def identifier(self) -> str:
        return self.dublin_core.identifier

    @property
    def language(self) -> Language:
        return self.dublin_core.language

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        """Build a manifest from a parsed YAML document.

        Raises:
            ManifestError: If a block has the wrong shape
        """
        projects = data.get("projects") or []
        if not isinstance(projects, list):
            raise ManifestError(f"parsing {MANIFEST_FILENAME}: 'projects' must be a list")

        return cls(
            dublin_core=DublinCore.from_dict(_as_mapping(data.get("dublin_core"), "dublin_core")),
            checking=Checking.from_dict(_as_mapping(data.get("checking"), "checking")),
            projects=tuple(Project.from_dict(p) for p in projects if isinstance(p, dict)),
        )


def load_manifest(directory: Path) -> Manifest:
    """Read and parse ``manifest.yaml`` from an RC directory.

    Args:
        directory: Root of the RC bundle

    Returns:
        The parsed manifest

    Raises:
        ManifestError: If the file is missing, unreadable or not valid YAML
    """
    path = Path(directory) / MANIFEST_FILENAME

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError(
            f"not a valid Resource Container: {MANIFEST_FILENAME} not found in {directory}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"reading {MANIFEST_FILENAME}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"parsing {MANIFEST_FILENAME}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"parsing {MANIFEST_FILENAME}: document is not a mapping")

    manifest = Manifest.from_dict(data)
    logger.debug(
        "Loaded manifest %s: subject=%r, %d projects",
        path, manifest.subject, len(manifest.projects),
    )
    return manifest
