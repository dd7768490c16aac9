"""Scripture Burrito metadata construction and persistence.

This module builds the scaffolding shared by every handler (meta,
ID authority, identification, languages, copyright) from an RC
manifest, and writes the finished record to ``metadata.json``.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from .. import __version__
from ..errors import FileOperationError
from ..rc.manifest import Manifest
from .types import Copyright, IdAuthority, Metadata

logger = logging.getLogger(__name__)

METADATA_FILENAME = "metadata.json"

BURRITO_TRUCK = "BurritoTruck"
UW_BURRITOS = "uWBurritos"

# Authority key -> identity. Any key other than BurritoTruck maps to the uW identity.
ID_AUTHORITIES: dict[str, IdAuthority] = {
    BURRITO_TRUCK: {
        "id": "https://git.door43.org/BurritoTruck",
        "name": {"en": "Door43 Burrito Truck"},
    },
    UW_BURRITOS: {
        "id": "https://git.door43.org/uW",
        "name": {"en": "Door43 uW Burritos"},
    },
}


def timestamp_now() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-01-01T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def new_metadata() -> Metadata:
    """Create an empty metadata record with the standard defaults."""
    return {
        "format": "scripture burrito",
        "meta": {
            "version": "1.0.0",
            "category": "source",
            "generator": {
                "softwareName": "rc2sb",
                "softwareVersion": __version__,
                "userName": "",
            },
            "defaultLocale": "en",
            "dateCreated": "",
            "normalization": "NFC",
        },
        "idAuthorities": {},
        "identification": {
            "primary": {},
            "name": {},
            "description": {},
            "abbreviation": {},
        },
        "languages": [],
        "type": {"flavorType": {"name": "", "flavor": {"name": ""}}},
        "confidential": False,
        "localizedNames": {},
        "ingredients": {},
        "copyright": {"shortStatements": []},
    }


def build_base_metadata(manifest: Manifest, id_authority: str, abbreviation: str = "") -> Metadata:
    """Create a metadata record with the fields common to all handlers.

    Args:
        manifest: Source RC manifest
        id_authority: Authority key, BURRITO_TRUCK or UW_BURRITOS
        abbreviation: Identification abbreviation; when empty the
            manifest identifier is uppercased instead

    Returns:
        Metadata with meta, idAuthorities, identification and languages set
    """
    metadata = new_metadata()
    now = timestamp_now()
    metadata["meta"]["dateCreated"] = now

    dc = manifest.dublin_core
    authority = ID_AUTHORITIES.get(id_authority, ID_AUTHORITIES[UW_BURRITOS])
    metadata["idAuthorities"][id_authority] = {
        "id": authority["id"],
        "name": dict(authority["name"]),
    }

    abbr = abbreviation or dc.identifier.upper()
    metadata["identification"] = {
        "primary": {id_authority: {abbr: {"revision": "1", "timestamp": now}}},
        "name": {"en": dc.title},
        "description": {"en": dc.title},
        "abbreviation": {"en": abbr},
    }

    metadata["languages"] = [
        {
            "tag": dc.language.identifier,
            "name": {"en": dc.language.title},
            "scriptDirection": dc.language.direction,
        }
    ]

    return metadata


def issued_year(issued: str) -> str:
    """Return the year part of an issued date.

    This is the first four characters, without parsing. A malformed
    date yields a malformed year; existing published burritos were
    generated this way, so it is only logged.
    """
    year = issued[:4]
    if not (len(year) == 4 and year.isdigit()):
        logger.warning("Issued date %r does not start with a four-digit year", issued)
    return year


def build_copyright(manifest: Manifest, narrative: bool = False) -> Copyright:
    """Generate the copyright block from the manifest.

    Args:
        manifest: Source RC manifest
        narrative: Use the Open Bible Stories wording
            ``Copyright © {year} by {publisher}`` instead of
            ``© {publisher} {year}, {rights}``

    Returns:
        Copyright block with a single short statement
    """
    dc = manifest.dublin_core
    year = issued_year(dc.issued)

    if narrative:
        return {"shortStatements": [{"statement": f"Copyright © {year} by {dc.publisher}"}]}

    return {
        "shortStatements": [
            {
                "statement": f"© {dc.publisher} {year}, {dc.rights}",
                "mimetype": "text/plain",
                "lang": "en",
            }
        ]
    }


def write_metadata(metadata: Metadata, directory: Path) -> Path:
    """Serialize metadata to ``metadata.json`` in a directory.

    The file is UTF-8, indented by two spaces and ends with a newline.

    Returns:
        Path of the written file

    Raises:
        FileOperationError: If the file cannot be written
    """
    path = Path(directory) / METADATA_FILENAME
    data = json.dumps(metadata, indent=2, ensure_ascii=False) + "\n"

    try:
        path.write_text(data, encoding="utf-8")
    except OSError as e:
        raise FileOperationError("writing", path, e.strerror or e) from e

    return path
