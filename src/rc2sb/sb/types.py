"""Type definitions for Scripture Burrito metadata.

This module defines TypedDict classes that mirror the JSON structure
of an SB ``metadata.json`` file, as described by
data/metadata.schema.json. Keys use the schema's camelCase names so
a record can be serialized with ``json.dump`` unchanged.
"""

from typing import TypedDict

# Book code -> empty marker list, e.g. {"GEN": []}
Scope = dict[str, list[str]]


class Checksum(TypedDict):
    """Checksums for one ingredient file."""

    md5: str


class _IngredientBase(TypedDict):
    checksum: Checksum
    mimeType: str
    size: int


class Ingredient(_IngredientBase, total=False):
    """One relocated file. ``scope`` is present only when non-empty."""

    scope: Scope


class Generator(TypedDict):
    softwareName: str
    softwareVersion: str
    userName: str


class Meta(TypedDict):
    version: str
    category: str
    generator: Generator
    defaultLocale: str
    dateCreated: str
    normalization: str


class IdAuthority(TypedDict):
    id: str
    name: dict[str, str]


class PrimaryEntry(TypedDict):
    revision: str
    timestamp: str


class Identification(TypedDict):
    """Identification block.

    ``primary`` maps authority key -> abbreviation -> revision entry.
    The other fields map language tag -> text.
    """

    primary: dict[str, dict[str, PrimaryEntry]]
    name: dict[str, str]
    description: dict[str, str]
    abbreviation: dict[str, str]


class LanguageEntry(TypedDict):
    tag: str
    name: dict[str, str]
    scriptDirection: str


class _FlavorBase(TypedDict):
    name: str


class Flavor(_FlavorBase, total=False):
    """Flavor details. Only scripture flavors carry the USFM fields."""

    usfmVersion: str
    translationType: str
    audience: str
    projectType: str


class _FlavorTypeBase(TypedDict):
    name: str
    flavor: Flavor


class FlavorType(_FlavorTypeBase, total=False):
    currentScope: Scope


class TypeSection(TypedDict):
    flavorType: FlavorType


class LocalizedName(TypedDict):
    """Book names keyed by language tag."""

    abbr: dict[str, str]
    short: dict[str, str]
    long: dict[str, str]


class _CopyrightStatementBase(TypedDict):
    statement: str


class CopyrightStatement(_CopyrightStatementBase, total=False):
    mimetype: str
    lang: str


class Copyright(TypedDict):
    shortStatements: list[CopyrightStatement]


class _MetadataBase(TypedDict):
    format: str
    meta: Meta
    idAuthorities: dict[str, IdAuthority]
    identification: Identification
    languages: list[LanguageEntry]
    type: TypeSection
    confidential: bool
    ingredients: dict[str, Ingredient]
    copyright: Copyright


class Metadata(_MetadataBase, total=False):
    """Complete SB metadata record."""

    localizedNames: dict[str, LocalizedName]
