"""Tests for the subject handlers.

Each test builds a small RC in a temporary directory, runs one handler
and checks the relocated files and the returned metadata.
"""

import threading
from pathlib import Path
from typing import Any, Callable

import pytest

from conftest import TWL_GEN, USFM_GEN_EN, USFM_GEN_HI, write_file
from rc2sb.errors import ConversionCancelled, ManifestError
from rc2sb.handlers import HandlerOptions
from rc2sb.rc import load_manifest
from rc2sb.registry import HandlerRegistry
from rc2sb.sb import Metadata, validate_metadata, verify_ingredients

LICENSE_KEY = "ingredients/LICENSE.md"


@pytest.fixture
def run(registry: HandlerRegistry, out_dir: Path) -> Callable[..., Metadata]:
    """Run the handler registered for an RC's subject and check consistency."""

    def _run(in_dir: Path, options: HandlerOptions | None = None) -> Metadata:
        manifest = load_manifest(in_dir)
        handler = registry.lookup(manifest.subject)
        metadata = handler.convert(manifest, in_dir, out_dir, options or HandlerOptions())
        validate_metadata(metadata)
        assert verify_ingredients(metadata, out_dir) == []
        return metadata

    return _run


def flavor_of(metadata: Metadata) -> tuple[str, str]:
    flavor_type = metadata["type"]["flavorType"]
    return flavor_type["name"], flavor_type["flavor"]["name"]


def obs_stories() -> dict[str, str]:
    return {f"content/{n:02d}.md": f"# Story {n}\n" for n in range(1, 4)}


# ============================================================================
# Open Bible Stories
# ============================================================================


class TestOBSHandler:
    """Test Open Bible Stories conversion."""

    def test_content_directory(self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path) -> None:
        """Test that content/ is copied to ingredients/content/."""
        files: dict[str, Any] = obs_stories()
        files["content/front/intro.md"] = "# Intro\n"
        files["media.yaml"] = "projects: []\n"
        in_dir = make_rc(
            "Open Bible Stories", "obs", projects=[{"identifier": "obs", "path": "./content"}], files=files
        )

        metadata = run(in_dir)

        assert flavor_of(metadata) == ("gloss", "textStories")
        assert metadata["identification"]["abbreviation"] == {"en": "OBS"}
        assert "BurritoTruck" in metadata["idAuthorities"]
        assert metadata["copyright"]["shortStatements"][0]["statement"] == "Copyright © 2024 by unfoldingWord"
        assert sorted(metadata["ingredients"]) == [
            LICENSE_KEY,
            "ingredients/content/01.md",
            "ingredients/content/02.md",
            "ingredients/content/03.md",
            "ingredients/content/front/intro.md",
        ]
        assert "currentScope" not in metadata["type"]["flavorType"]
        assert not (out_dir / "manifest.yaml").exists()
        assert not (out_dir / "media.yaml").exists()

    def test_root_level_content(self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path) -> None:
        """Test that path '.' copies stories from the RC root."""
        files = {
            "01.md": "# Story 1\n",
            "02.md": "# Story 2\n",
            "front/intro.md": "# Intro\n",
            "README.md": "# Readme\n",
            "LICENSE.md": "License\n",
            ".gitignore": "*.bak\n",
            ".gitea/config": "x\n",
            "media.yaml": "projects: []\n",
        }
        in_dir = make_rc("Open Bible Stories", "obs", projects=[{"identifier": "obs", "path": "."}], files=files)

        metadata = run(in_dir)

        assert sorted(metadata["ingredients"]) == [
            LICENSE_KEY,
            "ingredients/content/01.md",
            "ingredients/content/02.md",
            "ingredients/content/front/intro.md",
        ]
        assert (out_dir / "README.md").is_file()
        assert (out_dir / ".gitea" / "config").is_file()
        assert (out_dir / "LICENSE.md").read_text(encoding="utf-8") == "License\n"

    def test_without_license_or_readme(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path
    ) -> None:
        """Test that the default license is used and README is optional."""
        in_dir = make_rc(
            "Open Bible Stories", "obs", projects=[{"identifier": "obs", "path": "./content"}], files=obs_stories()
        )

        metadata = run(in_dir)

        assert LICENSE_KEY in metadata["ingredients"]
        assert (out_dir / "LICENSE.md").is_file()
        assert not (out_dir / "README.md").exists()

    def test_cancelled_before_start(self, make_rc: Callable[..., Path], registry: HandlerRegistry, out_dir: Path) -> None:
        """Test that a set cancel event stops the handler immediately."""
        in_dir = make_rc("Open Bible Stories", "obs", files=obs_stories())
        manifest = load_manifest(in_dir)
        event = threading.Event()
        event.set()

        with pytest.raises(ConversionCancelled):
            registry.lookup("Open Bible Stories").convert(manifest, in_dir, out_dir, HandlerOptions(), event)

        assert list(out_dir.iterdir()) == []


# ============================================================================
# Bible
# ============================================================================


class TestBibleHandler:
    """Test USFM Bible conversion."""

    def test_strips_numeric_prefix_and_records_scope(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path
    ) -> None:
        """Test '01-GEN.usfm' becomes 'GEN.usfm' with scope GEN."""
        in_dir = make_rc(
            "Aligned Bible",
            "ult",
            projects=[
                {"identifier": "gen", "path": "./01-GEN.usfm", "title": "Genesis"},
                {"identifier": "frt", "path": "./A0-FRT.usfm", "title": "Front Matter"},
            ],
            files={"01-GEN.usfm": USFM_GEN_EN, "A0-FRT.usfm": "\\id FRT\n"},
        )

        metadata = run(in_dir)

        assert flavor_of(metadata) == ("scripture", "textTranslation")
        assert metadata["type"]["flavorType"]["flavor"]["usfmVersion"] == "3.0"
        assert metadata["identification"]["abbreviation"] == {"en": "ULT"}
        assert metadata["ingredients"]["ingredients/GEN.usfm"]["scope"] == {"GEN": []}
        assert "scope" not in metadata["ingredients"]["ingredients/FRT.usfm"]
        assert metadata["type"]["flavorType"]["currentScope"] == {"GEN": []}
        assert list(metadata["localizedNames"]) == ["book-gen"]
        assert (out_dir / "ingredients" / "GEN.usfm").read_text(encoding="utf-8") == USFM_GEN_EN

    def test_localized_names_from_usfm(self, make_rc: Callable[..., Path], run: Callable[..., Metadata]) -> None:
        """Test that non-English toc markers populate a separate bucket."""
        in_dir = make_rc(
            "Bible",
            "irv",
            projects=[{"identifier": "gen", "path": "./01-GEN.usfm", "title": "उत्पत्ति"}],
            files={"01-GEN.usfm": USFM_GEN_HI},
            language="hi",
            language_title="हिन्दी",
        )

        metadata = run(in_dir)

        names = metadata["localizedNames"]["book-gen"]
        assert names["long"] == {"en": "The Book of Genesis", "hi": "उत्पत्ति की पुस्तक"}
        assert names["abbr"] == {"en": "Gen", "hi": "उत्प"}

    @pytest.mark.parametrize(
        "subject,identifier,abbr",
        [
            ("Bible", "udb", "UDB"),
            ("Hebrew Old Testament", "uhb", "UHB"),
            ("Greek New Testament", "ugnt", "UGNT"),
        ],
    )
    def test_abbreviation_from_identifier(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], subject: str, identifier: str, abbr: str
    ) -> None:
        """Test every Bible subject uppercases the identifier."""
        in_dir = make_rc(
            subject,
            identifier,
            projects=[{"identifier": "gen", "path": "./01-GEN.usfm"}],
            files={"01-GEN.usfm": USFM_GEN_EN},
        )

        metadata = run(in_dir)

        assert metadata["identification"]["abbreviation"] == {"en": abbr}

    def test_missing_project_file_skipped(self, make_rc: Callable[..., Path], run: Callable[..., Metadata]) -> None:
        """Test that a missing book is skipped, not fatal."""
        in_dir = make_rc(
            "Aligned Bible",
            "ult",
            projects=[
                {"identifier": "gen", "path": "./01-GEN.usfm"},
                {"identifier": "exo", "path": "./02-EXO.usfm"},
            ],
            files={"01-GEN.usfm": USFM_GEN_EN},
        )

        metadata = run(in_dir)

        assert "ingredients/EXO.usfm" not in metadata["ingredients"]
        assert metadata["type"]["flavorType"]["currentScope"] == {"GEN": []}


# ============================================================================
# Book TSV (TN, TQ, TWL)
# ============================================================================


class TestTSVBookHandlers:
    """Test Translation Notes, Questions and Words Links conversion."""

    @pytest.mark.parametrize(
        "subject,identifier,prefix,flavor,abbr",
        [
            ("TSV Translation Notes", "tn", "tn_", "x-bcvnotes", "TN"),
            ("TSV Translation Questions", "tq", "tq_", "x-bcvquestions", "TQ"),
            ("TSV Translation Words Links", "twl", "twl_", "x-bcvarticles", "TW"),
        ],
    )
    def test_strips_prefix(
        self,
        make_rc: Callable[..., Path],
        run: Callable[..., Metadata],
        subject: str,
        identifier: str,
        prefix: str,
        flavor: str,
        abbr: str,
    ) -> None:
        """Test prefix removal, scope and flavor."""
        in_dir = make_rc(
            subject,
            identifier,
            projects=[{"identifier": "gen", "path": f"./{prefix}GEN.tsv"}],
            files={f"{prefix}GEN.tsv": "Reference\tID\n1:1\tabcd\n"},
        )

        metadata = run(in_dir)

        assert flavor_of(metadata) == ("parascriptural", flavor)
        assert metadata["identification"]["abbreviation"] == {"en": abbr}
        assert metadata["ingredients"]["ingredients/GEN.tsv"]["scope"] == {"GEN": []}
        assert metadata["type"]["flavorType"]["currentScope"] == {"GEN": []}
        assert metadata["copyright"]["shortStatements"][0]["lang"] == "en"

    def test_localized_names_from_project_title(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata]
    ) -> None:
        """Test that a non-English project title becomes the local name."""
        in_dir = make_rc(
            "TSV Translation Notes",
            "tn",
            projects=[{"identifier": "gen", "path": "./tn_GEN.tsv", "title": "उत्पत्ति"}],
            files={"tn_GEN.tsv": "Reference\tID\n"},
            language="hi",
        )

        metadata = run(in_dir)

        names = metadata["localizedNames"]["book-gen"]
        assert names["long"] == {"en": "The Book of Genesis", "hi": "उत्पत्ति"}
        assert names["short"] == {"en": "Genesis", "hi": "उत्पत्ति"}
        assert names["abbr"] == {"en": "Gen"}

    def test_localized_names_from_usfm_path(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], tmp_path: Path
    ) -> None:
        """Test that an external USFM directory supplies the names."""
        usfm_dir = tmp_path / "hi_irv"
        write_file(usfm_dir / "01-GEN.usfm", USFM_GEN_HI)
        in_dir = make_rc(
            "TSV Translation Questions",
            "tq",
            projects=[{"identifier": "gen", "path": "./tq_GEN.tsv", "title": "शीर्षक"}],
            files={"tq_GEN.tsv": "Reference\tID\n"},
            language="hi",
        )

        metadata = run(in_dir, HandlerOptions(usfm_path=usfm_dir))

        names = metadata["localizedNames"]["book-gen"]
        assert names["long"]["hi"] == "उत्पत्ति की पुस्तक"
        assert names["abbr"]["hi"] == "उत्प"

    def test_missing_project_file_skipped(self, make_rc: Callable[..., Path], run: Callable[..., Metadata]) -> None:
        """Test that a missing TSV is skipped."""
        in_dir = make_rc(
            "TSV Translation Notes",
            "tn",
            projects=[
                {"identifier": "gen", "path": "./tn_GEN.tsv"},
                {"identifier": "exo", "path": "./tn_EXO.tsv"},
            ],
            files={"tn_GEN.tsv": "Reference\tID\n"},
        )

        metadata = run(in_dir)

        assert sorted(metadata["ingredients"]) == ["ingredients/GEN.tsv", LICENSE_KEY]

    def test_root_files_not_ingredients(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path
    ) -> None:
        """Test that README.md and .gitignore are copied but not listed."""
        in_dir = make_rc(
            "TSV Translation Notes",
            "tn",
            projects=[{"identifier": "gen", "path": "./tn_GEN.tsv"}],
            files={"tn_GEN.tsv": "Reference\tID\n", "README.md": "# TN\n", ".gitignore": "x\n"},
        )

        metadata = run(in_dir)

        assert (out_dir / "README.md").is_file()
        assert (out_dir / ".gitignore").is_file()
        assert "README.md" not in metadata["ingredients"]
        assert ".gitignore" not in metadata["ingredients"]


class TestTWLHandler:
    """Test TWL payload handling inside a conversion."""

    def twl_rc(self, make_rc: Callable[..., Path], extra: dict[str, str] | None = None) -> Path:
        files = {"twl_GEN.tsv": TWL_GEN}
        files.update(extra or {})
        return make_rc(
            "TSV Translation Words Links",
            "twl",
            projects=[{"identifier": "gen", "path": "./twl_GEN.tsv"}],
            files=files,
        )

    def test_auto_detects_payload(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path
    ) -> None:
        """Test that en_tw/ inside the RC is bundled and links rewritten."""
        in_dir = self.twl_rc(
            make_rc,
            {
                "en_tw/bible/kt/god.md": "# God\n",
                "en_tw/bible/kt/holyspirit.md": "# Holy Spirit\n",
                "en_tw/bible/other/light.md": "# Light\n",
            },
        )

        metadata = run(in_dir)

        assert "ingredients/payload/kt/god.md" in metadata["ingredients"]
        assert "ingredients/payload/other/light.md" in metadata["ingredients"]
        text = (out_dir / "ingredients" / "GEN.tsv").read_text(encoding="utf-8")
        assert text.count("\t./payload/") == 3

    def test_explicit_payload_path(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], tmp_path: Path, out_dir: Path
    ) -> None:
        """Test that an explicit TW checkout is used."""
        tw_dir = tmp_path / "en_tw_checkout"
        write_file(tw_dir / "bible" / "kt" / "god.md", "# God\n")
        in_dir = self.twl_rc(make_rc)

        metadata = run(in_dir, HandlerOptions(payload_path=tw_dir))

        assert "ingredients/payload/kt/god.md" in metadata["ingredients"]
        assert "./payload/kt/god.md" in (out_dir / "ingredients" / "GEN.tsv").read_text(encoding="utf-8")

    def test_no_payload_copies_as_is(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path
    ) -> None:
        """Test byte-identical copies when no payload exists."""
        in_dir = self.twl_rc(make_rc)

        metadata = run(in_dir)

        assert (out_dir / "ingredients" / "GEN.tsv").read_bytes() == (in_dir / "twl_GEN.tsv").read_bytes()
        assert not any(key.startswith("ingredients/payload/") for key in metadata["ingredients"])


# ============================================================================
# Translation Words and Translation Academy
# ============================================================================


class TestTWHandler:
    """Test Translation Words conversion."""

    def test_copies_bible_tree(self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path) -> None:
        """Test that bible/ content lands directly under ingredients/."""
        in_dir = make_rc(
            "Translation Words",
            "tw",
            projects=[{"identifier": "bible", "path": "./bible"}],
            files={
                "bible/config.yaml": "kt: {}\n",
                "bible/kt/god.md": "# God\n",
                "bible/names/peter.md": "# Peter\n",
                "bible/other/light.md": "# Light\n",
                "README.md": "# TW\n",
            },
        )

        metadata = run(in_dir)

        assert flavor_of(metadata) == ("peripheral", "x-peripheralArticles")
        assert metadata["identification"]["abbreviation"] == {"en": "TW"}
        assert sorted(metadata["ingredients"]) == [
            LICENSE_KEY,
            "ingredients/config.yaml",
            "ingredients/kt/god.md",
            "ingredients/names/peter.md",
            "ingredients/other/light.md",
        ]
        assert metadata["localizedNames"] == {}
        assert (out_dir / "README.md").is_file()


class TestTAHandler:
    """Test Translation Academy conversion."""

    def test_copies_project_directories(
        self, make_rc: Callable[..., Path], run: Callable[..., Metadata], out_dir: Path
    ) -> None:
        """Test each project directory is copied and missing ones skipped."""
        in_dir = make_rc(
            "Translation Academy",
            "ta",
            projects=[
                {"identifier": "intro", "path": "./intro"},
                {"identifier": "translate", "path": "./translate"},
                {"identifier": "checking", "path": "./checking"},
            ],
            files={
                "intro/ta-intro/01.md": "# Intro\n",
                "intro/toc.yaml": "title: Intro\n",
                "translate/figs-metaphor/01.md": "# Metaphor\n",
                "media.yaml": "projects: []\n",
            },
        )

        metadata = run(in_dir)

        assert metadata["identification"]["abbreviation"] == {"en": "TA"}
        assert sorted(metadata["ingredients"]) == [
            LICENSE_KEY,
            "ingredients/intro/ta-intro/01.md",
            "ingredients/intro/toc.yaml",
            "ingredients/translate/figs-metaphor/01.md",
        ]
        assert not (out_dir / "manifest.yaml").exists()
        assert not (out_dir / "media.yaml").exists()


# ============================================================================
# OBS TSV
# ============================================================================


class TestOBSTSVHandlers:
    """Test the four OBS TSV variants."""

    @pytest.mark.parametrize(
        "subject,prefix,flavor,abbr",
        [
            ("TSV OBS Study Notes", "sn_", "x-obsnotes", "OBSSN"),
            ("TSV OBS Study Questions", "sq_", "x-obsquestions", "OBSSQ"),
            ("TSV OBS Translation Notes", "tn_", "x-obsnotes", "OBSTN"),
            ("TSV OBS Translation Questions", "tq_", "x-obsquestions", "OBSTQ"),
        ],
    )
    def test_variants(
        self,
        make_rc: Callable[..., Path],
        run: Callable[..., Metadata],
        out_dir: Path,
        subject: str,
        prefix: str,
        flavor: str,
        abbr: str,
    ) -> None:
        """Test flavor, abbreviation, prefix removal and fixed names."""
        in_dir = make_rc(
            subject,
            f"obs-{prefix.rstrip('_')}",
            projects=[{"identifier": "obs", "path": f"./{prefix}OBS.tsv"}],
            files={f"{prefix}OBS.tsv": "Reference\tID\tNote\n1:1\tabcd\tnote\n"},
        )

        metadata = run(in_dir)

        assert flavor_of(metadata) == ("peripheral", flavor)
        assert metadata["identification"]["abbreviation"] == {"en": abbr}
        assert "BurritoTruck" in metadata["idAuthorities"]
        assert sorted(metadata["ingredients"]) == [LICENSE_KEY, "ingredients/OBS.tsv"]
        assert metadata["localizedNames"] == {
            "book-obs": {"abbr": {"en": "OBS"}, "short": {"en": "OBS"}, "long": {"en": "OBS"}}
        }
        assert (out_dir / "LICENSE.md").is_file()

    def test_requires_a_project(self, make_rc: Callable[..., Path], registry: HandlerRegistry, out_dir: Path) -> None:
        """Test that a manifest without projects is an error."""
        in_dir = make_rc("TSV OBS Study Notes", "obs-sn")
        manifest = load_manifest(in_dir)

        with pytest.raises(ManifestError, match="no projects"):
            registry.lookup("TSV OBS Study Notes").convert(manifest, in_dir, out_dir, HandlerOptions())


# ============================================================================
# Cancellation
# ============================================================================


class CancelAfter(threading.Event):
    """Event that reports itself set after a number of checks."""

    def __init__(self, checks: int):
        super().__init__()
        self.remaining = checks

    def is_set(self) -> bool:
        self.remaining -= 1
        return self.remaining < 0


class TestCancellation:
    """Test that handlers stop between projects."""

    def test_cancelled_between_books(
        self, make_rc: Callable[..., Path], registry: HandlerRegistry, out_dir: Path
    ) -> None:
        """Test that the second book is never copied."""
        in_dir = make_rc(
            "TSV Translation Notes",
            "tn",
            projects=[
                {"identifier": "gen", "path": "./tn_GEN.tsv"},
                {"identifier": "exo", "path": "./tn_EXO.tsv"},
            ],
            files={"tn_GEN.tsv": "Reference\tID\n", "tn_EXO.tsv": "Reference\tID\n"},
        )
        manifest = load_manifest(in_dir)

        # start, first book, then cancelled before the second book
        with pytest.raises(ConversionCancelled):
            registry.lookup("TSV Translation Notes").convert(
                manifest, in_dir, out_dir, HandlerOptions(), CancelAfter(2)
            )

        assert (out_dir / "ingredients" / "GEN.tsv").is_file()
        assert not (out_dir / "ingredients" / "EXO.tsv").exists()
        assert not (out_dir / "LICENSE.md").exists()
