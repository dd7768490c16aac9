"""Shared fixtures for building throwaway Resource Containers."""

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from rc2sb.registry import HandlerRegistry


def write_manifest(
    in_dir: Path,
    subject: str,
    identifier: str,
    projects: list[dict[str, Any]] | None = None,
    language: str = "en",
    language_title: str = "English",
    title: str = "Test Resource",
    issued: str = "2024-03-01",
) -> Path:
    """Write a minimal manifest.yaml into an RC directory."""
    data = {
        "dublin_core": {
            "conformsto": "rc0.2",
            "identifier": identifier,
            "issued": issued,
            "language": {"identifier": language, "title": language_title, "direction": "ltr"},
            "publisher": "unfoldingWord",
            "rights": "CC BY-SA 4.0",
            "subject": subject,
            "title": title,
            "type": "book",
            "version": "1",
        },
        "checking": {"checking_entity": ["unfoldingWord"], "checking_level": "3"},
        "projects": projects or [],
    }
    in_dir.mkdir(parents=True, exist_ok=True)
    path = in_dir / "manifest.yaml"
    path.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")
    return path


def write_file(path: Path, content: str | bytes) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


USFM_GEN_HI = """\\id GEN Hindi IRV
\\usfm 3.0
\\ide UTF-8
\\h उत्पत्ति
\\toc1 उत्पत्ति की पुस्तक
\\toc2 उत्पत्ति
\\toc3 उत्प
\\mt उत्पत्ति
\\c 1
\\p
\\v 1 आदि में परमेश्वर ने आकाश और पृथ्वी की सृष्टि की।
"""

USFM_GEN_EN = """\\id GEN EN_ULT
\\usfm 3.0
\\h Genesis
\\toc1 The Book of Genesis
\\toc2 Genesis
\\toc3 Gen
\\mt1 Genesis
\\c 1
\\p
\\v 1 In the beginning, God created the heavens and the earth.
"""

TWL_GEN = (
    "Reference\tID\tTags\tOrigWords\tOccurrence\tTWLink\n"
    "1:1\tabcd\tkeyterm\tאֱלֹהִ֑ים\t1\trc://*/tw/dict/bible/kt/god\n"
    "1:2\tefgh\t\tר֣וּחַ\t1\trc://*/tw/dict/bible/kt/holyspirit\n"
    "1:3\tijkl\tname\tאֹ֑ור\t1\trc://*/tw/dict/bible/other/light\n"
)


@pytest.fixture(scope="session")
def registry() -> HandlerRegistry:
    """Registry holding every built-in handler."""
    return HandlerRegistry.default()


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Empty output directory for a burrito."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def make_rc(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating an RC directory with a manifest and files.

    Call as ``make_rc(subject, identifier, projects=..., files={...})``;
    ``files`` maps RC-relative paths to contents.
    """

    def _make(
        subject: str,
        identifier: str,
        projects: list[dict[str, Any]] | None = None,
        files: dict[str, str | bytes] | None = None,
        name: str = "rc",
        **manifest_fields: Any,
    ) -> Path:
        in_dir = tmp_path / name
        write_manifest(in_dir, subject, identifier, projects, **manifest_fields)
        for relative, content in (files or {}).items():
            write_file(in_dir / relative, content)
        return in_dir

    return _make
