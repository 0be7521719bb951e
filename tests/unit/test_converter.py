from __future__ import annotations

from pathlib import Path

import pytest

from converttomd.config import ConverterConfig
from converttomd.converter import convert_file, convert_files, derive_output_path
from converttomd.errors import EmptyExportError, OutputExistsError


@pytest.mark.parametrize(
    ("source", "include_details", "expected"),
    [
        ("AI-538.xml", True, "AI-538.details.md"),
        ("AI-538.xml", False, "AI-538.md"),
        ("exports/AI-538.xml", False, "exports/AI-538.md"),
        ("archive.v2.xml", True, "archive.v2.details.md"),
        ("noext", False, "noext.md"),
        (".hidden", False, ".md"),
        ("exports/.hidden", True, "exports/.details.md"),
    ],
)
def test_derive_output_path(source: str, include_details: bool, expected: str) -> None:
    assert derive_output_path(source, include_details) == Path(expected)


def test_convert_file_writes_details_markdown(sample_export: Path) -> None:
    output = convert_file(sample_export, ConverterConfig())

    assert output == sample_export.with_name("AI-538.details.md")
    text = output.read_text(encoding="utf-8")
    assert text.startswith("# AI-538: Export audit trail to Markdown\n\n")
    assert "- **Labels:** audit, export" in text
    assert "- **Target Date:** 2024-02-01" in text
    assert "- **Components Affected:** Backend, Reports" in text
    assert "### Tue, 9 Jan 2024 09:30:00 +0000\n\nYes, it's attached.\nThanks" in text
    assert 'Can we keep the "raw" log too?' in text
    assert "![Image](https://jira.example.com/secure/attachment/1/trail.png)" in text
    assert text.endswith("## Audit Description\n\n**note**\n")


def test_convert_file_without_details(sample_export: Path) -> None:
    output = convert_file(sample_export, ConverterConfig(include_details=False))

    assert output.name == "AI-538.md"
    text = output.read_text(encoding="utf-8")
    assert "## Custom Fields" not in text
    assert "Target Date" not in text


def test_convert_file_honours_explicit_output(sample_export: Path, tmp_path: Path) -> None:
    target = tmp_path / "custom.md"

    output = convert_file(sample_export, ConverterConfig(output=target))

    assert output == target
    assert target.exists()
    assert not sample_export.with_name("AI-538.details.md").exists()


def test_existing_output_requires_force(sample_export: Path) -> None:
    existing = sample_export.with_name("AI-538.details.md")
    existing.write_text("keep me", encoding="utf-8")

    with pytest.raises(OutputExistsError) as excinfo:
        convert_file(sample_export, ConverterConfig())

    assert "already exists (use -f to overwrite)" in str(excinfo.value)
    assert existing.read_text(encoding="utf-8") == "keep me"

    convert_file(sample_export, ConverterConfig(force=True))
    assert existing.read_text(encoding="utf-8").startswith("# AI-538")


def test_convert_files_stops_at_first_failure(sample_export: Path, tmp_path: Path) -> None:
    empty = tmp_path / "empty.xml"
    empty.write_text("<rss><channel></channel></rss>", encoding="utf-8")
    later = tmp_path / "later.xml"
    later.write_bytes(sample_export.read_bytes())

    with pytest.raises(EmptyExportError):
        convert_files([sample_export, empty, later], ConverterConfig())

    assert sample_export.with_name("AI-538.details.md").exists()
    assert not later.with_name("later.details.md").exists()
