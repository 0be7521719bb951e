"""CLI parsing and dispatch tests for converttomd."""
from __future__ import annotations

from pathlib import Path

import pytest

from converttomd import cli


def test_parser_collects_files_and_flags() -> None:
    args = cli.build_parser().parse_args(["-o", "out.md", "-d", "off", "-v", "-f", "one.xml", "two.xml"])

    assert args.files == ["one.xml", "two.xml"]
    assert args.output == "out.md"
    assert args.details == "off"
    assert args.verbose is True
    assert args.force is True


def test_parser_leaves_unset_flags_as_none() -> None:
    """Unset flags stay ``None`` so environment and YAML values can apply."""

    args = cli.build_parser().parse_args(["one.xml"])

    assert args.verbose is None
    assert args.force is None
    assert args.details is None
    assert args.output is None


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "converttomd-jira version 1.0.0"


def test_no_input_files_is_an_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([]) == 1

    err = capsys.readouterr().err
    assert "Error: no input files specified" in err
    assert "usage:" in err
    assert "--details" in err
    assert "Examples:" in err


def test_main_converts_file(sample_export: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(sample_export.parent)

    assert cli.main(["--details", "off", str(sample_export)]) == 0

    output = sample_export.with_name("AI-538.md")
    assert output.read_text(encoding="utf-8").startswith("# AI-538: Export audit trail to Markdown")


def test_main_verbose_logs_progress(
    sample_export: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(sample_export.parent)

    assert cli.main(["-v", str(sample_export)]) == 0

    out = capsys.readouterr().out
    assert "Processing" in out
    assert "Created" in out
    assert "AI-538.details.md" in out


def test_main_fails_fast(
    sample_export: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    broken = tmp_path / "broken.xml"
    broken.write_text("<rss><channel>", encoding="utf-8")
    later = tmp_path / "later.xml"
    later.write_bytes(sample_export.read_bytes())

    assert cli.main([str(broken), str(later)]) == 1

    err = capsys.readouterr().err
    assert f"Error processing {broken}: failed to parse XML" in err
    assert not later.with_name("later.details.md").exists()


def test_main_refuses_to_overwrite(
    sample_export: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(sample_export.parent)
    sample_export.with_name("AI-538.details.md").write_text("existing", encoding="utf-8")

    assert cli.main([str(sample_export)]) == 1
    assert "use -f to overwrite" in capsys.readouterr().err

    assert cli.main(["--force", str(sample_export)]) == 0


def test_main_reads_dotenv(sample_export: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(sample_export.parent)
    (sample_export.parent / ".env").write_text("CONVERTTOMD_DETAILS=off\n", encoding="utf-8")
    # Recorded so the value loaded from .env is removed again at teardown.
    monkeypatch.setenv("CONVERTTOMD_DETAILS", "on")
    monkeypatch.delenv("CONVERTTOMD_DETAILS")

    assert cli.main([str(sample_export)]) == 0

    assert sample_export.with_name("AI-538.md").exists()
