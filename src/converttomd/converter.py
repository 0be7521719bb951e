"""Per-file conversion pipeline: read, extract, render, write."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .config import ConverterConfig
from .errors import OutputExistsError, OutputWriteError
from .extract import load_issue
from .logging_config import get_logger
from .render import render_markdown

LOGGER = get_logger(__name__)


def derive_output_path(input_path: str | Path, include_details: bool) -> Path:
    """Return ``<input without extension>.details.md`` or ``.md``."""

    source = Path(input_path)
    # Everything from the last dot of the file name is the extension, so a
    # dot-file such as ".hidden" has an empty base name.
    name = source.name
    dot = name.rfind(".")
    base = name[:dot] if dot != -1 else name
    suffix = ".details.md" if include_details else ".md"
    return source.parent / f"{base}{suffix}"


def convert_file(input_path: str | Path, config: ConverterConfig) -> Path:
    """Convert one export and return the path of the Markdown written."""

    source = Path(input_path)
    LOGGER.info("Processing %s", source, extra={"source": str(source)})

    issue = load_issue(source)

    output_path = config.output or derive_output_path(source, config.include_details)
    if not config.force and output_path.exists():
        raise OutputExistsError(
            f"output file {output_path} already exists (use -f to overwrite)",
            context={"output": str(output_path)},
        )

    markdown = render_markdown(issue, config.include_details)

    try:
        output_path.write_text(markdown, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(
            f"failed to write output: {exc}", context={"output": str(output_path)}
        ) from exc

    LOGGER.info("Created %s", output_path, extra={"output": str(output_path), "issue": issue.key})
    return output_path


def convert_files(paths: Iterable[str | Path], config: ConverterConfig) -> List[Path]:
    """Convert ``paths`` in order, stopping at the first failure."""

    return [convert_file(path, config) for path in paths]


__all__ = ["convert_file", "convert_files", "derive_output_path"]
