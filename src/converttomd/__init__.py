"""Convert JIRA XML issue exports into Markdown documents."""
from __future__ import annotations

from .config import VERSION as __version__
from .config import ConverterConfig
from .converter import convert_file, convert_files, derive_output_path
from .extract import load_issue, parse_export
from .html_markdown import html_to_markdown
from .models import Comment, CustomField, IssueRecord
from .render import render_markdown

__all__ = [
    "Comment",
    "ConverterConfig",
    "CustomField",
    "IssueRecord",
    "__version__",
    "convert_file",
    "convert_files",
    "derive_output_path",
    "html_to_markdown",
    "load_issue",
    "parse_export",
    "render_markdown",
]
