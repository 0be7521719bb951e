"""Markdown document assembly for a single issue record."""
from __future__ import annotations

from typing import Iterable, List

from .html_markdown import html_to_markdown
from .models import IssueRecord

AUDIT_DESCRIPTION_FIELD = "Audit Description"


def _bullet(label: str, value: str) -> str:
    return f"- **{label}:** {value}"


def _title_section(issue: IssueRecord) -> List[str]:
    return [
        f"# {issue.key}: {issue.summary}",
        "",
        f"**Link:** [{issue.link}]({issue.link})",
        "",
    ]


def _overview_section(issue: IssueRecord) -> List[str]:
    lines = [
        "## Overview",
        "",
        _bullet("Type", issue.type),
        _bullet("Priority", issue.priority),
        _bullet("Status", issue.status),
        _bullet("Resolution", issue.resolution),
        _bullet("Assignee", issue.assignee),
        _bullet("Reporter", issue.reporter),
    ]
    if issue.labels:
        lines.append(_bullet("Labels", ", ".join(issue.labels)))
    lines.append("")
    return lines


def _dates_section(issue: IssueRecord, include_details: bool) -> List[str]:
    lines = [
        "## Dates",
        "",
        _bullet("Created", issue.created),
        _bullet("Updated", issue.updated),
    ]
    if include_details:
        for custom_field in issue.custom_fields:
            if custom_field.is_date_field and custom_field.first_value:
                lines.append(_bullet(custom_field.name, custom_field.first_value))
    lines.append("")
    return lines


def _details_section(issue: IssueRecord) -> List[str]:
    return ["## Details", "", html_to_markdown(issue.description), ""]


def _comments_section(issue: IssueRecord) -> List[str]:
    if not issue.comments:
        return []
    lines = ["## Comments", ""]
    for comment in issue.comments:
        lines.extend([f"### {comment.created}", "", html_to_markdown(comment.body), ""])
    return lines


def _custom_field_bullets(issue: IssueRecord) -> Iterable[str]:
    for custom_field in issue.custom_fields:
        # Date fields are listed under "Dates".
        if custom_field.is_date_field:
            continue
        values = custom_field.non_empty_values
        if not values:
            continue
        if len(custom_field.values) > 1:
            yield _bullet(custom_field.name, ", ".join(values))
        else:
            yield _bullet(custom_field.name, custom_field.values[0])


def _custom_fields_section(issue: IssueRecord, include_details: bool) -> List[str]:
    if not include_details or not issue.custom_fields:
        return []

    lines = ["## Custom Fields", ""]
    lines.extend(_custom_field_bullets(issue))

    # Listed raw above and converted again here.
    for custom_field in issue.custom_fields:
        if custom_field.name == AUDIT_DESCRIPTION_FIELD and custom_field.first_value:
            lines.extend(
                [
                    "",
                    f"## {AUDIT_DESCRIPTION_FIELD}",
                    "",
                    html_to_markdown(custom_field.first_value),
                ]
            )
    return lines


def render_markdown(issue: IssueRecord, include_details: bool) -> str:
    """Render ``issue`` as a Markdown document.

    Sections always appear in the same order: title, overview, dates,
    details, comments and custom fields. Comments are omitted when the issue
    has none; custom fields (and custom date fields) only appear when
    ``include_details`` is set.
    """

    lines: List[str] = []
    lines.extend(_title_section(issue))
    lines.extend(_overview_section(issue))
    lines.extend(_dates_section(issue, include_details))
    lines.extend(_details_section(issue))
    lines.extend(_comments_section(issue))
    lines.extend(_custom_fields_section(issue, include_details))
    return "\n".join(lines).rstrip("\n") + "\n"


__all__ = ["AUDIT_DESCRIPTION_FIELD", "render_markdown"]
