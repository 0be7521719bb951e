"""In-memory representation of a single JIRA issue export."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Comment:
    created: str
    body: str
    author: str = ""
    id: str = ""


@dataclass(frozen=True)
class CustomField:
    name: str
    values: Tuple[str, ...] = ()
    id: str = ""
    key: str = ""

    @property
    def first_value(self) -> str:
        return self.values[0] if self.values else ""

    @property
    def non_empty_values(self) -> Tuple[str, ...]:
        return tuple(value for value in self.values if value != "")

    @property
    def is_date_field(self) -> bool:
        """Custom fields whose name mentions a date are rendered with the dates."""

        return "date" in self.name.lower()


@dataclass(frozen=True)
class IssueRecord:
    key: str = ""
    summary: str = ""
    link: str = ""
    type: str = ""
    priority: str = ""
    status: str = ""
    resolution: str = ""
    assignee: str = ""
    reporter: str = ""
    labels: Tuple[str, ...] = ()
    description: str = ""
    created: str = ""
    updated: str = ""
    due: str = ""
    comments: Tuple[Comment, ...] = ()
    custom_fields: Tuple[CustomField, ...] = ()


__all__ = ["Comment", "CustomField", "IssueRecord"]
