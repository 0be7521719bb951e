"""Read JIRA RSS exports (``<rss><channel><item>``) into issue records."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import EmptyExportError, ExportFormatError, ExportParseError, InputReadError
from .logging_config import get_logger
from .models import Comment, CustomField, IssueRecord

LOGGER = get_logger(__name__)


def local_name(tag: str) -> str:
    if "}" in tag:
        tag = tag.split("}", 1)[1]
    if ":" in tag:
        tag = tag.split(":", 1)[1]
    return tag


def _children(parent: Optional[ET.Element], name: str) -> Iterator[ET.Element]:
    if parent is None:
        return
    for child in parent:
        if local_name(child.tag) == name:
            yield child


def _find_child(parent: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    return next(_children(parent, name), None)


def chardata(element: Optional[ET.Element]) -> str:
    """Return the element's own character data, unstripped.

    Text belonging to nested elements is skipped; the text that follows each
    of them inside ``element`` is kept.
    """

    if element is None:
        return ""
    parts = [element.text or ""]
    for child in element:
        parts.append(child.tail or "")
    return "".join(parts)


def _child_text(parent: ET.Element, name: str) -> str:
    return chardata(_find_child(parent, name))


def _extract_comments(item: ET.Element) -> List[Comment]:
    comments = []
    for comment in _children(_find_child(item, "comments"), "comment"):
        comments.append(
            Comment(
                created=comment.get("created", ""),
                body=chardata(comment),
                author=comment.get("author", ""),
                id=comment.get("id", ""),
            )
        )
    return comments


def _extract_custom_fields(item: ET.Element) -> List[CustomField]:
    fields = []
    for custom_field in _children(_find_child(item, "customfields"), "customfield"):
        values_element = _find_child(custom_field, "customfieldvalues")
        values = tuple(chardata(value) for value in _children(values_element, "customfieldvalue"))
        fields.append(
            CustomField(
                name=_child_text(custom_field, "customfieldname"),
                values=values,
                id=custom_field.get("id", ""),
                key=custom_field.get("key", ""),
            )
        )
    return fields


def item_to_record(item: ET.Element) -> IssueRecord:
    """Map one ``<item>`` element onto an :class:`IssueRecord`."""

    labels = tuple(chardata(label) for label in _children(_find_child(item, "labels"), "label"))
    return IssueRecord(
        key=_child_text(item, "key"),
        summary=_child_text(item, "summary"),
        link=_child_text(item, "link"),
        type=_child_text(item, "type"),
        priority=_child_text(item, "priority"),
        status=_child_text(item, "status"),
        resolution=_child_text(item, "resolution"),
        assignee=_child_text(item, "assignee"),
        reporter=_child_text(item, "reporter"),
        labels=labels,
        description=_child_text(item, "description"),
        created=_child_text(item, "created"),
        updated=_child_text(item, "updated"),
        due=_child_text(item, "due"),
        comments=tuple(_extract_comments(item)),
        custom_fields=tuple(_extract_custom_fields(item)),
    )


def parse_export(data: bytes | str, *, source: str = "<memory>") -> IssueRecord:
    """Parse an export document and return its first issue.

    Raises
    ------
    ExportParseError
        If ``data`` is not well-formed XML.
    ExportFormatError
        If the root element is not ``rss``.
    EmptyExportError
        If the channel holds no ``item`` elements.
    """

    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ExportParseError(
            f"failed to parse XML: {exc}", context={"source": source}
        ) from exc

    if local_name(root.tag) != "rss":
        raise ExportFormatError(
            f"failed to parse XML: expected element type <rss> but have <{local_name(root.tag)}>",
            context={"source": source},
        )

    items = list(_children(_find_child(root, "channel"), "item"))
    if not items:
        raise EmptyExportError("no items found in XML", context={"source": source})
    if len(items) > 1:
        LOGGER.debug(
            "Export holds several items; only the first is converted",
            extra={"source": source, "items": len(items)},
        )
    return item_to_record(items[0])


def load_issue(path: str | Path) -> IssueRecord:
    """Read ``path`` and return the first issue it contains."""

    export_path = Path(path)
    try:
        data = export_path.read_bytes()
    except OSError as exc:
        raise InputReadError(
            f"failed to read file: {exc}", context={"source": str(export_path)}
        ) from exc
    return parse_export(data, source=str(export_path))


__all__ = ["chardata", "item_to_record", "load_issue", "local_name", "parse_export"]
