"""Convert the HTML fragments found in JIRA exports into Markdown.

JIRA's XML export embeds descriptions, comment bodies and some custom field
values as HTML. Only the small vocabulary the export actually emits is
understood (paragraphs, line breaks, bold, bullet lists, anchors and images);
anything else is passed through verbatim. Conversion never fails: when a link
or image cannot be located in full, scanning stops and the rest of the
fragment is returned as it is.
"""
from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

_ENTITIES = {
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&amp;": "&",
    "&#8217;": "'",
}
_ENTITY_PATTERN = re.compile("|".join(re.escape(entity) for entity in _ENTITIES))

_TAG_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("<p>", ""),
    ("</p>", "\n\n"),
    ("<br/>", "\n"),
    ("<br />", "\n"),
    ("<b>", "**"),
    ("</b>", "**"),
    ("<ul>", ""),
    ("</ul>", ""),
    ("<li>", "- "),
    ("</li>", "\n"),
)

_ANCHOR_OPEN = '<a href="'
_ANCHOR_CLOSE = "</a>"
_IMAGE_OPEN = '<img src="'
_IMAGE_WRAP_OPEN = '<span class="image-wrap"'
_SPAN_CLOSE = "</span>"

# (start, end, replacement) of the next match in a fragment.
_Match = Tuple[int, int, str]


def decode_entities(text: str) -> str:
    """Decode the fixed entity set in a single pass.

    Text produced by decoding ``&amp;`` is not decoded again, so ``&amp;lt;``
    becomes ``&lt;``. Entities outside the set are left untouched.
    """

    return _ENTITY_PATTERN.sub(lambda match: _ENTITIES[match.group(0)], text)


def replace_tags(text: str) -> str:
    """Rewrite block and inline tags literally, without tracking nesting."""

    for tag, replacement in _TAG_REPLACEMENTS:
        text = text.replace(tag, replacement)
    return text


def _rewrite_all(text: str, find_next: Callable[[str], Optional[_Match]]) -> str:
    # Each replacement removes the token that anchored its match, so the
    # loop always terminates.
    while True:
        match = find_next(text)
        if match is None:
            return text
        start, end, replacement = match
        text = text[:start] + replacement + text[end:]


def _next_anchor(text: str) -> Optional[_Match]:
    start = text.find(_ANCHOR_OPEN)
    if start == -1:
        return None

    url_start = start + len(_ANCHOR_OPEN)
    url_end = text.find('"', url_start)
    if url_end == -1:
        return None

    label_start = text.find(">", url_end)
    if label_start == -1:
        return None
    label_start += 1

    label_end = text.find(_ANCHOR_CLOSE, label_start)
    if label_end == -1:
        return None

    url = text[url_start:url_end]
    label = text[label_start:label_end]
    return start, label_end + len(_ANCHOR_CLOSE), f"[{label}]({url})"


def convert_links(text: str) -> str:
    """Rewrite every ``<a href="URL">TEXT</a>`` as ``[TEXT](URL)``."""

    return _rewrite_all(text, _next_anchor)


def _image_wrap_start(text: str, image_start: int) -> Optional[int]:
    """Return where the ``image-wrap`` span enclosing the image opens, if any."""

    wrap_start = text.rfind(_IMAGE_WRAP_OPEN, 0, image_start)
    if wrap_start == -1:
        return None
    # A span closed before the image does not enclose it.
    if text.find(_SPAN_CLOSE, wrap_start, image_start) != -1:
        return None
    return wrap_start


def _next_image(text: str) -> Optional[_Match]:
    image_start = text.find(_IMAGE_OPEN)
    if image_start == -1:
        return None

    url_start = image_start + len(_IMAGE_OPEN)
    url_end = text.find('"', url_start)
    if url_end == -1:
        return None

    # The tag ends at the next "/>"; only without one does the next ">" end it.
    self_closing = text.find("/>", url_end)
    if self_closing != -1:
        end = self_closing + len("/>")
    else:
        tag_end = text.find(">", url_end)
        if tag_end == -1:
            return None
        end = tag_end + 1

    start = image_start
    wrap_start = _image_wrap_start(text, image_start)
    if wrap_start is not None:
        start = wrap_start
        if text[end:].lstrip().startswith(_SPAN_CLOSE):
            end = text.find(_SPAN_CLOSE, end) + len(_SPAN_CLOSE)

    url = text[url_start:url_end]
    return start, end, f"![Image]({url})"


def convert_images(text: str) -> str:
    """Rewrite every ``<img src="URL" ...>`` as ``![Image](URL)``.

    An image wrapped in ``<span class="image-wrap" ...>`` is replaced together
    with its wrapper.
    """

    return _rewrite_all(text, _next_image)


def html_to_markdown(fragment: str | None) -> str:
    """Convert one HTML fragment to Markdown; never raises."""

    if not fragment:
        return ""
    text = decode_entities(fragment)
    text = replace_tags(text)
    text = convert_links(text)
    text = convert_images(text)
    return text.strip()


__all__ = [
    "convert_images",
    "convert_links",
    "decode_entities",
    "html_to_markdown",
    "replace_tags",
]
