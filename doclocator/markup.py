"""HTML helpers shared by the resolver and the display selector."""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterator
from typing import Optional

from bs4 import BeautifulSoup, Tag

# start/end tags, comments, doctypes and processing instructions
_TAG_RE = re.compile(r"<(?:!--.*?--|[!/?]?[A-Za-z][^>]*)>", re.DOTALL)


def strip_html(text: str) -> str:
    """Return the text content of an HTML fragment.

    Passages arrive with ``<em>`` highlight markup; the result list shows them
    as plain text unless raw rendering was requested.
    """
    if not text or ("<" not in text and "&" not in text):
        return text
    return BeautifulSoup(text, "html.parser").get_text()


def _collapse(text: str) -> str:
    return " ".join(text.split())


class _TagRanges:
    """Raw ``[start, end)`` ranges of every tag in an HTML string."""

    def __init__(self, html: str):
        self._ranges = [(m.start(), m.end()) for m in _TAG_RE.finditer(html)]
        self._starts = [start for start, _ in self._ranges]

    def splits(self, pos: int) -> bool:
        """True when ``pos`` falls strictly inside a tag, e.g. in an attribute."""
        i = bisect_right(self._starts, pos) - 1
        if i < 0:
            return False
        start, end = self._ranges[i]
        return start < pos < end


def _candidates(content: str, needle: str, markup: bool) -> Iterator[tuple[int, int]]:
    start = content.find(needle)
    while start >= 0:
        yield start, start + len(needle)
        start = content.find(needle, start + 1)

    words = _collapse(needle).split(" ")
    gap = r"(?:\s|<[^>]*>)+" if markup else r"\s+"
    pattern = gap.join(re.escape(w) for w in words)
    for match in re.finditer(pattern, content, flags=re.IGNORECASE):
        yield match.start(), match.end()


def find_text(
    content: str,
    needle: str,
    markup: bool = False,
) -> Optional[tuple[int, int]]:
    """Locate ``needle`` in ``content`` and return ``(start, end)``.

    Tries an exact substring first, then a case-insensitive match that lets
    any run of whitespace (and, with ``markup=True``, intervening tags) stand
    in for the whitespace between words.  With ``markup=True`` a match that
    begins or ends inside a tag (an attribute value, say) is skipped.
    """
    if not content or not needle or not needle.strip():
        return None

    tags = _TagRanges(content) if markup else None
    for start, end in _candidates(content, needle, markup):
        if tags is not None and (tags.splits(start) or tags.splits(end)):
            continue
        return start, end
    return None


def _line_starts(text: str) -> list[int]:
    return [0] + [m.end() for m in re.finditer("\n", text)]


def _following_tag(tag: Tag) -> Optional[Tag]:
    """First tag after ``tag``'s subtree in document order."""
    node: Optional[Tag] = tag
    while isinstance(node, Tag):
        for sibling in node.next_siblings:
            if isinstance(sibling, Tag):
                return sibling
        node = node.parent
    return None


def element_id_at(html: str, start: int, end: int) -> Optional[str]:
    """Id of the innermost element with an ``id`` whose content holds ``html[start:end]``.

    Element ranges come from bs4's source positions: an element opens where
    its start tag ends and closes at the last matching end tag before the next
    element outside its subtree.
    """
    if not html or start >= end:
        return None

    soup = BeautifulSoup(html, "html.parser")
    lines = _line_starts(html)
    lowered = html.lower()

    def offset(tag: Tag) -> Optional[int]:
        if tag.sourceline is None or tag.sourcepos is None:
            return None
        return lines[tag.sourceline - 1] + tag.sourcepos

    best_id: Optional[str] = None
    best_open = -1
    for element in soup.find_all(id=True):
        tag_start = offset(element)
        if tag_start is None or tag_start > start:
            continue
        opened = html.find(">", tag_start) + 1
        if opened <= 0 or opened > start:
            continue

        following = _following_tag(element)
        limit = offset(following) if following is not None else None
        if limit is None:
            limit = len(html)
        closed = lowered.rfind(f"</{element.name}", opened, limit)
        if closed < 0:
            closed = limit
        if end > closed:
            continue

        # nested elements open later, so the latest opening is the innermost
        if opened > best_open:
            best_open = opened
            best_id = str(element.get("id"))
    return best_id
