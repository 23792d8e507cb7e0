"""Renderable anchors produced by resolving evidence against a document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Union

from ..documents.models import BoundingBox
from ..spans import Span


class AnchorKind(str, Enum):
    PAGE = "page"
    TEXT_RANGE = "text_range"
    DOM_SELECTOR = "dom_selector"


@dataclass(frozen=True)
class PageAnchor:
    """A box on a page of a structured document.

    When evidence spans several blocks, the first block is the primary
    anchor and the rest are carried in ``secondary``.  Renderers that draw
    every highlighted region iterate :attr:`regions`.
    """

    page_index: int
    bbox: BoundingBox
    span: Span
    secondary: tuple["PageAnchor", ...] = ()

    kind = AnchorKind.PAGE

    @property
    def regions(self) -> Iterator["PageAnchor"]:
        yield PageAnchor(self.page_index, self.bbox, self.span)
        yield from self.secondary

    @property
    def pages(self) -> list[int]:
        return sorted({r.page_index for r in self.regions})

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "page_index": self.page_index,
            "bbox": self.bbox.to_list(),
            "span": self.span.to_dict(),
            "secondary": [a.to_dict() for a in self.secondary],
        }


@dataclass(frozen=True)
class TextRangeAnchor:
    """A character range of plain extracted text."""

    span: Span

    kind = AnchorKind.TEXT_RANGE

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "span": self.span.to_dict()}


@dataclass(frozen=True)
class DomSelectorAnchor:
    """A text match inside raw HTML or JSON content.

    ``offset`` and ``length`` address the raw content.  ``node_id`` is the id
    of the innermost HTML element with an id that contains the match.
    """

    offset: int
    length: int
    text: str
    node_id: Optional[str] = None

    kind = AnchorKind.DOM_SELECTOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "offset": self.offset,
            "length": self.length,
            "text": self.text,
            "node_id": self.node_id,
        }


Anchor = Union[PageAnchor, TextRangeAnchor, DomSelectorAnchor]
