# doclocator/documents/models.py
"""Document representations the evidence locator resolves against."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..spans import Span


class DocumentLoadError(Exception):
    """Raised when a document record cannot be turned into a Document."""


class DocumentKind(str, Enum):
    STRUCTURED = "structured"
    UNSTRUCTURED = "unstructured"
    HTML = "html"
    JSON = "json"


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle in page coordinates (origin top-left)."""

    left: float
    top: float
    right: float
    bottom: float

    def to_list(self) -> list[float]:
        return [self.left, self.top, self.right, self.bottom]


@dataclass(frozen=True)
class TextBlock:
    """A run of extracted text laid out inside one box on one page."""

    page: int
    bbox: BoundingBox
    span: Span


@dataclass(frozen=True)
class StructuredDocument:
    """Text plus per-block page/box/char-range metadata, usually PDF-backed.

    ``blocks`` are sorted by ``span.begin`` and do not overlap.  Blocks are
    contiguous within a page but may leave gaps between pages where the
    source had non-text regions.
    """

    text: str
    blocks: tuple[TextBlock, ...]
    pdf: Optional[bytes] = field(default=None, repr=False)
    document_id: Optional[str] = None

    kind = DocumentKind.STRUCTURED

    @property
    def page_count(self) -> int:
        if not self.blocks:
            return 0
        return max(b.page for b in self.blocks) + 1

    @property
    def covered_length(self) -> int:
        """Largest offset addressable through either the text or the blocks."""
        last = self.blocks[-1].span.end if self.blocks else 0
        return max(len(self.text), last)


@dataclass(frozen=True)
class UnstructuredDocument:
    """Extracted text with no positional metadata."""

    text: str
    document_id: Optional[str] = None

    kind = DocumentKind.UNSTRUCTURED


@dataclass(frozen=True)
class HtmlDocument:
    """Raw HTML markup."""

    html: str
    document_id: Optional[str] = None

    kind = DocumentKind.HTML


@dataclass(frozen=True)
class JsonDocument:
    """Raw text content of a JSON-typed document."""

    text: str
    file_type: str = "json"
    document_id: Optional[str] = None

    kind = DocumentKind.JSON


Document = Union[StructuredDocument, UnstructuredDocument, HtmlDocument, JsonDocument]
