"""Resolve evidence to a renderable anchor for each document representation.

Dispatch is a pure function of the document kind and what the evidence
carries:

- structured + span:   text offset mapper -> page/box anchors
- unstructured + span: clamped text range
- html / json + text:  substring match in the raw content
- anything else:       None (the document renders without a highlight)
"""

from __future__ import annotations

import logging
from typing import Optional

from ..documents.models import (
    Document,
    HtmlDocument,
    JsonDocument,
    StructuredDocument,
    UnstructuredDocument,
)
from ..markup import element_id_at, find_text, strip_html
from ..spans import Span
from .anchors import Anchor, DomSelectorAnchor, PageAnchor, TextRangeAnchor
from .evidence import Evidence, evidence_text, normalize_evidence
from .offsets import map_offset_to_blocks

logger = logging.getLogger(__name__)


def resolve_anchor(
    document: Document,
    span: Optional[Span],
    text: Optional[str] = None,
) -> Optional[Anchor]:
    """Resolve a span (and, for markup documents, captured text) to an anchor.

    Never raises for a document of one of the four kinds; every failure to
    find a location comes back as None.
    """
    if isinstance(document, StructuredDocument):
        if span is None:
            return None
        return _resolve_structured(document, span)

    if isinstance(document, UnstructuredDocument):
        if span is None:
            return None
        return TextRangeAnchor(span.clamp(len(document.text)))

    if isinstance(document, HtmlDocument):
        return _resolve_markup(document.html, text, html=True)

    if isinstance(document, JsonDocument):
        return _resolve_markup(document.text, text, html=False)

    raise TypeError(f"Unknown document type: {type(document).__name__}")


def locate(document: Document, evidence: Optional[Evidence]) -> Optional[Anchor]:
    """Normalise ``evidence`` and resolve it against ``document``."""
    span = normalize_evidence(evidence)
    anchor = resolve_anchor(document, span, evidence_text(evidence))
    logger.debug(
        "Resolved %s evidence on %s document %s -> %s",
        evidence.kind.value if evidence is not None else "no",
        document.kind.value,
        document.document_id,
        anchor.kind.value if anchor is not None else "no anchor",
    )
    return anchor


def _resolve_structured(document: StructuredDocument, span: Span) -> Optional[PageAnchor]:
    clamped = span.clamp(document.covered_length)
    blocks = map_offset_to_blocks(document.blocks, clamped)
    if not blocks:
        return None

    anchors = []
    for block in blocks:
        overlap = block.span.intersect(clamped) or Span(clamped.begin, clamped.begin)
        anchors.append(PageAnchor(page_index=block.page, bbox=block.bbox, span=overlap))

    primary = anchors[0]
    return PageAnchor(
        page_index=primary.page_index,
        bbox=primary.bbox,
        span=primary.span,
        secondary=tuple(anchors[1:]),
    )


def _resolve_markup(content: str, text: Optional[str], html: bool) -> Optional[DomSelectorAnchor]:
    # numeric offsets index extracted text, not markup, so only text can be matched
    if not text:
        return None

    candidates = [text]
    stripped = strip_html(text)
    if stripped and stripped != text:
        candidates.append(stripped)

    for needle in candidates:
        found = find_text(content, needle, markup=html)
        if found is None:
            continue
        start, end = found
        node_id = element_id_at(content, start, end) if html else None
        return DomSelectorAnchor(
            offset=start,
            length=end - start,
            text=content[start:end],
            node_id=node_id,
        )
    return None
