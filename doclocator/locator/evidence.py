"""Evidence variants and their normalisation to a single Span."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..query.models import QueryResultPassage, QueryTableResult
from ..spans import Span

logger = logging.getLogger(__name__)


class EvidenceKind(str, Enum):
    PASSAGE = "passage"
    TABLE = "table"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class PassageEvidence:
    """A query passage; ``span`` is None when the engine gave no offsets."""

    span: Optional[Span]
    text: str
    field: Optional[str] = None

    kind = EvidenceKind.PASSAGE


@dataclass(frozen=True)
class TableEvidence:
    """A table result; ``location`` is None for tables supplied only as HTML."""

    location: Optional[Span]
    table_id: str
    source_document_id: str
    html: str = ""

    kind = EvidenceKind.TABLE

    @property
    def text(self) -> str:
        return self.html


@dataclass(frozen=True)
class HighlightEvidence:
    """A free-text highlight span, optionally with the text it covers."""

    span: Span
    text: Optional[str] = None

    kind = EvidenceKind.HIGHLIGHT


Evidence = Union[PassageEvidence, TableEvidence, HighlightEvidence]


def normalize_evidence(evidence: Optional[Evidence]) -> Optional[Span]:
    """Reduce any evidence variant to the span it covers, or None.

    None means "show the document without a highlight"; it is an expected
    outcome, not an error.
    """
    if evidence is None:
        return None
    if isinstance(evidence, PassageEvidence):
        return evidence.span
    if isinstance(evidence, TableEvidence):
        if evidence.location is None:
            logger.debug(
                "Table %s has no location; rendering without highlight",
                evidence.table_id,
            )
        return evidence.location
    if isinstance(evidence, HighlightEvidence):
        return evidence.span
    raise TypeError(f"Unknown evidence type: {type(evidence).__name__}")


def passage_evidence(passage: Union[QueryResultPassage, Mapping[str, Any]]) -> PassageEvidence:
    """Build passage evidence from a response passage."""
    if not isinstance(passage, QueryResultPassage):
        passage = QueryResultPassage.model_validate(dict(passage))
    span = None
    if passage.begin is not None and passage.end is not None:
        span = Span(passage.begin, passage.end)
    return PassageEvidence(span=span, text=passage.passage_text, field=passage.field)


def table_evidence(table: Union[QueryTableResult, Mapping[str, Any]]) -> TableEvidence:
    """Build table evidence from a response table result."""
    if not isinstance(table, QueryTableResult):
        table = QueryTableResult.model_validate(dict(table))
    location = None
    if table.location is not None:
        location = Span(table.location.begin, table.location.end)
    return TableEvidence(
        location=location,
        table_id=table.table_id,
        source_document_id=table.source_document_id,
        html=table.table_html,
    )


def highlight_evidence(begin: int, end: int, text: Optional[str] = None) -> HighlightEvidence:
    return HighlightEvidence(span=Span(begin, end), text=text)


def evidence_text(evidence: Optional[Evidence]) -> Optional[str]:
    """Literal text captured with the evidence, if any."""
    if evidence is None:
        return None
    text = evidence.text
    return text if text else None
