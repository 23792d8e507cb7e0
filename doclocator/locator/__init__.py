"""Evidence locator: evidence normalisation, offset mapping and anchor resolution."""
from .anchors import Anchor, AnchorKind, DomSelectorAnchor, PageAnchor, TextRangeAnchor
from .evidence import (
    Evidence,
    EvidenceKind,
    HighlightEvidence,
    PassageEvidence,
    TableEvidence,
    highlight_evidence,
    normalize_evidence,
    passage_evidence,
    table_evidence,
)
from .offsets import map_offset_to_blocks
from .resolver import locate, resolve_anchor

__all__ = [
    "Anchor",
    "AnchorKind",
    "DomSelectorAnchor",
    "PageAnchor",
    "TextRangeAnchor",
    "Evidence",
    "EvidenceKind",
    "HighlightEvidence",
    "PassageEvidence",
    "TableEvidence",
    "highlight_evidence",
    "normalize_evidence",
    "passage_evidence",
    "table_evidence",
    "map_offset_to_blocks",
    "locate",
    "resolve_anchor",
]
