# doclocator/documents/loader.py
"""Build a Document from a query-result record.

Routes records to a representation kind:
- ``extracted_metadata.file_type == "html"``: raw markup from the ``html`` field
- ``extracted_metadata.file_type == "json"``: raw ``text`` content
- ``extracted_metadata.text_mappings`` present: structured (page/box/range blocks)
- otherwise: unstructured text
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from ..fields import resolve_field
from ..spans import Span
from .models import (
    BoundingBox,
    Document,
    DocumentLoadError,
    HtmlDocument,
    JsonDocument,
    StructuredDocument,
    TextBlock,
    UnstructuredDocument,
)

logger = logging.getLogger(__name__)

TEXT_FIELD = "text"


def load_document(
    record: Mapping[str, Any],
    pdf: Union[bytes, str, None] = None,
) -> Document:
    """Turn a query-result record into a typed Document.

    Parameters
    ----------
    record : Query-result (or fetched document) record.
    pdf    : Optional PDF payload, raw bytes or base64 text.  Only kept for
             structured documents, where a renderer draws the pages.
    """
    if not isinstance(record, Mapping):
        raise DocumentLoadError(
            f"Document record must be a mapping, got {type(record).__name__}"
        )

    document_id = resolve_field(record, "document_id")
    if document_id is not None:
        document_id = str(document_id)
    file_type = resolve_field(record, "extracted_metadata.file_type")

    if file_type == "html":
        html = resolve_field(record, "html")
        if not isinstance(html, str):
            html = _first_text(record.get(TEXT_FIELD))
        return HtmlDocument(html=html, document_id=document_id)

    text = _first_text(record.get(TEXT_FIELD))

    if file_type == "json":
        return JsonDocument(text=text, file_type=file_type, document_id=document_id)

    blocks = parse_text_mappings(resolve_field(record, "extracted_metadata.text_mappings"))
    if not blocks:
        logger.debug("No text mappings for %s; loading as unstructured", document_id)
        return UnstructuredDocument(text=text, document_id=document_id)

    return StructuredDocument(
        text=text,
        blocks=blocks,
        pdf=_decode_pdf(pdf),
        document_id=document_id,
    )


def load_document_file(path: Path, pdf_path: Optional[Path] = None) -> Document:
    """Load a document record from a JSON file, with an optional PDF beside it."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    try:
        record = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DocumentLoadError(f"Invalid JSON in {path}: {exc}") from exc

    pdf: Optional[bytes] = None
    if pdf_path is not None:
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")
        pdf = pdf_path.read_bytes()
    return load_document(record, pdf=pdf)


def parse_text_mappings(raw: Any) -> tuple[TextBlock, ...]:
    """Parse ``extracted_metadata.text_mappings`` into sorted text blocks.

    Accepts the JSON string the query service stores or an already decoded
    mapping.  Entries that address a field other than ``text[0]`` are skipped;
    malformed entries are dropped with a warning.  Page numbers are 1-based on
    the wire and 0-based in :class:`TextBlock`.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("text_mappings is not valid JSON; ignoring structure")
            return ()

    entries = raw.get("text_mappings") if isinstance(raw, Mapping) else raw
    if not isinstance(entries, list):
        return ()

    blocks: list[TextBlock] = []
    skipped = 0
    for entry in entries:
        if not isinstance(entry, Mapping):
            skipped += 1
            continue
        if resolve_field(entry, "field.name", TEXT_FIELD) != TEXT_FIELD:
            continue
        if resolve_field(entry, "field.index", 0) != 0:
            continue
        block = _parse_block(entry)
        if block is None:
            skipped += 1
            continue
        blocks.append(block)

    if skipped:
        logger.warning("Skipped %d malformed text mapping entries", skipped)

    blocks.sort(key=lambda b: (b.span.begin, b.span.end))
    return tuple(blocks)


def _parse_block(entry: Mapping[str, Any]) -> Optional[TextBlock]:
    page_number = resolve_field(entry, "page.page_number")
    bbox = resolve_field(entry, "page.bbox")
    span = resolve_field(entry, "field.span")

    if not isinstance(page_number, int) or page_number < 1:
        return None
    if not isinstance(bbox, list) or len(bbox) != 4:
        return None
    if not isinstance(span, list) or len(span) != 2:
        return None
    try:
        box = BoundingBox(*(float(v) for v in bbox))
        begin, end = (int(v) for v in span)
    except (TypeError, ValueError):
        return None
    if begin < 0 or end < begin:
        return None

    return TextBlock(page=page_number - 1, bbox=box, span=Span(begin, end))


def _first_text(value: Any) -> str:
    """Query results carry ``text`` as a string or as a list of strings."""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value and isinstance(value[0], str):
        return value[0]
    return ""


def _decode_pdf(pdf: Union[bytes, str, None]) -> Optional[bytes]:
    if pdf is None:
        return None
    if isinstance(pdf, (bytes, bytearray)):
        return bytes(pdf)
    try:
        return base64.b64decode(pdf, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DocumentLoadError(f"PDF payload is not valid base64: {exc}") from exc
