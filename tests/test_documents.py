# tests/test_documents.py
"""Tests for document models and loading documents from query records."""

import base64
import json

import pytest


TEXT_MAPPINGS = {
    "text_mappings": [
        {
            "page": {"page_number": 2, "bbox": [72.0, 80.0, 540.0, 420.0]},
            "field": {"name": "text", "index": 0, "span": [50, 120]},
        },
        {
            "page": {"page_number": 1, "bbox": [72.0, 100.0, 540.0, 300.0]},
            "field": {"name": "text", "index": 0, "span": [0, 50]},
        },
        {
            "page": {"page_number": 1, "bbox": [0, 0, 10, 10]},
            "field": {"name": "title", "index": 0, "span": [0, 5]},
        },
    ]
}


def _record(**overrides):
    record = {
        "document_id": "7e8ada041262d5b0aa02a05429d798c7",
        "text": ["x" * 120],
        "extracted_metadata": {
            "filename": "Art Effects.pdf",
            "file_type": "pdf",
            "text_mappings": json.dumps(TEXT_MAPPINGS),
        },
    }
    record.update(overrides)
    return record


class TestStructuredDocument:
    def test_page_count_and_covered_length(self):
        from doclocator.documents.models import BoundingBox, StructuredDocument, TextBlock
        from doclocator.spans import Span

        doc = StructuredDocument(
            text="abc",
            blocks=(
                TextBlock(0, BoundingBox(0, 0, 1, 1), Span(0, 2)),
                TextBlock(3, BoundingBox(0, 0, 1, 1), Span(2, 10)),
            ),
        )
        assert doc.page_count == 4
        assert doc.covered_length == 10
        assert doc.kind.value == "structured"

    def test_empty_blocks(self):
        from doclocator.documents.models import StructuredDocument

        doc = StructuredDocument(text="abc", blocks=())
        assert doc.page_count == 0
        assert doc.covered_length == 3


class TestLoadDocument:
    def test_structured_from_text_mappings(self):
        from doclocator.documents import DocumentKind, StructuredDocument, load_document

        doc = load_document(_record())
        assert isinstance(doc, StructuredDocument)
        assert doc.kind is DocumentKind.STRUCTURED
        assert doc.document_id == "7e8ada041262d5b0aa02a05429d798c7"
        assert len(doc.text) == 120

    def test_blocks_sorted_zero_based_and_filtered(self):
        from doclocator.documents import load_document

        doc = load_document(_record())
        assert [(b.page, b.span.begin, b.span.end) for b in doc.blocks] == [(0, 0, 50), (1, 50, 120)]
        assert doc.blocks[0].bbox.to_list() == [72.0, 100.0, 540.0, 300.0]

    def test_decoded_mapping_accepted(self):
        from doclocator.documents import StructuredDocument, load_document

        record = _record()
        record["extracted_metadata"]["text_mappings"] = TEXT_MAPPINGS
        assert isinstance(load_document(record), StructuredDocument)

    def test_unstructured_without_text_mappings(self):
        from doclocator.documents import UnstructuredDocument, load_document

        record = _record()
        del record["extracted_metadata"]["text_mappings"]
        doc = load_document(record)
        assert isinstance(doc, UnstructuredDocument)
        assert doc.text == "x" * 120

    def test_invalid_text_mappings_degrade_to_unstructured(self):
        from doclocator.documents import UnstructuredDocument, load_document

        record = _record()
        record["extracted_metadata"]["text_mappings"] = "{not json"
        assert isinstance(load_document(record), UnstructuredDocument)

    def test_malformed_entries_skipped(self):
        from doclocator.documents import parse_text_mappings

        blocks = parse_text_mappings({
            "text_mappings": [
                {"page": {"page_number": 0, "bbox": [0, 0, 1, 1]}, "field": {"span": [0, 5]}},
                {"page": {"page_number": 1, "bbox": [0, 0, 1]}, "field": {"span": [0, 5]}},
                {"page": {"page_number": 1, "bbox": [0, 0, 1, 1]}, "field": {"span": [9, 5]}},
                "garbage",
                {"page": {"page_number": 1, "bbox": [0, 0, 1, 1]}, "field": {"span": [5, 9]}},
            ]
        })
        assert [(b.span.begin, b.span.end) for b in blocks] == [(5, 9)]

    def test_html_document(self):
        from doclocator.documents import HtmlDocument, load_document

        doc = load_document({
            "document_id": "movie",
            "html": "<html><body><p>Hi</p></body></html>",
            "extracted_metadata": {"file_type": "html"},
        })
        assert isinstance(doc, HtmlDocument)
        assert doc.html.startswith("<html>")

    def test_json_document(self):
        from doclocator.documents import JsonDocument, load_document

        doc = load_document({
            "document_id": "enron",
            "text": '{"subject": "hello"}',
            "extracted_metadata": {"file_type": "json", "text_mappings": json.dumps(TEXT_MAPPINGS)},
        })
        assert isinstance(doc, JsonDocument)
        assert doc.file_type == "json"

    def test_string_text(self):
        from doclocator.documents import load_document

        doc = load_document({"document_id": "d", "text": "plain"})
        assert doc.text == "plain"

    def test_missing_text(self):
        from doclocator.documents import load_document

        assert load_document({"document_id": "d"}).text == ""

    def test_pdf_bytes_kept(self):
        from doclocator.documents import load_document

        doc = load_document(_record(), pdf=b"%PDF-1.4")
        assert doc.pdf == b"%PDF-1.4"

    def test_pdf_base64_decoded(self):
        from doclocator.documents import load_document

        payload = base64.b64encode(b"%PDF-1.4").decode("ascii")
        assert load_document(_record(), pdf=payload).pdf == b"%PDF-1.4"

    def test_invalid_base64_raises(self):
        from doclocator.documents import DocumentLoadError, load_document

        with pytest.raises(DocumentLoadError, match="base64"):
            load_document(_record(), pdf="not base64!!")

    def test_non_mapping_raises(self):
        from doclocator.documents import DocumentLoadError, load_document

        with pytest.raises(DocumentLoadError):
            load_document(["not", "a", "record"])


class TestLoadDocumentFile:
    def test_reads_json(self, tmp_path):
        from doclocator.documents import StructuredDocument, load_document_file

        path = tmp_path / "doc.json"
        path.write_text(json.dumps(_record()))
        pdf = tmp_path / "doc.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        doc = load_document_file(path, pdf_path=pdf)
        assert isinstance(doc, StructuredDocument)
        assert doc.pdf == b"%PDF-1.4"

    def test_missing_file_raises(self, tmp_path):
        from doclocator.documents import load_document_file

        with pytest.raises(FileNotFoundError):
            load_document_file(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path):
        from doclocator.documents import DocumentLoadError, load_document_file

        path = tmp_path / "bad.json"
        path.write_text("{")
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            load_document_file(path)
