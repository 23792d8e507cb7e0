# tests/test_evidence.py
"""Tests for spans, evidence variants and their normalisation."""

from __future__ import annotations


class TestSpan:
    def test_clamp_out_of_range(self):
        from doclocator.spans import Span

        assert Span(-5, 999999).clamp(100) == Span(0, 100)

    def test_clamp_inverted(self):
        from doclocator.spans import Span

        assert Span(80, 10).clamp(100) == Span(80, 80)

    def test_clamp_begin_past_end_of_text(self):
        from doclocator.spans import Span

        assert Span(150, 200).clamp(100) == Span(100, 100)

    def test_clamp_in_range_unchanged(self):
        from doclocator.spans import Span

        assert Span(3, 9).clamp(100) == Span(3, 9)

    def test_length_and_empty(self):
        from doclocator.spans import Span

        assert Span(3, 9).length == 6
        assert Span(4, 4).is_empty is True
        assert Span(9, 3).length == 0

    def test_intersect(self):
        from doclocator.spans import Span

        assert Span(0, 50).intersect(Span(40, 60)) == Span(40, 50)
        assert Span(0, 10).intersect(Span(20, 30)) is None

    def test_from_mapping(self):
        from doclocator.spans import Span

        assert Span.from_mapping({"begin": 1, "end": 5}) == Span(1, 5)
        assert Span.from_mapping({"begin": 1}) is None
        assert Span.from_mapping({"begin": "1", "end": 5}) is None
        assert Span.from_mapping(None) is None


class TestNormalizeEvidence:
    def test_passage_uses_own_span(self):
        from doclocator.locator.evidence import PassageEvidence, normalize_evidence
        from doclocator.spans import Span

        ev = PassageEvidence(span=Span(10, 20), text="passage")
        assert normalize_evidence(ev) == Span(10, 20)

    def test_passage_without_offsets(self):
        from doclocator.locator.evidence import PassageEvidence, normalize_evidence

        assert normalize_evidence(PassageEvidence(span=None, text="passage")) is None

    def test_table_with_location(self):
        from doclocator.locator.evidence import TableEvidence, normalize_evidence
        from doclocator.spans import Span

        ev = TableEvidence(location=Span(346183, 349624), table_id="t1", source_document_id="d1")
        assert normalize_evidence(ev) == Span(346183, 349624)

    def test_table_without_location_is_unresolvable(self):
        from doclocator.locator.evidence import TableEvidence, normalize_evidence

        ev = TableEvidence(location=None, table_id="t1", source_document_id="d1", html="<table/>")
        assert normalize_evidence(ev) is None

    def test_free_highlight_passes_through(self):
        from doclocator.locator.evidence import highlight_evidence, normalize_evidence
        from doclocator.spans import Span

        assert normalize_evidence(highlight_evidence(-5, 7)) == Span(-5, 7)

    def test_none(self):
        from doclocator.locator.evidence import normalize_evidence

        assert normalize_evidence(None) is None


class TestEvidenceConstructors:
    def test_passage_from_mapping(self):
        from doclocator.locator.evidence import EvidenceKind, passage_evidence
        from doclocator.spans import Span

        ev = passage_evidence({"passage_text": "hello", "begin": 3, "end": 8, "field": "text"})
        assert ev.kind is EvidenceKind.PASSAGE
        assert ev.span == Span(3, 8)
        assert ev.text == "hello"
        assert ev.field == "text"

    def test_passage_from_v1_offsets(self):
        from doclocator.locator.evidence import passage_evidence
        from doclocator.spans import Span

        ev = passage_evidence({"passage_text": "hello", "start_offset": 3, "end_offset": 8})
        assert ev.span == Span(3, 8)

    def test_passage_missing_end(self):
        from doclocator.locator.evidence import passage_evidence

        assert passage_evidence({"passage_text": "hello", "begin": 3}).span is None

    def test_table_from_nested_location(self):
        from doclocator.locator.evidence import EvidenceKind, table_evidence
        from doclocator.spans import Span

        ev = table_evidence({
            "table_id": "558ada041262d5b0aa02a05429d798c7",
            "source_document_id": "7e8ada041262d5b0aa02a05429d798c7",
            "table_html": "<table><tr><th>Hello</th><tr><td>How are ya?</td></tr></table>",
            "table_html_offset": 42500,
            "table": {"location": {"begin": 346183, "end": 349624}},
        })
        assert ev.kind is EvidenceKind.TABLE
        assert ev.location == Span(346183, 349624)
        assert ev.text.startswith("<table>")

    def test_table_from_model(self):
        from doclocator.locator.evidence import table_evidence
        from doclocator.query.models import QueryTableResult

        table = QueryTableResult(table_id="t", source_document_id="d", table_html="<table/>")
        assert table_evidence(table).location is None

    def test_evidence_text(self):
        from doclocator.locator.evidence import evidence_text, highlight_evidence

        assert evidence_text(highlight_evidence(0, 4)) is None
        assert evidence_text(highlight_evidence(0, 4, text="abcd")) == "abcd"
        assert evidence_text(None) is None
