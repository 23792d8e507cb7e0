# tests/test_display.py
"""Tests for choosing the title and body shown for each query result."""

import pytest


RESULT = {
    "document_id": "7e8ada041262d5b0aa02a05429d798c7",
    "title": "Custom title",
    "text": ["Lorem ipsum dolor sit amet."],
    "extracted_metadata": {
        "title": "Metadata title",
        "filename": "Art Effects.pdf",
    },
    "document_passages": [
        {"passage_text": "dolor <em>sit</em> amet", "start_offset": 12, "end_offset": 26, "field": "text"},
    ],
}


def _result(**overrides):
    result = {k: v for k, v in RESULT.items()}
    result.update(overrides)
    return result


class TestGetDisplaySettings:
    def test_defaults(self):
        from doclocator.display import DisplaySettings, get_display_settings

        assert get_display_settings() == DisplaySettings()

    def test_component_settings(self):
        from doclocator.display import get_display_settings

        settings = get_display_settings(
            component_settings={
                "fields_shown": {"title": {"field": "subject"}, "body": {"field": "body"}},
            }
        )
        assert settings.title_field == "subject"
        assert settings.body_field == "body"
        assert settings.use_passages is None

    def test_props_override_component_settings(self):
        from doclocator.display import get_display_settings

        settings = get_display_settings(
            props={"title_field": "headline", "use_passages": False},
            component_settings={
                "fields_shown": {"title": {"field": "subject"}, "body": {"field": "body"}},
            },
        )
        assert settings.title_field == "headline"
        assert settings.body_field == "body"
        assert settings.use_passages is False

    def test_non_string_fields_ignored(self):
        from doclocator.display import get_display_settings

        settings = get_display_settings(component_settings={"fields_shown": {"title": {"field": 3}}})
        assert settings.title_field is None


class TestSelectTitle:
    def test_configured_field(self):
        from doclocator.display import DisplaySettings, select_title

        assert select_title(_result(), DisplaySettings(title_field="title")) == "Custom title"

    def test_falls_back_to_metadata_title(self):
        from doclocator.display import DisplaySettings, select_title

        assert select_title(_result(), DisplaySettings(title_field="missing")) == "Metadata title"

    def test_falls_back_to_filename(self):
        from doclocator.display import DisplaySettings, select_title

        result = _result(extracted_metadata={"filename": "Art Effects.pdf"})
        assert select_title(result, DisplaySettings()) == "Art Effects.pdf"

    def test_falls_back_to_document_id(self):
        from doclocator.display import DisplaySettings, select_title

        result = _result(extracted_metadata={})
        assert select_title(result, DisplaySettings()) == "7e8ada041262d5b0aa02a05429d798c7"

    def test_blank_value_skipped(self):
        from doclocator.display import DisplaySettings, select_title

        result = _result(title="   ")
        assert select_title(result, DisplaySettings(title_field="title")) == "Metadata title"

    def test_list_value_uses_first_element(self):
        from doclocator.display import DisplaySettings, select_title

        result = _result(subject=["Re: meeting", "ignored"])
        assert select_title(result, DisplaySettings(title_field="subject")) == "Re: meeting"

    def test_nested_path(self):
        from doclocator.display import DisplaySettings, select_title

        result = _result(enriched={"entities": [{"text": "IBM"}]})
        assert select_title(result, DisplaySettings(title_field="enriched.entities[0].text")) == "IBM"

    def test_nothing_available(self):
        from doclocator.display import DisplaySettings, select_title

        assert select_title({}, DisplaySettings()) == ""

    def test_null_document_id(self):
        from doclocator.display import DisplaySettings, select_title

        assert select_title({"document_id": None}, DisplaySettings()) == ""

    def test_numeric_document_id(self):
        from doclocator.display import DisplaySettings, select_title

        assert select_title({"document_id": 42}, DisplaySettings()) == "42"


class TestSelectBody:
    def test_passage_preferred_and_stripped(self):
        from doclocator.display import DisplaySettings, select_body

        body, source, passage = select_body(_result(), DisplaySettings())
        assert body == "dolor sit amet"
        assert source == "passage"
        assert passage["start_offset"] == 12

    def test_passage_kept_raw_when_rendering_html(self):
        from doclocator.display import DisplaySettings, select_body

        body, _, _ = select_body(_result(), DisplaySettings(), render_html=True)
        assert body == "dolor <em>sit</em> amet"

    def test_passages_disabled_uses_body_field(self):
        from doclocator.display import DisplaySettings, select_body

        body, source, passage = select_body(_result(), DisplaySettings(use_passages=False))
        assert body == "Lorem ipsum dolor sit amet."
        assert source == "field"
        assert passage is None

    def test_no_passages_uses_configured_body_field(self):
        from doclocator.display import DisplaySettings, select_body

        result = _result(document_passages=[], summary="Short summary")
        body, source, _ = select_body(result, DisplaySettings(body_field="summary"))
        assert (body, source) == ("Short summary", "field")

    def test_empty_passage_text_falls_through(self):
        from doclocator.display import DisplaySettings, select_body

        result = _result(document_passages=[{"passage_text": ""}])
        body, source, _ = select_body(result, DisplaySettings(use_passages=True))
        assert source == "field"
        assert body == "Lorem ipsum dolor sit amet."

    def test_empty_state_text(self):
        from doclocator.display import DisplaySettings, select_body

        body, source, _ = select_body({"document_id": "d"}, DisplaySettings())
        assert (body, source) == ("Excerpt unavailable.", "empty")

    def test_custom_empty_text(self):
        from doclocator.display import DisplaySettings, select_body

        body, _, _ = select_body({"document_id": "d"}, DisplaySettings(), empty_text="Nothing here")
        assert body == "Nothing here"

    def test_default_body_field(self):
        from doclocator.display import DisplaySettings, select_body

        result = {"summary": "Summary text", "text": "ignored"}
        body, _, _ = select_body(result, DisplaySettings(), default_body_field="summary")
        assert body == "Summary text"

    def test_configured_body_field_beats_default(self):
        from doclocator.display import DisplaySettings, select_body

        result = {"summary": "ignored", "abstract": "Abstract text"}
        body, _, _ = select_body(result, DisplaySettings(body_field="abstract"), default_body_field="summary")
        assert body == "Abstract text"

    def test_ignores_environment(self, monkeypatch):
        from doclocator.display import DisplaySettings, select_body

        monkeypatch.setenv("DOCLOCATOR_RENDER_HTML", "true")
        monkeypatch.setenv("DOCLOCATOR_DEFAULT_BODY_FIELD", "summary")
        monkeypatch.setenv("DOCLOCATOR_EMPTY_RESULT_TEXT", "From env")
        body, source, _ = select_body({"text": "<b>bold</b>"}, DisplaySettings())
        assert (body, source) == ("bold", "field")
        body, _, _ = select_body({}, DisplaySettings())
        assert body == "Excerpt unavailable."


class TestSelectDisplayFields:
    def test_combined(self):
        from doclocator.display import DisplaySettings, select_display_fields

        fields = select_display_fields(_result(), DisplaySettings(title_field="title"))
        assert fields.title == "Custom title"
        assert fields.body == "dolor sit amet"
        assert fields.body_source == "passage"
        assert fields.passage is not None

    @pytest.mark.parametrize("use_passages", [None, True, False])
    def test_always_yields_text(self, use_passages):
        from doclocator.display import DisplaySettings, select_display_fields

        fields = select_display_fields({}, DisplaySettings(use_passages=use_passages))
        assert isinstance(fields.title, str)
        assert fields.body == "Excerpt unavailable."
