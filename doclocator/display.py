"""Choose which fields of a query result the result list shows.

Title fallback order::

    title_field -> extracted_metadata.title -> extracted_metadata.filename -> document_id

Body fallback order::

    use_passages true/unset: first passage -> body field -> empty-state text
    use_passages false:      body field -> empty-state text

The order is the result list's user-visible contract; keep it exact.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Optional

from .config import DEFAULT_BODY_FIELD, EMPTY_RESULT_TEXT
from .fields import resolve_field
from .markup import strip_html

BodySource = Literal["passage", "field", "empty"]

_TITLE_FALLBACKS = ("extracted_metadata.title", "extracted_metadata.filename")


@dataclass(frozen=True)
class DisplaySettings:
    """Resolved once per render configuration; read-only afterwards."""

    title_field: Optional[str] = None
    body_field: Optional[str] = None
    use_passages: Optional[bool] = None


@dataclass(frozen=True)
class DisplayFields:
    title: str
    body: str
    body_source: BodySource
    passage: Optional[Mapping[str, Any]] = None


def get_display_settings(
    props: Optional[Mapping[str, Any]] = None,
    component_settings: Optional[Mapping[str, Any]] = None,
) -> DisplaySettings:
    """Merge explicit options with the collection's component settings.

    ``props`` uses the option names ``title_field``, ``body_field`` and
    ``use_passages``; explicit values win.  Otherwise title and body fields
    come from ``fields_shown.title.field`` and ``fields_shown.body.field`` of
    the component settings.
    """
    props = props or {}
    component_settings = component_settings or {}

    title_field = props.get("title_field") or resolve_field(
        component_settings, "fields_shown.title.field"
    )
    body_field = props.get("body_field") or resolve_field(
        component_settings, "fields_shown.body.field"
    )
    use_passages = props.get("use_passages")
    return DisplaySettings(
        title_field=title_field if isinstance(title_field, str) else None,
        body_field=body_field if isinstance(body_field, str) else None,
        use_passages=use_passages if isinstance(use_passages, bool) else None,
    )


def _display_text(value: Any) -> Optional[str]:
    """Coerce a resolved field value to non-empty display text, or None."""
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or isinstance(value, (Mapping, list, bool)):
        return None
    text = str(value)
    return text if text.strip() else None


def select_title(result: Mapping[str, Any], settings: DisplaySettings) -> str:
    if settings.title_field:
        title = _display_text(resolve_field(result, settings.title_field))
        if title is not None:
            return title
    for path in _TITLE_FALLBACKS:
        title = _display_text(resolve_field(result, path))
        if title is not None:
            return title
    document_id = resolve_field(result, "document_id")
    return "" if document_id is None else str(document_id)


def _first_passage(result: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    passage = resolve_field(result, "document_passages[0]")
    return passage if isinstance(passage, Mapping) else None


def select_body(
    result: Mapping[str, Any],
    settings: DisplaySettings,
    empty_text: str = EMPTY_RESULT_TEXT,
    render_html: bool = False,
    default_body_field: str = DEFAULT_BODY_FIELD,
) -> tuple[str, BodySource, Optional[Mapping[str, Any]]]:
    """Return ``(body, source, passage)`` following the body fallback order.

    ``default_body_field`` is read when ``settings.body_field`` is unset.
    Callers that honour ``DoclocatorConfig`` pass its values in.
    """

    def clean(text: str) -> str:
        return text if render_html else strip_html(text)

    passage = _first_passage(result)
    use_passages = settings.use_passages
    if use_passages is None:
        use_passages = passage is not None

    if use_passages and passage is not None:
        passage_text = _display_text(passage.get("passage_text"))
        if passage_text is not None:
            return clean(passage_text), "passage", passage

    body_field = settings.body_field or default_body_field
    body = _display_text(resolve_field(result, body_field))
    if body is not None:
        return clean(body), "field", None

    return empty_text, "empty", None


def select_display_fields(
    result: Mapping[str, Any],
    settings: DisplaySettings,
    empty_text: str = EMPTY_RESULT_TEXT,
    render_html: bool = False,
    default_body_field: str = DEFAULT_BODY_FIELD,
) -> DisplayFields:
    body, source, passage = select_body(result, settings, empty_text, render_html, default_body_field)
    return DisplayFields(
        title=select_title(result, settings),
        body=body,
        body_source=source,
        passage=passage,
    )
