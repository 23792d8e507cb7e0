"""Helpers that pair query results with table results and collections.

Also builds the filter a document-fetch collaborator uses to load the
source documents of tables that came back without a matching result::

    document_id::<id1>|<id2>|...

That format is part of the fetch collaborator's query grammar; keep it exact.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

from ..config import clamp_passage_length
from ..fields import resolve_field
from .models import CollectionsResult, QueryResponse, QueryResultPassage, QueryTableResult

logger = logging.getLogger(__name__)

DOCUMENT_FILTER_PREFIX = "document_id::"
DOCUMENT_FILTER_SEPARATOR = "|"

ElementType = Literal["passage", "table"]


@dataclass(frozen=True)
class ResultSelection:
    """The result (and optional passage or table) a user chose to preview."""

    document: Mapping[str, Any]
    element: Optional[Union[QueryResultPassage, QueryTableResult, Mapping[str, Any]]] = None
    element_type: Optional[ElementType] = None


def find_tables_without_results(
    tables: Sequence[QueryTableResult],
    results: Sequence[Mapping[str, Any]],
) -> list[QueryTableResult]:
    """Tables whose source document is not among the loaded results."""
    loaded = {r.get("document_id") for r in results if isinstance(r, Mapping)}
    return [t for t in tables if t.source_document_id not in loaded]


def build_document_filter(document_ids: Iterable[str]) -> str:
    """``["d1", "d2"]`` -> ``"document_id::d1|d2"``."""
    return DOCUMENT_FILTER_PREFIX + DOCUMENT_FILTER_SEPARATOR.join(document_ids)


def pending_document_fetch(
    response: Optional[QueryResponse],
    already_fetched: bool = False,
) -> Optional[str]:
    """Filter for the source documents still missing, or None.

    Returns at most one request per query: once the caller has fetched
    (``already_fetched``) nothing more is requested, even if the fetch came
    back incomplete.  Retrying is the fetch collaborator's decision.
    """
    if response is None or already_fetched:
        return None
    missing = find_tables_without_results(response.table_results, response.results)
    if not missing:
        return None
    filter_string = build_document_filter(t.source_document_id for t in missing)
    logger.debug("Requesting %d source documents: %s", len(missing), filter_string)
    return filter_string


def find_collection_name(
    collections: Optional[CollectionsResult],
    item: Union[QueryTableResult, Mapping[str, Any], None],
) -> Optional[str]:
    """Name of the collection a result or table belongs to, if known."""
    if collections is None or item is None:
        return None
    if isinstance(item, QueryTableResult):
        collection_id = item.collection_id
    else:
        collection_id = resolve_field(item, "collection_id") or resolve_field(
            item, "result_metadata.collection_id"
        )
    if collection_id is None:
        return None
    for collection in collections.collections:
        if collection.collection_id == collection_id:
            return collection.name
    return None


def table_for_result(
    result: Mapping[str, Any],
    tables: Sequence[QueryTableResult],
) -> Optional[QueryTableResult]:
    """First table drawn from ``result``'s document."""
    document_id = result.get("document_id")
    for table in tables:
        if table.source_document_id == document_id:
            return table
    return None


def result_for_table(
    table: QueryTableResult,
    results: Sequence[Mapping[str, Any]],
) -> Optional[Mapping[str, Any]]:
    """The loaded result a table was drawn from."""
    for result in results:
        if result.get("document_id") == table.source_document_id:
            return result
    return None


def select_result(
    document: Mapping[str, Any],
    element: Optional[Union[QueryResultPassage, QueryTableResult, Mapping[str, Any]]] = None,
) -> ResultSelection:
    """Record which result, and which passage or table in it, to preview."""
    if element is None:
        return ResultSelection(document=document)
    if isinstance(element, QueryTableResult):
        return ResultSelection(document, element, "table")
    if isinstance(element, QueryResultPassage):
        return ResultSelection(document, element, "passage")
    if isinstance(element, Mapping) and "table_id" in element:
        return ResultSelection(document, element, "table")
    return ResultSelection(document, element, "passage")


def resolve_result_link(result: Mapping[str, Any], link_field: Optional[str]) -> Optional[str]:
    """URL to open instead of the preview when a link field is configured."""
    if not link_field:
        return None
    value = resolve_field(result, link_field)
    if isinstance(value, str) and value:
        return value
    return None


def passage_query_params(passage_length: Optional[int]) -> dict[str, Any]:
    """Query parameters that ask for passages of roughly ``passage_length`` chars."""
    return {
        "passages": {
            "characters": clamp_passage_length(passage_length),
            "enabled": True,
        }
    }


def show_tables_only_toggle(explicit: Optional[bool], response: Optional[QueryResponse]) -> bool:
    """Whether the tables-only toggle is shown: explicit choice, else any tables."""
    if explicit is not None:
        return explicit
    return response is not None and response.has_tables
