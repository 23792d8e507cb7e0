"""Data models for the query responses evidence is taken from."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QueryResultPassage(BaseModel):
    """A passage the query engine extracted from a result document."""

    model_config = ConfigDict(extra="allow")

    passage_text: str = ""
    begin: int | None = None
    end: int | None = None
    field: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_v1_offsets(cls, data: Any) -> Any:
        # v1 responses use start_offset/end_offset, v2 use begin/end
        if isinstance(data, dict):
            data = dict(data)
            if data.get("begin") is None and "start_offset" in data:
                data["begin"] = data.pop("start_offset")
            if data.get("end") is None and "end_offset" in data:
                data["end"] = data.pop("end_offset")
        return data


class TableLocation(BaseModel):
    """Character range of a table inside the source document text."""

    begin: int
    end: int


class QueryTableResult(BaseModel):
    """A table the query engine matched inside a source document."""

    model_config = ConfigDict(extra="allow")

    table_id: str
    source_document_id: str
    collection_id: str | None = None
    table_html: str = ""
    table_html_offset: int | None = None
    location: TableLocation | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_nested_location(cls, data: Any) -> Any:
        # the full response nests the range under table.location
        if isinstance(data, dict) and data.get("location") is None:
            nested = data.get("table")
            if isinstance(nested, dict) and isinstance(nested.get("location"), dict):
                data = dict(data)
                data["location"] = nested["location"]
        return data


class QueryResponse(BaseModel):
    """The parts of a query response the locator and result list consume.

    ``results`` stay plain dicts: display fields are addressed by arbitrary
    field paths, so the records are walked rather than modelled.
    """

    model_config = ConfigDict(extra="allow")

    matching_results: int = 0
    results: list[dict[str, Any]] = Field(default_factory=list)
    table_results: list[QueryTableResult] = Field(default_factory=list)

    @property
    def has_tables(self) -> bool:
        return len(self.table_results) > 0


class Collection(BaseModel):
    model_config = ConfigDict(extra="allow")

    collection_id: str
    name: str | None = None


class CollectionsResult(BaseModel):
    """Response of the list-collections call."""

    collections: list[Collection] = Field(default_factory=list)
