"""Query response models and result-list helpers."""
from .models import (
    Collection,
    CollectionsResult,
    QueryResponse,
    QueryResultPassage,
    QueryTableResult,
    TableLocation,
)

__all__ = [
    "Collection",
    "CollectionsResult",
    "QueryResponse",
    "QueryResultPassage",
    "QueryTableResult",
    "TableLocation",
]
