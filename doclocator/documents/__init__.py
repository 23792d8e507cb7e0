"""Document representations: structured, unstructured, HTML and JSON."""
from .models import (
    BoundingBox,
    Document,
    DocumentKind,
    DocumentLoadError,
    HtmlDocument,
    JsonDocument,
    StructuredDocument,
    TextBlock,
    UnstructuredDocument,
)
from .loader import load_document, load_document_file, parse_text_mappings

__all__ = [
    "BoundingBox",
    "Document",
    "DocumentKind",
    "DocumentLoadError",
    "HtmlDocument",
    "JsonDocument",
    "StructuredDocument",
    "TextBlock",
    "UnstructuredDocument",
    "load_document",
    "load_document_file",
    "parse_text_mappings",
]
