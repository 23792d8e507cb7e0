"""
doclocator: resolve search evidence to renderable anchors in document previews.

Main components:
    - doclocator.fields:    dotted/bracketed field-path resolution
    - doclocator.documents: document representations and record loading
    - doclocator.locator:   evidence normalisation, offset mapping, anchors
    - doclocator.display:   title/body selection for the result list
    - doclocator.query:     query response models and result helpers
"""

__version__ = "1.0.0"

from .display import (
    DisplayFields,
    DisplaySettings,
    get_display_settings,
    select_display_fields,
)
from .documents import load_document
from .fields import resolve_field
from .locator import locate, map_offset_to_blocks, normalize_evidence, resolve_anchor
from .spans import Span

__all__ = [
    "__version__",
    "DisplayFields",
    "DisplaySettings",
    "Span",
    "get_display_settings",
    "load_document",
    "locate",
    "map_offset_to_blocks",
    "normalize_evidence",
    "resolve_anchor",
    "resolve_field",
    "select_display_fields",
]
