# doclocator/envelope.py
"""
``_doclocator`` metadata envelope for saved CLI output.

Every JSON/YAML file the CLI writes carries a ``_doclocator`` key holding the
dict returned by :func:`build_envelope`, so a stored anchor can be traced
back to the document and evidence it was resolved from.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .utils.logging import get_current_log_file, get_session_id


def _get_version() -> str:
    """Installed package version, falling back to the source version."""
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("doclocator")
    except PackageNotFoundError:
        from . import __version__

        return __version__


def build_envelope(
    *,
    command: str,
    document_id: str | None = None,
    document_kind: str | None = None,
    evidence_kind: str | None = None,
    anchor_kind: str | None = None,
    duration_s: float | None = None,
) -> dict[str, Any]:
    """Build a JSON-serializable metadata envelope.

    Parameters
    ----------
    command:
        CLI command that produced the output (required).
    document_id:
        Id of the document resolved against, or ``None``.
    document_kind:
        Representation kind (structured, unstructured, html, json), or ``None``.
    evidence_kind:
        Evidence variant (passage, table, highlight), or ``None``.
    anchor_kind:
        Kind of the resolved anchor, or ``None`` when nothing resolved.
    duration_s:
        Wall-clock processing time in seconds, or ``None``.

    When a logging session is active its id and log file are recorded too, so
    the saved output can be matched to its log lines.
    """
    log_file = get_current_log_file()
    return {
        "version": _get_version(),
        "command": command,
        "document_id": document_id,
        "document_kind": document_kind,
        "evidence_kind": evidence_kind,
        "anchor_kind": anchor_kind,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "duration_s": duration_s,
        "session_id": get_session_id(),
        "log_file": str(log_file) if log_file is not None else None,
    }
