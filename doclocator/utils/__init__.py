"""Cross-cutting helpers."""

from .logging import get_current_log_file, get_session_id, setup_logging

__all__ = [
    "get_current_log_file",
    "get_session_id",
    "setup_logging",
]
