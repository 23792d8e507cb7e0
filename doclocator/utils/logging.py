"""
Session logging for doclocator entry points.

Library modules only ever call ``logging.getLogger(__name__)``.  The CLI (or
a host application) calls :func:`setup_logging` once per process run; that
opens a log file for the session under ``DoclocatorConfig.log_dir``
(``~/.doclocator/logs`` unless ``DOCLOCATOR_HOME_DIR`` moves it) and points
``doclocator.log`` at it.

Every line carries a short session id, so interleaved runs can be told apart
when several sessions append to the same directory::

    2026-10-19 14:02:11 DEBUG   [3fa9c1] doclocator.locator.resolver (resolver.py:71): Resolved passage evidence ...

What gets logged where:

- DEBUG: one line per resolution (evidence kind, document kind, anchor kind)
- WARNING: text-mapping entries the loader had to skip
- INFO: session start
"""

from __future__ import annotations

import logging
import sys
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config import get_config

ROOT_LOGGER = "doclocator"
LATEST_LINK = "doclocator.log"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_PREFIX = "%(asctime)s %(levelname)-7s [%(session)s] %(name)s"
CONSOLE_FORMAT = _PREFIX + ": %(message)s"
FILE_FORMAT = _PREFIX + " (%(filename)s:%(lineno)d): %(message)s"


@dataclass(frozen=True)
class _LogSession:
    session_id: str
    log_file: Path


_current: Optional[_LogSession] = None


class _SessionStamp(logging.Filter):
    """Stamp the session id on records reaching a handler.

    Attached to handlers rather than the logger, so records propagated up
    from ``doclocator.*`` children are stamped as well.
    """

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = self.session_id  # type: ignore[attr-defined]
        return True


def _resolve_level(level: Optional[str]) -> int:
    name = (level or get_config().log_level).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _point_latest(log_dir: Path, log_file: Path) -> None:
    link = log_dir / LATEST_LINK
    try:
        link.unlink(missing_ok=True)
        link.symlink_to(log_file.name)
    except OSError as exc:
        # e.g. Windows without symlink rights; the session file is still written
        logging.getLogger(__name__).debug("Could not update %s: %s", link, exc)


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    console_output: bool = False,
) -> Path:
    """Start a logging session and return its log file.

    Parameters
    ----------
    level : str, optional
        Level name; defaults to ``DoclocatorConfig.log_level``
        (``DOCLOCATOR_LOG_LEVEL``).
    log_dir : Path, optional
        Directory for session files; defaults to ``DoclocatorConfig.log_dir``.
    console_output : bool
        Mirror records to stderr.

    Calling it again starts a new session and replaces the handlers of the
    previous one.
    """
    global _current

    session_id = uuid.uuid4().hex[:6]
    log_level = _resolve_level(level)
    log_dir = Path(log_dir) if log_dir is not None else get_config().log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"doclocator_{datetime.now():%Y%m%d_%H%M%S}_{session_id}.log"

    root = logging.getLogger(ROOT_LOGGER)
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    root.setLevel(log_level)
    root.propagate = False

    stamp = _SessionStamp(session_id)
    handlers: list[logging.Handler] = [logging.FileHandler(log_file, encoding="utf-8")]
    handlers[0].setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    if console_output:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
        handlers.append(console)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.addFilter(stamp)
        root.addHandler(handler)

    _point_latest(log_dir, log_file)
    _current = _LogSession(session_id=session_id, log_file=log_file)
    root.info("Session %s started at %s", session_id, logging.getLevelName(log_level))
    return log_file


def get_current_log_file() -> Optional[Path]:
    return _current.log_file if _current is not None else None


def get_session_id() -> Optional[str]:
    return _current.session_id if _current is not None else None
