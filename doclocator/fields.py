"""Dotted/bracketed field-path resolution over nested result records.

A path such as ``highlight.text[0]`` or ``extracted_metadata.title`` is parsed
into a sequence of :class:`Key` and :class:`Index` steps, then walked against
plain mappings and sequences.  Lookups that find nothing return the caller's
default; nothing here raises for a bad path or an unexpected record shape.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Key:
    """Mapping lookup by name."""

    name: str


@dataclass(frozen=True)
class Index:
    """Sequence lookup by non-negative position."""

    position: int


Step = Union[Key, Index]

# name followed by zero or more [n] suffixes; name may be empty for "[0]" roots
_SEGMENT_RE = re.compile(r"^([^\[\]]*)((?:\[\d+\])*)$", re.ASCII)
_INDEX_RE = re.compile(r"\[(\d+)\]", re.ASCII)

_MISSING = object()


def parse_path(path: str) -> tuple[Step, ...]:
    """Parse a field path into lookup steps.

    Segments that do not follow the ``name[0][1]`` shape (an unmatched
    bracket, a negative index) become a single literal :class:`Key`, which
    normally resolves to nothing.
    """
    if not isinstance(path, str) or path == "":
        return ()

    steps: list[Step] = []
    for segment in path.split("."):
        m = _SEGMENT_RE.match(segment)
        if m is None:
            steps.append(Key(segment))
            continue
        name, suffix = m.groups()
        if name or not suffix:
            steps.append(Key(name))
        steps.extend(Index(int(n)) for n in _INDEX_RE.findall(suffix))
    return tuple(steps)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _step(value: Any, step: Step) -> Any:
    if isinstance(step, Index):
        if _is_sequence(value) and step.position < len(value):
            return value[step.position]
        return _MISSING

    if isinstance(value, Mapping):
        return value[step.name] if step.name in value else _MISSING
    # "items.0.name" addresses a list element the same way "items[0].name" does
    if _is_sequence(value) and step.name.isascii() and step.name.isdigit():
        return _step(value, Index(int(step.name)))
    return _MISSING


def _walk(record: Any, path: str) -> Any:
    steps = parse_path(path)
    if not steps:
        return _MISSING
    value = record
    for step in steps:
        value = _step(value, step)
        if value is _MISSING:
            return _MISSING
    return value


def resolve_field(record: Any, path: str | None, default: Any = None) -> Any:
    """Return the value at ``path`` inside ``record``, or ``default``.

    >>> resolve_field({"highlight": {"text": ["a", "b"]}}, "highlight.text[1]")
    'b'
    >>> resolve_field({"a": 1}, "a.b[0]") is None
    True
    """
    if path is None:
        return default
    value = _walk(record, path)
    return default if value is _MISSING else value


def has_field(record: Any, path: str | None) -> bool:
    """True when ``path`` resolves, even if the stored value is ``None``."""
    if path is None:
        return False
    return _walk(record, path) is not _MISSING
