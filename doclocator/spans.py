"""Character-offset spans into a document's extracted text."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
    """Half-open ``[begin, end)`` interval of character offsets.

    Offsets come straight from the query engine and are not validated here;
    they may be negative or run past the end of the text.  Use :meth:`clamp`
    before slicing.
    """

    begin: int
    end: int

    @property
    def length(self) -> int:
        return max(0, self.end - self.begin)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.begin

    def clamp(self, length: int) -> "Span":
        """Pull both offsets into ``[0, length]`` keeping ``begin <= end``."""
        length = max(0, length)
        begin = max(0, min(self.begin, length))
        end = max(begin, min(self.end, length))
        return Span(begin, end)

    def intersect(self, other: "Span") -> Optional["Span"]:
        begin = max(self.begin, other.begin)
        end = min(self.end, other.end)
        if end < begin:
            return None
        return Span(begin, end)

    def to_dict(self) -> dict[str, int]:
        return {"begin": self.begin, "end": self.end}

    @classmethod
    def from_mapping(cls, data: Any) -> Optional["Span"]:
        """Build a span from ``{"begin": .., "end": ..}``, or None if unusable."""
        if not isinstance(data, Mapping):
            return None
        begin = data.get("begin")
        end = data.get("end")
        if not isinstance(begin, int) or not isinstance(end, int):
            return None
        if isinstance(begin, bool) or isinstance(end, bool):
            return None
        return cls(begin, end)
