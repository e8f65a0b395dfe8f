#!/usr/bin/env python3
"""
CLEVIS CORE MODELS
------------------
Defines the fundamental value types used across the Clevis readers.
These models describe *where* a value lives, never the value itself.

Author: Clevis Team
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Cursor:
    """
    One position in a text file.

    Both fields are 1-based. A zero is never a valid position, but it may
    arrive from a hand-written config as an 'unset' marker, so readers must
    reject it rather than assume it away.
    """
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Span:
    """
    A range of literal text, from `start` through `end` (end column inclusive).
    """
    start: Cursor
    end: Cursor

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def __str__(self) -> str:
        return f"span {self.start}-{self.end}"


@dataclass(frozen=True)
class PathSegment:
    """
    One step of a dotted key path such as `servers[1]` in `config.servers[1].host`.
    """
    name: str                     # The mapping key to look up
    index: Optional[int] = None   # Sequence index, present only for `name[N]`

    def __str__(self) -> str:
        if self.index is None:
            return self.name
        return f"{self.name}[{self.index}]"
