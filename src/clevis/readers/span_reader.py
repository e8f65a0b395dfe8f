#!/usr/bin/env python3
"""
CLEVIS SPAN READER
------------------
Extracts literal text between two cursors.

Cursor convention (existing configs depend on it):
  * lines and columns are 1-based
  * the start column is the first character taken
  * the end column is the LAST character taken (inclusive)

So on `line 2`, columns 3..6 give `ne 2`. Nothing is trimmed.
"""

import logging
from dataclasses import dataclass
from typing import List

from clevis.core.errors import SpanOutOfRangeError
from clevis.core.models import Cursor, Span
from clevis.readers.source import read_source, split_lines

logger = logging.getLogger("clevis.readers")


@dataclass(frozen=True)
class SpanReader:
    file_path: str
    start: Cursor
    end: Cursor

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    def _out_of_range(self, reason: str) -> SpanOutOfRangeError:
        return SpanOutOfRangeError(str(self.span), self.file_path, reason=reason)

    def _validate(self, lines: List[str]) -> None:
        total = len(lines)
        start, end = self.start, self.end

        if start.line < 1 or end.line < 1:
            raise self._out_of_range("lines are 1-based")
        if start.line > total or end.line > total:
            raise self._out_of_range(f"file has {total} line(s)")
        if start.line > end.line:
            raise self._out_of_range("start line is after end line")
        if start.column < 1 or end.column < 1:
            raise self._out_of_range("columns are 1-based")

    def _slice_single(self, line: str) -> str:
        if self.start.column > len(line) or self.end.column > len(line):
            raise self._out_of_range("column out of bounds")
        if self.start.column > self.end.column:
            raise self._out_of_range("start column is after end column")
        return line[self.start.column - 1:self.end.column]

    def _slice_multi(self, lines: List[str]) -> str:
        first = lines[self.start.line - 1]
        middle = lines[self.start.line:self.end.line - 1]
        last = lines[self.end.line - 1]

        # Columns past the end of line clamp; an overlong start contributes nothing.
        parts = [first[self.start.column - 1:]]
        parts.extend(middle)
        parts.append(last[:self.end.column])
        return "\n".join(parts)

    def read(self) -> str:
        lines = split_lines(read_source(self.file_path))
        self._validate(lines)
        logger.debug(f"Extracting {self.span} from {self.file_path}")

        if self.span.is_single_line:
            return self._slice_single(lines[self.start.line - 1])
        return self._slice_multi(lines)

    def describe(self) -> str:
        return f"span {self.file_path} @ {self.start}-{self.end}"
