#!/usr/bin/env python3
"""
CLEVIS QUERY READER
-------------------
A presence assertion dressed up as a value: if the file contains the query
as a literal substring, the "value" is the query text itself. This lets a
link say "the README must mention exactly the version in Cargo.toml".

An empty query is contained in every file and therefore always succeeds.

The search runs over the same normalized text the span reader sees: BOM
removed and CRLF/CR turned into LF. Queries spanning lines are written with
LF breaks whatever the file uses; a query holding a CR never matches.
"""

import logging
from dataclasses import dataclass

from clevis.core.errors import QueryNotFoundError
from clevis.readers.source import read_source

logger = logging.getLogger("clevis.readers")


@dataclass(frozen=True)
class QueryReader:
    file_path: str
    query: str

    def read(self) -> str:
        content = read_source(self.file_path)
        if self.query not in content:
            raise QueryNotFoundError(self.query, self.file_path)
        logger.debug(f"Found query '{self.query}' in {self.file_path}")
        return self.query

    def describe(self) -> str:
        return f"query {self.file_path} ~ '{self.query}'"
