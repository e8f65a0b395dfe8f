#!/usr/bin/env python3
"""
CLEVIS KEY PATH PARSER
----------------------
Turns `package.authors[0].name` into PathSegments for the Navigator.

Bracket syntax that cannot be parsed at all is a ConfigError. An index that
parses but is not a non-negative integer is reported as a missing key, with
the path accumulated up to that segment.
"""

import re
from typing import List, Optional

from clevis.core.errors import ConfigError, KeyNotFoundError
from clevis.core.models import PathSegment

_INDEX_PATTERN = re.compile(r"[0-9]+")


def join_segments(segments: List[PathSegment]) -> str:
    """Renders segments back to their dotted form for diagnostics."""
    return ".".join(str(s) for s in segments)


def parse_segment(raw: str, key_path: str, prefix: str = "",
                  file_path: Optional[str] = None) -> PathSegment:
    """
    Parses one dotted component.

    Args:
        raw: The component text, e.g. `numbers[4]`.
        key_path: The full path, quoted in ConfigError messages.
        prefix: The dotted path before this component.
        file_path: The file the path is meant for, quoted in KeyNotFoundError.
    """
    bracket = raw.find('[')
    if bracket == -1:
        if not raw:
            raise ConfigError(f"Empty key segment in key path '{key_path}'")
        return PathSegment(name=raw)

    if not raw.endswith(']'):
        raise ConfigError(f"Malformed array index notation '{raw}' in key path '{key_path}'")

    name = raw[:bracket]
    if not name:
        raise ConfigError(f"Missing key name before '[' in segment '{raw}' of key path '{key_path}'")

    index_text = raw[bracket + 1:-1]
    if not _INDEX_PATTERN.fullmatch(index_text):
        raise KeyNotFoundError(
            f"{prefix}.{raw}" if prefix else raw,
            file_path or "<unknown>",
            reason=f"index '{index_text}' is not a non-negative integer",
        )
    return PathSegment(name=name, index=int(index_text))


def parse_key_path(key_path: str, file_path: Optional[str] = None) -> List[PathSegment]:
    """Splits a dotted key path into PathSegments."""
    segments: List[PathSegment] = []
    for raw in key_path.split('.'):
        segments.append(parse_segment(raw, key_path, join_segments(segments), file_path))
    return segments
