#!/usr/bin/env python3
"""
CLEVIS SOURCE LOADER
--------------------
The single place where readers touch the disk. Text comes back BOM-free with
LF line endings, so every reader sees the same characters for the same file.
"""

import logging
from pathlib import Path
from typing import List

from clevis.core.errors import FileOperationError

logger = logging.getLogger("clevis.readers")


def _clean_artifacts(text: str) -> str:
    """Removes a UTF-8 BOM and standardizes stray CR line endings."""
    text = text.lstrip('\ufeff')
    return text.replace('\r\n', '\n').replace('\r', '\n')


def read_source(file_path: str) -> str:
    """
    Reads a whole file as UTF-8 text.

    Raises:
        FileOperationError: the file is missing, unreadable or not UTF-8.
    """
    path = Path(file_path)
    logger.debug(f"Reading {path}")
    try:
        raw_text = path.read_text(encoding='utf-8-sig')
    except OSError as e:
        raise FileOperationError(str(file_path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise FileOperationError(str(file_path), f"not valid UTF-8: {e.reason}") from e
    return _clean_artifacts(raw_text)


def split_lines(text: str) -> List[str]:
    """
    Splits cleaned text on LF. A trailing newline terminates the last line
    instead of opening an empty one.
    """
    if not text:
        return []
    lines = text.split('\n')
    if text.endswith('\n'):
        lines.pop()
    return lines
