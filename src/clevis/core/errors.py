#!/usr/bin/env python3
"""
CLEVIS ERRORS
-------------
Every failure a reader, the config loader or the linker can produce.

Each kind carries the exit code the CLI uses for it, so that scripted callers
can tell "infrastructure broken" from "value missing" from "config malformed".
A value mismatch is not an error and has no class here.
"""

from typing import Optional


class ClevisError(Exception):
    """Base class for all Clevis failures."""

    kind = "Error"
    exit_code = 1


class FileOperationError(ClevisError):
    """The target file could not be opened or read."""

    kind = "FileOperation"
    exit_code = 2

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"File operation failed: {path} ({reason})")


class ParseError(ClevisError):
    """The file content is not valid for its declared format."""

    kind = "ParseError"
    exit_code = 3

    def __init__(self, file_type: str, path: str, reason: str):
        self.file_type = file_type
        self.path = path
        self.reason = reason
        super().__init__(f"Parse error in {file_type}: {path} ({reason})")


class KeyNotFoundError(ClevisError):
    """A key path or span does not resolve inside otherwise valid content."""

    kind = "KeyNotFound"
    exit_code = 4

    def __init__(self, key_path: str, file_path: str, reason: Optional[str] = None):
        self.key_path = key_path
        self.file_path = file_path
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Key '{key_path}'{detail} not found in {file_path}")


class SpanOutOfRangeError(KeyNotFoundError):
    """A span's line or column bounds fall outside the file."""

    kind = "OutOfRange"


class QueryNotFoundError(ClevisError):
    """A literal substring is absent from the file."""

    kind = "QueryNotFound"
    exit_code = 4

    def __init__(self, query: str, file_path: str):
        self.query = query
        self.file_path = file_path
        super().__init__(f"Query '{query}' not found in {file_path}")


class ConfigError(ClevisError):
    """Malformed input detected before any file is touched."""

    kind = "ConfigError"
    exit_code = 5

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Configuration error: {message}")
