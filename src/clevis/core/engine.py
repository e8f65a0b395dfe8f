#!/usr/bin/env python3
"""
CLEVIS ENGINE - Link Orchestrator
---------------------------------
The LinkEngine runs the links of a loaded Config and turns each outcome into
a plain report dictionary for the CLI. It is the only layer that catches
reader errors: below it they propagate, above it they are data.

Author: Clevis Team
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from clevis.config.loader import Config
from clevis.core.errors import ClevisError
from clevis.core.linker import Linker

logger = logging.getLogger("clevis.engine")

STATUS_MATCH = "MATCH"
STATUS_MISMATCH = "MISMATCH"
STATUS_ERROR = "ERROR"

MISMATCH_EXIT_CODE = 1


class LinkEngine:
    """
    Checks links from one Config and summarizes the results.
    Holds no state beyond the Config, so every call re-reads the files.
    """

    def __init__(self, config: Config):
        self.config = config

    def _read_side(self, linker: Linker, side: str) -> Dict[str, Any]:
        accessor = getattr(linker, side)
        entry = {"source": accessor.describe(), "value": None, "error": None, "error_kind": None}
        try:
            entry["value"] = accessor.read()
        except ClevisError as e:
            entry["error"] = str(e)
            entry["error_kind"] = e.kind
        return entry

    def check_link(self, link_key: str) -> Dict[str, Any]:
        """
        Checks a single link. Never raises for reader or lookup failures.
        """
        try:
            linker = self.config.get_linker(link_key)
            matched, value_a, value_b = linker.compare()
        except ClevisError as e:
            logger.debug(f"Link '{link_key}' failed: {e}")
            return self._link_error(link_key, e)

        report = {
            "link": link_key,
            "status": STATUS_MATCH if matched else STATUS_MISMATCH,
            "success": matched,
            "value_a": value_a,
            "value_b": value_b,
            "error": None,
            "error_kind": None,
            "exit_code": 0 if matched else MISMATCH_EXIT_CODE,
            "timestamp": time.time(),
        }
        return report

    def check_all(self, progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """Checks every link in declaration order."""
        reports = []
        keys = self.config.keys()
        total = len(keys)

        for processed, link_key in enumerate(keys, start=1):
            reports.append(self.check_link(link_key))
            if progress_callback:
                progress_callback(processed, total)

        return reports

    def show_link(self, link_key: str) -> Dict[str, Any]:
        """
        Reads both sides independently, so one broken side does not hide
        the other's value.

        Raises:
            KeyNotFoundError: no link is named `link_key`.
        """
        linker = self.config.get_linker(link_key)
        side_a = self._read_side(linker, "a")
        side_b = self._read_side(linker, "b")
        both_read = side_a["error"] is None and side_b["error"] is None
        return {
            "link": link_key,
            "a": side_a,
            "b": side_b,
            "matched": both_read and side_a["value"] == side_b["value"],
        }

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        if not reports:
            return {
                "total_links": 0, "success_rate": 0, "matched": 0,
                "mismatched": 0, "errors": 0, "failed_links": [],
            }

        total = len(reports)
        matched = sum(1 for r in reports if r.get("status") == STATUS_MATCH)
        mismatched = sum(1 for r in reports if r.get("status") == STATUS_MISMATCH)
        errors = sum(1 for r in reports if r.get("status") == STATUS_ERROR)

        return {
            "total_links": total,
            "success_rate": matched / total,
            "matched": matched,
            "mismatched": mismatched,
            "errors": errors,
            "failed_links": [r["link"] for r in reports if not r.get("success")],
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def exit_code_for(self, reports: List[Dict[str, Any]]) -> int:
        """0 when every link matched, else the code of the first failure."""
        for report in reports:
            if not report.get("success"):
                return report.get("exit_code", MISMATCH_EXIT_CODE)
        return 0

    def _link_error(self, link_key: str, error: ClevisError) -> Dict[str, Any]:
        return {
            "link": link_key, "status": STATUS_ERROR, "success": False,
            "value_a": None, "value_b": None,
            "error": str(error), "error_kind": error.kind,
            "exit_code": error.exit_code, "timestamp": time.time(),
        }
