"""Stdout/stderr rendering shared by the ``loadorder`` commands."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Prints either human-readable lines or one JSON document per command.

    In JSON mode successes go to stdout as ``{"status": ..., **data}`` and
    failures to stderr as ``{"error": <code>, "message": ..., **data}``.
    """

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, payload: Dict[str, Any], stream) -> None:
        print(json.dumps(payload, indent=self.indent, default=str), file=stream)

    def success(self, data: Dict[str, Any], message: str = "", *, status: str = "success") -> None:
        if self.json_mode:
            self._dump({"status": status, **data}, sys.stdout)
        elif message:
            print(message)

    def error(
        self,
        error: Exception,
        *,
        error_code: str = "error",
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self.json_mode:
            self._dump({"error": error_code, "message": str(error), **(data or {})}, sys.stderr)
        else:
            print(f"Error: {error}", file=sys.stderr)

    def text(self, message: str) -> None:
        """Print ``message`` in text mode only."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
