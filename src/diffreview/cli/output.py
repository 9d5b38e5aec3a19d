"""Output formatting utilities for the diffreview CLI."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

__all__ = [
    "OutputFormat",
    "format_error",
    "format_json",
    "format_table",
]


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands.

    Values:
        TEXT: Plain text output (default).
        JSON: Machine-readable JSON output.
        MARKDOWN: Formatted markdown for documentation.
    """

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error(
        ...     "Not a git repository: /tmp",
        ...     details=["Operation: repo_check"],
        ...     suggestion="Run inside a git working tree",
        ... ))
        Error: Not a git repository: /tmp
          Operation: repo_check
        Suggestion: Run inside a git working tree
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as JSON with 2-space indentation.

    Raises:
        TypeError: If data is not JSON-serializable.
    """
    return json.dumps(data, indent=2)


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a simple text table with pipe separators.

    Example:
        >>> print(format_table(["Severity", "File"], [["high", "a.ts"]]))
        Severity | File
        high     | a.ts
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(cell))

    lines = []

    header_parts = [h.ljust(col_widths[i]) for i, h in enumerate(headers)]
    lines.append(" | ".join(header_parts).rstrip())

    for row in rows:
        row_parts = [
            cell.ljust(col_widths[i]) if i < len(col_widths) else cell
            for i, cell in enumerate(row)
        ]
        lines.append(" | ".join(row_parts).rstrip())

    return "\n".join(lines)
