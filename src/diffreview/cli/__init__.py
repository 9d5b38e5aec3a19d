"""CLI utilities for diffreview.

Context management, output formatting and error handling shared by the
Click commands.
"""

from __future__ import annotations

from diffreview.cli.context import CLIContext, ExitCode, async_command
from diffreview.cli.output import OutputFormat

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "async_command",
]
