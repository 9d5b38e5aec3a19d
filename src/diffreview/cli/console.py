"""Shared Rich Console instance for diffreview CLI output.

Rich styles output in terminals and falls back to plain text when piped.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["err_console"]

# Progress messages go to stderr so stdout carries only command output
err_console = Console(stderr=True)
