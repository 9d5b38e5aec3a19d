"""Pydantic models shared by the agent and the CLI."""

from __future__ import annotations

from diffreview.models.review import ReviewContext, ReviewResult, UsageStats

__all__ = [
    "ReviewContext",
    "ReviewResult",
    "UsageStats",
]
