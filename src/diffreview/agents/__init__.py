"""Claude agents for diffreview."""

from __future__ import annotations

from diffreview.agents.base import BUILTIN_TOOLS, ReviewAgent
from diffreview.agents.code_reviewer import CodeReviewerAgent
from diffreview.agents.result import AgentUsage

__all__ = [
    "AgentUsage",
    "BUILTIN_TOOLS",
    "CodeReviewerAgent",
    "ReviewAgent",
]
