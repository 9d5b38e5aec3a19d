"""CodeReviewerAgent package.

Public API:
    - CodeReviewerAgent: Main agent class
    - REVIEWER_TOOLS: MCP tool names the agent may call
    - SYSTEM_PROMPT: Agent system prompt (for testing/inspection)
"""

from __future__ import annotations

from diffreview.agents.code_reviewer.agent import REVIEWER_TOOLS, CodeReviewerAgent
from diffreview.agents.code_reviewer.prompts import SYSTEM_PROMPT, build_review_prompt

__all__ = [
    "CodeReviewerAgent",
    "REVIEWER_TOOLS",
    "SYSTEM_PROMPT",
    "build_review_prompt",
]
