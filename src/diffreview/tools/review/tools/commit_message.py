"""generate_commit_message tool for MCP.

Formats the agent's summary of the changes as a conventional commit message.
Nothing is committed.
"""

from __future__ import annotations

from typing import Any

from claude_agent_sdk import tool

from diffreview.logging import get_logger
from diffreview.tools.review.constants import (
    COMMIT_TYPES,
    TOOL_GENERATE_COMMIT_MESSAGE,
)
from diffreview.tools.review.formatting import format_commit_message
from diffreview.tools.review.responses import error_response, success_response

logger = get_logger(__name__)


def create_generate_commit_message_tool() -> Any:
    """Create generate_commit_message tool.

    Returns:
        Decorated tool function.
    """

    @tool(
        TOOL_GENERATE_COMMIT_MESSAGE,
        "Generates a conventional commit message based on the code changes",
        {"root_dir": str, "summary": str, "type": str, "scope": str},
    )
    async def generate_commit_message(args: dict[str, Any]) -> dict[str, Any]:
        """Format a conventional commit message.

        Args via args dict:
            summary: A summary of the changes made (required)
            type: One of COMMIT_TYPES (required)
            scope: Scope of the change (optional)

        Returns:
            Success: {"commit_message": "type(scope): summary"}
            Error: {"isError": true, "error_code": "INVALID_INPUT"}
        """
        summary = str(args.get("summary") or "").strip()
        commit_type = str(args.get("type") or "").strip()
        scope = str(args.get("scope") or "").strip() or None

        if not summary:
            logger.warning("generate_commit_message_empty_summary")
            return error_response("Summary cannot be empty", "INVALID_INPUT")

        if commit_type not in COMMIT_TYPES:
            logger.warning("generate_commit_message_invalid_type", type=commit_type)
            valid_types = ", ".join(sorted(COMMIT_TYPES))
            return error_response(
                f"Invalid commit type '{commit_type}'. Must be one of: {valid_types}",
                "INVALID_INPUT",
            )

        commit_message = format_commit_message(summary, commit_type, scope)
        logger.info("commit_message_generated", commit_message=commit_message)
        return success_response({"commit_message": commit_message})

    return generate_commit_message
