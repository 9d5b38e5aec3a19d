"""Constants for the review MCP tools."""

from __future__ import annotations

#: MCP Server configuration
SERVER_NAME: str = "review-tools"
SERVER_VERSION: str = "1.0.0"

#: Conventional commit types accepted by generate_commit_message
COMMIT_TYPES: set[str] = {
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "chore",
}

#: Tool names registered on the server
TOOL_GET_FILE_CHANGES: str = "get_file_changes"
TOOL_CALCULATE_CODE_METRICS: str = "calculate_code_metrics"
TOOL_GENERATE_COMMIT_MESSAGE: str = "generate_commit_message"
TOOL_WRITE_REVIEW_TO_MARKDOWN: str = "write_review_to_markdown"

TOOL_NAMES: tuple[str, ...] = (
    TOOL_GET_FILE_CHANGES,
    TOOL_CALCULATE_CODE_METRICS,
    TOOL_GENERATE_COMMIT_MESSAGE,
    TOOL_WRITE_REVIEW_TO_MARKDOWN,
)


def mcp_tool_name(tool_name: str) -> str:
    """Return the name under which the agent sees a tool of this server."""
    return f"mcp__{SERVER_NAME}__{tool_name}"
