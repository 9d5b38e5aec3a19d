"""MCP server factory for the review tools."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from claude_agent_sdk import create_sdk_mcp_server
from claude_agent_sdk.types import McpSdkServerConfig

from diffreview.constants import DEFAULT_EXCLUDE_PATHS, DEFAULT_REPORT_FILENAME
from diffreview.logging import get_logger
from diffreview.tools.review.constants import (
    SERVER_NAME,
    SERVER_VERSION,
    TOOL_CALCULATE_CODE_METRICS,
    TOOL_GENERATE_COMMIT_MESSAGE,
    TOOL_GET_FILE_CHANGES,
    TOOL_WRITE_REVIEW_TO_MARKDOWN,
)
from diffreview.tools.review.tools.changes import create_get_file_changes_tool
from diffreview.tools.review.tools.commit_message import (
    create_generate_commit_message_tool,
)
from diffreview.tools.review.tools.metrics import (
    create_calculate_code_metrics_tool,
)
from diffreview.tools.review.tools.report import (
    create_write_review_to_markdown_tool,
)

logger = get_logger(__name__)


def create_review_tools_server(
    cwd: Path | None = None,
    exclude_paths: Collection[str] = DEFAULT_EXCLUDE_PATHS,
    report_filename: str = DEFAULT_REPORT_FILENAME,
) -> McpSdkServerConfig:
    """Create MCP server with all review tools registered.

    Verification is lazy: each tool reports a missing git binary or a
    directory outside a repository as an error response on first use.

    Args:
        cwd: Working directory used when a call omits ``root_dir``.
            Defaults to the process working directory.
        exclude_paths: Paths left out of file changes and metrics.
        report_filename: Report filename used when a call omits one.

    Returns:
        Configured MCP server instance.

    Example:
        ```python
        from diffreview.tools.review import create_review_tools_server

        server = create_review_tools_server(Path("/work/repo"))
        options = ClaudeAgentOptions(mcp_servers={"review-tools": server})
        ```
    """
    _cwd = cwd

    logger.info("creating_review_tools_server", version=SERVER_VERSION)

    tools = {
        TOOL_GET_FILE_CHANGES: create_get_file_changes_tool(_cwd, exclude_paths),
        TOOL_CALCULATE_CODE_METRICS: create_calculate_code_metrics_tool(
            _cwd, exclude_paths
        ),
        TOOL_GENERATE_COMMIT_MESSAGE: create_generate_commit_message_tool(),
        TOOL_WRITE_REVIEW_TO_MARKDOWN: create_write_review_to_markdown_tool(
            _cwd, report_filename
        ),
    }

    server = create_sdk_mcp_server(
        name=SERVER_NAME,
        version=SERVER_VERSION,
        tools=list(tools.values()),
    )

    # Add tools to the server dict for test access
    server["_tools"] = tools  # type: ignore[typeddict-unknown-key]

    return server
