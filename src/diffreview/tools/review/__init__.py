"""Review MCP tools for the code reviewer agent.

Four tools are served under the ``review-tools`` server name:
get_file_changes, calculate_code_metrics, generate_commit_message and
write_review_to_markdown. Tools never raise; failures come back as MCP
error responses with an ``error_code``.

Usage:
    from diffreview.tools.review import create_review_tools_server

    server = create_review_tools_server(cwd=Path("/work/repo"))
"""

from __future__ import annotations

from diffreview.tools.review.constants import (
    COMMIT_TYPES,
    SERVER_NAME,
    SERVER_VERSION,
    TOOL_NAMES,
    mcp_tool_name,
)
from diffreview.tools.review.formatting import (
    format_commit_message,
    format_review_document,
)
from diffreview.tools.review.prereqs import verify_review_prerequisites
from diffreview.tools.review.responses import error_response, success_response
from diffreview.tools.review.server import create_review_tools_server

__all__ = [
    "create_review_tools_server",
    "verify_review_prerequisites",
    "success_response",
    "error_response",
    "format_commit_message",
    "format_review_document",
    "mcp_tool_name",
    "COMMIT_TYPES",
    "SERVER_NAME",
    "SERVER_VERSION",
    "TOOL_NAMES",
]
