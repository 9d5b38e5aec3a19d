"""write_review_to_markdown tool for MCP."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from claude_agent_sdk import tool

from diffreview.constants import DEFAULT_REPORT_FILENAME
from diffreview.logging import get_logger
from diffreview.tools.review.constants import TOOL_WRITE_REVIEW_TO_MARKDOWN
from diffreview.tools.review.formatting import format_review_document
from diffreview.tools.review.responses import error_response, success_response
from diffreview.tools.review.tools import resolve_root_dir
from diffreview.utils.atomic import atomic_write_text

logger = get_logger(__name__)


def create_write_review_to_markdown_tool(
    cwd: Path | None = None,
    default_filename: str = DEFAULT_REPORT_FILENAME,
) -> Any:
    """Create write_review_to_markdown tool with working directory closure.

    Args:
        cwd: Default directory the report is written into.
        default_filename: Filename used when the call does not name one.

    Returns:
        Decorated tool function.
    """
    _cwd = cwd
    _default_filename = default_filename

    @tool(
        TOOL_WRITE_REVIEW_TO_MARKDOWN,
        "Writes the code review to a markdown file",
        {"root_dir": str, "review": str, "filename": str},
    )
    async def write_review_to_markdown(args: dict[str, Any]) -> dict[str, Any]:
        """Write the review under a dated heading.

        Args via args dict:
            review: The complete code review content (required)
            filename: Report filename relative to root_dir (optional)

        Returns:
            Success: {"file_path": "...", "success": true}
            Error: {"isError": true, "error_code": "INVALID_INPUT"|"FILE_WRITE_ERROR"}
        """
        review = str(args.get("review") or "")
        filename = str(args.get("filename") or "").strip() or _default_filename

        if not review.strip():
            logger.warning("write_review_to_markdown_empty_review")
            return error_response("Review content cannot be empty", "INVALID_INPUT")

        file_path = resolve_root_dir(args, _cwd) / filename
        content = format_review_document(review, datetime.now(UTC).date())

        try:
            await asyncio.to_thread(atomic_write_text, file_path, content)
        except OSError as e:
            logger.error("review_write_failed", path=str(file_path), error=str(e))
            return error_response(
                f"Failed to write review to {file_path}: {e}", "FILE_WRITE_ERROR"
            )

        logger.info("review_written", path=str(file_path))
        return success_response({"file_path": str(file_path), "success": True})

    return write_review_to_markdown
