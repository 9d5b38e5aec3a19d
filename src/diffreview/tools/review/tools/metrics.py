"""calculate_code_metrics tool for MCP."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path
from typing import Any

from claude_agent_sdk import tool

from diffreview.exceptions import GitError, NotARepositoryError
from diffreview.logging import get_logger
from diffreview.metrics import calculate_code_metrics
from diffreview.tools.review.constants import TOOL_CALCULATE_CODE_METRICS
from diffreview.tools.review.responses import error_response, success_response
from diffreview.tools.review.tools import resolve_root_dir

logger = get_logger(__name__)


def create_calculate_code_metrics_tool(
    cwd: Path | None = None,
    exclude_paths: Collection[str] = (),
) -> Any:
    """Create calculate_code_metrics tool with working directory closure.

    Args:
        cwd: Default working directory for git operations.
        exclude_paths: Exact paths skipped by the metrics run.

    Returns:
        Decorated tool function.
    """
    _cwd = cwd
    _excluded = tuple(exclude_paths)

    @tool(
        TOOL_CALCULATE_CODE_METRICS,
        "Calculates lines changed, a complexity score and potential security "
        "issues for the code changes in given directory",
        {"root_dir": str},
    )
    async def calculate_metrics(args: dict[str, Any]) -> dict[str, Any]:
        """Compute diff metrics.

        Returns:
            Success: CodeMetricsResult with camelCase keys.
            Error: {"isError": true, "error_code": "NOT_A_REPOSITORY"|"GIT_ERROR"}
        """
        root_dir = resolve_root_dir(args, _cwd)
        logger.info("calculate_code_metrics", root_dir=str(root_dir))

        try:
            result = await calculate_code_metrics(root_dir, _excluded)
        except NotARepositoryError:
            logger.error("calculate_code_metrics_not_a_repository")
            return error_response(
                f"Not inside a git repository: {root_dir}", "NOT_A_REPOSITORY"
            )
        except GitError as e:
            logger.error("calculate_code_metrics_git_error", error=e.message)
            return error_response(e.message, "GIT_ERROR")

        return success_response(result.model_dump(mode="json", by_alias=True))

    return calculate_metrics
