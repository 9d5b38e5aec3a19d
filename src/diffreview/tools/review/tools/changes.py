"""get_file_changes tool for MCP.

Returns the diff of every changed file in the working tree so the agent can
review it.
"""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path
from typing import Any

from claude_agent_sdk import tool

from diffreview.exceptions import GitError, NotARepositoryError
from diffreview.git import AsyncGitRepository
from diffreview.logging import get_logger
from diffreview.tools.review.constants import TOOL_GET_FILE_CHANGES
from diffreview.tools.review.responses import error_response, success_response
from diffreview.tools.review.tools import resolve_root_dir

logger = get_logger(__name__)


def create_get_file_changes_tool(
    cwd: Path | None = None,
    exclude_paths: Collection[str] = (),
) -> Any:
    """Create get_file_changes tool with working directory closure.

    Args:
        cwd: Default working directory for git operations.
        exclude_paths: Exact paths left out of the response.

    Returns:
        Decorated tool function.
    """
    _cwd = cwd
    _excluded = frozenset(exclude_paths)

    @tool(
        TOOL_GET_FILE_CHANGES,
        "Gets the code changes made in given directory",
        {"root_dir": str},
    )
    async def get_file_changes(args: dict[str, Any]) -> dict[str, Any]:
        """Collect per-file diffs.

        Returns:
            Success: {"files": [{"file": "...", "diff": "..."}]}
            Error: {"isError": true, "error_code": "NOT_A_REPOSITORY"|"GIT_ERROR"}
        """
        root_dir = resolve_root_dir(args, _cwd)
        logger.info("get_file_changes", root_dir=str(root_dir))

        try:
            repo = AsyncGitRepository(root_dir)
            files: list[dict[str, str]] = []
            for entry in await repo.summary():
                if entry.file_path in _excluded:
                    continue
                diff = await repo.diff(entry.file_path)
                files.append({"file": entry.file_path, "diff": diff})
        except NotARepositoryError:
            logger.error("get_file_changes_not_a_repository", root_dir=str(root_dir))
            return error_response(
                f"Not inside a git repository: {root_dir}", "NOT_A_REPOSITORY"
            )
        except GitError as e:
            logger.error("get_file_changes_git_error", error=e.message)
            return error_response(e.message, "GIT_ERROR")

        logger.info("get_file_changes_done", files=len(files))
        return success_response({"files": files})

    return get_file_changes
