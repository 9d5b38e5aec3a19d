"""Prerequisite verification for the review tools."""

from __future__ import annotations

import asyncio
from pathlib import Path

from diffreview.exceptions import (
    GitNotFoundError,
    NotARepositoryError,
    ReviewToolsError,
)
from diffreview.git import GitRepository


async def verify_review_prerequisites(cwd: Path | None = None) -> None:
    """Verify git is installed and *cwd* is inside a repository.

    Optional fail-fast check; the tools themselves report the same problems
    as MCP error responses on first use.

    Raises:
        ReviewToolsError: With ``check_failed`` set to ``git_installed`` or
            ``in_git_repo``.
    """
    try:
        await asyncio.to_thread(GitRepository, cwd)
    except GitNotFoundError:
        raise ReviewToolsError(
            "git is not installed or not available on PATH",
            check_failed="git_installed",
        ) from None
    except NotARepositoryError:
        raise ReviewToolsError(
            "not inside a git repository",
            check_failed="in_git_repo",
        ) from None
