"""GitPython-based diff source for diffreview.

Wraps a git working directory and exposes the two operations the metrics
pipeline and the review tools need: a per-file change summary and the
unified diff of a single file. Both compare the working tree against the
index, the same comparison plain ``git diff`` performs.

Example:
    ```python
    from diffreview.git import AsyncGitRepository, GitRepository

    # Sync usage
    repo = GitRepository("/path/to/repo")
    for entry in repo.summary():
        print(entry.file_path, entry.insertions, entry.deletions)

    # Async usage
    async_repo = AsyncGitRepository("/path/to/repo")
    text = await async_repo.diff("src/app.ts")
    ```
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandNotFound

from diffreview.exceptions import (
    DiffSourceUnavailableError,
    GitNotFoundError,
    NotARepositoryError,
)
from diffreview.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "AsyncGitRepository",
    "ChangeSummaryEntry",
    "GitRepository",
    "parse_numstat",
]


# =============================================================================
# Value Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class ChangeSummaryEntry:
    """Change counts for one file touched by the diff.

    Attributes:
        file_path: Path relative to the repository root.
        insertions: Lines added (0 for binary files).
        deletions: Lines removed (0 for binary files).
    """

    file_path: str
    insertions: int
    deletions: int

    def __post_init__(self) -> None:
        if self.insertions < 0:
            raise ValueError("insertions must be non-negative")
        if self.deletions < 0:
            raise ValueError("deletions must be non-negative")


# =============================================================================
# Helper Functions
# =============================================================================


def _count(field: str) -> int:
    return int(field) if field != "-" else 0


def parse_numstat(output: str) -> list[ChangeSummaryEntry]:
    """Parse ``git diff --numstat -z`` output into summary entries.

    With ``-z`` paths are emitted verbatim (no ``core.quotePath`` escaping)
    and every field is NUL-terminated. A plain record is
    ``added\\tdeleted\\tpath\\0``; a rename leaves the path empty and is
    followed by ``old\\0new\\0``, in which case the new path is reported.

    Binary files are reported by git as ``-\\t-`` and count as zero
    insertions and deletions. Entry order follows git's output.

    Args:
        output: Raw numstat output.

    Returns:
        One entry per changed file.
    """
    entries: list[ChangeSummaryEntry] = []
    fields = iter(output.split("\0"))
    for record in fields:
        parts = record.lstrip("\n").split("\t", 2)
        if len(parts) < 3:
            continue
        file_path = parts[2]
        if not file_path:
            # Rename: old and new paths follow as separate fields
            next(fields, "")
            file_path = next(fields, "")
            if not file_path:
                continue
        entries.append(
            ChangeSummaryEntry(
                file_path=file_path,
                insertions=_count(parts[0]),
                deletions=_count(parts[1]),
            )
        )
    return entries


def _git_failure_message(exc: GitCommandError) -> str:
    stderr = str(exc.stderr or exc.stdout or "").strip()
    return stderr or str(exc)


# =============================================================================
# Main Class: GitRepository
# =============================================================================


class GitRepository:
    """GitPython-based diff source.

    Thread-safe: only stores immutable configuration and the Repo instance.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize GitRepository.

        Args:
            path: Path inside the git working tree. Defaults to the current
                directory.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not inside a git repository.
        """
        resolved_path = Path.cwd() if path is None else Path(path)
        self._path = resolved_path

        try:
            self._repo = Repo(resolved_path, search_parent_directories=True)
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(
                f"Not a git repository: {resolved_path}",
                path=resolved_path,
            ) from e

    @property
    def path(self) -> Path:
        """Directory the repository was opened from."""
        return self._path

    @property
    def repo(self) -> Repo:
        """Underlying GitPython Repo instance."""
        return self._repo

    def summary(self) -> list[ChangeSummaryEntry]:
        """Get the per-file change summary of the working tree.

        Returns:
            Entries in the order git reports them.

        Raises:
            DiffSourceUnavailableError: If the git command fails.
        """
        try:
            output = self._repo.git.diff("--numstat", "-z")
        except GitCommandError as e:
            raise DiffSourceUnavailableError(
                f"git diff --numstat -z failed: {_git_failure_message(e)}",
                operation="summary",
            ) from e
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        entries = parse_numstat(str(output))
        logger.debug("diff_summary_loaded", path=str(self._path), files=len(entries))
        return entries

    def diff(self, file_path: str) -> str:
        """Get the unified diff of a single file.

        Args:
            file_path: Path relative to the repository root.

        Returns:
            Unified diff text; empty when the file has no changes.

        Raises:
            DiffSourceUnavailableError: If the git command fails.
        """
        try:
            output = self._repo.git.diff("--", file_path)
        except GitCommandError as e:
            raise DiffSourceUnavailableError(
                f"git diff failed for {file_path}: {_git_failure_message(e)}",
                operation="diff",
                file_path=file_path,
            ) from e
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        return str(output)

    def get_repo_root(self) -> Path:
        """Get the repository working tree root."""
        return Path(self._repo.working_tree_dir or self._path)


# =============================================================================
# Async Wrapper
# =============================================================================


class AsyncGitRepository:
    """Async wrapper for GitRepository.

    Delegates every operation to a synchronous GitRepository running in a
    worker thread. Satisfies the ``DiffSource`` protocol.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize AsyncGitRepository.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not inside a git repository.
        """
        self._sync = GitRepository(path)

    @property
    def path(self) -> Path:
        return self._sync.path

    async def summary(self) -> list[ChangeSummaryEntry]:
        """Get the per-file change summary."""
        return await asyncio.to_thread(self._sync.summary)

    async def diff(self, file_path: str) -> str:
        """Get the unified diff of a single file."""
        return await asyncio.to_thread(self._sync.diff, file_path)

    async def get_repo_root(self) -> Path:
        return await asyncio.to_thread(self._sync.get_repo_root)
