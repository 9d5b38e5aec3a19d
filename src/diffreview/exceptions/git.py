from __future__ import annotations

from pathlib import Path

from diffreview.exceptions.agent import AgentError


class GitError(AgentError):
    """Exception for git operation failures.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed (e.g., "summary", "diff").
        recoverable: True if error might be recoverable.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize the GitError.

        Args:
            message: Human-readable error message.
            operation: Git operation that failed.
            recoverable: True if error might be recoverable.
        """
        self.operation = operation
        self.recoverable = recoverable
        super().__init__(message)


class GitNotFoundError(GitError):
    """Exception raised when git CLI is not installed or not in PATH."""

    def __init__(self, message: str = "Git CLI not found") -> None:
        super().__init__(message, operation="git_check", recoverable=False)


class NotARepositoryError(GitError):
    """Exception raised when operating outside a git repository.

    Attributes:
        message: Human-readable error message.
        path: Directory that is not a repo.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        self.path = path
        super().__init__(message, operation="repo_check", recoverable=False)


class DiffSourceUnavailableError(GitError):
    """Exception raised when the diff summary or a file diff cannot be read.

    Aborts the whole metrics computation; no partial result is produced.

    Attributes:
        message: Human-readable error message.
        operation: "summary" or "diff".
        file_path: File whose diff was requested (None for the summary).
    """

    def __init__(
        self,
        message: str,
        operation: str,
        file_path: str | None = None,
    ) -> None:
        self.file_path = file_path
        super().__init__(message, operation=operation, recoverable=False)


class ReviewToolsError(AgentError):
    """Exception for review MCP tools initialization failures.

    Raised when the review tools server cannot be used because a
    prerequisite is missing (git not installed, not in a git repo).

    Attributes:
        message: Human-readable error message.
        check_failed: The specific prerequisite check that failed.
    """

    def __init__(
        self,
        message: str,
        check_failed: str | None = None,
    ) -> None:
        self.check_failed = check_failed
        super().__init__(message)
