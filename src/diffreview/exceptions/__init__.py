"""diffreview exception hierarchy.

All exceptions can be imported from this package:
    from diffreview.exceptions import AgentError, GitError, ConfigError
"""

from __future__ import annotations

from diffreview.exceptions.agent import (
    AgentError,
    CircuitBreakerError,
    CLINotFoundError,
    InvalidToolError,
    MalformedResponseError,
    NetworkError,
    ProcessError,
    ReviewTimeoutError,
    StreamingError,
)
from diffreview.exceptions.base import DiffReviewError
from diffreview.exceptions.config import ConfigError
from diffreview.exceptions.git import (
    DiffSourceUnavailableError,
    GitError,
    GitNotFoundError,
    NotARepositoryError,
    ReviewToolsError,
)

__all__ = [
    # Base
    "DiffReviewError",
    # Agent
    "AgentError",
    "CircuitBreakerError",
    "CLINotFoundError",
    "InvalidToolError",
    "MalformedResponseError",
    "NetworkError",
    "ProcessError",
    "ReviewTimeoutError",
    "StreamingError",
    # Config
    "ConfigError",
    # Git
    "DiffSourceUnavailableError",
    "GitError",
    "GitNotFoundError",
    "NotARepositoryError",
    "ReviewToolsError",
]
