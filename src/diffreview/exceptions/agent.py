from __future__ import annotations

from typing import Any

from diffreview.exceptions.base import DiffReviewError


class AgentError(DiffReviewError):
    """Base exception for all agent-related errors.

    Parent class for the exceptions that can occur while the review agent
    runs. It records which agent failed and wraps underlying errors with
    actionable information.

    Attributes:
        message: Human-readable error message.
        agent_name: Name of the agent that raised the error (if known).
        error_code: Optional error code for categorizing errors
            (e.g., GIT_ERROR, TIMEOUT).
    """

    def __init__(
        self,
        message: str,
        agent_name: str | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize the AgentError.

        Args:
            message: Human-readable error message.
            agent_name: Optional name of the agent that raised the error.
            error_code: Optional error code for categorizing errors.
        """
        self.agent_name = agent_name
        self.error_code = error_code
        super().__init__(message)


class CLINotFoundError(AgentError):
    """Exception raised when Claude CLI is not installed or not found.

    Attributes:
        message: Human-readable error message.
        cli_path: Path where CLI was expected (if known).
    """

    def __init__(
        self,
        message: str = (
            "Claude CLI not found. Install: npm install -g @anthropic-ai/claude-code"
        ),
        cli_path: str | None = None,
    ) -> None:
        self.cli_path = cli_path
        super().__init__(message)


class ProcessError(AgentError):
    """Exception raised when the Claude CLI process fails.

    Attributes:
        message: Human-readable error message.
        exit_code: Process exit code (if available).
        stderr: Standard error output (if available).
    """

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message)


class ReviewTimeoutError(AgentError):
    """Exception raised when an agent operation times out.

    Attributes:
        message: Human-readable error message.
        timeout_seconds: The timeout value that was exceeded.
    """

    def __init__(
        self,
        message: str = "Operation timed out",
        timeout_seconds: float | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(message, error_code="TIMEOUT")


class NetworkError(AgentError):
    """Exception raised for network and connection errors.

    Attributes:
        message: Human-readable error message.
        url: URL that failed (if applicable).
    """

    def __init__(
        self,
        message: str = "Network connection error",
        url: str | None = None,
    ) -> None:
        self.url = url
        super().__init__(message)


class StreamingError(AgentError):
    """Exception raised for mid-stream failures during response streaming.

    Raised when streaming fails after some messages have already been
    received. ``partial_messages`` holds what arrived before the failure.

    Attributes:
        message: Human-readable error message.
        partial_messages: Messages received before the failure.
    """

    def __init__(
        self,
        message: str = "Streaming interrupted",
        partial_messages: list[Any] | None = None,
    ) -> None:
        self.partial_messages = partial_messages or []
        super().__init__(message)


class MalformedResponseError(AgentError):
    """Exception raised when a response cannot be parsed.

    Attributes:
        message: Human-readable error message.
        raw_response: The raw response that could not be parsed.
    """

    def __init__(
        self,
        message: str = "Could not parse response",
        raw_response: str | None = None,
    ) -> None:
        self.raw_response = raw_response
        super().__init__(message)


class InvalidToolError(AgentError):
    """Exception raised when an unknown tool is specified in allowed_tools.

    Attributes:
        message: Human-readable error message.
        tool_name: The invalid tool name.
        available_tools: List of valid tool names.
    """

    def __init__(
        self,
        tool_name: str,
        available_tools: list[str] | None = None,
    ) -> None:
        self.tool_name = tool_name
        self.available_tools = available_tools or []
        message = f"Unknown tool '{tool_name}'"
        if available_tools:
            message += f". Available tools: {', '.join(sorted(available_tools)[:10])}"
            if len(available_tools) > 10:
                message += f" (and {len(available_tools) - 10} more)"
        super().__init__(message)


class CircuitBreakerError(AgentError):
    """Exception raised when an agent appears stuck in a tool-call loop.

    Attributes:
        message: Human-readable error message.
        tool_name: Tool that exceeded the call threshold.
        call_count: Number of calls observed.
        max_calls: Threshold that was exceeded.
    """

    def __init__(
        self,
        tool_name: str,
        call_count: int,
        max_calls: int,
        agent_name: str | None = None,
    ) -> None:
        self.tool_name = tool_name
        self.call_count = call_count
        self.max_calls = max_calls
        super().__init__(
            f"Circuit breaker triggered: '{tool_name}' called {call_count} times "
            f"(limit {max_calls})",
            agent_name=agent_name,
            error_code="CIRCUIT_BREAKER",
        )
