"""Base class for the agents that review a working-tree diff.

A ``ReviewAgent`` owns the Claude session settings (prompt, model, granted
tools) and exposes ``query()``, which streams the SDK response while a
``ToolCallTally`` stops runaway tool loops. SDK failures are re-raised as
``AgentError`` subclasses so the CLI can report them like any other
diffreview error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

from diffreview.constants import DEFAULT_MODEL
from diffreview.exceptions import (
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
from diffreview.logging import get_logger

if TYPE_CHECKING:
    from claude_agent_sdk import Message

    from diffreview.agents.result import AgentUsage

__all__ = [
    "ReviewAgent",
    "ToolCallTally",
    "BUILTIN_TOOLS",
    "DEFAULT_MODEL",
]

logger = get_logger(__name__)

TContext = TypeVar("TContext", contravariant=True)
TResult = TypeVar("TResult", covariant=True)

#: Claude Code tools that can be granted without an MCP server
BUILTIN_TOOLS: frozenset[str] = frozenset(
    {
        "Read",
        "Write",
        "Edit",
        "Bash",
        "Glob",
        "Grep",
        "NotebookEdit",
        "WebFetch",
        "WebSearch",
        "TodoWrite",
        "Task",
        "ExitPlanMode",
    }
)

PermissionMode = Literal["default", "acceptEdits", "plan", "bypassPermissions"]

#: Lets the reviewer write its markdown report without prompting
DEFAULT_PERMISSION_MODE: PermissionMode = "acceptEdits"

#: A review calling one tool this many times is stuck
MAX_SAME_TOOL_CALLS: int = 15

#: Hard cap on streamed messages per review
MAX_TOTAL_MESSAGES: int = 100


def _tool_names(message: Message) -> list[str]:
    content = getattr(message, "content", None)
    if not isinstance(content, list):
        return []
    return [
        block.name
        for block in content
        if type(block).__name__ == "ToolUseBlock" and getattr(block, "name", None)
    ]


@dataclass
class ToolCallTally:
    """Running count of tool calls and messages for one review query.

    ``record()`` raises ``CircuitBreakerError`` once a single tool reaches
    ``max_same_tool`` calls or the stream reaches ``max_messages`` messages.
    The message cap reports the most called tool, or ``"unknown"`` when no
    tool was called.
    """

    agent_name: str
    max_same_tool: int = MAX_SAME_TOOL_CALLS
    max_messages: int = MAX_TOTAL_MESSAGES
    calls: dict[str, int] = field(default_factory=dict)
    messages: int = 0

    def record(self, message: Message) -> None:
        self.messages += 1
        for tool_name in _tool_names(message):
            logger.debug("agent_tool_call", agent=self.agent_name, tool=tool_name)
            self.calls[tool_name] = self.calls.get(tool_name, 0) + 1

        for tool_name, count in self.calls.items():
            if count >= self.max_same_tool:
                raise CircuitBreakerError(
                    tool_name=tool_name,
                    call_count=count,
                    max_calls=self.max_same_tool,
                    agent_name=self.agent_name,
                )

        if self.messages >= self.max_messages:
            tool_name, count = max(
                self.calls.items(), key=lambda item: item[1], default=("unknown", 0)
            )
            raise CircuitBreakerError(
                tool_name=tool_name,
                call_count=count,
                max_calls=self.max_messages,
                agent_name=self.agent_name,
            )


#: SDK exception class name -> diffreview error, matched by name so the SDK
#: import stays lazy
_SDK_ERRORS: dict[str, Callable[[Exception], AgentError]] = {
    "CLINotFoundError": lambda e: CLINotFoundError(
        cli_path=getattr(e, "cli_path", None)
    ),
    "ProcessError": lambda e: ProcessError(
        message=str(e),
        exit_code=getattr(e, "exit_code", None),
        stderr=getattr(e, "stderr", None),
    ),
    "TimeoutError": lambda e: ReviewTimeoutError(
        message=str(e) or "Operation timed out",
        timeout_seconds=getattr(e, "timeout_seconds", None),
    ),
    "CLIConnectionError": lambda e: NetworkError(message=str(e)),
    "CLIJSONDecodeError": lambda e: MalformedResponseError(
        message=str(e), raw_response=getattr(e, "line", None)
    ),
}


class ReviewAgent(ABC, Generic[TContext, TResult]):
    """A Claude session configured to review changes in a repository.

    Subclasses supply the review prompt and tool grants to ``__init__`` and
    turn a context (what to review) into a result in ``execute()``. Tools
    are checked when the agent is built: each must be a Claude Code builtin
    or ``mcp__<server>__<tool>`` for a server passed in ``mcp_servers``.
    """

    def __init__(
        self,
        name: str,
        system_prompt: str,
        allowed_tools: list[str],
        model: str | None = None,
        mcp_servers: dict[str, Any] | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        """Create the agent.

        Args:
            name: Agent name used in logs and errors.
            system_prompt: Review instructions sent as the system prompt.
            allowed_tools: Tools the reviewer may call.
            model: Claude model ID, DEFAULT_MODEL when omitted.
            mcp_servers: In-process servers backing the ``mcp__`` tools.
            max_tokens: Output token cap passed to the SDK.
            temperature: Sampling temperature passed to the SDK.

        Raises:
            InvalidToolError: If a tool is neither builtin nor served.
        """
        self._name = name
        self._system_prompt = system_prompt
        self._allowed_tools = list(allowed_tools)
        self._model = model or DEFAULT_MODEL
        self._mcp_servers = mcp_servers or {}
        self._max_tokens = max_tokens
        self._temperature = temperature

        self._validate_tools(self._allowed_tools, self._mcp_servers)

    @property
    def name(self) -> str:
        return self._name

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    @property
    def allowed_tools(self) -> list[str]:
        return self._allowed_tools.copy()

    @property
    def model(self) -> str:
        return self._model

    @property
    def mcp_servers(self) -> dict[str, Any]:
        return self._mcp_servers.copy()

    def _validate_tools(
        self,
        allowed_tools: list[str],
        mcp_servers: dict[str, Any],
    ) -> None:
        served = tuple(f"mcp__{server}__" for server in mcp_servers)
        unknown = [
            tool
            for tool in allowed_tools
            if tool not in BUILTIN_TOOLS and not tool.startswith(served)
        ]
        if unknown:
            available = sorted(BUILTIN_TOOLS) + [
                f"mcp__{server}__<tool>" for server in sorted(mcp_servers)
            ]
            raise InvalidToolError(unknown[0], available)

    def _build_options(
        self,
        cwd: str | Path | None = None,
        mcp_servers: dict[str, Any] | None = None,
    ) -> Any:
        """ClaudeAgentOptions for one review run.

        ``mcp_servers`` replaces the construction-time servers for this run
        only; the review tools server is rebuilt per repository.
        """
        from claude_agent_sdk import ClaudeAgentOptions

        # extra_args values must be strings
        extra_args: dict[str, str | None] = {}
        if self._max_tokens is not None:
            extra_args["max_tokens"] = str(self._max_tokens)
        if self._temperature is not None:
            extra_args["temperature"] = str(self._temperature)

        return ClaudeAgentOptions(
            allowed_tools=self._allowed_tools,
            system_prompt=self._system_prompt,
            model=self._model,
            permission_mode=DEFAULT_PERMISSION_MODE,
            mcp_servers=self._mcp_servers if mcp_servers is None else mcp_servers,
            cwd=str(cwd) if cwd else None,
            extra_args=extra_args,
        )

    def _wrap_sdk_error(self, error: Exception) -> AgentError:
        build = _SDK_ERRORS.get(type(error).__name__)
        if build is not None:
            return build(error)
        return AgentError(message=str(error), agent_name=self._name)

    def _extract_usage(self, messages: list[Message]) -> AgentUsage:
        from diffreview.agents.utils import extract_usage

        return extract_usage(messages)

    @abstractmethod
    async def execute(self, context: TContext) -> TResult:
        """Run the review described by *context*.

        Raises:
            AgentError: SDK failures, already wrapped. Nothing is retried.
        """
        ...

    async def query(
        self,
        prompt: str,
        cwd: str | Path | None = None,
        mcp_servers: dict[str, Any] | None = None,
    ) -> AsyncIterator[Message]:
        """Send *prompt* to Claude and yield the streamed messages.

        Raises:
            StreamingError: The stream broke after at least one message; the
                messages received so far are attached.
            CircuitBreakerError: The reviewer looped on a tool.
            AgentError: The SDK failed before anything was streamed.
        """
        from claude_agent_sdk import ClaudeSDKClient

        options = self._build_options(cwd, mcp_servers)
        received: list[Message] = []
        tally = ToolCallTally(agent_name=self._name)

        logger.debug("agent_query_started", agent=self._name, model=self._model)

        try:
            async with ClaudeSDKClient(options=options) as client:
                await client.query(prompt)
                async for message in client.receive_response():
                    received.append(message)
                    tally.record(message)
                    yield message
        except CircuitBreakerError:
            raise
        except Exception as e:
            if received:
                raise StreamingError(
                    message=f"Streaming interrupted: {e}",
                    partial_messages=received,
                ) from e
            raise self._wrap_sdk_error(e) from e
