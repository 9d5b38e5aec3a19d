"""CodeReviewerAgent implementation.

Reviews the uncommitted changes of a working tree. The agent reads the
changes and their metrics through the review MCP tools and can format a
commit message and save the review as a markdown report.
"""

from __future__ import annotations

import time
from collections import Counter
from collections.abc import Collection
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from diffreview.agents.base import ReviewAgent
from diffreview.agents.code_reviewer.prompts import SYSTEM_PROMPT, build_review_prompt
from diffreview.agents.utils import (
    extract_all_text,
    extract_tool_results,
    extract_tool_uses,
)
from diffreview.constants import DEFAULT_EXCLUDE_PATHS
from diffreview.exceptions import AgentError, ReviewTimeoutError
from diffreview.logging import get_logger
from diffreview.models.review import ReviewContext, ReviewResult, UsageStats
from diffreview.tools.review import (
    SERVER_NAME,
    TOOL_NAMES,
    create_review_tools_server,
    mcp_tool_name,
)
from diffreview.tools.review.constants import (
    TOOL_GENERATE_COMMIT_MESSAGE,
    TOOL_WRITE_REVIEW_TO_MARKDOWN,
)

if TYPE_CHECKING:
    from pathlib import Path

    from diffreview.agents.result import AgentUsage

logger = get_logger(__name__)

#: Tools the reviewer may call, as the SDK names them
REVIEWER_TOOLS: tuple[str, ...] = tuple(mcp_tool_name(name) for name in TOOL_NAMES)


class CodeReviewerAgent(ReviewAgent[ReviewContext, ReviewResult]):
    """Agent that reviews the uncommitted changes of a repository.

    Only the four review MCP tools are allowed; the server is rebuilt for
    every run so that it operates on ``context.cwd``.

    Example:
        ```python
        agent = CodeReviewerAgent()
        result = await agent.execute(ReviewContext(cwd=Path("/work/repo")))
        print(result.review)
        if result.commit_message:
            print(result.commit_message)
        ```
    """

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        exclude_paths: Collection[str] = DEFAULT_EXCLUDE_PATHS,
    ) -> None:
        """Initialize the CodeReviewerAgent.

        Args:
            model: Optional Claude model ID.
            max_tokens: Optional maximum output tokens (SDK default used if None).
            temperature: Optional sampling temperature 0.0-1.0 (SDK default).
            exclude_paths: Paths hidden from the file changes and metrics tools.
        """
        self._exclude_paths = tuple(exclude_paths)
        super().__init__(
            name="code-reviewer",
            system_prompt=SYSTEM_PROMPT,
            allowed_tools=list(REVIEWER_TOOLS),
            model=model,
            mcp_servers={
                SERVER_NAME: create_review_tools_server(
                    exclude_paths=self._exclude_paths
                )
            },
            max_tokens=max_tokens,
            temperature=temperature,
        )

    @property
    def exclude_paths(self) -> tuple[str, ...]:
        return self._exclude_paths

    def _servers_for(self, context: ReviewContext) -> dict[str, Any]:
        return {
            SERVER_NAME: create_review_tools_server(
                cwd=context.cwd,
                exclude_paths=self._exclude_paths,
                report_filename=context.report_filename,
            )
        }

    async def execute(self, context: ReviewContext) -> ReviewResult:
        """Run a review of the changes under ``context.cwd``.

        Args:
            context: ReviewContext with the directory and output options.

        Returns:
            ReviewResult with the review text, the commit message and report
            path when the corresponding tools succeeded, and usage stats.

        Raises:
            AgentError: On SDK failures; timeouts carry error_code TIMEOUT.
        """
        start_time = time.time()
        start_timestamp = datetime.now(UTC).isoformat()
        log = logger.bind(agent=self.name, cwd=str(context.cwd))
        log.info("review_started")

        try:
            messages: list[Any] = []
            async for msg in self.query(
                build_review_prompt(context),
                cwd=context.cwd,
                mcp_servers=self._servers_for(context),
            ):
                messages.append(msg)
        except AgentError:
            raise
        except TimeoutError as e:
            raise ReviewTimeoutError("Code review operation timed out") from e
        except Exception as e:
            raise AgentError(
                f"Code review failed: {e}",
                agent_name=self.name,
            ) from e

        commit_message, report_path = self._collect_tool_outputs(messages)
        review = self._review_text(messages) or extract_all_text(messages)
        duration_ms = int((time.time() - start_time) * 1000)

        tool_calls = Counter(name for name, _ in extract_tool_uses(messages).values())
        metadata: dict[str, Any] = {
            "cwd": str(context.cwd),
            "duration_ms": duration_ms,
            "timestamp": start_timestamp,
            "tool_calls": dict(tool_calls),
        }
        if context.write_report and report_path is None:
            log.warning("review_report_not_written")

        usage = self._convert_to_usage_stats(self._extract_usage(messages), duration_ms)
        log.info(
            "review_completed",
            duration_ms=duration_ms,
            report_path=report_path,
            has_commit_message=commit_message is not None,
        )
        return ReviewResult(
            success=bool(review.strip()),
            review=review,
            commit_message=commit_message,
            report_path=report_path,
            usage=usage,
            metadata=metadata,
        )

    def _collect_tool_outputs(
        self, messages: list[Any]
    ) -> tuple[str | None, str | None]:
        """Pull the last successful commit message and report path."""
        commit_message: str | None = None
        report_path: str | None = None
        for tool_name, payload in extract_tool_results(messages):
            if payload.get("isError"):
                logger.warning(
                    "review_tool_failed",
                    tool=tool_name,
                    error_code=payload.get("error_code"),
                )
                continue
            if tool_name == mcp_tool_name(TOOL_GENERATE_COMMIT_MESSAGE):
                commit_message = payload.get("commit_message") or commit_message
            elif tool_name == mcp_tool_name(TOOL_WRITE_REVIEW_TO_MARKDOWN):
                report_path = payload.get("file_path") or report_path
        return commit_message, report_path

    def _review_text(self, messages: list[Any]) -> str:
        """Return the review body the agent saved, if it saved one."""
        review = ""
        for tool_name, tool_input in extract_tool_uses(messages).values():
            if tool_name == mcp_tool_name(TOOL_WRITE_REVIEW_TO_MARKDOWN):
                review = str(tool_input.get("review") or review)
        return review

    def _convert_to_usage_stats(
        self,
        agent_usage: AgentUsage,
        duration_ms: int,
    ) -> UsageStats:
        """Convert AgentUsage to the UsageStats model.

        The SDK-reported duration is used when present, otherwise the
        wall-clock duration measured here.
        """
        return UsageStats(
            input_tokens=agent_usage.input_tokens,
            output_tokens=agent_usage.output_tokens,
            total_cost=agent_usage.total_cost_usd,
            duration_ms=agent_usage.duration_ms or duration_ms,
        )
