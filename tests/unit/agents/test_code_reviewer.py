"""Unit tests for CodeReviewerAgent.

Tests the review agent's functionality including:
- Initialization and tool configuration
- Prompt construction from the review context
- Collection of review text, commit message and report path
- Usage and metadata reporting
- Error wrapping for SDK failures
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from diffreview.agents.code_reviewer import (
    REVIEWER_TOOLS,
    SYSTEM_PROMPT,
    CodeReviewerAgent,
    build_review_prompt,
)
from diffreview.constants import DEFAULT_EXCLUDE_PATHS
from diffreview.exceptions import AgentError, NetworkError
from diffreview.models.review import ReviewContext, UsageStats
from diffreview.tools.review import SERVER_NAME, TOOL_NAMES, mcp_tool_name
from tests.fixtures.agents import MockSDKClient, SDKMessages

REVIEW_BODY = "## Summary\n\nThe login handler hardcodes a password."

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def agent() -> CodeReviewerAgent:
    """Create a CodeReviewerAgent instance for testing."""
    return CodeReviewerAgent()


@pytest.fixture
def review_context(tmp_path: Path) -> ReviewContext:
    return ReviewContext(cwd=tmp_path, report_filename="review.md")


def full_session(sdk_messages: SDKMessages, cwd: Path) -> list:
    """A session that reads changes, formats a commit and saves a report."""
    return [
        sdk_messages.text("Looking at the changes."),
        *sdk_messages.tool_call(
            "get_file_changes",
            {"root_dir": str(cwd)},
            {"files": [{"file": "src/login.ts", "diff": "+const password = 1"}]},
        ),
        *sdk_messages.tool_call(
            "calculate_code_metrics",
            {"root_dir": str(cwd)},
            {"filesChanged": 1, "linesAdded": 1, "linesRemoved": 0},
        ),
        sdk_messages.text(REVIEW_BODY),
        *sdk_messages.tool_call(
            "generate_commit_message",
            {"root_dir": str(cwd), "summary": "add login", "type": "feat"},
            {"commit_message": "feat(auth): add login"},
        ),
        *sdk_messages.tool_call(
            "write_review_to_markdown",
            {"root_dir": str(cwd), "review": REVIEW_BODY, "filename": "review.md"},
            {"file_path": str(cwd / "review.md"), "success": True},
        ),
        sdk_messages.result(input_tokens=1000, output_tokens=400, duration_ms=2500),
    ]


# =============================================================================
# Initialization
# =============================================================================


class TestCodeReviewerAgentInit:
    def test_defaults(self, agent: CodeReviewerAgent) -> None:
        assert agent.name == "code-reviewer"
        assert agent.system_prompt == SYSTEM_PROMPT
        assert agent.allowed_tools == list(REVIEWER_TOOLS)
        assert agent.exclude_paths == DEFAULT_EXCLUDE_PATHS
        assert SERVER_NAME in agent.mcp_servers

    def test_reviewer_tools_are_the_review_server_tools(self) -> None:
        assert REVIEWER_TOOLS == tuple(mcp_tool_name(n) for n in TOOL_NAMES)
        assert all(t.startswith("mcp__review-tools__") for t in REVIEWER_TOOLS)
        assert len(REVIEWER_TOOLS) == 4

    def test_custom_settings(self) -> None:
        agent = CodeReviewerAgent(
            model="claude-haiku-4-5-20251001",
            max_tokens=2048,
            temperature=0.3,
            exclude_paths=["vendor"],
        )

        assert agent.model == "claude-haiku-4-5-20251001"
        assert agent.exclude_paths == ("vendor",)


# =============================================================================
# Prompt
# =============================================================================


class TestBuildReviewPrompt:
    def test_default_prompt(self, tmp_path: Path) -> None:
        prompt = build_review_prompt(ReviewContext(cwd=tmp_path))

        assert f"Review the uncommitted code changes in {tmp_path}." in prompt
        assert f'Pass root_dir "{tmp_path}" to every tool call.' in prompt
        assert "generate a conventional commit message" in prompt
        assert 'filename "code-review.md"' in prompt

    def test_disabled_outputs(self, tmp_path: Path) -> None:
        prompt = build_review_prompt(
            ReviewContext(cwd=tmp_path, commit_message=False, write_report=False)
        )

        assert "Do not generate a commit message." in prompt
        assert "Do not write the review to a file." in prompt
        assert "write_review_to_markdown using" not in prompt

    def test_system_prompt_names_every_tool(self) -> None:
        for name in TOOL_NAMES:
            assert name in SYSTEM_PROMPT


# =============================================================================
# Execution
# =============================================================================


class TestCodeReviewerAgentExecute:
    @pytest.mark.asyncio
    async def test_full_review(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response(full_session(sdk_messages, review_context.cwd))

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            result = await agent.execute(review_context)

        assert result.success is True
        assert result.review == REVIEW_BODY
        assert result.commit_message == "feat(auth): add login"
        assert result.report_path == str(review_context.cwd / "review.md")
        assert result.has_report is True
        assert result.usage == UsageStats(
            input_tokens=1000,
            output_tokens=400,
            total_cost=0.005,
            duration_ms=2500,
        )
        assert result.metadata["cwd"] == str(review_context.cwd)
        assert result.metadata["tool_calls"] == {name: 1 for name in REVIEWER_TOOLS}
        assert "timestamp" in result.metadata

    @pytest.mark.asyncio
    async def test_prompt_and_options(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response(
            [sdk_messages.text("Fine."), sdk_messages.result()]
        )

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            await agent.execute(review_context)

        assert mock_sdk_client.query_calls == [build_review_prompt(review_context)]
        options = mock_sdk_client.options_used
        assert options.cwd == str(review_context.cwd)
        assert options.allowed_tools == list(REVIEWER_TOOLS)
        assert set(options.mcp_servers) == {SERVER_NAME}

    @pytest.mark.asyncio
    async def test_server_is_bound_to_context(
        self,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        agent = CodeReviewerAgent(exclude_paths=["vendor"])
        mock_sdk_client.queue_response(
            [sdk_messages.text("Fine."), sdk_messages.result()]
        )
        factory = MagicMock(return_value={"type": "sdk", "name": SERVER_NAME})

        with (
            patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client),
            patch(
                "diffreview.agents.code_reviewer.agent.create_review_tools_server",
                factory,
            ),
        ):
            await agent.execute(review_context)

        factory.assert_called_once_with(
            cwd=review_context.cwd,
            exclude_paths=("vendor",),
            report_filename="review.md",
        )
        assert mock_sdk_client.options_used.mcp_servers == {
            SERVER_NAME: factory.return_value
        }

    @pytest.mark.asyncio
    async def test_review_falls_back_to_response_text(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response(
            [
                sdk_messages.text("First part."),
                sdk_messages.text("Second part."),
                sdk_messages.result(),
            ]
        )

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            result = await agent.execute(review_context)

        assert result.success is True
        assert result.review == "First part.\n\nSecond part."
        assert result.commit_message is None
        assert result.report_path is None
        assert result.has_report is False

    @pytest.mark.asyncio
    async def test_error_tool_results_are_ignored(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response(
            [
                sdk_messages.text(REVIEW_BODY),
                *sdk_messages.tool_call(
                    "generate_commit_message",
                    {"summary": "", "type": "feat"},
                    {
                        "isError": True,
                        "message": "summary must not be empty",
                        "error_code": "INVALID_INPUT",
                    },
                ),
                *sdk_messages.tool_call(
                    "write_review_to_markdown",
                    {"review": REVIEW_BODY},
                    {
                        "isError": True,
                        "message": "Failed to write review",
                        "error_code": "FILE_WRITE_ERROR",
                    },
                ),
                sdk_messages.result(),
            ]
        )

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            result = await agent.execute(review_context)

        assert result.commit_message is None
        assert result.report_path is None
        # The attempted report body is still the review
        assert result.review == REVIEW_BODY
        assert result.success is True

    @pytest.mark.asyncio
    async def test_last_commit_message_wins(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response(
            [
                sdk_messages.text(REVIEW_BODY),
                *sdk_messages.tool_call(
                    "generate_commit_message",
                    {"summary": "x", "type": "fix"},
                    {"commit_message": "fix: x"},
                ),
                *sdk_messages.tool_call(
                    "generate_commit_message",
                    {"summary": "y", "type": "feat"},
                    {"commit_message": "feat: y"},
                ),
                sdk_messages.result(),
            ]
        )

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            result = await agent.execute(review_context)

        assert result.commit_message == "feat: y"
        tool_calls = result.metadata["tool_calls"]
        assert tool_calls == {mcp_tool_name("generate_commit_message"): 2}

    @pytest.mark.asyncio
    async def test_empty_response_is_unsuccessful(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response([sdk_messages.result()])

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            result = await agent.execute(review_context)

        assert result.success is False
        assert result.review == ""

    @pytest.mark.asyncio
    async def test_usage_without_sdk_duration(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
        sdk_messages: SDKMessages,
    ) -> None:
        mock_sdk_client.queue_response(
            [sdk_messages.text("ok"), sdk_messages.result(duration_ms=0)]
        )

        with patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client):
            result = await agent.execute(review_context)

        assert result.usage is not None
        assert result.usage.duration_ms == result.metadata["duration_ms"]


# =============================================================================
# Error handling
# =============================================================================


class CLIConnectionError(Exception):
    pass


class TestCodeReviewerAgentErrors:
    @pytest.mark.asyncio
    async def test_connection_error_is_wrapped(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
    ) -> None:
        mock_sdk_client.queue_error(CLIConnectionError("connection refused"))

        with (
            patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client),
            pytest.raises(NetworkError),
        ):
            await agent.execute(review_context)

    @pytest.mark.asyncio
    async def test_timeout_has_timeout_code(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
        mock_sdk_client: MockSDKClient,
    ) -> None:
        mock_sdk_client.queue_error(TimeoutError("took too long"))

        with (
            patch("claude_agent_sdk.ClaudeSDKClient", mock_sdk_client),
            pytest.raises(AgentError) as exc_info,
        ):
            await agent.execute(review_context)

        assert exc_info.value.error_code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_agent_error(
        self,
        agent: CodeReviewerAgent,
        review_context: ReviewContext,
    ) -> None:
        failing_client = MagicMock(side_effect=RuntimeError("boom"))

        with (
            patch("claude_agent_sdk.ClaudeSDKClient", failing_client),
            pytest.raises(AgentError, match="boom"),
        ):
            await agent.execute(review_context)
