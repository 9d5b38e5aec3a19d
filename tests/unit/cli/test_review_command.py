"""Unit tests for the ``review`` command.

The agent is replaced with a mock; these tests cover option handling,
prerequisite checks and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from diffreview.exceptions import NetworkError
from diffreview.main import cli
from diffreview.models.review import ReviewContext, ReviewResult, UsageStats

AGENT_PATH = "diffreview.cli.commands.review.CodeReviewerAgent"


@pytest.fixture
def review_result() -> ReviewResult:
    return ReviewResult(
        success=True,
        review="## Summary\n\nLooks good.",
        commit_message="docs: add usage notes",
        report_path="/work/code-review.md",
        usage=UsageStats(
            input_tokens=1200, output_tokens=300, total_cost=0.01, duration_ms=4200
        ),
    )


@pytest.fixture
def mock_agent_cls(review_result: ReviewResult) -> MagicMock:
    agent = MagicMock()
    agent.model = "claude-sonnet-4-5-20250929"
    agent.execute = AsyncMock(return_value=review_result)
    return MagicMock(return_value=agent)


def executed_context(mock_agent_cls: MagicMock) -> ReviewContext:
    return mock_agent_cls.return_value.execute.await_args.args[0]


@pytest.mark.slow
class TestReviewCommand:
    def test_text_output(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
        mock_agent_cls: MagicMock,
    ) -> None:
        with patch(AGENT_PATH, mock_agent_cls):
            result = cli_runner.invoke(cli, ["review", str(dirty_git_repo)])

        assert result.exit_code == 0, result.output
        assert "Looks good." in result.output
        assert "Commit message: docs: add usage notes" in result.output
        assert "Report written to /work/code-review.md" in result.output
        assert "Tokens: 1500 (4200 ms)" in result.output

    def test_defaults_come_from_config(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
        mock_agent_cls: MagicMock,
        sample_config_yaml: str,
    ) -> None:
        (isolated_config / "diffreview.yaml").write_text(sample_config_yaml)

        with patch(AGENT_PATH, mock_agent_cls):
            result = cli_runner.invoke(cli, ["review", str(dirty_git_repo)])

        assert result.exit_code == 0, result.output
        mock_agent_cls.assert_called_once_with(
            model="claude-haiku-4-5-20251001",
            max_tokens=4096,
            temperature=0.2,
            exclude_paths=["dist", "package-lock.json"],
        )
        context = executed_context(mock_agent_cls)
        assert context.cwd == dirty_git_repo.resolve()
        assert context.commit_message is False
        assert context.write_report is True
        assert context.report_filename == "REVIEW.md"

    def test_flags_override_config(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
        mock_agent_cls: MagicMock,
        sample_config_yaml: str,
    ) -> None:
        (isolated_config / "diffreview.yaml").write_text(sample_config_yaml)

        with patch(AGENT_PATH, mock_agent_cls):
            result = cli_runner.invoke(
                cli,
                [
                    "review",
                    str(dirty_git_repo),
                    "--commit-message",
                    "--no-report",
                    "--filename",
                    "notes.md",
                ],
            )

        assert result.exit_code == 0, result.output
        context = executed_context(mock_agent_cls)
        assert context.commit_message is True
        assert context.write_report is False
        assert context.report_filename == "notes.md"

    def test_json_output(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
        mock_agent_cls: MagicMock,
    ) -> None:
        with patch(AGENT_PATH, mock_agent_cls):
            result = cli_runner.invoke(
                cli, ["-q", "review", str(dirty_git_repo), "-o", "json"]
            )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["commit_message"] == "docs: add usage notes"

    def test_unsuccessful_review_exits_nonzero(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
        mock_agent_cls: MagicMock,
    ) -> None:
        mock_agent_cls.return_value.execute.return_value = ReviewResult(success=False)

        with patch(AGENT_PATH, mock_agent_cls):
            result = cli_runner.invoke(cli, ["review", str(dirty_git_repo)])

        assert result.exit_code == 1
        assert "(the agent returned no review text)" in result.output

    def test_agent_error(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
        mock_agent_cls: MagicMock,
    ) -> None:
        mock_agent_cls.return_value.execute.side_effect = NetworkError(
            "connection refused"
        )

        with patch(AGENT_PATH, mock_agent_cls):
            result = cli_runner.invoke(cli, ["review", str(dirty_git_repo)])

        assert result.exit_code == 1
        assert "Error: connection refused" in result.output


def test_review_outside_repository(
    cli_runner: CliRunner,
    isolated_config: Path,
    mock_agent_cls: MagicMock,
) -> None:
    with patch(AGENT_PATH, mock_agent_cls):
        result = cli_runner.invoke(cli, ["review"])

    assert result.exit_code == 1
    assert "not inside a git repository" in result.output
    mock_agent_cls.assert_not_called()
