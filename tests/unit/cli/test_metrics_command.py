"""Unit tests for the ``metrics`` command."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from diffreview.exceptions import DiffSourceUnavailableError
from diffreview.main import cli
from diffreview.metrics import CodeMetricsResult


@pytest.mark.slow
class TestMetricsCommandOnRepository:
    def test_text_output(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
    ) -> None:
        result = cli_runner.invoke(cli, ["metrics", str(dirty_git_repo)])

        assert result.exit_code == 0, result.output
        assert "Files changed:    2" in result.output
        assert "Lines added:      7" in result.output
        assert "Lines removed:    1" in result.output
        assert "Complexity score: 1.75" in result.output
        assert "Security issues (1):" in result.output
        assert "High severity issues present" in result.output
        assert "src/app.ts:2" in result.output
        assert "Potential hardcoded credentials" in result.output

    def test_json_output_uses_camel_case(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
    ) -> None:
        result = cli_runner.invoke(cli, ["metrics", str(dirty_git_repo), "-o", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["filesChanged"] == 2
        assert data["linesAdded"] == 7
        assert data["securityIssues"] == [
            {
                "file": "src/app.ts",
                "line": 2,
                "severity": "high",
                "description": "Potential hardcoded credentials",
            }
        ]

    def test_exclude_replaces_configured_paths(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        dirty_git_repo: Path,
    ) -> None:
        result = cli_runner.invoke(
            cli,
            ["metrics", str(dirty_git_repo), "--exclude", "README.md", "-o", "json"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        # dist is no longer excluded
        assert data["filesChanged"] == 2
        assert data["linesAdded"] == 6

    def test_clean_tree(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        temp_git_repo: Path,
    ) -> None:
        result = cli_runner.invoke(cli, ["metrics", str(temp_git_repo)])

        assert result.exit_code == 0, result.output
        assert "Files changed:    0" in result.output
        assert "No security issues found." in result.output

    def test_not_a_repository(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        tmp_path: Path,
    ) -> None:
        plain_dir = tmp_path / "plain"
        plain_dir.mkdir()

        result = cli_runner.invoke(cli, ["metrics", str(plain_dir)])

        assert result.exit_code == 1
        assert "Not a git repository" in result.output
        assert "Suggestion: Run diffreview inside a git working tree" in result.output


class TestMetricsCommandMocked:
    def test_markdown_output(
        self, cli_runner: CliRunner, isolated_config: Path
    ) -> None:
        metrics_result = CodeMetricsResult(
            lines_added=3, lines_removed=1, files_changed=1, complexity_score=1.5
        )
        with patch(
            "diffreview.cli.commands.metrics.calculate_code_metrics",
            AsyncMock(return_value=metrics_result),
        ):
            result = cli_runner.invoke(cli, ["metrics", "-o", "markdown"])

        assert result.exit_code == 0, result.output
        assert "# Code Metrics" in result.output
        assert "| Complexity score | 1.50 |" in result.output
        assert "## Security Issues (0)" in result.output

    def test_configured_exclusions_are_used(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        sample_config_yaml: str,
    ) -> None:
        (isolated_config / "diffreview.yaml").write_text(sample_config_yaml)
        calculate = AsyncMock(return_value=CodeMetricsResult())

        with patch("diffreview.cli.commands.metrics.calculate_code_metrics", calculate):
            result = cli_runner.invoke(cli, ["metrics"])

        assert result.exit_code == 0, result.output
        assert calculate.await_args.args[1] == ("dist", "package-lock.json")

    def test_diff_failure_exits_with_operation(
        self, cli_runner: CliRunner, isolated_config: Path
    ) -> None:
        error = DiffSourceUnavailableError(
            "git diff failed for src/a.ts: bad object",
            operation="diff",
            file_path="src/a.ts",
        )
        with patch(
            "diffreview.cli.commands.metrics.calculate_code_metrics",
            AsyncMock(side_effect=error),
        ):
            result = cli_runner.invoke(cli, ["metrics"])

        assert result.exit_code == 1
        assert "Error: git diff failed for src/a.ts: bad object" in result.output
        assert "Operation: diff" in result.output
