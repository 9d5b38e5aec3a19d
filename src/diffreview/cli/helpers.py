"""Text and markdown renderers for command output."""

from __future__ import annotations

from diffreview.cli.output import format_table
from diffreview.metrics import CodeMetricsResult
from diffreview.models.review import ReviewResult

HIGH_SEVERITY_NOTICE = "High severity issues present; review before committing."


def _issue_location(file: str, line: int | None) -> str:
    return f"{file}:{line}" if line is not None else file


def format_metrics_text(result: CodeMetricsResult) -> str:
    """Format metrics as text for console output.

    Args:
        result: CodeMetricsResult from calculate_code_metrics.

    Returns:
        Formatted text string.
    """
    lines = [
        f"Files changed:    {result.files_changed}",
        f"Lines added:      {result.lines_added}",
        f"Lines removed:    {result.lines_removed}",
        f"Complexity score: {result.complexity_score:.2f}",
        "",
    ]

    if not result.security_issues:
        lines.append("No security issues found.")
        return "\n".join(lines)

    if result.has_high_severity_issues:
        lines.append(HIGH_SEVERITY_NOTICE)
    lines.append(f"Security issues ({len(result.security_issues)}):")
    rows = [
        [
            issue.severity.value.upper(),
            _issue_location(issue.file, issue.line),
            issue.description,
        ]
        for issue in result.security_issues
    ]
    lines.append(format_table(["Severity", "Location", "Description"], rows))
    return "\n".join(lines)


def format_metrics_markdown(result: CodeMetricsResult) -> str:
    """Format metrics as markdown.

    Args:
        result: CodeMetricsResult from calculate_code_metrics.

    Returns:
        Formatted markdown string.
    """
    lines = [
        "# Code Metrics",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Files changed | {result.files_changed} |",
        f"| Lines added | {result.lines_added} |",
        f"| Lines removed | {result.lines_removed} |",
        f"| Complexity score | {result.complexity_score:.2f} |",
        "",
        f"## Security Issues ({len(result.security_issues)})",
        "",
    ]

    if not result.security_issues:
        lines.append("No security issues found.")
        return "\n".join(lines)

    if result.has_high_severity_issues:
        lines.extend([f"**{HIGH_SEVERITY_NOTICE}**", ""])
    lines.extend(
        [
            "| Severity | File | Added line | Description |",
            "| --- | --- | --- | --- |",
        ]
    )
    for issue in result.security_issues:
        line = str(issue.line) if issue.line is not None else "-"
        lines.append(
            f"| {issue.severity.value} | `{issue.file}` | {line} "
            f"| {issue.description} |"
        )
    return "\n".join(lines)


def format_review_text(result: ReviewResult) -> str:
    """Format a review result for console output."""
    lines = [result.review.strip() or "(the agent returned no review text)"]

    if result.commit_message:
        lines.extend(["", f"Commit message: {result.commit_message}"])
    if result.report_path:
        lines.extend(["", f"Report written to {result.report_path}"])
    if result.usage:
        lines.extend(
            [
                "",
                f"Tokens: {result.usage.total_tokens} "
                f"({result.usage.duration_ms} ms)",
            ]
        )

    return "\n".join(lines)
