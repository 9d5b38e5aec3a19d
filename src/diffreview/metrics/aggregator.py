"""Aggregate diff metrics over every changed file.

Files are processed one at a time in summary order. A failing diff fetch
aborts the whole computation: there is no partial result and no retry.
"""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from diffreview.git import AsyncGitRepository
from diffreview.logging import get_logger
from diffreview.metrics.complexity import estimate_complexity, round_score
from diffreview.metrics.models import CodeMetricsResult, SecurityIssue
from diffreview.metrics.security import scan_security_issues
from diffreview.vcs import DiffSource

__all__ = ["calculate_code_metrics", "compute_metrics"]

logger = get_logger(__name__)


async def compute_metrics(
    source: DiffSource,
    exclude_paths: Collection[str] = (),
) -> CodeMetricsResult:
    """Compute metrics for the changes reported by a diff source.

    Args:
        source: Provides the change summary and per-file diffs.
        exclude_paths: Exact paths skipped before their diff is fetched.

    Returns:
        CodeMetricsResult whose complexity score is the mean of the per-file
        scores. With no files the score is the untouched accumulator (0.0).

    Raises:
        GitError: Whatever the source raises (e.g. DiffSourceUnavailableError);
            propagated unchanged.
    """
    excluded = set(exclude_paths)
    entries = [
        entry for entry in await source.summary() if entry.file_path not in excluded
    ]

    lines_added = 0
    lines_removed = 0
    complexity_score = 0.0
    security_issues: list[SecurityIssue] = []

    for entry in entries:
        diff = await source.diff(entry.file_path)

        lines_added += entry.insertions
        lines_removed += entry.deletions

        file_complexity = estimate_complexity(diff)
        complexity_score += file_complexity

        file_issues = scan_security_issues(diff, entry.file_path)
        security_issues.extend(file_issues)

        logger.debug(
            "file_metrics",
            file=entry.file_path,
            complexity=file_complexity,
            issues=len(file_issues),
        )

    if len(entries) > 0:
        complexity_score = round_score(complexity_score / len(entries))

    result = CodeMetricsResult(
        lines_added=lines_added,
        lines_removed=lines_removed,
        files_changed=len(entries),
        complexity_score=complexity_score,
        security_issues=security_issues,
    )
    logger.info(
        "metrics_computed",
        files_changed=result.files_changed,
        lines_added=result.lines_added,
        lines_removed=result.lines_removed,
        complexity_score=result.complexity_score,
        security_issues=len(result.security_issues),
    )
    return result


async def calculate_code_metrics(
    root_dir: Path | str,
    exclude_paths: Collection[str] = (),
) -> CodeMetricsResult:
    """Compute metrics for the uncommitted changes of a git working tree.

    Args:
        root_dir: Directory inside the working tree.
        exclude_paths: Exact paths to skip.

    Raises:
        GitNotFoundError: If git is not installed.
        NotARepositoryError: If root_dir is not inside a repository.
        DiffSourceUnavailableError: If a git diff command fails.
    """
    repo = AsyncGitRepository(root_dir)
    return await compute_metrics(repo, exclude_paths)
