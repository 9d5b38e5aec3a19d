"""Formatting helpers for the review tools.

Pure functions so they can be tested without an MCP server.
"""

from __future__ import annotations

from datetime import date


def format_commit_message(
    summary: str,
    commit_type: str,
    scope: str | None = None,
) -> str:
    """Format a conventional commit message.

    Args:
        summary: Short description of the change.
        commit_type: Conventional commit type (feat, fix, etc.).
        scope: Optional scope, rendered in parentheses.

    Returns:
        ``type(scope): summary``, or ``type: summary`` without a scope.

    Examples:
        >>> format_commit_message("add login form", "feat", "auth")
        'feat(auth): add login form'
        >>> format_commit_message("bump deps", "chore")
        'chore: bump deps'
    """
    scope_text = f"({scope})" if scope else ""
    return f"{commit_type}{scope_text}: {summary}"


def format_review_document(review: str, review_date: date) -> str:
    """Render the markdown report written by write_review_to_markdown.

    Examples:
        >>> format_review_document("Looks good.", date(2026, 1, 2))
        '# Code Review - 2026-01-02\\n\\nLooks good.'
    """
    return f"# Code Review - {review_date.isoformat()}\n\n{review}"
