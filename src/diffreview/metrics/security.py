"""Naive security indicator scan over the added lines of a diff.

Only lines starting with ``+`` and not with ``+++`` are scanned; the
``+++ b/path`` header is diff metadata. An added line whose own content
starts with ``++`` is indistinguishable from a header by prefix and is
skipped as well.

Reported line numbers are positions within the filtered added-lines
sequence (1-based), NOT line numbers in the file.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from diffreview.metrics.models import SecurityIssue, SecuritySeverity

__all__ = [
    "SECURITY_RULES",
    "SecurityRule",
    "iter_added_lines",
    "scan_security_issues",
]


@dataclass(frozen=True, slots=True)
class SecurityRule:
    """One indicator of the security table.

    Attributes:
        pattern: Compiled, case-insensitive regex searched in the line.
        severity: Severity of the issue emitted on a match.
        description: Description of the issue emitted on a match.
    """

    pattern: re.Pattern[str]
    severity: SecuritySeverity
    description: str

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


SECURITY_RULES: tuple[SecurityRule, ...] = (
    SecurityRule(
        re.compile(r"password|secret|token|key", re.IGNORECASE),
        SecuritySeverity.HIGH,
        "Potential hardcoded credentials",
    ),
    SecurityRule(
        re.compile(r"eval\s*\(", re.IGNORECASE),
        SecuritySeverity.HIGH,
        "Unsafe eval() usage",
    ),
    SecurityRule(
        re.compile(r"exec\s*\(", re.IGNORECASE),
        SecuritySeverity.MEDIUM,
        "Command execution detected",
    ),
    SecurityRule(
        re.compile(r"innerHTML|outerHTML", re.IGNORECASE),
        SecuritySeverity.MEDIUM,
        "Potential XSS vulnerability",
    ),
    SecurityRule(
        re.compile(r"sql\s*=", re.IGNORECASE),
        SecuritySeverity.MEDIUM,
        "Potential SQL injection",
    ),
)


def iter_added_lines(diff: str) -> Iterator[tuple[int, str]]:
    """Yield ``(position, content)`` for each added line of a diff.

    ``position`` is 1-based within the added lines; ``content`` has the
    leading ``+`` and surrounding whitespace removed.
    """
    added = (
        line
        for line in diff.split("\n")
        if line.startswith("+") and not line.startswith("+++")
    )
    for index, line in enumerate(added):
        yield index + 1, line[1:].strip()


def scan_security_issues(
    diff: str,
    file_path: str,
    rules: tuple[SecurityRule, ...] = SECURITY_RULES,
) -> list[SecurityIssue]:
    """Scan the added lines of a diff for security indicators.

    A line may trigger several rules. Issues come out in line order, then
    rule order within a line.

    Args:
        diff: Unified diff text for one file.
        file_path: Path recorded on every issue.
        rules: Rule table; defaults to SECURITY_RULES.

    Returns:
        The matched issues; empty when nothing matches.
    """
    issues: list[SecurityIssue] = []
    for position, content in iter_added_lines(diff):
        for rule in rules:
            if rule.matches(content):
                issues.append(
                    SecurityIssue(
                        file=file_path,
                        line=position,
                        severity=rule.severity,
                        description=rule.description,
                    )
                )
    return issues
