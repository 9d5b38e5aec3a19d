"""Data models for diff metrics.

- SecuritySeverity: Enum for indicator severity levels
- SecurityIssue: One flagged line/pattern combination
- CodeMetricsResult: Aggregate metrics for one run

Both models serialize with camelCase keys (``linesAdded``,
``securityIssues``...) when dumped with ``by_alias=True``, which is the shape
the review tools hand to the model.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SecuritySeverity(str, Enum):
    """Severity of a security indicator.

    Examples:
        >>> SecuritySeverity.HIGH.value
        'high'
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SecurityIssue(BaseModel):
    """A line flagged by the security scanner.

    Not a verified vulnerability: the scan is lexical and false positives
    (e.g. a comment mentioning "key") are expected.

    Attributes:
        file: File path relative to the repository root.
        line: 1-based position of the line among the diff's ADDED lines.
            This is not the line number in the file.
        severity: Indicator severity.
        description: Human-readable description of the indicator.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    file: str
    line: int | None = Field(
        default=None,
        ge=1,
        description="Index within the added lines of the diff, not a file line",
    )
    severity: SecuritySeverity
    description: str


class CodeMetricsResult(BaseModel):
    """Metrics for every file in a change set.

    Attributes:
        lines_added: Sum of per-file insertions.
        lines_removed: Sum of per-file deletions.
        files_changed: Number of files processed (after exclusions).
        complexity_score: Mean per-file complexity score, rounded to two
            decimals; the raw accumulator (0) when no file changed.
        security_issues: Issues in file order, then line order.

    Examples:
        >>> result = CodeMetricsResult()
        >>> result.model_dump(by_alias=True)["filesChanged"]
        0
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    lines_added: int = Field(default=0, ge=0)
    lines_removed: int = Field(default=0, ge=0)
    files_changed: int = Field(default=0, ge=0)
    complexity_score: float = 0.0
    security_issues: list[SecurityIssue] = Field(default_factory=list)

    @property
    def has_high_severity_issues(self) -> bool:
        """True if any issue has high severity."""
        return any(
            issue.severity == SecuritySeverity.HIGH for issue in self.security_issues
        )
