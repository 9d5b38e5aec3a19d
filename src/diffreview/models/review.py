"""Data models for code review runs.

- UsageStats: Token usage and cost tracking
- ReviewContext: Input context for review execution
- ReviewResult: Outcome of a review run

All models use Pydantic v2 for validation and serialization.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from diffreview.constants import DEFAULT_REPORT_FILENAME


class UsageStats(BaseModel):
    """Usage statistics for agent execution.

    Attributes:
        input_tokens: Number of tokens in input/prompt.
        output_tokens: Number of tokens in response.
        total_cost: Estimated cost in USD (if available).
        duration_ms: Execution time in milliseconds.

    Examples:
        >>> stats = UsageStats(
        ...     input_tokens=1000,
        ...     output_tokens=500,
        ...     total_cost=0.025,
        ...     duration_ms=2500
        ... )
        >>> stats.total_tokens
        1500
    """

    input_tokens: int = Field(ge=0, description="Number of tokens in input/prompt")
    output_tokens: int = Field(ge=0, description="Number of tokens in response")
    total_cost: float | None = Field(
        default=None, ge=0, description="Estimated cost in USD"
    )
    duration_ms: int = Field(ge=0, description="Execution time in milliseconds")

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class ReviewContext(BaseModel):
    """Context for a code review run.

    Attributes:
        cwd: Directory whose uncommitted changes are reviewed.
        commit_message: Ask the agent for a conventional commit message.
        write_report: Ask the agent to save the review as markdown.
        report_filename: Report filename, relative to ``cwd``.

    Examples:
        >>> context = ReviewContext(cwd=Path("/work/repo"), write_report=False)
        >>> context.report_filename
        'code-review.md'
    """

    cwd: Path = Field(
        default_factory=Path.cwd, description="Directory whose changes are reviewed"
    )
    commit_message: bool = Field(
        default=True, description="Generate a conventional commit message"
    )
    write_report: bool = Field(
        default=True, description="Write the review to a markdown file"
    )
    report_filename: str = Field(
        default=DEFAULT_REPORT_FILENAME, description="Report filename under cwd"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("report_filename")
    @classmethod
    def check_report_filename(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("report_filename must be non-empty")
        return v


class ReviewResult(BaseModel):
    """Outcome of a code review run.

    Attributes:
        success: Whether the agent produced a review.
        review: Review text (the saved report body when one was written).
        commit_message: Conventional commit message, if one was generated.
        report_path: Path of the written markdown report, if any.
        usage: Token usage and timing.
        metadata: Run details (cwd, duration_ms, timestamp, tool_calls).
    """

    success: bool
    review: str = ""
    commit_message: str | None = None
    report_path: str | None = None
    usage: UsageStats | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_report(self) -> bool:
        return self.report_path is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return self.model_dump(mode="json")
