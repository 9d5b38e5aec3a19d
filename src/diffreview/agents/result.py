"""Agent usage value object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AgentUsage:
    """Usage statistics for one agent run.

    Immutable value object holding the token usage, cost and timing that the
    Claude SDK reports in its final ResultMessage.

    Attributes:
        input_tokens: Number of input tokens consumed.
        output_tokens: Number of output tokens generated.
        total_cost_usd: Total cost in USD (may be None if unavailable).
        duration_ms: Execution duration in milliseconds.

    Example:
        ```python
        usage = AgentUsage(
            input_tokens=100,
            output_tokens=200,
            total_cost_usd=0.003,
            duration_ms=1500,
        )
        print(f"Total tokens: {usage.total_tokens}")  # 300
        ```
    """

    input_tokens: int
    output_tokens: int
    total_cost_usd: float | None
    duration_ms: int

    def __post_init__(self) -> None:
        """Validate field values after initialization."""
        if self.input_tokens < 0:
            raise ValueError("input_tokens must be non-negative")
        if self.output_tokens < 0:
            raise ValueError("output_tokens must be non-negative")
        if self.duration_ms < 0:
            raise ValueError("duration_ms must be non-negative")
        if self.total_cost_usd is not None and self.total_cost_usd < 0:
            raise ValueError("total_cost_usd must be non-negative")

    @property
    def total_tokens(self) -> int:
        """Total tokens (input + output)."""
        return self.input_tokens + self.output_tokens
