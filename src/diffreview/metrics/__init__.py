"""Diff metrics: lexical complexity and naive security indicators.

Public API:
    - compute_metrics / calculate_code_metrics: aggregate over a change set
    - estimate_complexity: score one diff
    - scan_security_issues: flag added lines of one diff
    - CodeMetricsResult, SecurityIssue, SecuritySeverity: result models
"""

from __future__ import annotations

from diffreview.metrics.aggregator import calculate_code_metrics, compute_metrics
from diffreview.metrics.complexity import (
    BASE_COMPLEXITY,
    COMPLEXITY_RULES,
    ComplexityRule,
    estimate_complexity,
    round_score,
)
from diffreview.metrics.models import (
    CodeMetricsResult,
    SecurityIssue,
    SecuritySeverity,
)
from diffreview.metrics.security import (
    SECURITY_RULES,
    SecurityRule,
    iter_added_lines,
    scan_security_issues,
)

__all__ = [
    "BASE_COMPLEXITY",
    "COMPLEXITY_RULES",
    "SECURITY_RULES",
    "CodeMetricsResult",
    "ComplexityRule",
    "SecurityIssue",
    "SecurityRule",
    "SecuritySeverity",
    "calculate_code_metrics",
    "compute_metrics",
    "estimate_complexity",
    "iter_added_lines",
    "round_score",
    "scan_security_issues",
]
