"""Lexical complexity estimation for a unified diff.

A weighted keyword count, not an AST analysis. The rules run over the whole
diff text, so constructs on removed lines and in headers count as well as
those on added lines. Callers who want net-added complexity must filter the
text themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

__all__ = [
    "BASE_COMPLEXITY",
    "COMPLEXITY_RULES",
    "ComplexityRule",
    "estimate_complexity",
    "round_score",
]

#: Score of a diff that matches no rule
BASE_COMPLEXITY: float = 1.0

_HUNDREDTHS = Decimal("0.01")


def round_score(value: float) -> float:
    """Round a score to two decimals, ties away from zero.

    Works on the exact binary value of *value*, so 1.125 (exactly
    representable) becomes 1.13 while 1.005 (stored as 1.00499...) becomes
    1.0. The builtin round() would send 1.125 to the even 1.12.

    Examples:
        >>> round_score(4.5 / 4)
        1.13
    """
    return float(Decimal(value).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class ComplexityRule:
    """One weighted pattern of the complexity table.

    Attributes:
        name: Short identifier, used in logs and tests.
        pattern: Compiled regex counted with ``findall``.
        weight: Score added per occurrence.
    """

    name: str
    pattern: re.Pattern[str]
    weight: float

    def count(self, text: str) -> int:
        return len(self.pattern.findall(text))

    def score(self, text: str) -> float:
        return self.count(text) * self.weight


COMPLEXITY_RULES: tuple[ComplexityRule, ...] = (
    ComplexityRule("function", re.compile(r"function\s+\w+\s*\("), 1.0),
    ComplexityRule("if", re.compile(r"if\s*\("), 0.5),
    ComplexityRule("else", re.compile(r"else\s*\{"), 0.3),
    ComplexityRule("for", re.compile(r"for\s*\("), 1.0),
    ComplexityRule("while", re.compile(r"while\s*\("), 1.0),
    ComplexityRule("switch", re.compile(r"switch\s*\("), 0.8),
    ComplexityRule("ternary", re.compile(r"\?\s*:"), 0.2),
    ComplexityRule("try", re.compile(r"try\s*\{"), 0.5),
    ComplexityRule("catch", re.compile(r"catch\s*\("), 0.5),
)


def estimate_complexity(
    diff: str,
    rules: tuple[ComplexityRule, ...] = COMPLEXITY_RULES,
) -> float:
    """Estimate the complexity of a diff.

    Args:
        diff: Unified diff text for one file.
        rules: Rule table; defaults to COMPLEXITY_RULES.

    Returns:
        ``1.0 + sum(count * weight)`` rounded by round_score. An empty diff
        scores exactly 1.0.

    Examples:
        >>> estimate_complexity("")
        1.0
        >>> estimate_complexity("+if (a) {}\\n+if (b) {}\\n+if (c) {}")
        2.5
    """
    score = BASE_COMPLEXITY
    for rule in rules:
        score += rule.score(diff)
    return round_score(score)
