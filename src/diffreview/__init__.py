"""diffreview - automated code review for git working directories.

Collects the uncommitted diff of a repository, computes lexical diff metrics
(complexity score and security indicators) and drives a Claude agent that
writes a structured review, a conventional commit message and a markdown
report.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
