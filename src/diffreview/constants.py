"""diffreview constants: Claude model identifiers and review defaults.

Single source of truth for values shared between configuration, the review
tools and the CLI.
"""

from __future__ import annotations

# =============================================================================
# Models
# =============================================================================

#: Latest Claude Sonnet 4.5 model (balanced performance and cost)
CLAUDE_SONNET_LATEST: str = "claude-sonnet-4-5-20250929"

#: Default model for the review agent
DEFAULT_MODEL: str = CLAUDE_SONNET_LATEST

#: Maximum output tokens for all Claude 4.5 variants
MAX_OUTPUT_TOKENS: int = 64000

# =============================================================================
# Review defaults
# =============================================================================

#: Paths skipped before a diff is fetched (build output, lockfiles)
DEFAULT_EXCLUDE_PATHS: tuple[str, ...] = ("dist", "bun.lock")

#: Default markdown report filename, relative to the reviewed directory
DEFAULT_REPORT_FILENAME: str = "code-review.md"

#: Project configuration filename looked up in the working directory
PROJECT_CONFIG_FILENAME: str = "diffreview.yaml"
