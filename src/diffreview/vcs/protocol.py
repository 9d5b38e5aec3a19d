"""DiffSource protocol definition.

The metrics pipeline and the review tools only need two read operations
from version control. :class:`~diffreview.git.repository.AsyncGitRepository`
satisfies the protocol structurally, as do the in-memory fakes used in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from diffreview.git.repository import ChangeSummaryEntry


@runtime_checkable
class DiffSource(Protocol):
    """Read-only source of per-file diffs."""

    async def summary(self) -> list[ChangeSummaryEntry]:
        """Return the changed files with insertion/deletion counts, in order."""
        ...

    async def diff(self, file_path: str) -> str:
        """Return the unified diff text for *file_path*."""
        ...
