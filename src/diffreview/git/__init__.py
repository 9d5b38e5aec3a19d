"""Git diff source package using GitPython.

Usage:
    ```python
    from diffreview.git import AsyncGitRepository

    repo = AsyncGitRepository("/path/to/repo")
    entries = await repo.summary()
    text = await repo.diff(entries[0].file_path)
    ```
"""

from __future__ import annotations

from diffreview.git.repository import (
    AsyncGitRepository,
    ChangeSummaryEntry,
    GitRepository,
    parse_numstat,
)

__all__ = [
    "AsyncGitRepository",
    "ChangeSummaryEntry",
    "GitRepository",
    "parse_numstat",
]
