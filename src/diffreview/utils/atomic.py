"""Atomic file writes via the atomicwrites library.

The target is either completely written or left untouched.
"""

from __future__ import annotations

from pathlib import Path

from atomicwrites import atomic_write  # type: ignore[import-untyped]

__all__ = ["atomic_write_text"]


def atomic_write_text(
    path: Path | str,
    content: str,
    *,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """Write text content to a file atomically.

    Args:
        path: Destination file path.
        content: Text content to write.
        encoding: Character encoding to use.
        mkdir: Create missing parent directories.

    Raises:
        OSError: If the write or rename operation fails.

    Example:
        >>> atomic_write_text("/work/repo/code-review.md", "# Code Review")
    """
    file_path = Path(path)

    if mkdir:
        file_path.parent.mkdir(parents=True, exist_ok=True)

    with atomic_write(str(file_path), mode="w", encoding=encoding, overwrite=True) as f:
        f.write(content)
