"""Tool factories for the review MCP server."""

from __future__ import annotations

from pathlib import Path
from typing import Any


def resolve_root_dir(args: dict[str, Any], cwd: Path | None) -> Path:
    """Pick the directory a tool call operates on.

    An explicit, non-blank ``root_dir`` argument wins over the server's
    working directory, which wins over the process working directory.
    """
    root_dir = str(args.get("root_dir") or "").strip()
    if root_dir:
        return Path(root_dir)
    return cwd or Path.cwd()
