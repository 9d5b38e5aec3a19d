"""Version-control abstractions consumed by the metrics pipeline."""

from __future__ import annotations

from diffreview.vcs.protocol import DiffSource

__all__ = ["DiffSource"]
