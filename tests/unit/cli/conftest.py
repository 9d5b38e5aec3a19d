"""Shared fixtures for CLI command tests.

Common fixtures available from parent conftest.py:
- cli_runner: Click CLI test runner
- temp_dir: Temporary directory for test files
- clean_env: Clean environment without DIFFREVIEW_ vars
- sample_config_yaml: Sample YAML config content
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def isolated_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    clean_env: None,
) -> Path:
    """Run from an empty directory with no user or project config.

    Returns:
        The directory used as both cwd and home.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(tmp_path)
    return tmp_path
