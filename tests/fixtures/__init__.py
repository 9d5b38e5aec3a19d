"""Shared test fixtures for the diffreview test suite.

Available Fixtures
==================

Agent SDK mocks (tests/fixtures/agents.py)
    mock_sdk_client, sdk_messages

Diff sources (tests/fixtures/diffs.py)
    fake_diff_source, sample_diffs

Git repositories (tests/fixtures/git.py)
    temp_git_repo, dirty_git_repo
"""
