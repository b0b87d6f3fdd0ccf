"""Shared pytest configuration."""

import pytest


@pytest.fixture(autouse=True)
def _no_progress_bars(monkeypatch):
    """Keep tqdm output out of test logs."""
    monkeypatch.setenv("BYTEPAIR_DISABLE_PROGRESS", "1")
