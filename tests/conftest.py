"""Shared test fixtures for activity counter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from activity.counter import Counter


@pytest.fixture()
def counter() -> Counter:
    """Counter with a one-minute tau holding 30 events as of t=1000."""
    return Counter(tau=60.0, value=30.0, timestamp=1000.0)


@pytest.fixture()
def counter_files(tmp_path: Path) -> tuple[Path, Path]:
    """Two counters with equal tau and timestamp saved as JSON.

    Returns the ``(first, second)`` file paths.
    """
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"
    first.write_text(
        json.dumps({"tau": 60.0, "value": 10.0, "timestamp": 500.0}) + "\n", encoding="utf-8"
    )
    second.write_text(
        json.dumps({"tau": 60.0, "value": 20.0, "timestamp": 500.0}) + "\n", encoding="utf-8"
    )
    return first, second
