"""Shared test fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def apple_ttml(fixtures_dir: Path) -> Path:
    return fixtures_dir / "transcript_1000672687584.ttml"


@pytest.fixture
def timed_ttml(fixtures_dir: Path) -> Path:
    return fixtures_dir / "timed_blocks.ttml"


@pytest.fixture
def untimed_ttml(fixtures_dir: Path) -> Path:
    return fixtures_dir / "untimed.ttml"


@pytest.fixture
def library_json(fixtures_dir: Path) -> Path:
    return fixtures_dir / "library.json"
