"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample_input_path() -> Path:
    return Path(__file__).resolve().parents[2] / "data" / "sample_week1.json"
