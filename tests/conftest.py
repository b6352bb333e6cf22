"""Shared pytest fixtures for stepcalc tests."""

from pathlib import Path

import pytest

from stepcalc.core.config import (
    LOG_LEVEL_VAR,
    MAX_INPUT_LENGTH_VAR,
    PRECISION_VAR,
    TRANSCRIPTS_DIR_VAR,
    CalculatorSettings,
)
from stepcalc.core.expression_lang import Evaluator


@pytest.fixture
def evaluator() -> Evaluator:
    """Return a fresh evaluation session."""
    return Evaluator()


@pytest.fixture
def transcripts_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) transcripts directory under tmp_path."""
    return tmp_path / "evaluations"


@pytest.fixture
def calc_settings(transcripts_dir: Path) -> CalculatorSettings:
    """Return default settings writing transcripts under tmp_path."""
    return CalculatorSettings(transcripts_dir=transcripts_dir)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty working directory with no STEPCALC_* overrides."""
    for var in (MAX_INPUT_LENGTH_VAR, PRECISION_VAR, TRANSCRIPTS_DIR_VAR, LOG_LEVEL_VAR):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
