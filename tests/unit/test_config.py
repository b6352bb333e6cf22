"""Tests for settings resolution (defaults, stepcalc.toml, environment)."""

from __future__ import annotations

from pathlib import Path

import pytest

from stepcalc.core.config import (
    CONFIG_FILENAME,
    MAX_INPUT_LENGTH_VAR,
    PRECISION_VAR,
    TRANSCRIPTS_DIR_VAR,
    load_settings,
)
from stepcalc.core.errors import ConfigError
from stepcalc.core.expression_lang.tokenizer import MAX_INPUT_LENGTH
from stepcalc.core.numeric import DISPLAY_PRECISION


class TestLoadSettings:
    def test_defaults(self, clean_env: Path) -> None:
        settings = load_settings(clean_env)
        assert settings.max_input_length == MAX_INPUT_LENGTH
        assert settings.precision == DISPLAY_PRECISION
        assert settings.transcripts_dir == clean_env / "evaluations"

    def test_defaults_to_working_directory(self, clean_env: Path) -> None:
        resolved = load_settings().transcripts_dir.resolve()
        assert resolved == (clean_env / "evaluations").resolve()

    def test_toml_file(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text(
            """
[calculator]
max_input_length = 2000
precision = 4
transcripts_dir = "saved"
"""
        )
        settings = load_settings(clean_env)
        assert settings.max_input_length == 2000
        assert settings.precision == 4
        assert settings.transcripts_dir == clean_env / "saved"

    def test_other_tables_are_ignored(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text('[tool]\nname = "x"\n')
        assert load_settings(clean_env).precision == DISPLAY_PRECISION

    def test_environment_overrides_file(
        self, clean_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (clean_env / CONFIG_FILENAME).write_text("[calculator]\nprecision = 4\n")
        monkeypatch.setenv(PRECISION_VAR, "6")
        monkeypatch.setenv(MAX_INPUT_LENGTH_VAR, "50")
        settings = load_settings(clean_env)
        assert settings.precision == 6
        assert settings.max_input_length == 50

    def test_absolute_transcripts_dir(
        self, clean_env: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        elsewhere = tmp_path_factory.mktemp("elsewhere")
        monkeypatch.setenv(TRANSCRIPTS_DIR_VAR, str(elsewhere))
        assert load_settings(clean_env).transcripts_dir == elsewhere

    def test_invalid_toml(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text("[calculator\n")
        with pytest.raises(ConfigError, match="Invalid stepcalc.toml"):
            load_settings(clean_env)

    def test_non_integer_value(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(PRECISION_VAR, "two")
        with pytest.raises(ConfigError, match="precision must be an integer"):
            load_settings(clean_env)

    def test_negative_precision(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text("[calculator]\nprecision = -1\n")
        with pytest.raises(ConfigError, match="precision must be at least 0"):
            load_settings(clean_env)

    def test_precision_above_maximum(
        self, clean_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(PRECISION_VAR, "400")
        with pytest.raises(ConfigError, match="precision must be at most 15"):
            load_settings(clean_env)

    def test_precision_at_maximum(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text("[calculator]\nprecision = 15\n")
        assert load_settings(clean_env).precision == 15

    def test_zero_length_ceiling(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text("[calculator]\nmax_input_length = 0\n")
        with pytest.raises(ConfigError, match="max_input_length must be at least 1"):
            load_settings(clean_env)

    def test_boolean_is_rejected(self, clean_env: Path) -> None:
        (clean_env / CONFIG_FILENAME).write_text("[calculator]\nprecision = true\n")
        with pytest.raises(ConfigError):
            load_settings(clean_env)
