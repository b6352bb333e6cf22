"""
Configuration for the stepcalc calculator and CLI.

Settings are resolved in this order (later wins):
    1. Defaults on CalculatorSettings
    2. ``[calculator]`` table of ``stepcalc.toml`` in the working directory
    3. Environment variables STEPCALC_MAX_INPUT_LENGTH, STEPCALC_PRECISION,
       STEPCALC_TRANSCRIPTS_DIR

Example stepcalc.toml:

    [calculator]
    max_input_length = 2000
    precision = 4
    transcripts_dir = "evaluations"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stepcalc.core.errors import ConfigError
from stepcalc.core.expression_lang.tokenizer import MAX_INPUT_LENGTH
from stepcalc.core.numeric import DISPLAY_PRECISION, MAX_PRECISION

CONFIG_FILENAME = "stepcalc.toml"
DEFAULT_TRANSCRIPTS_DIR = "evaluations"

MAX_INPUT_LENGTH_VAR = "STEPCALC_MAX_INPUT_LENGTH"
PRECISION_VAR = "STEPCALC_PRECISION"
TRANSCRIPTS_DIR_VAR = "STEPCALC_TRANSCRIPTS_DIR"
LOG_LEVEL_VAR = "STEPCALC_LOG_LEVEL"


@dataclass
class CalculatorSettings:
    """Calculator configuration."""

    max_input_length: int = MAX_INPUT_LENGTH
    precision: int = DISPLAY_PRECISION  # decimal places for function results
    transcripts_dir: Path = Path(DEFAULT_TRANSCRIPTS_DIR)


def load_settings(root: Path | None = None) -> CalculatorSettings:
    """Load settings from ``root/stepcalc.toml`` and the environment.

    Args:
        root: Directory holding stepcalc.toml (default: current directory).
            A relative transcripts_dir is resolved against it.

    Raises:
        ConfigError: If the file is not valid TOML or a value is invalid.
    """
    root = root or Path.cwd()
    settings = CalculatorSettings()

    config_path = root / CONFIG_FILENAME
    if config_path.exists():
        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid {CONFIG_FILENAME}: {e}") from e
        _apply(settings, data.get("calculator", {}), source=CONFIG_FILENAME)

    env_values: dict[str, Any] = {}
    if MAX_INPUT_LENGTH_VAR in os.environ:
        env_values["max_input_length"] = os.environ[MAX_INPUT_LENGTH_VAR]
    if PRECISION_VAR in os.environ:
        env_values["precision"] = os.environ[PRECISION_VAR]
    if TRANSCRIPTS_DIR_VAR in os.environ:
        env_values["transcripts_dir"] = os.environ[TRANSCRIPTS_DIR_VAR]
    _apply(settings, env_values, source="environment")

    if not settings.transcripts_dir.is_absolute():
        settings.transcripts_dir = root / settings.transcripts_dir
    return settings


def _apply(settings: CalculatorSettings, values: dict[str, Any], *, source: str) -> None:
    if "max_input_length" in values:
        settings.max_input_length = _int_setting(
            values["max_input_length"], "max_input_length", source, minimum=1
        )
    if "precision" in values:
        settings.precision = _int_setting(
            values["precision"], "precision", source, maximum=MAX_PRECISION
        )
    if "transcripts_dir" in values:
        settings.transcripts_dir = Path(str(values["transcripts_dir"]))


def _int_setting(
    value: Any, name: str, source: str, minimum: int = 0, maximum: int | None = None
) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer ({source}), got {value!r}") from None
    if isinstance(value, bool) or number < minimum:
        raise ConfigError(f"{name} must be at least {minimum} ({source}), got {value!r}")
    if maximum is not None and number > maximum:
        raise ConfigError(f"{name} must be at most {maximum} ({source}), got {value!r}")
    return number
