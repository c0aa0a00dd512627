# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the colrecord configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml

from colrecord.errors import ConfigError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".colrecord.yaml"

SchemaFormat = Literal["orc", "arrow"]

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SCHEMA_FORMATS: tuple[str, ...] = ("orc", "arrow")


@dataclass
class ColrecordConfig:
    """Settings read from a ``.colrecord.yaml`` file.

    Attributes:
        log_level: Root logger level used by the CLI.
        schema_format: How ``colrecord schema`` prints a derived schema.
    """

    log_level: str = "WARNING"
    schema_format: SchemaFormat = "orc"


def load_config(path: Path) -> ColrecordConfig:
    """Load and parse a colrecord configuration file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> ColrecordConfig:
    """Load ``.colrecord.yaml`` from *directory*, or return the defaults if there is none."""
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return ColrecordConfig()
    return load_config(path)


# ################
# Implementation
# ################


def _parse_config(text: str, source_label: str = "<string>") -> ColrecordConfig:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ColrecordConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    config = ColrecordConfig()
    if "log-level" in data:
        level = _require_string(data, "log-level", source_label).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"{source_label}: 'log-level' must be one of {', '.join(LOG_LEVELS)}")
        config.log_level = level
    if "schema-format" in data:
        schema_format = _require_string(data, "schema-format", source_label).lower()
        if schema_format not in SCHEMA_FORMATS:
            raise ConfigError(f"{source_label}: 'schema-format' must be one of {', '.join(SCHEMA_FORMATS)}")
        config.schema_format = schema_format  # type: ignore[assignment]
    return config


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value
