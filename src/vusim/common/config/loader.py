# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Loading of JSON configuration files that may contain comments."""

import re
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from vusim.common.config.simulation_config import SimulationConfig
from vusim.common.exceptions import ConfigurationError
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)

# A string literal, a line comment or a block comment. Strings are matched first
# so comment markers inside them (e.g. URLs) survive.
_TOKEN_PATTERN = re.compile(
    r'(?P<string>"(?:[^"\\]|\\.)*")|(?P<line>//[^\n]*)|(?P<block>/\*.*?\*/)',
    re.DOTALL,
)


def strip_json_comments(text: str) -> str:
    """Remove `//` and `/* */` comments from JSON text, leaving strings intact."""

    def _replace(match: re.Match[str]) -> str:
        return match.group("string") or ""

    return _TOKEN_PATTERN.sub(_replace, text)


def read_json_with_comments(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Unable to read config file {path}: {e}") from e
    try:
        document = orjson.loads(strip_json_comments(text))
    except orjson.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
    if not isinstance(document, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return document


def load_config(
    defaults_file: Path,
    overrides_file: Path | None = None,
    **overrides: Any,
) -> SimulationConfig:
    """Load the simulation config.

    Top-level keys of the overrides file replace those of the defaults file,
    then keyword overrides (from the command line) replace both.

    Raises:
        ConfigurationError: If a file cannot be read or the merged document
            does not validate.
    """
    document = read_json_with_comments(defaults_file)
    if overrides_file is not None:
        document.update(read_json_with_comments(overrides_file))
    document.update({k: v for k, v in overrides.items() if v is not None})
    _logger.debug(lambda: f"Merged config keys: {sorted(document)}")
    try:
        return SimulationConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid simulation config:\n{e}") from e
