# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Process level settings read from `VUSIM_*` environment variables.

Sections are grouped by concern and accessed as attributes of the
:data:`Environment` singleton, e.g. `Environment.HTTP.CONNECTION_LIMIT`.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _HTTPSettings(BaseSettings):
    """Connection pool and socket tuning for the shared aiohttp connector."""

    model_config = SettingsConfigDict(env_prefix="VUSIM_HTTP_", case_sensitive=False)

    CONNECTION_LIMIT: int = Field(
        default=2500, ge=1, description="Maximum open connections in the pool."
    )
    KEEPALIVE_TIMEOUT: int = Field(
        default=300, ge=1, description="Seconds an idle pooled connection is kept."
    )
    TTL_DNS_CACHE: int = Field(default=300, ge=0, description="DNS cache TTL (s).")
    REQUEST_TIMEOUT: float = Field(
        default=60.0, gt=0, description="Total timeout of a single request (s)."
    )
    TCP_KEEPIDLE: int = Field(default=60, ge=1)
    TCP_KEEPINTVL: int = Field(default=30, ge=1)
    TCP_KEEPCNT: int = Field(default=1, ge=1)
    TCP_USER_TIMEOUT: int = Field(default=30000, ge=0, description="ms")
    SO_RCVBUF: int = Field(default=1024 * 64, ge=1024)
    SO_SNDBUF: int = Field(default=1024 * 64, ge=1024)


class _TaskSettings(BaseSettings):
    """Identity of this load generator process within a distributed test."""

    model_config = SettingsConfigDict(env_prefix="VUSIM_TASK_", case_sensitive=False)

    INDEX: int = Field(
        default=0,
        ge=0,
        description="Index of this task. Task 0 performs global set-up work.",
    )
    TEST_ID: str = Field(
        default="local", description="Identifier shared by all tasks of one test."
    )


class _ConfigSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VUSIM_CONFIG_", case_sensitive=False)

    DEFAULTS_FILE: Path = Field(
        default=Path(__file__).resolve().parent.parent / "configs" / "defaults.json",
        description="JSON (with comments) file holding the default simulation config.",
    )
    OVERRIDES_FILE: Path | None = Field(
        default=None,
        description="Optional JSON (with comments) file whose top-level keys replace the defaults.",
    )


class _LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VUSIM_LOG_", case_sensitive=False)

    LEVEL: str = Field(default="INFO", description="Root log level.")
    FILE: Path | None = Field(default=None, description="Optional log file.")
    RICH_TRACEBACKS: bool = Field(default=True)
    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=4000, ge=80, description="Longer console messages are truncated."
    )


class _Environment(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VUSIM_", case_sensitive=False)

    HTTP: _HTTPSettings = Field(default_factory=_HTTPSettings)
    TASK: _TaskSettings = Field(default_factory=_TaskSettings)
    CONFIG: _ConfigSettings = Field(default_factory=_ConfigSettings)
    LOGGING: _LoggingSettings = Field(default_factory=_LoggingSettings)


Environment = _Environment()
