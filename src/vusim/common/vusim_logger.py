# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Thin wrapper around :mod:`logging` with a TRACE level and lazy messages.

Messages may be passed as zero-argument callables, which are only evaluated
when the level is enabled. This keeps per-request debug formatting off the hot
path of thousands of concurrent virtual users::

    _logger = VUSimLogger(__name__)
    _logger.debug(lambda: f"GET {path} {status}: {body}")
"""

import logging
from collections.abc import Callable
from typing import Any

_TRACE = logging.DEBUG - 5
_DEBUG = logging.DEBUG
_INFO = logging.INFO
_WARNING = logging.WARNING
_ERROR = logging.ERROR
_CRITICAL = logging.CRITICAL

logging.addLevelName(_TRACE, "TRACE")

MessageT = str | Callable[[], str]


class VUSimLogger:
    """Logger that supports lazily evaluated messages and a TRACE level."""

    def __init__(self, logger_name: str) -> None:
        self.logger_name = logger_name
        self._logger = logging.getLogger(logger_name)

    @property
    def level(self) -> int:
        return self._logger.getEffectiveLevel()

    def set_level(self, level: int | str) -> None:
        self._logger.setLevel(level)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def is_trace_enabled(self) -> bool:
        return self._logger.isEnabledFor(_TRACE)

    @property
    def is_debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(_DEBUG)

    def log(self, level: int, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, **kwargs)

    def trace(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_TRACE, msg, *args, **kwargs)

    def debug(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_DEBUG, msg, *args, **kwargs)

    def info(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_INFO, msg, *args, **kwargs)

    def warning(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_WARNING, msg, *args, **kwargs)

    def error(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_ERROR, msg, *args, **kwargs)

    def exception(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(_ERROR, msg, *args, **kwargs)

    def critical(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_CRITICAL, msg, *args, **kwargs)
