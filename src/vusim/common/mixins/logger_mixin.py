# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any

from vusim.common.vusim_logger import MessageT, VUSimLogger


class VUSimLoggerMixin:
    """Mixin that gives a class its own :class:`VUSimLogger` and logging shortcuts.

    Passes unknown keyword arguments up the MRO so it can be combined with
    other cooperative base classes.
    """

    def __init__(self, logger_name: str | None = None, **kwargs: Any) -> None:
        self.logger = VUSimLogger(logger_name or self.__class__.__name__)
        super().__init__(**kwargs)

    @property
    def is_debug_enabled(self) -> bool:
        return self.logger.is_debug_enabled

    @property
    def is_trace_enabled(self) -> bool:
        return self.logger.is_trace_enabled

    def trace(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.logger.trace(msg, *args, **kwargs)

    def debug(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.logger.error(msg, *args, **kwargs)

    def exception(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.logger.exception(msg, *args, **kwargs)
