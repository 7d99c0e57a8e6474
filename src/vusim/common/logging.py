# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console and file logging for the load generator.

Usage::

    from vusim.common.logging import setup_rich_logging

    setup_rich_logging("INFO", log_file=None, log_levels={"clients": "DEBUG"})
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from rich.console import Console, ConsoleRenderable, Group
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from vusim.common.environment import Environment
from vusim.common.vusim_logger import _TRACE, VUSimLogger

_logger = VUSimLogger(__name__)

_PACKAGE_LOGGER = "vusim"


def parse_level(level: str | int) -> int:
    """Convert a level name (including TRACE) or number to a logging level."""
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name == "TRACE":
        return _TRACE
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_rich_logging(
    level: str | int,
    log_file: Path | None = None,
    log_levels: dict[str, str] | None = None,
    console: Console | None = None,
) -> None:
    """Set up rich logging on the root logger.

    Args:
        level: Root log level.
        log_file: Also write plain text logs to this file.
        log_levels: Per-logger overrides keyed by logger name suffix under the
            `vusim` package (e.g. `"clients.request_client"`). The key `"*"`
            overrides the root level.
    """
    log_levels = dict(log_levels or {})
    root_level = parse_level(log_levels.pop("*", level))
    logging.root.setLevel(root_level)

    for existing_handler in logging.root.handlers[:]:
        logging.root.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=Environment.LOGGING.RICH_TRACEBACKS,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    logging.root.addHandler(rich_handler)

    if log_file is not None:
        logging.root.addHandler(create_file_handler(log_file, root_level))

    for suffix, suffix_level in log_levels.items():
        name = (
            suffix
            if suffix.startswith(_PACKAGE_LOGGER)
            else f"{_PACKAGE_LOGGER}.{suffix}"
        )
        logging.getLogger(name).setLevel(parse_level(suffix_level))

    _logger.debug(lambda: f"Logging initialized with level: {root_level}")


def create_file_handler(log_file: Path, level: str | int) -> logging.FileHandler:
    """Configure a file handler for logging."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return file_handler


class LogHighlighter(RegexHighlighter):
    """Highlights URLs, numbers, quoted strings and key=value pairs in log messages."""

    base_style = "repr."
    highlights = [
        re.compile(
            r"(?P<url>https?://[^\s\]\)'\"]+)"
            r"|(?P<number>(?<![.\w])-?\d+\.?\d*(?:ms|s)?\b)"
            r"|(?P<str>\"[^\"]*\"|'[^']*')"
            r"|\b(?P<attrib_name>\w+)=(?P<attrib_value>[^\s,=\[\](){}]+)?"
        )
    ]


class CustomRichHandler(RichHandler):
    """Rich handler rendering `HH:MM:SS.mmm LEVEL    message (logger:lineno)`."""

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.highlighter = LogHighlighter()

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]

        line = Text()
        line.append(f"{timestamp} ", style="log.time")
        line.append(f"{record.levelname:<8} ", style=level_style)
        body = Text(message)
        self.highlighter.highlight(body)
        line.append_text(body)
        line.append(f" ({record.name}:{record.lineno})", style="dim italic")

        if traceback is not None:
            return Group(line, traceback)
        return line
