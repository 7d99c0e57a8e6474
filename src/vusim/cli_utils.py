# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)


@contextmanager
def exit_on_error(
    title: str = "Error", console: Console | None = None, exit_code: int = 1
) -> Iterator[None]:
    """Print any exception raised in the block as a rich panel and exit.

    `SystemExit` and `KeyboardInterrupt` pass through unchanged.
    """
    try:
        yield
    except (SystemExit, KeyboardInterrupt):
        raise
    except Exception as e:
        _logger.debug(lambda: f"{title}: {e!r}")
        console = console or Console(stderr=True)
        console.print(
            Panel(
                Text(f"{e.__class__.__name__}: {e}", style="red"),
                title=f"[bold red]{title}[/bold red]",
                border_style="red",
                title_align="left",
            )
        )
        console.file.flush()
        sys.exit(exit_code)
