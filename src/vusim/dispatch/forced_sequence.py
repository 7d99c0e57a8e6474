# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Deterministic override of random action selection, for reproducing a scenario.

A descriptor `"home.play_random"` forces the `home` dispatcher to run
`play_random` the next time it dispatches. A conditional descriptor
`"home?.play_random"` is dropped, instead of waited for, when the next
dispatch comes from a different dispatcher.
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from vusim.common.exceptions import ConfigurationError
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)


@dataclass(frozen=True, slots=True)
class ForcedEntry:
    dispatcher_name: str
    action_name: str
    conditional: bool = False

    @classmethod
    def parse(cls, descriptor: str) -> "ForcedEntry":
        dispatcher, _, action = descriptor.partition(".")
        conditional = dispatcher.endswith("?")
        dispatcher = dispatcher.rstrip("?")
        if not dispatcher or not action:
            raise ConfigurationError(
                f"Invalid forced action '{descriptor}', expected '<dispatcher>[?].<action>'"
            )
        return cls(dispatcher, action, conditional)


class ForcedSequence:
    """Ordered forced entries and a cursor shared by every dispatcher it is given to.

    The cursor is lock-guarded, but sharing one sequence between several VUs
    interleaves their dispatches. Use it with a single VU.
    """

    def __init__(self, entries: Iterable[ForcedEntry]) -> None:
        self.entries = tuple(entries)
        self._cursor = 0
        self._lock = threading.Lock()

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[str]) -> "ForcedSequence":
        return cls(ForcedEntry.parse(d) for d in descriptors)

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    @property
    def exhausted(self) -> bool:
        with self._lock:
            return self._cursor >= len(self.entries)

    def take(self, dispatcher_name: str) -> str | None:
        """Consume the next entry if it applies to `dispatcher_name`.

        Returns:
            The action name to run, or None to fall back to a random draw.
        """
        with self._lock:
            if self._cursor >= len(self.entries):
                return None
            entry = self.entries[self._cursor]
            if entry.dispatcher_name == dispatcher_name:
                self._cursor += 1
                _logger.debug(
                    lambda: f"Forced action {dispatcher_name}.{entry.action_name} "
                    f"({self._cursor}/{len(self.entries)})"
                )
                return entry.action_name
            if entry.conditional:
                self._cursor += 1
                _logger.debug(
                    lambda: f"Skipped conditional forced action "
                    f"{entry.dispatcher_name}.{entry.action_name} in {dispatcher_name}"
                )
            return None
