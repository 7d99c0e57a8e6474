# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import re

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}

_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d)")
_FULL_PATTERN = re.compile(r"^(?:\d+(?:\.\d+)?(?:ms|s|m|h|d))+$")


def parse_duration(duration: str | float | int) -> float:
    """Parse a duration into seconds.

    Accepts numbers (seconds), numeric strings (seconds) and unit strings made
    of one or more `<number><unit>` components with units `ms`, `s`, `m`,
    `h` and `d`, e.g. `"90s"`, `"1h30m"`, `"250ms"`.

    Raises:
        ValueError: If the value is negative or not a valid duration.
    """
    if isinstance(duration, bool):
        raise ValueError(f"Invalid duration: {duration!r}")
    if isinstance(duration, int | float):
        seconds = float(duration)
    else:
        text = duration.strip().replace(" ", "")
        try:
            seconds = float(text)
        except ValueError:
            if not _FULL_PATTERN.match(text):
                raise ValueError(f"Invalid duration: {duration!r}") from None
            seconds = sum(
                float(value) * _UNIT_SECONDS[unit]
                for value, unit in _COMPONENT_PATTERN.findall(text)
            )
    if seconds < 0:
        raise ValueError(f"Duration must be >= 0: {duration!r}")
    return seconds
