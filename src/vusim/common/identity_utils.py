# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Deterministic identities for simulated users.

Instance number `n` maps to the phone number `+1AAA5550NNN` where `AAA` is
`n // 100` and `NNN` is `100 + n % 100`, and to the username `load_nnnnn`.
"""

from vusim.common.constants import PHONE_AREA_MAX, USERNAME_NUMBER_MAX, USERNAME_PREFIX


def phone_number(n: int) -> str:
    """Return the phone number of instance `n`.

    Raises:
        ValueError: If `n` is negative or needs an area code above 999.
    """
    if n < 0:
        raise ValueError(f"Number must be >= 0 ({n})")
    area = n // 100
    if area > PHONE_AREA_MAX:
        raise ValueError(f"Number too big ({n})")
    return f"+1{area:03d}5550{100 + n % 100}"


def number_from_phone(phone: str) -> int:
    """Inverse of :func:`phone_number`. Malformed input yields 0."""
    digits = phone[2:5] + phone[10:]
    try:
        return max(0, int(digits))
    except ValueError:
        return 0


def username_from_number(n: int) -> str:
    """Return the username of instance `n`.

    Raises:
        ValueError: If `n` does not fit in five digits.
    """
    if n < 0 or n > USERNAME_NUMBER_MAX:
        raise ValueError(f"Number too big ({n})")
    return f"{USERNAME_PREFIX}{n:05d}"


def username_from_phone(phone: str) -> str:
    return username_from_number(number_from_phone(phone))


def device_id(instance_number: int) -> str:
    """Device id header value: a UUID whose last group is the zero padded instance number."""
    return f"00000000-0000-0000-0000-{instance_number % 10**12:012d}"
