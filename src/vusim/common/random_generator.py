# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Seedable random number generators.

Every consumer derives its own named generator so that adding a random draw in
one component does not shift the sequence seen by another. Without a seed the
generators are seeded from the OS.
"""

import hashlib
import random

_global_seed: int | None = None


def init(seed: int | None) -> None:
    """Set the seed all subsequently derived generators are based on."""
    global _global_seed
    _global_seed = seed


def reset() -> None:
    init(None)


def derive(name: str) -> random.Random:
    """Return a new generator for `name`, deterministic when a seed is set."""
    if _global_seed is None:
        return random.Random()
    digest = hashlib.sha256(f"{_global_seed}:{name}".encode()).digest()
    return random.Random(int.from_bytes(digest[:8], "big"))
