# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Protocol, runtime_checkable

from vusim.common.models import HttpResponse


@runtime_checkable
class HttpTransportProtocol(Protocol):
    """Sends one HTTP request and reports what happened. Never raises for I/O errors."""

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> HttpResponse: ...

    async def close(self) -> None: ...
