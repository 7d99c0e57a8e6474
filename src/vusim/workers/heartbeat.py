# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
import time
from collections.abc import Callable

from vusim.common.constants import NANOS_PER_SECOND
from vusim.common.mixins import VUSimLoggerMixin
from vusim.transports import HttpTransportProtocol

HEARTBEAT_INTERVAL_SEC = 10.0


class HeartbeatMonitor(VUSimLoggerMixin):
    """Polls the backend health endpoint for the length of the test.

    Takes the place of one VU so that a long run leaves a periodic trace of
    backend availability in the logs.
    """

    def __init__(
        self,
        transport: HttpTransportProtocol,
        url: str,
        duration_sec: float,
        interval_sec: float = HEARTBEAT_INTERVAL_SEC,
        clock: Callable[[], float] = time.monotonic,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.transport = transport
        self.url = url
        self.duration_sec = duration_sec
        self.interval_sec = interval_sec
        self._clock = clock
        self.successes = 0
        self.failures = 0

    async def run(self) -> None:
        start = self._clock()
        while self._clock() - start < self.duration_sec:
            response = await self.transport.request("GET", self.url, {})
            if response.status == 200:
                self.successes += 1
            else:
                self.failures += 1
            self.info(
                f"{self.successes} succ {self.failures} fail "
                f"{response.latency_ns / NANOS_PER_SECOND:.3f}s rt"
            )
            await asyncio.sleep(self.interval_sec)
