# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any

import orjson

from vusim.clients.auth import AuthSession
from vusim.clients.response_parser import parse_response
from vusim.common.config import SimulationConfig
from vusim.common.constants import DEFAULT_OS_VERSION, HTTP_TIMEOUT_ERROR_CODE
from vusim.common.identity_utils import device_id
from vusim.common.mixins import VUSimLoggerMixin
from vusim.common.models import HttpResponse, RequestResult
from vusim.metrics import SimulationMetrics
from vusim.timing.delays import DelayPolicy
from vusim.transports import HttpTransportProtocol


class ResilientRequestClient(VUSimLoggerMixin):
    """Backend client of one virtual user: auth headers, refresh, retries and error metrics.

    Request failures never raise. They are returned as `RequestResult.error`.
    """

    def __init__(
        self,
        transport: HttpTransportProtocol,
        auth: AuthSession,
        config: SimulationConfig,
        metrics: SimulationMetrics,
        delays: DelayPolicy,
        instance_number: int,
        url_base: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.transport = transport
        self.auth = auth
        self.config = config
        self.metrics = metrics
        self.delays = delays
        self.url_base = url_base if url_base is not None else config.endpoints.url_base
        self.device_id = device_id(instance_number)

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": self.auth.authorization,
            "X-TU-device-Id": self.device_id,
            "X-TU-Client-Version": self.config.client_version,
            "X-TU-Server-Version": self.config.min_server_version,
            "X-TU-OS-Version": DEFAULT_OS_VERSION,
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def get(self, path: str) -> RequestResult:
        return await self._request("GET", path, None)

    async def post(self, path: str, body: Any) -> RequestResult:
        return await self._request("POST", path, orjson.dumps(body))

    async def _request(self, method: str, path: str, body: bytes | None) -> RequestResult:
        refresh = await self.auth.ensure_fresh()
        if refresh is not None and refresh.error is not None:
            return refresh

        retry = self.config.retry
        result = RequestResult()
        for attempt in range(1, retry.max_attempts + 1):
            response = await self.transport.request(
                method,
                self.url_base + path,
                self._headers(with_body=body is not None),
                body=body,
            )
            result = parse_response(response)
            self.trace(lambda: f"{method} {path} {response.status}: {response.body}")
            self._record_error_metrics(path, response, result)

            if response.status is not None and response.status < 500:
                return result
            if attempt < retry.max_attempts:
                await self.delays.delay_range(
                    retry.backoff_min_sec, retry.backoff_max_sec
                )
                self.warning(f"{method} {path} retrying after {result.error}")
        return result

    def _record_error_metrics(
        self, path: str, response: HttpResponse, result: RequestResult
    ) -> None:
        status = response.status
        if status is not None and (status < 200 or 300 <= status < 502):
            code = result.error.code if result.error else None
            if not self.config.is_suppressed(path, code):
                self.metrics.api_errors.add(1)
        elif response.error_code == HTTP_TIMEOUT_ERROR_CODE:
            self.metrics.timeouts.add(1)
        elif response.error_code:
            self.metrics.network_errors.add(1)
