# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
import socket
import time
from typing import Any

import aiohttp

from vusim.common.constants import HTTP_TIMEOUT_ERROR_CODE, NANOS_PER_SECOND
from vusim.common.environment import Environment
from vusim.common.mixins import VUSimLoggerMixin
from vusim.common.models import HttpResponse
from vusim.common.vusim_logger import VUSimLogger
from vusim.transports.http_defaults import AioHttpDefaults, SocketDefaults

_logger = VUSimLogger(__name__)

GENERIC_ERROR_CODE = 1000
"""Transport error code of a failure that is neither a timeout nor a connect error."""

CONNECT_ERROR_CODE = 1212
"""Transport error code of a failure to establish the TCP connection."""


class AioHttpClient(VUSimLoggerMixin):
    """HTTP client shared by all virtual users of a process.

    Every request reuses one pooled TCP connector. Failures never raise: a
    response without a status carries the transport error message and code.
    """

    def __init__(
        self,
        timeout: float | None = None,
        tcp_kwargs: dict[str, Any] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.tcp_connector: aiohttp.TCPConnector | None = create_tcp_connector(
            **tcp_kwargs or {}
        )
        self.timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else Environment.HTTP.REQUEST_TIMEOUT
        )
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=self.tcp_connector,
                timeout=self.timeout,
                skip_auto_headers=["User-Agent"],
                connector_owner=False,
            )
        return self._session

    async def close(self) -> None:
        """Close the client."""
        if self._session is not None:
            await self._session.close()
            self._session = None
        if self.tcp_connector:
            await self.tcp_connector.close()
            self.tcp_connector = None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> HttpResponse:
        """Send a request and capture its status, body and timing.

        Args:
            method: HTTP method (GET, POST)
            url: The URL to send the request to
            headers: Request headers
            body: Request payload

        Returns:
            HttpResponse with the status and body, or the transport error
        """
        self.trace(lambda: f"Sending {method} request to {url}")
        response = HttpResponse(
            method=method,
            url=url,
            request_headers=headers,
            start_perf_ns=time.perf_counter_ns(),
        )
        try:
            async with self._get_session().request(
                method, url, data=body, headers=headers
            ) as http_response:
                response.status = http_response.status
                response.body = await http_response.text(errors="replace")
        except asyncio.TimeoutError:
            response.error = "request timeout"
            response.error_code = HTTP_TIMEOUT_ERROR_CODE
        except aiohttp.ClientConnectorError as e:
            response.error = str(e)
            response.error_code = CONNECT_ERROR_CODE
        except aiohttp.ClientError as e:
            response.error = f"{e.__class__.__name__}: {e}"
            response.error_code = GENERIC_ERROR_CODE
        response.end_perf_ns = time.perf_counter_ns()

        self.trace(
            lambda: f"{method} {url} {response.status} in "
            f"{response.latency_ns / NANOS_PER_SECOND:.3f}s: {response.body or response.error}"
        )
        return response

    async def get(self, url: str, headers: dict[str, str]) -> HttpResponse:
        return await self.request("GET", url, headers)

    async def post(self, url: str, body: bytes, headers: dict[str, str]) -> HttpResponse:
        return await self.request("POST", url, headers, body=body)


def create_tcp_connector(**kwargs) -> aiohttp.TCPConnector:
    """Create a new connector with the given configuration, applying the socket defaults."""
    default_kwargs: dict[str, Any] = AioHttpDefaults.get_default_kwargs()
    default_kwargs.update(kwargs)

    if AioHttpDefaults.supports_tcp_connector_param("socket_factory"):

        def socket_factory(addr_info):
            family, sock_type, proto, _, _ = addr_info
            sock = socket.socket(family=family, type=sock_type, proto=proto)
            SocketDefaults.apply_to_socket(sock)
            return sock

        default_kwargs["socket_factory"] = socket_factory
    else:
        _logger.debug("TCPConnector has no socket_factory, using OS socket defaults")
    return aiohttp.TCPConnector(**default_kwargs)
