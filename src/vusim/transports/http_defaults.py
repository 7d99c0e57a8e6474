# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import inspect
import socket
from dataclasses import dataclass
from typing import Any

from vusim.common.environment import Environment
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)


@dataclass(frozen=True)
class SocketDefaults:
    """
    Default values for socket options.
    """

    TCP_NODELAY = 1  # Disable Nagle's algorithm
    SO_KEEPALIVE = 1  # Enable keepalive

    @classmethod
    def apply_to_socket(cls, sock: socket.socket) -> None:
        """Apply the default socket options to the given socket."""
        sock.setsockopt(socket.SOL_TCP, socket.TCP_NODELAY, cls.TCP_NODELAY)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, cls.SO_KEEPALIVE)

        # Keepalive timing is Linux specific
        if hasattr(socket, "TCP_KEEPIDLE"):
            sock.setsockopt(
                socket.SOL_TCP, socket.TCP_KEEPIDLE, Environment.HTTP.TCP_KEEPIDLE
            )
            sock.setsockopt(
                socket.SOL_TCP, socket.TCP_KEEPINTVL, Environment.HTTP.TCP_KEEPINTVL
            )
            sock.setsockopt(
                socket.SOL_TCP, socket.TCP_KEEPCNT, Environment.HTTP.TCP_KEEPCNT
            )

        sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, Environment.HTTP.SO_RCVBUF)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, Environment.HTTP.SO_SNDBUF)

        if hasattr(socket, "TCP_USER_TIMEOUT"):
            sock.setsockopt(
                socket.SOL_TCP,
                socket.TCP_USER_TIMEOUT,
                Environment.HTTP.TCP_USER_TIMEOUT,
            )


@dataclass(frozen=True)
class AioHttpDefaults:
    """Default values for the shared aiohttp.TCPConnector.

    Thousands of virtual users share one pool, so the limit is high and idle
    connections are kept alive between think times.
    """

    LIMIT = Environment.HTTP.CONNECTION_LIMIT  # Maximum number of concurrent connections
    LIMIT_PER_HOST = 0  # 0 will set to LIMIT
    TTL_DNS_CACHE = Environment.HTTP.TTL_DNS_CACHE  # Time to live for DNS cache
    USE_DNS_CACHE = True
    ENABLE_CLEANUP_CLOSED = False
    FORCE_CLOSE = False
    KEEPALIVE_TIMEOUT = Environment.HTTP.KEEPALIVE_TIMEOUT

    @staticmethod
    def supports_tcp_connector_param(param_name: str) -> bool:
        """Check if TCPConnector supports a given parameter."""
        from aiohttp import TCPConnector

        return param_name in inspect.signature(TCPConnector.__init__).parameters

    @classmethod
    def get_default_kwargs(cls) -> dict[str, Any]:
        """Get the default keyword arguments for aiohttp.TCPConnector."""
        return {
            "limit": cls.LIMIT,
            "limit_per_host": cls.LIMIT_PER_HOST,
            "ttl_dns_cache": cls.TTL_DNS_CACHE,
            "use_dns_cache": cls.USE_DNS_CACHE,
            "enable_cleanup_closed": cls.ENABLE_CLEANUP_CLOSED,
            "force_close": cls.FORCE_CLOSE,
            "keepalive_timeout": cls.KEEPALIVE_TIMEOUT,
        }
