# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.transports.aiohttp_client import AioHttpClient, create_tcp_connector
from vusim.transports.base_transports import HttpTransportProtocol

__all__ = ["AioHttpClient", "HttpTransportProtocol", "create_tcp_connector"]
