# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from tests.harness.fake_transport import (
    FakeTransport,
    RecordedRequest,
    ScriptedResponse,
    app_error,
    connection_error,
    ok,
    server_error,
)
from tests.harness.time_traveler import TimeTraveler

__all__ = [
    "FakeTransport",
    "RecordedRequest",
    "ScriptedResponse",
    "TimeTraveler",
    "app_error",
    "connection_error",
    "ok",
    "server_error",
]
