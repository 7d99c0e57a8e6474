# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLIS = 1_000_000
MILLIS_PER_SECOND = 1000

HTTP_TIMEOUT_ERROR_CODE = 1211
"""Transport error code reported for a request that timed out."""

EXPIRED_TOKEN_REFRESH_MARGIN_SEC = 60.0
"""Default margin before token expiry at which the token is refreshed."""

PHONE_AREA_MAX = 999
USERNAME_NUMBER_MAX = 99999
USERNAME_PREFIX = "load_"

DEFAULT_OS_VERSION = "vusim"
