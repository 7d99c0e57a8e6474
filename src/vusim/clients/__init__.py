# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.clients.auth import AuthSession
from vusim.clients.error_classifier import ErrorClassification, ErrorClassifier
from vusim.clients.request_client import ResilientRequestClient
from vusim.clients.response_parser import parse_response

__all__ = [
    "AuthSession",
    "ErrorClassification",
    "ErrorClassifier",
    "ResilientRequestClient",
    "parse_response",
]
