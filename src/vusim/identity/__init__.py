# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.identity.cognito import CognitoIdentityProvider
from vusim.identity.protocols import IdentityProviderProtocol

__all__ = ["CognitoIdentityProvider", "IdentityProviderProtocol"]
