# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Protocol, runtime_checkable

from vusim.common.models import RequestResult


@runtime_checkable
class IdentityProviderProtocol(Protocol):
    """Opaque token exchange with an external identity provider.

    A successful result carries `AuthenticationResult` (access token, lifetime
    and refresh token) at the top level of its body.
    """

    async def sign_up(self, phone: str) -> RequestResult:
        """Create the account. An already existing account is reported as an error."""
        ...

    async def initiate_auth(self, phone: str) -> RequestResult:
        """Start a custom challenge flow. The body carries the challenge `Session`."""
        ...

    async def respond_to_challenge(self, phone: str, session: str | None) -> RequestResult:
        """Answer the challenge started by :meth:`initiate_auth`."""
        ...

    async def refresh(self, phone: str, refresh_token: str) -> RequestResult:
        """Exchange a refresh token for a new access token."""
        ...
