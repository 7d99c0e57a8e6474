# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import time
from collections.abc import Callable

from vusim.clients.error_classifier import (
    IDENTITY_THROTTLE_STATUS,
    IDENTITY_USER_EXISTS_TYPE,
)
from vusim.common.constants import EXPIRED_TOKEN_REFRESH_MARGIN_SEC
from vusim.common.mixins import VUSimLoggerMixin
from vusim.common.models import (
    AuthToken,
    IdentityTokens,
    RequestResult,
    VirtualUserState,
)
from vusim.identity.protocols import IdentityProviderProtocol


class AuthSession(VUSimLoggerMixin):
    """Holds a virtual user's bearer token and keeps it fresh.

    The token itself lives on the :class:`VirtualUserState` that owns it.
    """

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        state: VirtualUserState,
        refresh_margin_sec: float = EXPIRED_TOKEN_REFRESH_MARGIN_SEC,
        clock: Callable[[], float] = time.monotonic,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.identity_provider = identity_provider
        self.state = state
        self.refresh_margin_sec = refresh_margin_sec
        self._clock = clock

    @property
    def authorization(self) -> str:
        token = self.state.token
        return f"Bearer {token.access_token if token else ''}"

    def _store(self, tokens: IdentityTokens, refresh_token: str | None) -> None:
        self.state.token = AuthToken(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token or refresh_token,
            expires_at=self._clock() + tokens.expires_in,
        )

    async def authenticate(self) -> RequestResult:
        """Sign up (an existing account is fine), then complete the custom auth challenge."""
        phone = self.state.phone
        sign_up = await self.identity_provider.sign_up(phone)
        if (
            sign_up.error is not None
            and sign_up.error.status != IDENTITY_THROTTLE_STATUS
            and sign_up.error_type != IDENTITY_USER_EXISTS_TYPE
        ):
            return sign_up

        initiate = await self.identity_provider.initiate_auth(phone)
        if initiate.error is not None:
            return initiate

        session = initiate.body.get("Session") if isinstance(initiate.body, dict) else None
        respond = await self.identity_provider.respond_to_challenge(phone, session)
        tokens = IdentityTokens.from_body(respond.body)
        if tokens is not None:
            self._store(tokens, refresh_token=None)
        else:
            self.state.token = None
        return respond

    def needs_refresh(self) -> bool:
        token = self.state.token
        return (
            token is not None
            and bool(token.refresh_token)
            and token.needs_refresh(self._clock(), self.refresh_margin_sec)
        )

    async def ensure_fresh(self) -> RequestResult | None:
        """Refresh the token if it expires within the margin.

        Returns:
            None if no refresh was needed, otherwise the refresh result.
        """
        if not self.needs_refresh():
            return None
        token = self.state.token
        self.warning(f"Refreshing access token: {self.state.phone}")
        result = await self.identity_provider.refresh(
            self.state.phone, token.refresh_token
        )
        tokens = IdentityTokens.from_body(result.body)
        if tokens is not None:
            self._store(tokens, refresh_token=token.refresh_token)
        else:
            # Keep the refresh token so the next request tries again
            self.state.token = AuthToken(
                access_token="", refresh_token=token.refresh_token, expires_at=0.0
            )
            if result.error is None:
                return RequestResult.failure(
                    f"Token refresh returned no AuthenticationResult: {self.state.phone}"
                )
        return result
