# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import ConfigDict, Field

from vusim.common.models.base_models import VUSimBaseModel


class AuthToken(VUSimBaseModel):
    """A bearer token and the monotonic time at which it expires."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., description="Bearer token sent to the backend.")
    refresh_token: str | None = Field(
        default=None, description="Token used to obtain a new access token."
    )
    expires_at: float = Field(
        ..., description="Monotonic clock value (seconds) at which the token expires."
    )

    def remaining(self, now: float) -> float:
        return self.expires_at - now

    def needs_refresh(self, now: float, margin_sec: float) -> bool:
        return self.remaining(now) <= margin_sec


class IdentityTokens(VUSimBaseModel):
    """The `AuthenticationResult` of a successful identity provider call."""

    access_token: str = Field(..., alias="AccessToken")
    expires_in: float = Field(..., alias="ExpiresIn", description="Lifetime in seconds.")
    refresh_token: str | None = Field(default=None, alias="RefreshToken")

    @classmethod
    def from_body(cls, body: object) -> "IdentityTokens | None":
        if not isinstance(body, dict):
            return None
        result = body.get("AuthenticationResult")
        if not isinstance(result, dict):
            return None
        return cls.model_validate(result)
