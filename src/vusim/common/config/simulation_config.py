# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import math
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from vusim.common.enums import ErrCode
from vusim.common.exceptions import ConfigurationError
from vusim.common.models import SpecialEvent, VUSimBaseModel
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)

DEFAULT_MENU_BAR_SPLIT = {
    "new_tab": 0.8333333333333334,
    "settings": 0.1,
    "wallet_details": 0.0666666666666667,
}
"""Share of a menu bar's total weight given to each of its entries."""

SPLIT_SUM_TOLERANCE = 1e-6
COGNITO_ENDPOINT = "https://cognito-idp.us-west-2.amazonaws.com/"


class StageConfig(VUSimBaseModel):
    """One segment of the test timeline: ramp linearly to `target` VUs over `duration`."""

    duration: str | float = Field(
        ..., description='Duration string such as "5m" or "1h30m", or seconds.'
    )
    target: int = Field(..., ge=0, description="VU count at the end of the stage.")


class StackEndpoints(VUSimBaseModel):
    """Endpoints of one deployment of the backend."""

    client_id: str = Field(..., description="Identity provider app client id.")
    url_base: str = Field(
        ..., description="Base URL that backend paths are appended to."
    )
    identity_url: str = Field(
        default=COGNITO_ENDPOINT, description="Identity provider endpoint."
    )
    health_url: str | None = Field(
        default=None, description="Health endpoint polled in heartbeat mode."
    )

    @field_validator("url_base")
    @classmethod
    def ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"


class RetryConfig(VUSimBaseModel):
    max_attempts: int = Field(default=3, ge=1, description="Attempts per request.")
    backoff_min_sec: float = Field(default=1.0, ge=0)
    backoff_max_sec: float = Field(default=5.0, ge=0)

    @model_validator(mode="after")
    def validate_backoff_range(self) -> Self:
        if self.backoff_max_sec < self.backoff_min_sec:
            raise ValueError(
                f"retry.backoff_max_sec ({self.backoff_max_sec}) must be >= "
                f"retry.backoff_min_sec ({self.backoff_min_sec})"
            )
        return self


class ErrorSuppression(VUSimBaseModel):
    """An expected application error that must not count as an API error."""

    path: str = Field(..., description="Backend path, without query string.")
    code: int = Field(..., description="Application error code.")

    def matches(self, path: str, code: int | None) -> bool:
        return code == self.code and path.split("?", 1)[0] == self.path


class SimulationConfig(VUSimBaseModel):
    """Everything that shapes a load test run.

    Loaded from a JSON defaults file with top-level keys replaced by an
    optional overrides file (see :func:`vusim.common.config.load_config`).
    """

    stack: Annotated[str, Field(description="Key into `client_stack_data`.")] = (
        "local"
    )
    client_stack_data: Annotated[
        dict[str, StackEndpoints],
        Field(description="Endpoints of each known backend deployment."),
    ] = {}
    client_version: str = "0.0.0"
    min_server_version: str = "0.0.0"

    stages: Annotated[
        list[StageConfig],
        Field(
            description="Test timeline. The last stage is the ramp-down window. "
            "Fewer than three stages means no VU runs."
        ),
    ] = []
    vus_max: Annotated[
        int | None,
        Field(
            ge=1,
            description="Maximum concurrency. Defaults to the highest stage target.",
        ),
    ] = None

    action_weights: Annotated[
        dict[str, dict[str, float]],
        Field(description="Per dispatcher name, replacement weights per action name."),
    ] = {}
    menu_bar_split: Annotated[
        dict[str, float],
        Field(description="Share of the menu bar weight for each menu bar entry."),
    ] = DEFAULT_MENU_BAR_SPLIT
    max_action_retries: int = Field(default=10, ge=0)
    forced_actions: Annotated[
        list[str],
        Field(
            description='Debug only. Descriptors "<dispatcher>[?].<action>" forced in order.'
        ),
    ] = []

    enable_delays: Annotated[
        bool,
        Field(description="Randomize delays. When off, every delay uses its minimum."),
    ] = True
    play_async: Annotated[
        bool, Field(description="Enable the events and social (async play) screens.")
    ] = False
    respond_to_alerts: Annotated[
        bool,
        Field(
            description="Jump straight to the social screen when an async match needs a response."
        ),
    ] = True
    heartbeat: Annotated[
        bool,
        Field(description="VU 1 of each task polls the health endpoint instead of playing."),
    ] = False
    abort_on_identity_throttle: Annotated[
        bool,
        Field(description="Abort the whole run once the identity provider throttles sign in."),
    ] = True

    retry: RetryConfig = RetryConfig()
    token_refresh_margin_sec: float = Field(default=60.0, ge=0)
    matchmaking_timeout_sec: float = Field(default=180.0, gt=0)
    error_suppressions: Annotated[
        list[ErrorSuppression],
        Field(description="Expected errors that are not counted as API errors."),
    ] = [ErrorSuppression(path="users/session_start", code=ErrCode.USER_NOT_FOUND)]
    error_message_prefixes: Annotated[
        dict[str, str],
        Field(
            description="Message prefix to reason mapping, for conditions without a dedicated error code."
        ),
    ] = {
        "User rank is too low to request this level": "rank_too_low",
        "User rank is too low to do this action": "rank_too_low",
        "User is already matched.": "already_matched",
    }

    events: Annotated[
        list[SpecialEvent],
        Field(description="Special event definitions seeded for the test."),
    ] = []
    max_hidden_tournaments: int = Field(default=0, ge=0)

    seed: int | None = Field(default=None, description="Seed for all random draws.")
    log_levels: dict[str, str] = {}

    @field_validator("action_weights")
    @classmethod
    def validate_action_weights(
        cls, value: dict[str, dict[str, float]]
    ) -> dict[str, dict[str, float]]:
        for dispatcher_name, weights in value.items():
            for action_name, weight in weights.items():
                if not math.isfinite(weight) or weight < 0:
                    raise ValueError(
                        f"action_weights.{dispatcher_name}.{action_name} must be a "
                        f"finite number >= 0, got {weight}"
                    )
        return value

    @field_validator("menu_bar_split")
    @classmethod
    def validate_menu_bar_split(cls, value: dict[str, float]) -> dict[str, float]:
        missing = set(DEFAULT_MENU_BAR_SPLIT) - set(value)
        if missing:
            raise ValueError(f"menu_bar_split is missing entries: {sorted(missing)}")
        if any(not math.isfinite(v) or v < 0 for v in value.values()):
            raise ValueError(f"menu_bar_split shares must be finite and >= 0: {value}")
        total = sum(value.values())
        if abs(total - 1.0) > SPLIT_SUM_TOLERANCE:
            raise ValueError(f"menu_bar_split must sum to 1, got {total:.6f}: {value}")
        return value

    @model_validator(mode="after")
    def validate_stack(self) -> Self:
        if self.client_stack_data and self.stack not in self.client_stack_data:
            raise ValueError(
                f"stack '{self.stack}' not found in client_stack_data "
                f"({', '.join(sorted(self.client_stack_data))})"
            )
        return self

    @model_validator(mode="after")
    def validate_forced_actions(self) -> Self:
        for descriptor in self.forced_actions:
            dispatcher, _, action = descriptor.partition(".")
            if not dispatcher.rstrip("?") or not action:
                raise ValueError(
                    f"forced_actions entry '{descriptor}' is not '<dispatcher>[?].<action>'"
                )
        return self

    @property
    def endpoints(self) -> StackEndpoints:
        try:
            return self.client_stack_data[self.stack]
        except KeyError:
            raise ConfigurationError(
                f"stack '{self.stack}' not found in client_stack_data"
            ) from None

    @property
    def max_concurrency(self) -> int:
        if self.vus_max is not None:
            return self.vus_max
        return max((stage.target for stage in self.stages), default=1) or 1

    def weights_for(self, dispatcher_name: str) -> dict[str, float]:
        return self.action_weights.get(dispatcher_name, {})

    def is_suppressed(self, path: str, code: int | None) -> bool:
        return any(rule.matches(path, code) for rule in self.error_suppressions)
