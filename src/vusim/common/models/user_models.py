# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import ConfigDict, Field

from vusim.common.models.auth_models import AuthToken
from vusim.common.models.backend_models import (
    LevelDescriptor,
    ProgressTrackers,
    UserSnapshot,
)
from vusim.common.models.base_models import VUSimBaseModel


class VirtualUserSchedule(VUSimBaseModel):
    """Test-wide timing a virtual user needs to decide when to stop."""

    model_config = ConfigDict(frozen=True)

    test_start: float = Field(
        ..., description="Monotonic clock value (seconds) at which the test started."
    )
    test_duration_sec: float = Field(..., ge=0, description="Total test duration.")
    ramp_down_start_sec: float = Field(
        ..., ge=0, description="Elapsed time at which the ramp-down window begins."
    )
    ramp_down_duration_sec: float = Field(
        ..., ge=0, description="Length of the ramp-down window."
    )
    max_concurrency: int = Field(..., ge=1, description="Target number of VUs.")


class VirtualUserState(VUSimBaseModel):
    """
    Mutable per-VU record. Owned by exactly one virtual user task.

    Holds the simulated identity, the last user document and game configuration
    the backend returned, the screen currently shown, and the auth token.
    """

    ordinal: int = Field(..., ge=1, description="1-based VU number within this task.")
    instance_number: int = Field(
        ..., ge=0, description="Globally unique number used to derive the identity."
    )
    phone: str = Field(..., description="Simulated phone number (identity).")
    username: str = Field(..., description="Username chosen at activation.")
    schedule: VirtualUserSchedule

    token: AuthToken | None = Field(default=None, description="Current auth token.")
    user: UserSnapshot | None = Field(
        default=None, description="Last user document fetched from the backend."
    )
    current_screen: str | None = Field(
        default=None, description="Name of the screen currently shown."
    )
    opponent_username: str | None = Field(
        default=None, description="Opponent faced in the last game played."
    )
    opponent_is_bot: bool | None = Field(
        default=None, description="Whether the last opponent was a bot."
    )
    progress_trackers: ProgressTrackers | None = None
    levels: list[LevelDescriptor] = Field(default_factory=list)
    max_level: int = Field(default=0, description="Highest available tower level.")

    def set_user(self, data: object) -> None:
        """Replace the cached user snapshot. Empty payloads are ignored."""
        if not data:
            return
        if isinstance(data, UserSnapshot):
            self.user = data
        else:
            self.user = UserSnapshot.model_validate(data)

    def reset_session(self) -> None:
        """Forget everything cached by a previous session iteration."""
        self.token = None
        self.user = None
        self.current_screen = None
        self.opponent_username = None
        self.opponent_is_bot = None
        self.progress_trackers = None
        self.levels = []
        self.max_level = 0

    def has_account(self, minimum: float = 0) -> bool:
        return (self.user.account if self.user else 0) >= minimum

    def has_secondary_account(self, minimum: float = 0) -> bool:
        return (self.user.secondary_account if self.user else 0) >= minimum
