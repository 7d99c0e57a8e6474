# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Snapshots of the documents the game backend returns.

Only the fields the simulation reads are declared. Everything else is kept as
extra data so a snapshot can be logged as the backend sent it.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from vusim.common.enums import (
    CurrencyType,
    ItemType,
    UserPlaySessionStatus,
    UserQueueStatus,
    UserSpecialEventStatus,
)
from vusim.common.models.base_models import BackendModel


class UserProfile(BackendModel):
    use_default_matchmaking_level: bool = False
    lowest_matchmaking_level: int = 0
    default_matchmaking_level: int | None = None
    exclude_bots: bool = False


class InviteData(BackendModel):
    status: UserQueueStatus | str | None = None
    invited: bool = False


class GameAvailability(BackendModel):
    is_unlocked: bool = False


class Consumable(BackendModel):
    next_use_ts: datetime | None = None


class InventoryItem(BackendModel):
    item_type: ItemType | str
    quantity: int = 0
    consumable: Consumable | None = None

    def is_usable(self, now: datetime | None = None) -> bool:
        """An item is usable with at least one whole unit and no pending cooldown.

        Quantities are two-decimal fixed point values, so one unit is 100.
        """
        if self.quantity < 100:
            return False
        if self.consumable is None or self.consumable.next_use_ts is None:
            return True
        now = now or datetime.now(timezone.utc)
        next_use = self.consumable.next_use_ts
        if next_use.tzinfo is None:
            next_use = next_use.replace(tzinfo=timezone.utc)
        return next_use <= now


class PlaySession(BackendModel):
    """One of the user's live or asynchronous play sessions."""

    id: str
    status: UserPlaySessionStatus | str | None = None
    is_live: bool = False
    requires_action: bool = False
    opponent_username: str | None = None
    game: str | None = Field(default=None, description="The game id of the session.")
    game_type: str | None = None
    requested_level: int = 0
    matched_level: int = 0
    matched_level_value: float = 0
    special_event_data: dict[str, Any] | None = None

    @property
    def special_event_id(self) -> str | None:
        if self.special_event_data:
            return self.special_event_data.get("id")
        return None


class UserSnapshot(BackendModel):
    """The last known state of the simulated user's account."""

    username: str | None = None
    phone: str | None = None
    rank: int = 0
    xp: int = 0
    account: float = 0
    secondary_account: float = 0
    profile: UserProfile | None = None
    invite_data: InviteData | None = None
    available_games: dict[str, GameAvailability] = Field(
        default_factory=dict, alias="available_games"
    )
    inventory: list[InventoryItem] = Field(default_factory=list)
    sessions: list[PlaySession] = Field(default_factory=list)

    @classmethod
    def looks_like_user(cls, data: Any) -> bool:
        """Whether a response payload is a user document."""
        return (
            isinstance(data, dict) and "account" in data and "secondaryAccount" in data
        )

    @property
    def live_session(self) -> PlaySession | None:
        return next((s for s in self.sessions if s.is_live), None)

    def is_game_unlocked(self, game: str) -> bool:
        availability = self.available_games.get(game)
        return availability is not None and availability.is_unlocked

    def find_item(self, item_type: ItemType) -> InventoryItem | None:
        return next((i for i in self.inventory if i.item_type == item_type), None)

    def has_usable_item(self, item_type: ItemType) -> bool:
        item = self.find_item(item_type)
        return item is not None and item.is_usable()

    def async_session_against(
        self, opponent_username: str | None
    ) -> PlaySession | None:
        return next(
            (
                s
                for s in self.sessions
                if not s.is_live and s.opponent_username == opponent_username
            ),
            None,
        )

    def async_session_with_status(
        self, status: UserPlaySessionStatus, only_requires_action: bool = False
    ) -> PlaySession | None:
        return next(
            (
                s
                for s in self.sessions
                if not s.is_live
                and s.status == status
                and (not only_requires_action or s.requires_action)
            ),
            None,
        )

    def async_session_for_event(self, special_event_id: str) -> PlaySession | None:
        return next(
            (
                s
                for s in self.sessions
                if not s.is_live and s.special_event_id == special_event_id
            ),
            None,
        )

    def has_open_session_against(self, opponent_username: str | None) -> bool:
        return any(
            s.opponent_username == opponent_username
            and s.status != UserPlaySessionStatus.COMPLETED
            for s in self.sessions
        )


class LevelDescriptor(BackendModel):
    """One level of the tower, from the `towerdata` configuration document."""

    level: int
    amount: float = 0
    available: bool = False
    unlocks_at_rank: int = 0


class SpecialEvent(BackendModel):
    id: str
    name: str | None = None
    type: str | None = None
    user_status: UserSpecialEventStatus | str | None = None
    is_hidden: bool = False
    is_featured: bool = False
    has_invite_code: bool | None = None
    invite_code: str | None = None
    join_type: str | None = None
    join_cost: float = 0
    join_currency: CurrencyType | str | None = None
    user_next_rejoin_cost: float = 0
    user_rejoin_currency: CurrencyType | str | None = None
    start: str | None = None
    close: datetime | None = None

    def is_closed(self, now: datetime | None = None) -> bool:
        if self.close is None:
            return False
        now = now or datetime.now(timezone.utc)
        close = self.close
        if close.tzinfo is None:
            close = close.replace(tzinfo=timezone.utc)
        return now >= close

    def matches_definition(self, other: "SpecialEvent") -> bool:
        """Whether this event was created from the same definition as `other`.

        Events seeded for a test are matched back to their configured
        definitions (and therefore their invite codes) by their properties,
        since the backend assigns the ids.
        """
        has_invite_code = (
            self.has_invite_code
            if self.has_invite_code is not None
            else self.invite_code is not None
        )
        other_has_invite_code = (
            other.has_invite_code
            if other.has_invite_code is not None
            else other.invite_code is not None
        )
        return (
            self.type == other.type
            and self.name == other.name
            and self.start == other.start
            and self.close == other.close
            and self.join_type == other.join_type
            and self.join_cost == other.join_cost
            and self.join_currency == other.join_currency
            and self.is_featured == other.is_featured
            and has_invite_code == other_has_invite_code
            and self.is_hidden == other.is_hidden
        )


class SpecialEventSequence(BackendModel):
    """The `special_events` listing split into past, running and upcoming events."""

    last: list[SpecialEvent] = Field(default_factory=list)
    current: list[SpecialEvent] = Field(default_factory=list)
    next: list[SpecialEvent] = Field(default_factory=list)

    def find(self, event_id: str) -> SpecialEvent | None:
        for events in (self.last, self.current, self.next):
            for event in events:
                if event.id == event_id:
                    return event
        return None

    def replace(self, event: SpecialEvent) -> None:
        for events in (self.last, self.current, self.next):
            for i, existing in enumerate(events):
                if existing.id == event.id:
                    events[i] = event
                    return


class GameSnapshot(BackendModel):
    """A game document from `games/<id>`. Game specific state stays as raw JSON."""

    id: str
    type: str | None = None
    status: str | None = None
    is_bot: bool = False
    data: dict[str, Any] | None = None

    @property
    def round_number(self) -> int | None:
        if not self.data:
            return None
        return (self.data.get("currentRoundData") or {}).get("roundNumber")

    @property
    def game_status(self) -> dict[str, Any]:
        if not self.data:
            return {}
        return self.data.get("gameStatus") or {}

    @property
    def player_state(self) -> dict[str, Any]:
        if not self.data:
            return {}
        player = self.data.get("player") or {}
        return (player.get("currentRoundData") or {}).get("playerState") or {}


class ProgressTracker(BackendModel):
    id: int
    state: str | None = None


class ProgressTrackers(BackendModel):
    goals: list[ProgressTracker] = Field(default_factory=list)
