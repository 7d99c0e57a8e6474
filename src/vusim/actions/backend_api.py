# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Thin wrappers over the game backend's REST endpoints.

Each method issues exactly one request through the VU's
:class:`ResilientRequestClient` and returns its :class:`RequestResult`.
Only :meth:`GameBackend.get_user` updates the cached user as a side effect.
"""

from typing import Any

from vusim.clients import ResilientRequestClient
from vusim.common.enums import (
    ClientEventType,
    ConfigType,
    FeedType,
    ItemType,
    LeaderboardType,
    UserPlaySessionType,
)
from vusim.common.exceptions import InvalidStateError
from vusim.common.models import RequestResult, VirtualUserState

PAGE_LIMIT = 40


class GameBackend:
    def __init__(self, client: ResilientRequestClient, state: VirtualUserState) -> None:
        self.client = client
        self.state = state

    # =========================================================================
    # Session and account
    # =========================================================================

    async def startup(self) -> RequestResult:
        return await self.client.post(
            "startup", {"foregrounded": False, "installed": False}
        )

    async def session_start(self) -> RequestResult:
        return await self.client.post("users/session_start", {})

    async def register(self) -> RequestResult:
        return await self.client.post("users/register", {})

    async def activate(self, username: str) -> RequestResult:
        return await self.client.post("users/activate", {"username": username})

    async def set_inviter(self, inviter: str) -> RequestResult:
        return await self.client.post("users/set_inviter", {"inviter": inviter})

    async def use_item(self, item_type: ItemType) -> RequestResult:
        return await self.client.post("users/use_item", {"itemType": item_type})

    async def set_balance(self, amount: float) -> RequestResult:
        return await self.client.post("users/set_balance", {"amount": amount})

    async def set_secondary_balance(self, amount: float) -> RequestResult:
        return await self.client.post("users/set_secondary_balance", {"amount": amount})

    async def set_xp(self, xp: int) -> RequestResult:
        return await self.client.post("users/set_xp", {"xp": xp})

    async def add_item(self, item: ItemType, quantity: int) -> RequestResult:
        return await self.client.post(
            "users/add_item", {"item": item, "quantity": quantity}
        )

    async def unlock_game(self, game: str) -> RequestResult:
        return await self.client.post("users/unlock_game", {"game": game})

    async def update_profile(self, **profile: Any) -> RequestResult:
        return await self.client.post("users", {"profile": profile})

    async def cashout_start(self) -> RequestResult:
        return await self.client.post("users/cashout_start", {})

    async def cashout_finish(
        self,
        charity_percent: int,
        charity_amount: float,
        player_amount: float,
        payee: str,
    ) -> RequestResult:
        return await self.client.post(
            "users/cashout_finish",
            {
                "charityPercent": charity_percent,
                "desiredCharityAmount": charity_amount,
                "desiredPlayerAmount": player_amount,
                "payee": payee,
            },
        )

    async def ads_start(self) -> RequestResult:
        return await self.client.post("ads/start", {})

    async def ads_finish(self) -> RequestResult:
        return await self.client.post("ads/finish", {})

    # =========================================================================
    # Users
    # =========================================================================

    async def get_config(self, config_type: ConfigType) -> RequestResult:
        return await self.client.get(f"config/{config_type}")

    async def get_user(self, projection: str = "standard") -> RequestResult:
        result = await self.client.get(f"users?projection={projection}")
        self.state.set_user(result.data)
        return result

    async def find_user(
        self,
        username: str | None,
        allow_bots: bool = True,
        projection: str = "brief",
        exact: bool = True,
    ) -> RequestResult:
        if not username:
            raise InvalidStateError(f"Cannot look up user with username {username!r}")
        return await self.client.get(
            f"users/find?username={username}&allowBots={allow_bots}"
            f"&projection={projection}&exact={exact}"
        )

    async def find_challengees(self) -> RequestResult:
        return await self.client.get("users/find_challengees")

    async def get_stats(self, username: str | None) -> RequestResult:
        if not username:
            raise InvalidStateError(f"Cannot get stats of username {username!r}")
        return await self.client.get(f"users/find_stats?username={username}")

    async def get_recent_games(self) -> RequestResult:
        return await self.client.get("users/stats")

    async def get_active_count(self) -> RequestResult:
        return await self.client.get("users/active_count")

    async def get_leaderboard(
        self, leaderboard_type: LeaderboardType, event_id: str | None = None
    ) -> RequestResult:
        id_part = f"&id={event_id}" if event_id else ""
        return await self.client.get(
            f"users/leaderboard?type={leaderboard_type}{id_part}&offset=0&limit={PAGE_LIMIT}"
        )

    async def get_activity_feed(
        self, feed_type: FeedType, event_id: str | None = None
    ) -> RequestResult:
        return await self.client.get(
            f"feeds/activity?type={feed_type}&id={event_id or ''}&offset=0&limit={PAGE_LIMIT}"
        )

    async def get_progress_trackers(self) -> RequestResult:
        return await self.client.get("users/progress_trackers")

    async def claim_progress_tracker(self, tracker_id: int) -> RequestResult:
        return await self.client.post(
            "users/progress_trackers/claim", {"progressTrackerId": tracker_id}
        )

    # =========================================================================
    # Games
    # =========================================================================

    async def request_match(
        self,
        session_type: UserPlaySessionType,
        level: int,
        username: str | None = None,
    ) -> RequestResult:
        return await self.client.post(
            "games/request_match",
            {
                "type": session_type,
                "level": level,
                "username": username,
                "strictMatching": False,
                "botsOnly": False,
                "gameType": None,
            },
        )

    async def cancel_request_level(self) -> RequestResult:
        return await self.client.post("games/cancel_request_level", {})

    async def get_game(self, game_id: str) -> RequestResult:
        return await self.client.get(f"games/{game_id}")

    async def post_game_event(
        self, game_id: str, event_type: ClientEventType, data: Any = None
    ) -> RequestResult:
        event: dict[str, Any] = {"type": event_type}
        if data is not None:
            event["data"] = data
        return await self.client.post(f"games/{game_id}/event", {"event": event})

    async def post_game_answer(self, game_id: str, round_number: int, data: Any) -> RequestResult:
        return await self.client.post(
            f"games/{game_id}/answer", {"answer": {"round": round_number, "data": data}}
        )

    async def watch_game(self, game_id: str) -> RequestResult:
        return await self.client.get(f"games/{game_id}/watch")

    async def accept_match(self, session_id: str) -> RequestResult:
        return await self.client.post("games/accept_match", {"sessionId": session_id})

    async def decline_match(self, session_id: str) -> RequestResult:
        return await self.client.post("games/decline_match", {"sessionId": session_id})

    async def acknowledge_match(self, session_id: str) -> RequestResult:
        return await self.client.post(
            "games/acknowledge_match", {"sessionId": session_id}
        )

    # =========================================================================
    # Special events
    # =========================================================================

    async def get_special_events(self) -> RequestResult:
        return await self.client.get("special_events")

    async def get_special_event(self, event_id: str) -> RequestResult:
        return await self.client.get(f"special_events/{event_id}")

    async def get_invite_only_special_event(self, access_code: str) -> RequestResult:
        return await self.client.get(f"special_events/invite_only/{access_code}")

    async def claim_special_event(self, event_id: str, claimant: str) -> RequestResult:
        return await self.client.post(
            "special_events/claim", {"eventId": event_id, "claimant": claimant}
        )

    async def join_special_event(
        self, event_id: str, invite_code: str | None = None
    ) -> RequestResult:
        body: dict[str, Any] = {"eventId": event_id}
        if invite_code:
            body["inviteCode"] = invite_code
        return await self.client.post("special_events/join", body)

    async def rejoin_special_event(self, event_id: str) -> RequestResult:
        return await self.client.post("special_events/rejoin", {"eventId": event_id})
