# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Builders for the JSON documents the game backend and identity provider return."""

from typing import Any

from tests.harness.fake_transport import FakeTransport, ScriptedResponse, ok

ALL_GAMES = ("CrystalCaveGame", "ShootingGalleryGame", "AsteroidGame")


def make_user_document(
    username: str = "testuser",
    account: float = 600,
    secondary_account: float = 200,
    rank: int = 25,
    sessions: list[dict[str, Any]] | None = None,
    profile: dict[str, Any] | None = None,
    invited: bool = True,
    **extra: Any,
) -> dict[str, Any]:
    """A fully topped-up, active user so that session bootstrap has nothing to do."""
    return {
        "username": username,
        "phone": "+15550000000",
        "rank": rank,
        "xp": 2000,
        "account": account,
        "secondaryAccount": secondary_account,
        "profile": profile
        or {
            "useDefaultMatchmakingLevel": False,
            "lowestMatchmakingLevel": 0,
            "defaultMatchmakingLevel": None,
            "excludeBots": False,
        },
        "inviteData": {"status": "playing", "invited": invited},
        "available_games": {game: {"isUnlocked": True} for game in ALL_GAMES},
        "inventory": [
            {"itemType": "megaSpin", "quantity": 500},
            {"itemType": "basicSpin", "quantity": 1000},
        ],
        "sessions": sessions or [],
        **extra,
    }


def make_async_session(
    session_id: str = "session-1",
    status: str = "received",
    opponent_username: str = "opponent",
    requires_action: bool = True,
    **extra: Any,
) -> dict[str, Any]:
    return {
        "id": session_id,
        "status": status,
        "isLive": False,
        "requiresAction": requires_action,
        "opponentUsername": opponent_username,
        **extra,
    }


def identity_tokens(expires_in: float = 3600, refresh_token: str = "refresh-1") -> dict:
    return {
        "AuthenticationResult": {
            "AccessToken": "access-1",
            "ExpiresIn": expires_in,
            "RefreshToken": refresh_token,
        }
    }


def identity_error(error_type: str, status: int = 400) -> ScriptedResponse:
    return ScriptedResponse(status, {"__type": error_type, "message": error_type})


def script_sign_in(transport: FakeTransport, expires_in: float = 3600) -> FakeTransport:
    """Script a successful sign up, challenge and challenge response."""
    return (
        transport.script("SignUp", ScriptedResponse(200, {"UserSub": "sub-1"}))
        .script("InitiateAuth", ScriptedResponse(200, {"Session": "challenge-session"}))
        .script(
            "RespondToAuthChallenge",
            ScriptedResponse(200, identity_tokens(expires_in=expires_in)),
        )
    )


def script_session(
    transport: FakeTransport, user: dict[str, Any] | None = None
) -> FakeTransport:
    """Script a successful loading screen for an already registered, active user."""
    user = user or make_user_document()
    script_sign_in(transport)
    return transport.script("users/session_start", ok(user)).script("users", ok(user))
