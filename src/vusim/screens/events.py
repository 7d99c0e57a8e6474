# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The events tab and the details screen of one special event."""

from vusim.actions.async_games import make_async_move, see_result
from vusim.actions.outcomes import is_fatal, to_outcome
from vusim.actions.special_events import (
    claim_prize,
    hidden_access_code,
    join_event,
    rejoin_event,
    select_event,
)
from vusim.common.enums import (
    FeedType,
    LeaderboardType,
    UserPlaySessionStatus,
    UserSpecialEventStatus,
)
from vusim.common.models import RequestResult, SpecialEvent, SpecialEventSequence
from vusim.dispatch import CONTINUE, FATAL_ABORT, NO_OP, ActionOutcome
from vusim.screens.game_over import async_game_over
from vusim.screens.runner import MENU_BAR_WEIGHT, ActionSpec, Screen, ScreenRunner

IDLE_RANGE_SEC = (5.0, 45.0)


def _event_from(result: RequestResult) -> SpecialEvent | None:
    if result.error is not None or not isinstance(result.data, dict):
        return None
    return SpecialEvent.model_validate(result.data)


class EventsScreen(Screen):
    name = "events"
    dispatcher_name = "events_screen"
    metric_name = "events_screen"
    menu_bar_weight = MENU_BAR_WEIGHT
    requires_async_play = True

    def __init__(self, runner: ScreenRunner) -> None:
        super().__init__(runner)
        self.sequence: SpecialEventSequence | None = None

    async def update(self) -> RequestResult:
        """Reload the user and the events listing. Stops at the first fatal error."""
        backend = self.ctx.backend
        result = await backend.get_user()
        if is_fatal(result.error):
            return result
        result = await backend.get_special_events()
        if result.error is None and isinstance(result.data, dict):
            self.sequence = SpecialEventSequence.model_validate(result.data)
        return result

    async def on_enter(self) -> ActionOutcome | None:
        await self.update()
        return None

    async def after_dispatch(self, outcome: ActionOutcome) -> ActionOutcome | None:
        if is_fatal((await self.update()).error):
            return FATAL_ABORT
        return None

    async def idle(self) -> ActionOutcome:
        # Periodic refresh while the player looks at the list
        await self.ctx.delays.delay_range(*IDLE_RANGE_SEC)
        return to_outcome(await self.update())

    async def select_event_details(self) -> ActionOutcome:
        event = select_event(self.sequence, self.ctx.rng)
        if event is None:
            return NO_OP
        return await self.runner.open("event_details", self, event)

    async def select_hidden_event_details(self) -> ActionOutcome:
        ctx = self.ctx
        access_code = hidden_access_code(ctx, self.sequence)
        if access_code is None:
            return NO_OP
        ctx.logger.info(f"VU {ctx.state.ordinal}: Trying hidden access code: {access_code}")
        result = await ctx.backend.get_invite_only_special_event(access_code)
        event = _event_from(result)
        if event is None:
            ctx.logger.error(f"VU {ctx.state.ordinal}: {result.error}")
            return NO_OP
        return await self.runner.open("event_details", self, event, access_code)

    actions = (
        ActionSpec("idle", 20, idle),
        ActionSpec("select_event_details", 50, select_event_details),
        ActionSpec("select_hidden_event_details", 10, select_hidden_event_details),
    )


class EventDetailsScreen(Screen):
    """One special event, shown on top of the events tab.

    Keeps the parent's listing current, since the player returns to it.

    Args:
        runner: The screen runner.
        parent: The events tab this screen was opened from.
        event: The event to show.
        access_code: Invite code of a hidden event, if it was found with one.
    """

    name = "event_details"
    dispatcher_name = "event_details_screen"
    metric_name = "event_details_screen"
    overlay = True

    def __init__(
        self,
        runner: ScreenRunner,
        parent: EventsScreen,
        event: SpecialEvent,
        access_code: str | None = None,
    ) -> None:
        super().__init__(runner)
        self.parent = parent
        self.event = event
        self.access_code = access_code
        self.selected_tab = "leaderboard"

    async def update_all(self) -> RequestResult:
        backend = self.ctx.backend
        result = await backend.get_user()
        if is_fatal(result.error):
            return result
        result = await backend.get_special_events()
        if is_fatal(result.error):
            return result
        if result.error is None and isinstance(result.data, dict):
            sequence = SpecialEventSequence.model_validate(result.data)
            self.parent.sequence = sequence
            if not self.access_code:
                updated = sequence.find(self.event.id)
                if updated is None:
                    return RequestResult.failure(
                        f"Cannot find special event {self.event.id} after update"
                    )
                self.event = updated

        if self.selected_tab == "leaderboard":
            return await backend.get_leaderboard(LeaderboardType.AD_HOC_SCORE, self.event.id)
        return await backend.get_activity_feed(FeedType.AD_HOC, self.event.id)

    async def update_single(self) -> RequestResult:
        backend = self.ctx.backend
        uninvolved = self.event.user_status in (None, UserSpecialEventStatus.UNINVOLVED)
        if self.access_code and uninvolved:
            result = await backend.get_invite_only_special_event(self.access_code)
        else:
            result = await backend.get_special_event(self.event.id)
        event = _event_from(result)
        if event is not None:
            self.event = event
            if self.parent.sequence is not None:
                self.parent.sequence.replace(event)
        return result

    async def on_enter(self) -> ActionOutcome | None:
        await self.update_all()
        return None

    async def after_dispatch(self, outcome: ActionOutcome) -> ActionOutcome | None:
        if is_fatal((await self.update_single()).error):
            return FATAL_ABORT
        return None

    async def leaderboard(self) -> ActionOutcome:
        if self.selected_tab == "leaderboard":
            return NO_OP
        result = await self.ctx.backend.get_leaderboard(
            LeaderboardType.AD_HOC_SCORE, self.event.id
        )
        if is_fatal(result.error):
            return FATAL_ABORT
        self.selected_tab = "leaderboard"
        return CONTINUE

    async def feed(self) -> ActionOutcome:
        if self.selected_tab == "feed":
            return NO_OP
        self.selected_tab = "feed"
        return await self.runner.open("feed", FeedType.AD_HOC, self.event.id)

    async def idle(self) -> ActionOutcome:
        await self.ctx.delays.delay_range(*IDLE_RANGE_SEC)
        return to_outcome(await self.update_all())

    async def event_action(self) -> ActionOutcome:
        """Join, play, claim or rejoin, depending on where the user stands in the event."""
        ctx = self.ctx
        event = self.event
        user = ctx.state.user
        session = user.async_session_for_event(event.id) if user else None
        status = event.user_status

        if status in (UserSpecialEventStatus.ACTIVE, UserSpecialEventStatus.PLAYING):
            if session is not None and session.requires_action:
                if session.status == UserPlaySessionStatus.PLAYING:
                    ctx.logger.debug(lambda: f"Event {event.name}: Make move...")
                    return await make_async_move(ctx, session, async_game_over(self))
                if session.status != UserPlaySessionStatus.COMPLETED:
                    ctx.logger.debug(lambda: f"Event {event.name}: See result...")
                    return await see_result(ctx, session, async_game_over(self))
                ctx.logger.error(
                    f"VU {ctx.state.ordinal}: Session {session.id} requires action "
                    f"but its status is {session.status}"
                )
            # Waiting for the round to begin or for the opponent's move
            return NO_OP
        if status in (UserSpecialEventStatus.WON, UserSpecialEventStatus.RUNNER_UP):
            ctx.logger.debug(lambda: f"Event {event.name}: Claim...")
            return await claim_prize(ctx, event)
        if status == UserSpecialEventStatus.UNINVOLVED:
            ctx.logger.debug(lambda: f"Event {event.name}: Join...")
            return await join_event(ctx, event, self.access_code)
        if status == UserSpecialEventStatus.ELIMINATED:
            ctx.logger.debug(lambda: f"Event {event.name}: Rejoin...")
            return await rejoin_event(ctx, event)
        ctx.logger.debug(lambda: f"Event {event.name}: Skip... (user_status={status})")
        return NO_OP

    actions = (
        ActionSpec("back", 25, Screen.back),
        ActionSpec("leaderboard", 5, leaderboard),
        ActionSpec("feed", 5, feed),
        ActionSpec("idle", 10, idle),
        ActionSpec("event_action", 55, event_action),
    )
