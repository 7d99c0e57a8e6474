# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for weighted action dispatch.

Tests:
- Cumulative trigger computation and weight overrides
- Weighted selection frequencies, conditions and zero weights
- No-repeat redraws and NO_OP redispatch bounds
- Named dispatch and construction errors
"""

import random
from collections import Counter

import pytest

from vusim.common.enums import OutcomeKind
from vusim.common.exceptions import DispatchError
from vusim.dispatch import CONTINUE, NO_OP, Action, ActionOutcome, Dispatcher

# =============================================================================
# Helper Functions
# =============================================================================


def make_action(
    name: str,
    weight: float,
    outcome: ActionOutcome = CONTINUE,
    condition=None,
    calls: list[str] | None = None,
) -> Action:
    """Create an action that records its runs into `calls` and returns `outcome`."""

    async def body() -> ActionOutcome:
        if calls is not None:
            calls.append(name)
        return outcome

    return Action(name=name, weight=weight, body=body, condition=condition)


def make_dispatcher(*actions: Action, seed: int = 1, **kwargs) -> Dispatcher:
    return Dispatcher("test", actions, random_source=random.Random(seed), **kwargs)


def selection_shares(dispatcher: Dispatcher, draws: int) -> dict[str, float]:
    counts = Counter(dispatcher.select().name for _ in range(draws))
    return {name: count / draws for name, count in counts.items()}


# =============================================================================
# Triggers
# =============================================================================


class TestTriggers:
    def test_triggers_are_cumulative_normalized_weights(self):
        dispatcher = make_dispatcher(
            make_action("a", 50), make_action("b", 25), make_action("c", 25)
        )
        assert dispatcher.triggers["a"] == pytest.approx(0.5)
        assert dispatcher.triggers["b"] == pytest.approx(0.75)
        assert dispatcher.triggers["c"] == 1.0

    def test_last_positive_trigger_is_pinned_to_one(self):
        dispatcher = make_dispatcher(
            make_action("a", 1 / 3), make_action("b", 1 / 3), make_action("c", 1 / 3)
        )
        assert dispatcher.triggers["c"] == 1.0

    def test_weight_overrides_replace_defaults(self):
        dispatcher = make_dispatcher(
            make_action("a", 50),
            make_action("b", 50),
            weight_overrides={"a": 10, "b": 90},
        )
        assert dispatcher.actions["a"].weight == 10
        assert dispatcher.triggers["a"] == pytest.approx(0.1)

    def test_unknown_override_is_ignored(self):
        dispatcher = make_dispatcher(
            make_action("a", 1), weight_overrides={"missing": 5}
        )
        assert list(dispatcher.actions) == ["a"]
        assert dispatcher.triggers["a"] == 1.0


# =============================================================================
# Selection
# =============================================================================


class TestSelection:
    def test_selection_frequency_matches_weights(self):
        dispatcher = make_dispatcher(make_action("a", 70), make_action("b", 30))
        shares = selection_shares(dispatcher, 100_000)
        assert shares["a"] == pytest.approx(0.70, abs=0.02)
        assert shares["b"] == pytest.approx(0.30, abs=0.02)

    def test_false_condition_redistributes_share(self):
        dispatcher = make_dispatcher(
            make_action("a", 50, condition=lambda: False),
            make_action("b", 25),
            make_action("c", 25),
        )
        shares = selection_shares(dispatcher, 20_000)
        assert "a" not in shares
        assert shares["b"] == pytest.approx(0.5, abs=0.02)
        assert shares["c"] == pytest.approx(0.5, abs=0.02)

    def test_condition_is_reevaluated_on_every_selection(self):
        enabled = [False]
        dispatcher = make_dispatcher(
            make_action("gated", 1000, condition=lambda: enabled[0]),
            make_action("other", 1),
        )
        assert dispatcher.select().name == "other"
        enabled[0] = True
        assert selection_shares(dispatcher, 1000)["gated"] > 0.95

    def test_zero_weight_action_is_never_selected(self):
        dispatcher = make_dispatcher(make_action("never", 0), make_action("always", 1))
        assert set(selection_shares(dispatcher, 5000)) == {"always"}

    @pytest.mark.parametrize(
        "actions",
        [
            pytest.param([], id="empty"),
            pytest.param([("a", 0), ("b", 0)], id="all-zero"),
        ],
    )
    def test_nothing_selectable_raises(self, actions):
        dispatcher = make_dispatcher(*(make_action(n, w) for n, w in actions))
        with pytest.raises(DispatchError, match="no selectable action"):
            dispatcher.select()

    def test_all_conditions_false_raises(self):
        dispatcher = make_dispatcher(make_action("a", 1, condition=lambda: False))
        with pytest.raises(DispatchError):
            dispatcher.select()

    def test_duplicate_action_names_rejected(self):
        with pytest.raises(DispatchError, match="duplicate action 'a'"):
            make_dispatcher(make_action("a", 1), make_action("a", 2))

    def test_same_seed_gives_same_sequence(self):
        def names(seed: int) -> list[str]:
            dispatcher = make_dispatcher(
                make_action("a", 1), make_action("b", 1), make_action("c", 1), seed=seed
            )
            return [dispatcher.select().name for _ in range(50)]

        assert names(7) == names(7)
        assert names(7) != names(8)


# =============================================================================
# Dispatch
# =============================================================================


class TestDispatch:
    @pytest.mark.asyncio
    async def test_dispatch_runs_selected_action(self):
        calls: list[str] = []
        dispatcher = make_dispatcher(make_action("only", 1, calls=calls))
        outcome = await dispatcher.dispatch()
        assert outcome == CONTINUE
        assert calls == ["only"]
        assert dispatcher.last_selected == "only"

    @pytest.mark.asyncio
    async def test_no_repeats_never_selects_previous_action_twice(self):
        calls: list[str] = []
        dispatcher = make_dispatcher(
            make_action("a", 1, calls=calls),
            make_action("b", 1, calls=calls),
            no_repeats=True,
            max_retries=50,
        )
        for _ in range(500):
            await dispatcher.dispatch()
        assert all(first != second for first, second in zip(calls, calls[1:]))

    @pytest.mark.asyncio
    async def test_no_repeats_with_single_action_still_dispatches(self):
        calls: list[str] = []
        dispatcher = make_dispatcher(make_action("a", 1, calls=calls), no_repeats=True)
        await dispatcher.dispatch()
        await dispatcher.dispatch()
        assert calls == ["a", "a"]

    @pytest.mark.asyncio
    async def test_no_op_outcome_is_redispatched(self):
        calls: list[str] = []
        dispatcher = make_dispatcher(
            make_action("idle", 1, outcome=NO_OP, calls=calls),
            make_action("work", 1, calls=calls),
            max_retries=30,
        )
        outcome = await dispatcher.dispatch()
        assert outcome == CONTINUE
        assert calls[-1] == "work"
        assert all(name == "idle" for name in calls[:-1])

    @pytest.mark.asyncio
    async def test_no_op_redispatch_is_bounded(self):
        calls: list[str] = []
        dispatcher = make_dispatcher(
            make_action("idle", 1, outcome=NO_OP, calls=calls), max_retries=4
        )
        outcome = await dispatcher.dispatch()
        assert outcome.kind == OutcomeKind.NO_OP_CONTINUE
        assert len(calls) == 5

    @pytest.mark.asyncio
    async def test_dispatch_named_ignores_weight_and_condition(self):
        calls: list[str] = []
        dispatcher = make_dispatcher(
            make_action("hidden", 0, condition=lambda: False, calls=calls),
            make_action("other", 1, calls=calls),
        )
        await dispatcher.dispatch_named("hidden")
        assert calls == ["hidden"]

    @pytest.mark.asyncio
    async def test_dispatch_named_unknown_action_raises(self):
        dispatcher = make_dispatcher(make_action("a", 1))
        with pytest.raises(DispatchError, match="no action named 'missing'"):
            await dispatcher.dispatch_named("missing")
