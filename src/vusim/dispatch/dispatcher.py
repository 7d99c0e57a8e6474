# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Weighted random selection of actions.

Selection draws `r` uniformly from [0, 1) and runs the first applicable action
whose cumulative trigger is >= `r`. Triggers are recomputed over the actions
whose condition currently holds, so a false condition redistributes its share
proportionally over the others.
"""

import random
from collections.abc import Iterable, Mapping

from vusim.common import random_generator as rng
from vusim.common.enums import OutcomeKind
from vusim.common.exceptions import DispatchError
from vusim.common.mixins import VUSimLoggerMixin
from vusim.dispatch.action import NO_OP, Action, ActionOutcome
from vusim.dispatch.forced_sequence import ForcedSequence

DEFAULT_MAX_RETRIES = 10


class Dispatcher(VUSimLoggerMixin):
    """A named set of weighted actions.

    Args:
        name: Dispatcher name, used for weight overrides and forced sequences.
        actions: Candidate actions. Names must be unique.
        weight_overrides: Replacement weights by action name. Unknown names are ignored.
        no_repeats: Redraw when the previous selection comes up again.
        max_retries: Bound on no-repeat redraws and on redispatching after an
            action reports it had nothing to do.
        forced: Optional forced sequence that takes precedence over random draws.
        random_source: Generator for the draws.
    """

    def __init__(
        self,
        name: str,
        actions: Iterable[Action],
        *,
        weight_overrides: Mapping[str, float] | None = None,
        no_repeats: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        forced: ForcedSequence | None = None,
        random_source: random.Random | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.name = name
        self.actions: dict[str, Action] = {}
        for action in actions:
            if action.name in self.actions:
                raise DispatchError(name, f"duplicate action '{action.name}'")
            self.actions[action.name] = action
        self.no_repeats = no_repeats
        self.max_retries = max_retries
        self.forced = forced
        self.last_selected: str | None = None
        self._rng = random_source or rng.derive(f"dispatch.{name}")
        if weight_overrides:
            self.apply_weights(weight_overrides)
        else:
            self._compute_triggers(list(self.actions.values()))

    def apply_weights(self, weights: Mapping[str, float]) -> None:
        for action_name, weight in weights.items():
            action = self.actions.get(action_name)
            if action is None:
                self.debug(
                    lambda action_name=action_name: f"Dispatcher '{self.name}': "
                    f"ignoring weight for unknown action '{action_name}'"
                )
                continue
            action.weight = weight
        self._compute_triggers(list(self.actions.values()))

    @property
    def triggers(self) -> dict[str, float]:
        return {name: action.trigger for name, action in self.actions.items()}

    def _compute_triggers(self, candidates: list[Action]) -> float:
        total = sum(action.weight for action in candidates if action.weight > 0)
        cumulative = 0.0
        for action in candidates:
            if total > 0 and action.weight > 0:
                cumulative += action.weight / total
            action.trigger = cumulative
        # Pin the last positive trigger so rounding can never leave a gap below 1
        for action in reversed(candidates):
            if action.weight > 0:
                action.trigger = 1.0
                break
        return total

    def _draw(self, candidates: list[Action]) -> Action:
        draw = self._rng.random()
        for action in candidates:
            if action.weight > 0 and action.trigger >= draw:
                return action
        return candidates[-1]

    def select(self) -> Action:
        """Pick an action by weighted random draw, honoring conditions and no-repeat.

        Raises:
            DispatchError: If no action has positive weight and a true condition.
        """
        candidates = [a for a in self.actions.values() if a.is_applicable()]
        if self._compute_triggers(candidates) <= 0:
            raise DispatchError(
                self.name,
                "no selectable action (empty set, all weights zero or all conditions false)",
            )

        action = self._draw(candidates)
        if self.no_repeats:
            retries = 0
            while action.name == self.last_selected and retries < self.max_retries:
                action = self._draw(candidates)
                retries += 1
        return action

    async def _run(self, action: Action) -> ActionOutcome:
        self.last_selected = action.name
        self.trace(lambda: f"Dispatcher '{self.name}': running '{action.name}'")
        return await action.body()

    async def dispatch_named(self, action_name: str) -> ActionOutcome:
        """Run exactly `action_name`, regardless of its weight and condition."""
        action = self.actions.get(action_name)
        if action is None:
            raise DispatchError(self.name, f"no action named '{action_name}'")
        return await self._run(action)

    async def dispatch(self) -> ActionOutcome:
        """Run one action chosen by the forced sequence or by weighted draw.

        An action reporting that it had nothing to do is redrawn, at most
        `max_retries` times, after which its outcome is returned as is.
        """
        if self.forced is not None:
            forced_name = self.forced.take(self.name)
            if forced_name is not None:
                return await self.dispatch_named(forced_name)

        outcome = NO_OP
        for _ in range(self.max_retries + 1):
            outcome = await self._run(self.select())
            if outcome.kind != OutcomeKind.NO_OP_CONTINUE:
                return outcome
        return outcome
