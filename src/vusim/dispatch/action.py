# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from vusim.common.enums import OutcomeKind


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """What a dispatched action reports back to its screen loop.

    Only :attr:`OutcomeKind.JUMP_TO_SCREEN` carries a `screen`.
    """

    kind: OutcomeKind
    screen: str | None = None

    @property
    def leaves_screen(self) -> bool:
        return self.kind.leaves_screen

    @property
    def ends_iteration(self) -> bool:
        return self.kind.ends_iteration

    @property
    def skips_think_time(self) -> bool:
        return self.kind.skips_think_time

    def __str__(self) -> str:
        return f"{self.kind}({self.screen})" if self.screen else str(self.kind)


def jump_to(screen: str) -> ActionOutcome:
    return ActionOutcome(OutcomeKind.JUMP_TO_SCREEN, screen)


CONTINUE = ActionOutcome(OutcomeKind.CONTINUE)
NO_OP = ActionOutcome(OutcomeKind.NO_OP_CONTINUE)
HANDLED_ERROR = ActionOutcome(OutcomeKind.HANDLED_ERROR)
LEAVE_SCREEN = ActionOutcome(OutcomeKind.LEAVE_SCREEN)
SUSPEND = ActionOutcome(OutcomeKind.SUSPEND)
FATAL_ABORT = ActionOutcome(OutcomeKind.FATAL_ABORT)
FINISHED = ActionOutcome(OutcomeKind.FINISHED)

ActionBody = Callable[[], Awaitable[ActionOutcome]]
Condition = Callable[[], bool]


@dataclass(slots=True)
class Action:
    """A named, weighted behavior held by exactly one :class:`Dispatcher`.

    `trigger` is the cumulative normalized weight upper bound of this action,
    recomputed by the dispatcher whenever the effective weights change.
    """

    name: str
    weight: float
    body: ActionBody
    condition: Condition | None = None
    trigger: float = 0.0

    def is_applicable(self) -> bool:
        return self.condition is None or bool(self.condition())
