# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.common.enums.base_enums import CaseInsensitiveStrEnum


class OutcomeKind(CaseInsensitiveStrEnum):
    """The closed set of results a dispatched action can report to its screen."""

    CONTINUE = "continue"
    """Proceed with the screen loop. Think time applies before the next dispatch."""

    NO_OP_CONTINUE = "no_op_continue"
    """Proceed with the screen loop without think time. The action found nothing to do."""

    HANDLED_ERROR = "handled_error"
    """A recoverable error occurred and was dealt with. Proceed with the screen loop."""

    LEAVE_SCREEN = "leave_screen"
    """Return control to the parent screen."""

    JUMP_TO_SCREEN = "jump_to_screen"
    """Hand control to the named sibling screen, bypassing the weighted draw."""

    SUSPEND = "suspend"
    """End this iteration of the virtual user's session."""

    FATAL_ABORT = "fatal_abort"
    """Stop the virtual user for the remainder of the run."""

    FINISHED = "finished"
    """The loop ended because the ramp-down schedule retired this virtual user."""

    @property
    def leaves_screen(self) -> bool:
        """Whether a screen loop must return this outcome to its caller."""
        return self in _LEAVING_KINDS

    @property
    def ends_iteration(self) -> bool:
        """Whether this outcome ends the current session iteration."""
        return self in _ITERATION_ENDING_KINDS

    @property
    def skips_think_time(self) -> bool:
        return self == OutcomeKind.NO_OP_CONTINUE


_LEAVING_KINDS = frozenset(
    {
        OutcomeKind.LEAVE_SCREEN,
        OutcomeKind.JUMP_TO_SCREEN,
        OutcomeKind.SUSPEND,
        OutcomeKind.FATAL_ABORT,
        OutcomeKind.FINISHED,
    }
)

_ITERATION_ENDING_KINDS = frozenset(
    {OutcomeKind.SUSPEND, OutcomeKind.FATAL_ABORT, OutcomeKind.FINISHED}
)
