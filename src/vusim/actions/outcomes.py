# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Conversions from request results to action outcomes."""

import random

from vusim.actions.context import ActionContext
from vusim.clients import ErrorClassifier
from vusim.common.models import ErrorDetails, RequestResult, UserSnapshot
from vusim.dispatch import (
    CONTINUE,
    FATAL_ABORT,
    HANDLED_ERROR,
    LEAVE_SCREEN,
    ActionOutcome,
)

RANK_TOO_LOW_REASON = "rank_too_low"


def is_fatal(error: ErrorDetails | None) -> bool:
    return ErrorClassifier.is_fatal(error)


def to_outcome(result: RequestResult) -> ActionOutcome:
    """Fatal errors abort, other errors are handled, success continues."""
    if is_fatal(result.error):
        return FATAL_ABORT
    if result.error is not None:
        return HANDLED_ERROR
    return CONTINUE


def ok_or_error(result: RequestResult | None) -> ActionOutcome:
    """Only fatal errors matter. Anything else continues."""
    if result is not None and is_fatal(result.error):
        return FATAL_ABORT
    return CONTINUE


def ok_or_back_or_error(
    result: RequestResult | None, back_percent: float, rng: random.Random
) -> ActionOutcome:
    """Like :func:`ok_or_error`, but leave the screen with `back_percent` % probability."""
    if result is not None and is_fatal(result.error):
        return FATAL_ABORT
    return LEAVE_SCREEN if rng.random() * 100 <= back_percent else CONTINUE


def check_response(
    ctx: ActionContext, result: RequestResult, tag: str, only_fatal: bool = False
) -> ActionOutcome | None:
    """Log a failed request and decide whether the caller must stop.

    A successful response carrying a user document refreshes the cached user.

    Args:
        only_fatal: Treat non-fatal errors as warnings the caller may continue past.

    Returns:
        None if the caller may continue, otherwise the outcome it must return.
    """
    error = result.error
    if error is None:
        if UserSnapshot.looks_like_user(result.data):
            ctx.state.set_user(result.data)
        return None
    if is_fatal(error):
        ctx.logger.error(f"VU {ctx.state.ordinal}: Fatal error! {tag}: {error}")
        return FATAL_ABORT
    if only_fatal:
        ctx.logger.warning(f"VU {ctx.state.ordinal}: Warning! {tag}: {error}")
        return None
    ctx.logger.error(f"VU {ctx.state.ordinal}: Error! {tag}: {error}")
    return HANDLED_ERROR


def log_rank_details(ctx: ActionContext, result: RequestResult, detail: str) -> None:
    """Log the user's progression when the backend says their rank is too low."""
    if ctx.classifier.has_reason(result.error, RANK_TOO_LOW_REASON):
        user = ctx.state.user
        ctx.logger.error(
            f"Username: {user.username if user else None}, "
            f"rank: {user.rank if user else None}, "
            f"xp: {user.xp if user else None}, {detail}"
        )
