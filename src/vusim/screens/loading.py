# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The loading screen: sign in, bootstrap the account and fetch configuration."""

from vusim.actions import ActionContext
from vusim.actions.account import load_game_config, session_start
from vusim.common.vusim_logger import VUSimLogger
from vusim.dispatch import CONTINUE, FATAL_ABORT, FINISHED, SUSPEND, ActionOutcome

_logger = VUSimLogger(__name__)

IDENTITY_THROTTLE_BACKOFF_SEC = 600.0
TRANSIENT_BACKOFF_SEC = 60.0


async def run_loading(ctx: ActionContext) -> ActionOutcome:
    """Bootstrap the session.

    Failures are handled by kind:

    - identity provider throttling: count it, back off up to 10 minutes, abort;
    - transient (no status or 5xx): back off up to a minute, then let the next iteration bootstrap again;
    - anything else: the VU cannot make progress, so it sits out the rest of the run.
    """
    state = ctx.state
    result = await session_start(ctx)
    if result.error is not None:
        _logger.error(f"VU {state.ordinal}: Error at start of session: {result.error}")
        if ctx.classifier.is_identity_throttle(result):
            ctx.metrics.cognito_throttles.add(1)
            await ctx.delays.backoff(IDENTITY_THROTTLE_BACKOFF_SEC, state.ordinal)
            return FATAL_ABORT
        if ctx.classifier.is_transient(result.error):
            await ctx.delays.backoff(TRANSIENT_BACKOFF_SEC, state.ordinal)
            return SUSPEND
        _logger.warning(f"Non-retryable error. Stopping VU: {state.ordinal}")
        await ctx.lifecycle.terminate()
        return FINISHED

    if state.user is None:
        _logger.error(f"No user at start of session! Stopping VU: {state.ordinal}")
        await ctx.lifecycle.terminate()
        return FINISHED

    await load_game_config(ctx)
    return CONTINUE
