# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
from pathlib import Path

from rich.console import Console
from rich.table import Table

from vusim.common import random_generator as rng
from vusim.common.config import SimulationConfig, load_config
from vusim.common.environment import Environment
from vusim.common.exceptions import VUSimError
from vusim.common.logging import setup_rich_logging
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)


def load_simulation_config(
    defaults: Path | None = None,
    overrides: Path | None = None,
    vus: int | None = None,
    forced_actions: list[str] | None = None,
) -> SimulationConfig:
    """Load the config from the given files, falling back to the environment settings.

    Raises:
        ConfigurationError: If the config does not validate, or its weight
            overrides leave a dispatcher with no selectable action.
    """
    from vusim.screens.table import check_effective_weights

    config = load_config(
        defaults or Environment.CONFIG.DEFAULTS_FILE,
        overrides or Environment.CONFIG.OVERRIDES_FILE,
        vus_max=vus,
        forced_actions=forced_actions or None,
    )
    check_effective_weights(config)
    return config


def run_load_test(
    defaults: Path | None = None,
    overrides: Path | None = None,
    task_index: int | None = None,
    test_id: str | None = None,
    vus: int | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    forced_actions: list[str] | None = None,
    export: Path | None = None,
    console: Console | None = None,
) -> None:
    """Run the load test of this task and print the metrics summary.

    Raises:
        VUSimError: If the run was aborted because the identity provider throttled sign in.
    """
    from vusim.controller import LoadTestController
    from vusim.metrics import build_summary_table, export_summary_json

    config = load_simulation_config(defaults, overrides, vus, forced_actions)
    setup_rich_logging(
        log_level or Environment.LOGGING.LEVEL,
        log_file=log_file or Environment.LOGGING.FILE,
        log_levels=config.log_levels,
    )
    rng.init(config.seed)

    controller = LoadTestController(
        config,
        task_index=task_index if task_index is not None else Environment.TASK.INDEX,
        test_id=test_id or Environment.TASK.TEST_ID,
    )
    summaries = asyncio.run(controller.run())

    console = console or Console()
    console.print(build_summary_table(summaries))
    if export is not None:
        export_summary_json(summaries, export)
        _logger.info(f"Metrics summary written to {export}")
    if controller.aborted:
        raise VUSimError("Load test aborted: identity provider throttled sign in")


def validate_config(
    defaults: Path | None = None,
    overrides: Path | None = None,
    vus: int | None = None,
    console: Console | None = None,
) -> None:
    """Print the timeline and action weight tables of a valid config."""
    from vusim.timing import RampSchedule

    config = load_simulation_config(defaults, overrides, vus)
    schedule = RampSchedule.from_stages(config.stages, config.max_concurrency)
    console = console or Console()
    console.print(build_timeline_table(schedule))
    if not schedule.is_valid:
        console.print("[yellow]Fewer than 3 stages: no VU would run.[/yellow]")
    console.print(build_weights_table(config))


def build_timeline_table(schedule) -> Table:
    table = Table(title="Test Timeline")
    table.add_column("Stage", justify="right", style="cyan")
    table.add_column("Start (s)", justify="right", style="green")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Target VUs", justify="right", style="green")
    start = 0.0
    for i, stage in enumerate(schedule.stages, start=1):
        label = f"{i} (ramp-down)" if i == len(schedule.stages) else str(i)
        table.add_row(label, f"{start:,.1f}", f"{stage.duration_sec:,.1f}", str(stage.target))
        start += stage.duration_sec
    table.caption = (
        f"Total {schedule.test_duration_sec:,.1f}s, ramp-down starts at "
        f"{schedule.ramp_down_start_sec:,.1f}s, max {schedule.max_concurrency} VUs"
    )
    return table


def build_weights_table(config: SimulationConfig) -> Table:
    """Default screen action weights with the configured overrides applied."""
    from vusim.screens.table import default_weights

    table = Table(title="Action Weights")
    table.add_column("Dispatcher", style="cyan", no_wrap=True)
    table.add_column("Action", style="magenta")
    table.add_column("Weight", justify="right", style="green")
    for dispatcher_name, defaults in default_weights(config).items():
        overrides = config.weights_for(dispatcher_name)
        for action_name, weight in defaults.items():
            if action_name in overrides:
                cell = f"{overrides[action_name]:g} (override)"
            else:
                cell = "varies" if weight is None else f"{weight:g}"
            table.add_row(dispatcher_name, action_name, cell)
    return table
