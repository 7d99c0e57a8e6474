# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for the virtual user load generator."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

import sys
from pathlib import Path

from cyclopts import App

from vusim.cli_utils import exit_on_error

app = App(name="vusim", help="Virtual user load generator for the game backend")


@app.command(name="run")
def run(
    defaults: Path | None = None,
    overrides: Path | None = None,
    task_index: int | None = None,
    test_id: str | None = None,
    vus: int | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    force: list[str] | None = None,
    export: Path | None = None,
) -> None:
    """Run a load test.

    Args:
        defaults: JSON (with comments) defaults file. Defaults to the packaged defaults.
        overrides: JSON (with comments) file whose top-level keys replace the defaults.
        task_index: Index of this task within a distributed test.
        test_id: Identifier shared by all tasks of the test.
        vus: Maximum number of VUs, overriding `vus_max`.
        log_level: Root log level (TRACE, DEBUG, INFO, WARNING, ERROR).
        log_file: Also write logs to this file.
        force: Forced action descriptors "<dispatcher>[?].<action>", in order.
        export: Write the metrics summary to this JSON file.
    """
    with exit_on_error(title="Error Running Load Test"):
        from vusim.cli_runner import run_load_test

        run_load_test(
            defaults=defaults,
            overrides=overrides,
            task_index=task_index,
            test_id=test_id,
            vus=vus,
            log_level=log_level,
            log_file=log_file,
            forced_actions=force,
            export=export,
        )


@app.command(name="validate")
def validate(
    defaults: Path | None = None,
    overrides: Path | None = None,
    vus: int | None = None,
) -> None:
    """Validate the configuration and show the resolved timeline and action weights.

    Args:
        defaults: JSON (with comments) defaults file. Defaults to the packaged defaults.
        overrides: JSON (with comments) file whose top-level keys replace the defaults.
        vus: Maximum number of VUs, overriding `vus_max`.
    """
    with exit_on_error(title="Invalid Configuration"):
        from vusim.cli_runner import validate_config

        validate_config(defaults=defaults, overrides=overrides, vus=vus)


def main() -> int:
    return app(sys.argv[1:])
