#!/usr/bin/env python3
"""batchmake CLI - batch builds and publish checklist for a tree
of tutorial folders."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from batchmake.command.make import MakeCommand
from batchmake.command.publish import PublishCommand
from batchmake.command.step import StepCommand
from batchmake.command.targets import TargetsCommand
from batchmake.core.config import State
from batchmake.core.log import logger


class CliState(State):
    """Build every tutorial folder and check it is ready for publish.

    A target is any directory containing the marker file
    (Cargo.toml by default). Targets are built in lexicographic
    order with the board parameter exported as BSP, and the first
    failure stops the run.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.build.parameter rpi4)
    2. Environment variables
       (BATCHMAKE_CONFIG__BUILD__PARAMETER=rpi4)
    3. .env file
    4. --include files, ./batchmake.yaml, user config, defaults
    """

    make: CliSubCommand[MakeCommand]
    step: CliSubCommand[StepCommand]
    publish: CliSubCommand[PublishCommand]
    targets: CliSubCommand[TargetsCommand]

    def cli_cmd(self):
        """Dispatch to active subcommand, or show help if none
        provided."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        with logger:
            exit_code = asyncio.run(subcommand.run_workflow(self))
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
