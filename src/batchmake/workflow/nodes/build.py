"""Batch build nodes - discover targets, then build them all."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from batchmake.core.config import State
from batchmake.core.log import logger
from batchmake.core.result import RunOutcome
from batchmake.runner.batch import BatchBuildRunner
from batchmake.runner.discovery import discover_targets


@dataclass
class DiscoverTargets(BaseNode[State]):
    """Find the targets for this run."""

    async def run(self, ctx: GraphRunContext[State]) -> BuildAll:
        """Discover targets fresh; nothing is cached across runs.

        Raises:
            DiscoveryError: If the build root is missing or unreadable
        """
        build = ctx.state.config.build
        targets = discover_targets(build.root, build.marker, build.exclude)
        ctx.state.runtime.build.targets = targets

        if not targets:
            logger.warn(
                "No targets found", root=str(build.root), marker=build.marker
            )
        return BuildAll()


@dataclass
class BuildAll(BaseNode[State, None, RunOutcome]):
    """Build every discovered target with the run's parameter."""

    async def run(self, ctx: GraphRunContext[State]) -> End[RunOutcome]:
        build = ctx.state.config.build
        parameter = ctx.state.runtime.build.parameter or build.parameter

        runner = BatchBuildRunner(
            command=build.command,
            parameter_name=build.parameter_name,
            fail_fast=build.fail_fast,
        )

        with logger.span(
            "Batch build",
            parameter=parameter,
            targets=len(ctx.state.runtime.build.targets),
        ):
            outcome = runner.run_all(
                ctx.state.runtime.build.targets, parameter
            )

        ctx.state.runtime.build.outcome = outcome
        return End(outcome)
