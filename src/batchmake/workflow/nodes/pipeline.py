"""Pipeline nodes - run named steps in order, stop at the first
failure."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from batchmake.core.config import State
from batchmake.core.log import logger
from batchmake.core.result import PipelineOutcome
from batchmake.core.runner import Runner
from batchmake.runner.discovery import discover_targets
from batchmake.steps import StepContext


@dataclass
class PreparePipeline(BaseNode[State, None, PipelineOutcome]):
    """Validate the step list and the build root before any step runs."""

    step_names: list[str]

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> RunStep | End[PipelineOutcome]:
        """Schedule the steps.

        Raises:
            ValueError: If a step name is not configured
            DiscoveryError: If the build root is missing or unreadable
        """
        config = ctx.state.config
        unknown = [n for n in self.step_names if n not in config.steps]
        if unknown:
            available = ', '.join(sorted(config.steps))
            raise ValueError(
                f"Unknown step(s): {', '.join(unknown)}. "
                f"Available steps: {available}"
            )

        discover_targets(
            config.build.root, config.build.marker, config.build.exclude
        )

        pipeline = ctx.state.runtime.pipeline
        pipeline.step_names = list(self.step_names)
        pipeline.outcome = PipelineOutcome()

        if not self.step_names:
            logger.warn("No steps to run")
            return End(pipeline.outcome)
        return RunStep(index=0)


@dataclass
class RunStep(BaseNode[State, None, PipelineOutcome]):
    """Run one scheduled step."""

    index: int

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> RunStep | End[PipelineOutcome]:
        """Run the step at ``index`` and route on its result.

        Returns:
            RunStep: The next step, if this one succeeded
            End[PipelineOutcome]: After the last step or the first
                failure
        """
        config = ctx.state.config
        pipeline = ctx.state.runtime.pipeline
        names = pipeline.step_names
        name = names[self.index]
        step = config.steps[name]

        # Earlier steps may have added or removed targets
        targets = discover_targets(
            config.build.root, config.build.marker, config.build.exclude
        )
        step_ctx = StepContext(
            root=config.build.root.resolve(),
            targets=targets,
            build_command=config.build.command,
            parameter_name=config.build.parameter_name,
            parameter=(
                ctx.state.runtime.build.parameter or config.build.parameter
            ),
            fail_fast=config.build.fail_fast,
            runner=Runner(),
        )

        logger.info(
            f"Step {self.index + 1}/{len(names)}: {name}",
            description=step.description,
        )
        with logger.span(f"Step {name}", kind=step.kind):
            result = step.run(name, step_ctx)
        pipeline.outcome.results.append(result)

        if not result.success:
            where = f" in {result.target.name}" if result.target else ""
            logger.error(
                f"Step '{name}' failed{where}",
                returncode=result.returncode,
                message=result.message,
            )
            return End(pipeline.outcome)

        if self.index + 1 < len(names):
            return RunStep(index=self.index + 1)
        return End(pipeline.outcome)
