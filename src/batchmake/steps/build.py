"""Batch build step."""

from typing import Literal

from pydantic import Field

from batchmake.core.result import StepResult
from batchmake.runner.batch import BatchBuildRunner
from batchmake.steps.base import Step, StepContext


class BuildStep(Step):
    """Build every target with the configured build command."""

    kind: Literal["build"] = "build"
    parameter: str | None = Field(
        default=None,
        description="Build parameter; defaults to config.build.parameter",
    )

    def run(self, name: str, ctx: StepContext) -> StepResult:
        runner = BatchBuildRunner(
            command=ctx.build_command,
            parameter_name=ctx.parameter_name,
            runner=ctx.runner,
            fail_fast=ctx.fail_fast,
        )
        outcome = runner.run_all(ctx.targets, self.parameter or ctx.parameter)

        if outcome.ok:
            return StepResult(
                step=name,
                success=True,
                message=f"built {len(outcome.built)} target(s)",
            )
        return StepResult(
            step=name,
            success=False,
            returncode=outcome.returncode,
            target=outcome.target,
            message="Build failed!",
        )
