"""Run one command in every target."""

from typing import Literal

from pydantic import Field

from batchmake.core.log import logger
from batchmake.core.result import StepResult
from batchmake.steps.base import Step, StepContext


class ForeachStep(Step):
    """Run a command in every target directory, fail-fast.

    With ``parameters`` the whole sweep is repeated once per value,
    exported under the build parameter name (e.g. clippy for every
    board).
    """

    kind: Literal["foreach"] = "foreach"
    command: str = Field(description="Command run in each target")
    parameters: list[str] = Field(
        default_factory=list,
        description="Parameter values to sweep; empty means no export",
    )

    def run(self, name: str, ctx: StepContext) -> StepResult:
        sweeps = self.parameters or [None]

        for parameter in sweeps:
            env = {ctx.parameter_name: parameter} if parameter else None
            for target in ctx.targets:
                logger.info(
                    f"{name}: {target.name}",
                    parameter=parameter or "",
                )
                result = ctx.runner.execute(
                    self.command, cwd=target.path, env=env
                )
                if result.exited != 0:
                    return StepResult(
                        step=name,
                        success=False,
                        returncode=result.exited,
                        target=target,
                        message=f"'{self.command}' failed",
                    )

        return StepResult(step=name, success=True)
