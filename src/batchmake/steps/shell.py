"""Run one command once."""

from typing import Literal

from pydantic import Field

from batchmake.core.result import StepResult
from batchmake.steps.base import Step, StepContext


class ShellStep(Step):
    """Run a command once, in the root or a directory below it."""

    kind: Literal["shell"] = "shell"
    command: str = Field(description="Shell command to run")
    cwd: str = Field(
        default=".",
        description="Working directory, relative to the discovery root",
    )

    def run(self, name: str, ctx: StepContext) -> StepResult:
        result = ctx.runner.execute(self.command, cwd=ctx.root / self.cwd)
        return StepResult(
            step=name,
            success=result.exited == 0,
            returncode=result.exited,
            message="" if result.exited == 0 else f"'{self.command}' failed",
        )
