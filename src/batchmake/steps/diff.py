"""Diff neighbouring targets."""

import shlex
from typing import Literal

from pydantic import Field

from batchmake.core.log import logger
from batchmake.core.result import StepResult
from batchmake.steps.base import Step, StepContext

# diff(1): 0 identical, 1 different, >1 trouble
DIFF_OK = (0, 1)


class DiffStep(Step):
    """Compare each target with the one before it.

    The report for a pair (old, new) is written into the new
    target's directory.
    """

    kind: Literal["diff"] = "diff"
    command: str = Field(
        default="diff -uNr -x .diff -x target {old} {new}",
        description="Diff command; {old} and {new} are target paths",
    )
    output: str = Field(
        default=".diff",
        description="Report filename written into the newer target",
    )

    def run(self, name: str, ctx: StepContext) -> StepResult:
        for old, new in zip(ctx.targets, ctx.targets[1:]):
            command = self.command.format(
                old=shlex.quote(old.name), new=shlex.quote(new.name)
            )
            result = ctx.runner.execute(command, cwd=ctx.root, hide=True)

            if result.exited not in DIFF_OK:
                return StepResult(
                    step=name,
                    success=False,
                    returncode=result.exited,
                    target=new,
                    message=result.stderr.strip(),
                )

            report = new.path / self.output
            report.write_text(result.stdout)
            logger.debug(
                f"Diffed {old.name} -> {new.name}",
                changed=result.exited == 1,
                report=str(report),
            )

        return StepResult(step=name, success=True)
