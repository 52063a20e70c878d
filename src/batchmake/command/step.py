"""Step command - run configured steps by name."""

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg

from batchmake.core.errors import BatchmakeError
from batchmake.core.log import logger


async def run_steps(state: "State", names: list[str]) -> int:
    """Run the named steps through the pipeline graph.

    Returns:
        Exit code (0=every step passed, 1=a step failed)
    """
    from batchmake.workflow.graph import create_pipeline_workflow, run_workflow
    from batchmake.workflow.nodes.pipeline import PreparePipeline

    try:
        outcome = await run_workflow(
            create_pipeline_workflow(), PreparePipeline(names), state
        )
    except (BatchmakeError, ValueError) as e:
        logger.error(str(e))
        return 1

    return 0 if outcome.success else 1


class StepCommand(BaseModel):
    """Run one configured step (clean, fmt, clippy, diff, ...) on
    every target."""

    name: CliPositionalArg[str] = Field(
        description="Step name from config.steps",
    )
    bsp: str | None = Field(
        default=None,
        description="Board support package for build steps",
    )

    async def run_workflow(self, state: "State") -> int:
        if self.bsp:
            state.runtime.build.parameter = self.bsp
        return await run_steps(state, [self.name])
