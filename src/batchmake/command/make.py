"""Make command - build every target with one board parameter."""

from pydantic import BaseModel, Field

from batchmake.core.errors import BatchmakeError
from batchmake.core.log import logger


class MakeCommand(BaseModel):
    """Build every target, stopping at the first failure.

    Runs the configured build command (default: make) in each
    directory containing the marker file, in lexicographic order,
    with the board parameter exported as BSP.
    """

    bsp: str | None = Field(
        default=None,
        description=(
            "Board support package passed to every build "
            "(default: config.build.parameter, rpi3)"
        ),
    )

    async def run_workflow(self, state: "State") -> int:
        """Run batch build workflow.

        Args:
            state: State instance with config loaded

        Returns:
            Exit code (0=all targets built, 1=failure)
        """
        from batchmake.workflow.graph import create_build_workflow, run_workflow
        from batchmake.workflow.nodes.build import DiscoverTargets

        if self.bsp:
            state.runtime.build.parameter = self.bsp

        try:
            outcome = await run_workflow(
                create_build_workflow(), DiscoverTargets(), state
            )
        except BatchmakeError as e:
            logger.error(str(e))
            return 1

        if not outcome.ok:
            logger.error(
                "Build failed!",
                target=outcome.target.name,
                returncode=outcome.returncode,
                failed=[f.target.name for f in outcome.failures],
            )
            return 1

        logger.info(f"All {len(outcome.built)} target(s) built")
        return 0
