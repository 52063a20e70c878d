"""Publish command - run the ready-for-publish checklist."""

from pydantic import BaseModel

from batchmake.core.log import logger


class PublishCommand(BaseModel):
    """Run every step of the publish checklist in order.

    The checklist is the config.publish list (clean, fmt, lint,
    clippy, make, diff, spelling, ...). The first failing step
    aborts the rest.
    """

    async def run_workflow(self, state: "State") -> int:
        """Run publish workflow.

        Returns:
            Exit code (0=ready for publish, 1=failure)
        """
        from batchmake.command.step import run_steps

        exit_code = await run_steps(state, state.config.publish)
        if exit_code == 0:
            logger.info("Ready for publish")
        return exit_code
