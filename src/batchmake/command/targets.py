"""Targets command - list discovered targets."""

from pydantic import BaseModel

from batchmake.core.errors import DiscoveryError
from batchmake.core.log import logger
from batchmake.runner.discovery import discover_targets


class TargetsCommand(BaseModel):
    """Print every discovered target, one per line, in build order."""

    async def run_workflow(self, state: "State") -> int:
        build = state.config.build
        try:
            targets = discover_targets(build.root, build.marker, build.exclude)
        except DiscoveryError as e:
            logger.error(str(e))
            return 1

        for target in targets:
            print(target.name)
        return 0
