"""Graph workflow definitions."""

from pydantic_graph import Graph

from batchmake.core.config import State
from batchmake.core.log import logger


def create_build_workflow():
    """Create the batch build graph.

    DiscoverTargets → BuildAll → End[RunOutcome]
    """
    logger.debug("Building batch build graph")

    from batchmake.workflow.nodes.build import BuildAll, DiscoverTargets

    return Graph(nodes=(DiscoverTargets, BuildAll), state_type=State)


def create_pipeline_workflow():
    """Create the step pipeline graph.

    PreparePipeline → RunStep(0) → ... → RunStep(n-1) →
        End[PipelineOutcome]

    Any RunStep whose step fails ends the graph.
    """
    logger.debug("Building pipeline graph")

    from batchmake.workflow.nodes.pipeline import PreparePipeline, RunStep

    return Graph(nodes=(PreparePipeline, RunStep), state_type=State)


async def run_workflow(workflow, start_node, state: State):
    """Run a graph to completion and return its End data."""
    async with workflow.iter(start_node, state=state) as run:
        async for node in run:
            logger.spew("Workflow node", node=type(node).__name__)
    return run.result.output
