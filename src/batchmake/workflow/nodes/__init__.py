"""Workflow nodes for graph state machines."""

from batchmake.workflow.nodes.build import BuildAll, DiscoverTargets
from batchmake.workflow.nodes.pipeline import PreparePipeline, RunStep

__all__ = [
    "DiscoverTargets",
    "BuildAll",
    "PreparePipeline",
    "RunStep",
]
