"""Pipeline steps."""

from typing import Annotated

from pydantic import Field

from batchmake.steps.base import Step, StepContext
from batchmake.steps.build import BuildStep
from batchmake.steps.diff import DiffStep
from batchmake.steps.foreach import ForeachStep
from batchmake.steps.shell import ShellStep

AnyStep = Annotated[
    BuildStep | ForeachStep | ShellStep | DiffStep,
    Field(discriminator="kind"),
]

__all__ = [
    "AnyStep",
    "BuildStep",
    "DiffStep",
    "ForeachStep",
    "ShellStep",
    "Step",
    "StepContext",
]
