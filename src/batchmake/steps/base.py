"""Step base class and execution context."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field

from batchmake.core.result import StepResult, Target
from batchmake.core.runner import Runner


@dataclass
class StepContext:
    """Everything a step needs to run against the target tree."""

    root: Path
    targets: list[Target]
    build_command: str = "make"
    parameter_name: str = "BSP"
    parameter: str = "rpi3"
    fail_fast: bool = True
    runner: Runner = field(default_factory=Runner)


class Step(BaseModel):
    """One configured operation of a pipeline."""

    description: str = Field(
        default="",
        description="Human-readable summary shown when the step starts",
    )

    @abstractmethod
    def run(self, name: str, ctx: StepContext) -> StepResult:
        """Run the step.

        Args:
            name: Name the step is configured under
            ctx: Execution context

        Returns:
            StepResult; failures of the external tool are reported,
                not raised
        """
