"""Result types for target builds and pipeline steps."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Target(BaseModel):
    """One discovered buildable directory."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str

    def __str__(self) -> str:
        return self.name


class BuildResult(BaseModel):
    """Outcome of building a single target."""

    target: Target
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


class RunStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    STOPPED = "stopped"
    COMPLETED = "completed"


class RunOutcome(BaseModel):
    """Outcome of one batch build run.

    ``stopped`` carries the first failing target and its exit code.
    ``failures`` lists every failed build; with fail-fast it holds
    exactly the one that stopped the run.
    """

    status: RunStatus
    built: list[Target] = Field(default_factory=list)
    target: Target | None = None
    returncode: int | None = None
    failures: list[BuildResult] = Field(default_factory=list)

    @classmethod
    def success(cls, built: list[Target]) -> RunOutcome:
        return cls(status=RunStatus.COMPLETED, built=built)

    @classmethod
    def failed(
        cls,
        target: Target,
        returncode: int,
        built: list[Target],
        failures: list[BuildResult] | None = None,
    ) -> RunOutcome:
        return cls(
            status=RunStatus.STOPPED,
            built=built,
            target=target,
            returncode=returncode,
            failures=failures or [
                BuildResult(target=target, returncode=returncode)
            ],
        )

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.COMPLETED


class StepResult(BaseModel):
    """Outcome of one pipeline step."""

    step: str
    success: bool
    returncode: int = 0
    target: Target | None = None
    message: str = ""


class PipelineOutcome(BaseModel):
    """Outcome of a chain of steps, halted at the first failure."""

    results: list[StepResult] = Field(default_factory=list)

    @property
    def failed_step(self) -> StepResult | None:
        return next((r for r in self.results if not r.success), None)

    @property
    def success(self) -> bool:
        return self.failed_step is None
