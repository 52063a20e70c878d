"""Batch build runner: one build per target, fail-fast."""

from collections.abc import Sequence

from batchmake.core.log import logger
from batchmake.core.result import BuildResult, RunOutcome, RunStatus, Target
from batchmake.core.runner import Runner


class BatchBuildRunner:
    """Run a build command in each target's directory.

    The shared parameter is exported under ``parameter_name`` into
    every child environment. Targets are built strictly one after
    another; with ``fail_fast`` the first non-zero exit stops the
    run and later targets are never spawned.
    """

    def __init__(
        self,
        command: str = "make",
        parameter_name: str = "BSP",
        runner: Runner | None = None,
        fail_fast: bool = True,
    ):
        """Initialize batch build runner.

        Args:
            command: Build command run in every target
            parameter_name: Environment variable carrying the parameter
            runner: Command runner (a new Runner if omitted)
            fail_fast: Stop at the first failed target
        """
        self.command = command
        self.parameter_name = parameter_name
        self.runner = runner or Runner()
        self.fail_fast = fail_fast
        self.status = RunStatus.PENDING

    def build(self, target: Target, parameter: str) -> BuildResult:
        """Build a single target.

        Raises:
            TargetDirectoryError: If the target directory cannot be entered
            ProcessSpawnError: If the build command cannot be launched
        """
        logger.info(f"Building {target.name}", parameter=parameter)
        result = self.runner.execute(
            self.command,
            cwd=target.path,
            env={self.parameter_name: parameter},
        )
        return BuildResult(target=target, returncode=result.exited)

    def run_all(
        self, targets: Sequence[Target], parameter: str
    ) -> RunOutcome:
        """Build every target in order.

        Args:
            targets: Targets in build order
            parameter: Value exported under parameter_name

        Returns:
            RunOutcome; a failed build is reported here, never raised
        """
        built: list[Target] = []
        failures: list[BuildResult] = []

        for target in targets:
            self.status = RunStatus.RUNNING
            result = self.build(target, parameter)
            built.append(target)

            if result.success:
                continue

            logger.error(
                f"Build failed: {target.name}",
                returncode=result.returncode,
            )
            failures.append(result)
            if self.fail_fast:
                break

        if failures:
            self.status = RunStatus.STOPPED
            first = failures[0]
            return RunOutcome.failed(
                first.target, first.returncode, built, failures
            )

        self.status = RunStatus.COMPLETED
        logger.info(f"Built {len(built)} target(s)", parameter=parameter)
        return RunOutcome.success(built)
