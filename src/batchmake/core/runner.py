"""Command execution using invoke library with custom extensions."""

import os
import shlex
import shutil
from pathlib import Path

from invoke import Context, Result
from invoke.exceptions import CommandTimedOut

from batchmake.core.errors import ProcessSpawnError, TargetDirectoryError
from batchmake.core.log import logger

# Exit statuses a POSIX shell reserves for "could not run it"
SHELL_SPAWN_FAILURES = {
    126: "command found but not executable",
    127: "command not found",
}


class Runner(Context):
    """Wrapper around invoke.Context for running build tools.

    Commands run through the shell with their output mirrored to
    our stdout/stderr. The working directory is applied as a quoted
    ``cd`` in front of the command itself, so the process-wide cwd
    is never touched.

    A KeyboardInterrupt while a child runs is handled by invoke:
    the child is interrupted and waited for, then the interrupt
    propagates to the caller.
    """

    def execute(
        self,
        command: str,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
        hide: bool = False,
        timeout: int | None = None,
    ) -> Result:
        """Run a command and return its result without raising on
        non-zero exit.

        Exit status 126 or 127 means a launch failure only when the
        command's first word cannot be resolved either. A tool that
        started and then exits 127 itself (say, a script calling a
        missing program) is reported as an ordinary failure.

        Args:
            command: Shell command to execute
            cwd: Working directory for the command
            env: Variables added to the inherited environment
            hide: Capture output instead of passing it through
            timeout: Maximum execution time in seconds

        Returns:
            invoke.Result with stdout, stderr, exited (return code);
                exited is -1 on timeout

        Raises:
            TargetDirectoryError: If cwd cannot be entered
            ProcessSpawnError: If the command cannot be launched
        """
        shell_command = command
        if cwd is not None:
            cwd = Path(cwd).resolve()
            check_directory(cwd)
            shell_command = f"cd {shlex.quote(str(cwd))} && {command}"

        kwargs = {
            "hide": hide,
            "warn": True,
            "in_stream": False,
        }
        if timeout:
            kwargs["timeout"] = timeout
        if env:
            kwargs["env"] = env

        logger.spew(
            "Spawning command",
            command=command,
            cwd=str(cwd) if cwd else "",
        )

        try:
            result = self.run(shell_command, **kwargs)
        except CommandTimedOut as e:
            result = e.result
            result.exited = -1
        except OSError as e:
            raise ProcessSpawnError(command, e.strerror or str(e)) from e

        if result.exited in SHELL_SPAWN_FAILURES and not is_launchable(
            command, cwd, env
        ):
            raise ProcessSpawnError(
                command, SHELL_SPAWN_FAILURES[result.exited]
            )

        logger.spew(
            "Command finished", command=command, exited=result.exited
        )
        return result


def is_launchable(
    command: str,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> bool:
    """Whether the first word of command names an executable.

    Words with a slash are checked relative to cwd; bare names are
    looked up on PATH (from env if it sets one).
    """
    try:
        words = shlex.split(command)
    except ValueError:
        return True
    if not words:
        return True

    program = words[0]
    if "/" in program:
        path = Path(program).expanduser()
        if not path.is_absolute() and cwd is not None:
            path = cwd / path
        return path.is_file() and os.access(path, os.X_OK)

    search_path = (env or {}).get("PATH", os.environ.get("PATH"))
    return shutil.which(program, path=search_path) is not None


def check_directory(path: Path) -> None:
    """Raise TargetDirectoryError unless path is an enterable
    directory."""
    if not path.exists():
        raise TargetDirectoryError(path, "no such directory")
    if not path.is_dir():
        raise TargetDirectoryError(path, "not a directory")
    if not os.access(path, os.X_OK):
        raise TargetDirectoryError(path, "permission denied")
