"""Exceptions raised while discovering and building targets.

A target whose build exits non-zero is not an exception: it is
reported as a failed RunOutcome. The errors here are the cases
where no exit status exists.
"""

from pathlib import Path


class BatchmakeError(Exception):
    """Base class for batchmake errors."""


class DiscoveryError(BatchmakeError, OSError):
    """Discovery root is missing or unreadable."""

    def __init__(self, root: Path, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot discover targets in {root}: {reason}")


class TargetDirectoryError(BatchmakeError, OSError):
    """A target's working directory cannot be entered."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot enter {path}: {reason}")


class ProcessSpawnError(BatchmakeError, OSError):
    """The command could not be launched at all."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot launch '{command}': {reason}")


__all__ = [
    "BatchmakeError",
    "DiscoveryError",
    "TargetDirectoryError",
    "ProcessSpawnError",
]
