"""Target discovery by marker file."""

import os
from collections.abc import Iterable
from pathlib import Path

from batchmake.core.errors import DiscoveryError
from batchmake.core.log import logger
from batchmake.core.result import Target

DEFAULT_MARKER = "Cargo.toml"
DEFAULT_EXCLUDE = ("target", ".git")


def discover_targets(
    root: Path,
    marker: str = DEFAULT_MARKER,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> list[Target]:
    """Find every directory under root that contains marker.

    Args:
        root: Directory to walk recursively
        marker: Filename identifying a buildable directory
        exclude: Directory names never descended into

    Returns:
        Targets sorted lexicographically by path; empty if none

    Raises:
        DiscoveryError: If root is missing or unreadable
    """
    root = Path(root).resolve()
    if not root.exists():
        raise DiscoveryError(root, "no such directory")
    if not root.is_dir():
        raise DiscoveryError(root, "not a directory")

    try:
        # Fail early on unreadable roots; os.walk would skip them
        with os.scandir(root):
            pass
    except OSError as e:
        raise DiscoveryError(root, e.strerror or str(e)) from e

    skip = set(exclude)
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in skip]
        if marker in filenames:
            path = Path(dirpath)
            found.append(
                Target(path=path, name=path.relative_to(root).as_posix())
            )

    found.sort(key=lambda t: t.path.as_posix())
    logger.debug(
        f"Discovered {len(found)} target(s)", root=str(root), marker=marker
    )
    return found
