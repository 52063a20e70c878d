"""Pytest configuration and fixtures for batchmake tests."""

import tempfile
from pathlib import Path

import pytest

from batchmake.core.log import ConsoleSink, FileSink, setup_logger

# Records "<target> <BSP>" into ../calls.log, then exits with the
# status stored in the target's exit_code file (0 if missing).
BUILD_SCRIPT = """\
echo "$(basename "$PWD") ${BSP:-unset}" >> ../calls.log
if [ -f exit_code ]; then exit "$(cat exit_code)"; fi
exit 0
"""


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Configure console-only logging at debug level for the
    test session."""
    test_log_root = Path(tempfile.gettempdir()) / "batchmake-tests"
    setup_logger(
        log_root=test_log_root,
        run_name="test",
        console=ConsoleSink(level="debug"),
        file=FileSink(enabled=False),
    )


def make_target(root: Path, name: str, exit_code: int = 0) -> Path:
    """Create a target directory with a marker and a build script."""
    path = root / name
    path.mkdir(parents=True, exist_ok=True)
    (path / "Cargo.toml").write_text(f'[package]\nname = "{name}"\n')
    (path / "build.sh").write_text(BUILD_SCRIPT)
    if exit_code:
        (path / "exit_code").write_text(str(exit_code))
    return path


def read_calls(root: Path) -> list[str]:
    """Return the "<target> <BSP>" lines recorded by build.sh."""
    calls = root / "calls.log"
    if not calls.exists():
        return []
    return calls.read_text().splitlines()


@pytest.fixture
def target_tree(tmp_path):
    """Three flat targets a, b, c under tmp_path."""
    for name in ("c", "a", "b"):
        make_target(tmp_path, name)
    return tmp_path


@pytest.fixture(name="make_target")
def make_target_fixture():
    """Factory fixture for make_target()."""
    return make_target


@pytest.fixture(name="read_calls")
def read_calls_fixture():
    """Factory fixture for read_calls()."""
    return read_calls
