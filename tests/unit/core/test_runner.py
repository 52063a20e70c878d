"""Tests for the invoke-based command Runner."""

import os

import pytest

from batchmake.core.errors import ProcessSpawnError, TargetDirectoryError
from batchmake.core.runner import Runner, check_directory, is_launchable


def test_successful_command():
    """Test that a successful command reports exit status 0."""
    result = Runner().execute("true", hide=True)

    assert result.exited == 0


def test_failed_command_does_not_raise():
    """Test that a non-zero exit is returned, not raised."""
    result = Runner().execute("sh -c 'exit 2'", hide=True)

    assert result.exited == 2


def test_runs_in_given_directory(tmp_path):
    """Test that cwd applies to the command only."""
    before = os.getcwd()

    result = Runner().execute("pwd", cwd=tmp_path, hide=True)

    assert result.stdout.strip() == str(tmp_path.resolve())
    assert os.getcwd() == before


def test_directory_with_spaces(tmp_path):
    """Test that directories with spaces can be entered."""
    spaced = tmp_path / "with space"
    spaced.mkdir()

    result = Runner().execute("pwd", cwd=spaced, hide=True)

    assert result.exited == 0
    assert result.stdout.strip() == str(spaced.resolve())


@pytest.mark.parametrize("name", ["a&b", "it's", "$HOME;(x)"])
def test_directory_with_shell_metacharacters(tmp_path, name):
    """Test that the directory is passed to the shell quoted."""
    odd = tmp_path / name
    odd.mkdir()

    result = Runner().execute("pwd", cwd=odd, hide=True)

    assert result.exited == 0
    assert result.stdout.strip() == str(odd.resolve())


def test_env_is_added_to_inherited_environment(monkeypatch):
    """Test that env entries are exported next to the inherited
    environment."""
    monkeypatch.setenv("BATCHMAKE_TEST_INHERITED", "kept")

    result = Runner().execute(
        'echo "$BSP $BATCHMAKE_TEST_INHERITED"',
        env={"BSP": "rpi4"},
        hide=True,
    )

    assert result.stdout.strip() == "rpi4 kept"


def test_output_passes_through(capfd):
    """Test that output is mirrored when not hidden."""
    Runner().execute("echo passthrough-marker")

    assert "passthrough-marker" in capfd.readouterr().out


def test_missing_command_raises():
    """Test that an unknown executable raises ProcessSpawnError."""
    with pytest.raises(ProcessSpawnError, match="command not found"):
        Runner().execute("batchmake-no-such-tool --flag", hide=True)


def test_non_executable_command_raises(tmp_path):
    """Test that a non-executable file raises ProcessSpawnError."""
    script = tmp_path / "tool"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o644)

    with pytest.raises(ProcessSpawnError, match="not executable"):
        Runner().execute("./tool", cwd=tmp_path, hide=True)


def test_launched_command_exiting_127_is_a_failure():
    """Test that 127 from a tool that did start is an ordinary
    failure."""
    result = Runner().execute("sh -c 'exit 127'", hide=True)

    assert result.exited == 127


def test_is_launchable(tmp_path):
    """Test first-word resolution on PATH and relative to cwd."""
    tool = tmp_path / "tool"
    tool.write_text("#!/bin/sh\nexit 0\n")
    tool.chmod(0o755)

    assert is_launchable("sh -c true")
    assert is_launchable("./tool --flag", cwd=tmp_path)
    assert not is_launchable("./missing", cwd=tmp_path)
    assert not is_launchable("batchmake-no-such-tool")


def test_missing_directory_raises(tmp_path):
    """Test that a missing cwd raises TargetDirectoryError."""
    with pytest.raises(TargetDirectoryError, match="no such directory"):
        Runner().execute("true", cwd=tmp_path / "missing")


def test_check_directory_rejects_files(tmp_path):
    """Test that a file is not accepted as a working directory."""
    path = tmp_path / "file"
    path.write_text("")

    with pytest.raises(TargetDirectoryError, match="not a directory"):
        check_directory(path)


def test_timeout_handling():
    """Test that a timed-out command reports exit status -1."""
    result = Runner().execute("sleep 10", timeout=1, hide=True)

    assert result.exited == -1
