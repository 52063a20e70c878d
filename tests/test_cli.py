"""End-to-end tests for the batchmake command line."""

import sys

import pytest
from pydantic_settings import CliApp

from batchmake.cli import CliState


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep pytest's argv and any project config out of the CLI."""
    monkeypatch.setattr(sys, "argv", ["batchmake"])
    monkeypatch.chdir(tmp_path)


def run_cli(root, *args) -> int:
    """Run the CLI against root and return its exit code."""
    cli_args = [
        "--config.build.root", str(root),
        "--config.build.command", "sh build.sh",
        *args,
    ]
    with pytest.raises(SystemExit) as exc:
        CliApp.run(CliState, cli_args=cli_args)
    return exc.value.code


def test_make_success(target_tree, read_calls):
    """Test that make exits 0 and uses the default board."""
    assert run_cli(target_tree, "make") == 0
    assert read_calls(target_tree) == ["a rpi3", "b rpi3", "c rpi3"]


def test_make_with_board(target_tree, read_calls):
    """Test that --bsp is exported to every build."""
    assert run_cli(target_tree, "make", "--bsp", "rpi4") == 0
    assert read_calls(target_tree) == ["a rpi4", "b rpi4", "c rpi4"]


def test_make_failure_exits_1(tmp_path, make_target, read_calls):
    """Test that a failed build exits 1 and stops the run."""
    root = tmp_path / "tree"
    make_target(root, "a")
    make_target(root, "b", exit_code=2)
    make_target(root, "c")

    assert run_cli(root, "make", "--bsp", "boardX") == 1
    assert read_calls(root) == ["a boardX", "b boardX"]


def test_make_missing_root_exits_1(tmp_path):
    """Test that a missing root exits 1 without raising."""
    assert run_cli(tmp_path / "missing", "make") == 1


def test_make_missing_tool_exits_1(target_tree):
    """Test that a build tool that cannot start exits 1."""
    cli_args = [
        "--config.build.root", str(target_tree),
        "--config.build.command", "batchmake-no-such-build-tool",
        "make",
    ]
    with pytest.raises(SystemExit) as exc:
        CliApp.run(CliState, cli_args=cli_args)

    assert exc.value.code == 1


def test_targets_lists_build_order(target_tree, capsys):
    """Test that targets prints one target per line, in order."""
    assert run_cli(target_tree, "targets") == 0

    lines = capsys.readouterr().out.splitlines()
    assert [line for line in lines if line in ("a", "b", "c")] == [
        "a", "b", "c",
    ]


def test_step_runs_one_step(target_tree, read_calls):
    """Test that step runs a single configured step."""
    assert run_cli(target_tree, "step", "make", "--bsp", "rpi4") == 0
    assert read_calls(target_tree) == ["a rpi4", "b rpi4", "c rpi4"]


def test_step_unknown_exits_1(target_tree, read_calls):
    """Test that an unknown step name exits 1."""
    assert run_cli(target_tree, "step", "deploy") == 1
    assert read_calls(target_tree) == []


def test_publish_stops_at_first_failure(target_tree, read_calls):
    """Test that publish exits 1 at the first failed step."""
    (target_tree / "batchmake.yaml").write_text(
        "config:\n"
        "  steps:\n"
        "    ok:\n"
        "      kind: shell\n"
        "      command: 'true'\n"
        "    broken:\n"
        "      kind: shell\n"
        "      command: sh -c 'exit 1'\n"
        "  publish: [ok, broken, make]\n"
    )

    assert run_cli(target_tree, "publish") == 1
    assert read_calls(target_tree) == []


def test_publish_success(target_tree, read_calls):
    """Test that publish exits 0 when every step passes."""
    (target_tree / "batchmake.yaml").write_text(
        "config:\n"
        "  publish: [make, diff]\n"
    )

    assert run_cli(target_tree, "publish") == 0
    assert len(read_calls(target_tree)) == 3
    assert (target_tree / "c" / ".diff").exists()
