"""Tests for closing the logger and its file sink."""

import pytest

from batchmake.core.log import ConsoleSink, FileSink, Logger


@pytest.fixture
def file_logger(tmp_path):
    """A logger writing only to tmp_path/run.log, already set up."""
    logger = Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, path=str(tmp_path / "run.log")),
    )
    logger.setup(log_root=tmp_path, run_name="make")
    return logger


def test_leaving_context_closes_log_file(file_logger, tmp_path):
    """Test that the with-block flushes the build log and closes it."""
    assert not file_logger.file._file.closed

    with file_logger:
        file_logger.info("Building a", parameter="rpi3")

    assert file_logger.file._file.closed
    assert "Building a" in (tmp_path / "run.log").read_text()


def test_log_file_closed_when_run_raises(file_logger):
    """Test that an exception escaping the run still closes the file."""
    with pytest.raises(RuntimeError), file_logger:
        raise RuntimeError("build tree vanished")

    assert file_logger.file._file.closed


def test_closing_twice_is_harmless(file_logger):
    """Test that a second close() after the with-block does nothing."""
    with file_logger:
        pass

    file_logger.close()

    assert file_logger.file._file.closed


def test_config_close_reaches_file_sink(tmp_path):
    """Test that Config.close() closes the logger it set up."""
    from batchmake.core.config import BuildConfig, Config

    config = Config(
        logger=Logger(
            console=ConsoleSink(enabled=False),
            file=FileSink(enabled=True, path=str(tmp_path / "config.log")),
        ),
        build=BuildConfig(root=tmp_path),
        log_root=tmp_path,
    )
    assert not config.logger.file._file.closed

    config.close()

    assert config.logger.file._file.closed


def test_sinks_inherit_logger_level():
    """Test that only sinks without their own level take the
    logger's."""
    logger = Logger(
        level="debug",
        console=ConsoleSink(),
        file=FileSink(level="error"),
    )

    assert logger.console.level == "debug"
    assert logger.file.level == "error"
