"""Logger with composable output sinks, backed by logfire."""

from __future__ import annotations

import contextlib
from abc import abstractmethod
from pathlib import Path
from typing import Any

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from pydantic import Field, PrivateAttr, model_validator

from batchmake.core.base import BaseConfig

_current_logger: Logger | None = None


class _LoggerProxy:
    """Forwards attribute access to _current_logger.

    Before setup_logger() runs every call is a no-op, so modules
    can log at import time or from tests without configuration.
    """
    def __getattr__(self, name):
        if _current_logger is None:
            if name == "span":
                return lambda *args, **kwargs: contextlib.nullcontext()

            def _noop(*args, **kwargs):  # noqa: ARG001
                pass
            return _noop
        return getattr(_current_logger, name)

    def __enter__(self):
        if _current_logger is None:
            return self
        return _current_logger.__enter__()

    def __exit__(self, *args):
        if _current_logger is None:
            return False
        return _current_logger.__exit__(*args)


logger = _LoggerProxy()


class LevelFilteringExporter(SpanExporter):
    """Span exporter that drops spans below a minimum level."""

    # Level names to OpenTelemetry severity numbers
    _level_thresholds = {
        'spew': logs_pb2.SEVERITY_NUMBER_TRACE,
        'trace': logs_pb2.SEVERITY_NUMBER_TRACE3,
        'debug': logs_pb2.SEVERITY_NUMBER_DEBUG,
        'info': logs_pb2.SEVERITY_NUMBER_INFO,
        'warn': logs_pb2.SEVERITY_NUMBER_WARN,
        'error': logs_pb2.SEVERITY_NUMBER_ERROR,
        'fatal': logs_pb2.SEVERITY_NUMBER_FATAL,
    }

    def __init__(self, exporter: SpanExporter, min_level: str | None):
        self._exporter = exporter
        self._min_severity = self._level_thresholds.get(
            (min_level or 'info').lower(), logs_pb2.SEVERITY_NUMBER_INFO
        )

    def export(self, spans: list[ReadableSpan]) -> SpanExportResult:
        filtered = [
            span for span in spans
            if (span.attributes or {}).get(
                'logfire.level_num', logs_pb2.SEVERITY_NUMBER_INFO
            ) >= self._min_severity
        ]
        if filtered:
            return self._exporter.export(filtered)
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


class Sink(BaseConfig):
    """Base class for log output sinks.

    Sinks are BaseConfig models, so the close() cascade from
    Logger reaches them.
    """

    enabled: bool = Field(default=True, description="Enable this sink")
    level: str | None = Field(
        default=None,
        description=(
            "Log level for this sink. If None, inherits from Logger.level. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    format_template: str | None = Field(
        default=None,
        description="Format template string (None for raw JSON spans)"
    )

    _processor: Any = PrivateAttr(default=None)

    @staticmethod
    def _level_name(level_num: int) -> str:
        for name in [
            'fatal', 'error', 'warn', 'info', 'debug', 'trace', 'spew'
        ]:
            if level_num >= LevelFilteringExporter._level_thresholds[name]:
                return name
        return "unknown"

    @classmethod
    def _extract_span_data(cls, span) -> dict:
        """Extract the fields available to format_template."""
        from datetime import UTC, datetime

        attrs = span.attributes or {}
        ts = datetime.fromtimestamp(span.start_time / 1e9, tz=UTC)
        filepath = attrs.get("code.filepath", "")
        lineno = attrs.get("code.lineno", "")
        level_num = attrs.get(
            "logfire.level_num", logs_pb2.SEVERITY_NUMBER_INFO
        )

        return {
            'timestamp': ts,
            'level': cls._level_name(level_num),
            'message': attrs.get("logfire.msg", span.name),
            'filepath': filepath,
            'lineno': lineno,
            'location': f"{filepath}:{lineno}" if filepath else "",
            'function': attrs.get("code.function", ""),
        }

    def _format_span(self, span) -> str:
        if not self.format_template:
            import os
            return span.to_json() + os.linesep

        data = self._extract_span_data(span)

        try:
            formatted = self.format_template.format(**data)
        except KeyError as e:
            return f"ERROR: Invalid template field {e}\n"

        # Keyword arguments passed to logger calls, minus instrumentation
        attrs = span.attributes or {}
        skip_prefixes = ('otel.', 'telemetry.', 'service.', 'process.')
        skip_keys = {
            'code.filepath', 'code.lineno', 'code.function',
            'logfire.msg', 'logfire.level_num', 'logfire.span_type',
            'logfire.msg_template', 'logfire.json_schema',
        }
        custom_attrs = {
            key: value for key, value in attrs.items()
            if key not in skip_keys
            and not any(key.startswith(p) for p in skip_prefixes)
        }
        if custom_attrs:
            attrs_str = ' '.join(
                f"{k}={v!r}" for k, v in sorted(custom_attrs.items())
            )
            formatted = f"{formatted} │ {attrs_str}"

        return formatted + '\n'

    @abstractmethod
    def create_processor(self, log_root: Path, run_name: str):
        """Return a span processor for this sink, or None."""

    def close(self):
        if self._processor:
            with contextlib.suppress(Exception):
                self._processor.shutdown()


class ConsoleSink(Sink):
    """Console output, rendered by logfire itself."""

    verbose: bool = Field(
        default=False,
        description="Show full span details"
    )
    colors: str = Field(
        default="auto",
        description="Color mode: auto, always, never"
    )

    def create_processor(self, log_root: Path, run_name: str):
        return None


class FileSink(Sink):
    """File output sink."""

    enabled: bool = Field(
        default=False,
        description="Enable file logging"
    )
    path: str = Field(
        default="{log_root}/{run_name}/batchmake.log",
        description="Log file path template"
    )

    _file: Any = PrivateAttr(default=None)

    def create_processor(self, log_root: Path, run_name: str):
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )

        log_path = Path(
            self.path.format(log_root=log_root, run_name=run_name)
        )
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Line buffered; stays open for the lifetime of the sink
        self._file = open(log_path, "a", buffering=1, encoding="utf-8")  # noqa: SIM115

        base_exporter = ConsoleSpanExporter(
            out=self._file,
            formatter=self._format_span
        )
        return BatchSpanProcessor(
            LevelFilteringExporter(base_exporter, self.level)
        )

    def close(self):
        """Flush the processor into the file, then close the file."""
        super().close()

        if self._file and not self._file.closed:
            with contextlib.suppress(OSError):
                self._file.flush()
                self._file.close()


class Logger(BaseConfig):
    """Logger with console and file sinks.

    Closing the logger closes every sink through the
    BaseCloseable cascade.
    """

    level: str = Field(
        default="info",
        description=(
            "Default log level for all sinks. Individual sinks can override. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    console: ConsoleSink = Field(
        default_factory=ConsoleSink,
        description="Console output configuration"
    )
    file: FileSink = Field(
        default_factory=FileSink,
        description="File logging configuration"
    )

    @model_validator(mode='after')
    def _cascade_level_to_sinks(self) -> 'Logger':
        for sink in [self.console, self.file]:
            if sink.level is None:
                sink.level = self.level
        return self

    def setup(self, log_root: Path, run_name: str):
        """Create processors for the enabled sinks and configure logfire.

        Args:
            log_root: Root directory for log files
            run_name: Name of the current run (make, publish, ...)
        """
        import logfire
        from logfire import ConsoleOptions

        for sink in [self.console, self.file]:
            if sink.enabled:
                sink._processor = sink.create_processor(log_root, run_name)

        processors = [
            sink._processor
            for sink in [self.file]
            if sink.enabled and sink._processor
        ]

        console_config = (
            ConsoleOptions(
                # logfire has no level below trace
                min_log_level=(
                    'trace' if self.console.level == 'spew'
                    else self.console.level
                ),
                verbose=self.console.verbose,
                colors=self.console.colors,
                include_timestamps=True,
            )
            if self.console.enabled
            else False
        )

        logfire.configure(
            service_name=f"batchmake-{run_name}",
            send_to_logfire=False,
            console=console_config,
            additional_span_processors=processors if processors else None,
        )

    def info(self, msg: str, **kwargs):
        import logfire
        logfire.info(msg, **kwargs)

    def debug(self, msg: str, **kwargs):
        import logfire
        logfire.debug(msg, **kwargs)

    def trace(self, msg: str, **kwargs):
        import logfire
        logfire.log(
            level=LevelFilteringExporter._level_thresholds['trace'],
            msg_template=msg,
            attributes=kwargs if kwargs else None
        )

    def spew(self, msg: str, **kwargs):
        """Log below trace, for subprocess lifecycle noise."""
        import logfire
        logfire.log(
            level=LevelFilteringExporter._level_thresholds['spew'],
            msg_template=msg,
            attributes=kwargs if kwargs else None
        )

    def warn(self, msg: str, **kwargs):
        import logfire
        logfire.warn(msg, **kwargs)

    def error(self, msg: str, **kwargs):
        import logfire
        logfire.error(msg, **kwargs)

    def span(self, msg: str, **kwargs):
        """Span context manager, e.g. ``with logger.span("build"):``."""
        import logfire
        return logfire.span(msg, **kwargs)


def setup_logger(
    log_root: Path,
    run_name: str,
    console: ConsoleSink | None = None,
    file: FileSink | None = None,
    level: str = "info",
) -> Logger:
    """Initialize the global logger singleton.

    Called by Config once settings are loaded; tests call it
    directly.

    Args:
        log_root: Root directory for log files
        run_name: Name of the current run
        console: Console sink config (or None for defaults)
        file: File sink config (or None for defaults)
        level: Default level for sinks that do not set one

    Returns:
        Logger: The initialized global logger instance
    """
    global _current_logger

    _current_logger = Logger(
        level=level,
        console=console or ConsoleSink(),
        file=file or FileSink(),
    )
    _current_logger.setup(log_root, run_name)

    return _current_logger
