"""Base classes for configuration and state models.

Closeable children are walked on close() so that a single
``with state.config:`` tears down the logger and its sinks.
Kept apart from config.py so log.py can import BaseConfig
without a cycle.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Closeable(Protocol):
    """Protocol for objects that support close()."""

    def close(self) -> None:
        ...


class BaseCloseable(BaseModel):
    """Pydantic model that closes its Closeable fields.

    Config.close() -> Logger.close() -> Sink.close()
    """

    def close(self):
        """Close every Closeable field, reporting failures to stderr.

        A failing child does not stop the remaining children from
        being closed.
        """
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    print(
                        f"Warning: Error closing {field_name}: {e}",
                        file=sys.stderr,
                    )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        self.close()
        return False


class BaseConfig(BaseCloseable):
    """Marker base for configuration sections (YAML/env/CLI)."""
    pass


class BaseState(BaseCloseable):
    """Marker base for runtime state sections (mutated by workflows)."""
    pass


__all__ = ["Closeable", "BaseCloseable", "BaseConfig", "BaseState"]
