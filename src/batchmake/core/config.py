"""Application state and configuration."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from batchmake.core.base import BaseConfig, BaseState
from batchmake.core.log import Logger
from batchmake.core.result import PipelineOutcome, RunOutcome, Target
from batchmake.core.yaml_settings import YamlWithIncludesSettingsSource
from batchmake.steps import AnyStep

# Modules available for template substitution in YAML files
# Usage: {platformdirs.user_log_dir}, {os.getcwd}, {Path.cwd}
TEMPLATE_NAMESPACE = {
    'os': os,
    'platformdirs': platformdirs,
    'Path': Path,
}

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class BuildConfig(BaseConfig):
    """Target discovery and batch build configuration."""

    root: Path = Field(
        default=Path("."),
        description="Directory searched recursively for targets",
    )
    marker: str = Field(
        default="Cargo.toml",
        description="Filename whose presence makes a directory a target",
    )
    exclude: list[str] = Field(
        default_factory=lambda: ["target", ".git"],
        description="Directory names never searched for targets",
    )
    command: str = Field(
        default="make",
        description="Build command run in every target",
    )
    parameter_name: str = Field(
        default="BSP",
        description="Environment variable carrying the build parameter",
    )
    parameter: str = Field(
        default="rpi3",
        description="Default build parameter (board support package)",
    )
    fail_fast: bool = Field(
        default=True,
        description=(
            "Stop at the first failed target. When false, every target "
            "is built and all failures are reported"
        ),
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance"
    )
    build: BuildConfig = Field(
        default_factory=BuildConfig,
        description="Target discovery and build settings"
    )
    steps: dict[str, AnyStep] = Field(
        default_factory=dict,
        description="Named step definitions (build, foreach, shell, diff)",
    )
    publish: list[str] = Field(
        default_factory=list,
        description="Step names run in order by the publish checklist",
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "batchmake"
        ),
        description=(
            "Root directory for log files "
            "(supports {platformdirs.*} templates)"
        ),
    )

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Initialize the global logger singleton once config loads."""
        from batchmake.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger()

        setup_logger(
            log_root=self.log_root,
            run_name="batchmake",
            console=self.logger.console,
            file=self.logger.file,
            level=self.logger.level,
        )
        return self

    def close(self):
        """Close the global logger, then the remaining children."""
        from batchmake.core.log import logger
        if logger is not None:
            logger.close()

        super().close()


# ============================================================
# RUNTIME STATE MODELS (mutable during workflow execution)
# ============================================================

class BuildState(BaseState):
    """Batch build runtime state."""

    parameter: str | None = Field(
        default=None,
        description="Build parameter for this run (overrides config)",
    )
    targets: list[Target] = Field(
        default_factory=list,
        description="Targets discovered for this run",
    )
    outcome: RunOutcome | None = Field(
        default=None,
        description="Result of the batch build",
    )


class PipelineState(BaseState):
    """Step pipeline runtime state."""

    step_names: list[str] = Field(
        default_factory=list,
        description="Steps scheduled for this run, in order",
    )
    outcome: PipelineOutcome = Field(
        default_factory=PipelineOutcome,
        description="Results of the steps run so far",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Runtime(BaseModel):
    """All runtime state, by workflow."""

    build: BuildState = Field(
        default_factory=BuildState,
        description="Batch build runtime state"
    )
    pipeline: PipelineState = Field(
        default_factory=PipelineState,
        description="Step pipeline runtime state"
    )


# ============================================================
# STATE (config + runtime combined)
# ============================================================

class State(BaseSettings):
    """Complete application state - configuration and runtime.

    This is the state object that flows through every workflow
    graph. ``config`` is loaded from YAML, .env, environment
    variables and the command line; ``runtime`` is mutated by
    workflow nodes.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)"
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to include and merge. "
            "Use --include on CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file="batchmake.yaml",
        env_file=".env",
        env_prefix="BATCHMAKE_",
        env_nested_delimiter="__",
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore'
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init args (CLI) > environment > .env > YAML >
        secrets.

        The package defaults are YAML, so environment variables have
        to rank above YAML to be able to override anything.
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            file_secret_settings,
        )

    @model_validator(mode="after")
    def substitute_templates(self) -> "State":
        """Substitute {config.*}, {os.*}, {platformdirs.*} and
        {Path.*} templates in every string and path."""
        self._substitute_recursive(self)
        return self

    def _substitute_recursive(self, obj: Any) -> None:
        if isinstance(obj, BaseModel):
            for field_name in obj.__class__.model_fields:
                value = getattr(obj, field_name)
                new_value = self._substitute_value(value)
                if new_value is not value:
                    setattr(obj, field_name, new_value)
        elif isinstance(obj, dict):
            for key in obj:
                obj[key] = self._substitute_value(obj[key])
        elif isinstance(obj, list):
            for i in range(len(obj)):
                obj[i] = self._substitute_value(obj[i])

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, Path):
            return Path(self._substitute_string(str(value)))
        elif isinstance(value, (BaseModel, dict, list)):
            self._substitute_recursive(value)
            return value
        else:
            return value

    def _substitute_string(self, value: str) -> str:
        """Replace {dotted.path} templates with their values.

        Unknown references are left as they are, so runtime
        placeholders such as {old} and {new} in diff commands
        survive.

        Examples:
            "{config.build.root}/out" -> "./out"
            "{platformdirs.user_log_dir}" -> "~/.local/state/batchmake/log"
        """
        def replace_template(match):
            parts = match.group(1).split(".")

            if parts[0] in TEMPLATE_NAMESPACE:
                module = parts[0]
                obj = TEMPLATE_NAMESPACE[module]
                parts = parts[1:]
            else:
                module = None
                obj = self

            try:
                for part in parts:
                    obj = getattr(obj, part)

                if callable(obj):
                    if module == 'platformdirs':
                        obj = obj('batchmake', appauthor=False)
                    else:
                        obj = obj()

                return str(obj)
            except (AttributeError, TypeError):
                return match.group(0)

        return re.sub(r'\{([A-Za-z._]+)\}', replace_template, value)


__all__ = ["State", "Config", "BuildConfig", "BaseConfig", "BaseState"]
