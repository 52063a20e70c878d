"""CLI command modules for batchmake."""

from batchmake.command.make import MakeCommand
from batchmake.command.publish import PublishCommand
from batchmake.command.step import StepCommand
from batchmake.command.targets import TargetsCommand

__all__ = ["MakeCommand", "PublishCommand", "StepCommand", "TargetsCommand"]
