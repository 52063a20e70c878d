"""Batch builds and a publish checklist for trees of tutorial folders."""

__version__ = "0.1.0"
