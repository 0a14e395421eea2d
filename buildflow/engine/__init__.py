"""Selection engine for Buildflow."""

from .resolver import SelectionEngine, clear_artifacts, resolve

__all__ = ["SelectionEngine", "clear_artifacts", "resolve"]
