"""Logging module for assertion dispatch."""

from declarative_assertion.logging.dispatch_logger import (
    DispatchEvent,
    DispatchKind,
    DispatchLogger,
)

__all__ = ["DispatchEvent", "DispatchKind", "DispatchLogger"]
