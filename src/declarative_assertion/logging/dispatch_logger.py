"""Dispatch logger recording which assertion branches were evaluated and fired."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class DispatchKind(Enum):
    """Kind of dispatch event."""

    PREDICATE = "predicate"
    ACTION = "action"
    VALIDATION_ERROR = "validation_error"


@dataclass
class DispatchEvent:
    """Represents a logged dispatch event."""

    timestamp: datetime
    kind: DispatchKind
    source: str
    label: str
    result: Optional[bool] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind.value,
            "source": self.source,
            "label": self.label,
            "result": self.result,
            "error": self.error,
        }

    def __str__(self) -> str:
        text = f"[{self.source}] {self.kind.value} {self.label}"
        if self.error:
            return f"{text} ERROR: {self.error}"
        if self.result is not None:
            return f"{text} -> {self.result}"
        return text


class ColoredFormatter(logging.Formatter):
    """Formatter with color support for console output."""

    COLORS = {
        "RESET": "\033[0m",
        "BLUE": "\033[94m",
        "GREEN": "\033[92m",
        "YELLOW": "\033[93m",
        "RED": "\033[91m",
    }

    KIND_COLORS = {
        DispatchKind.PREDICATE: "BLUE",
        DispatchKind.ACTION: "GREEN",
        DispatchKind.VALIDATION_ERROR: "RED",
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        event = getattr(record, "dispatch_event", None)

        if event and isinstance(event, DispatchEvent):
            return self._format_event(event)

        return super().format(record)

    def _format_event(self, event: DispatchEvent) -> str:
        timestamp = event.timestamp.strftime("%H:%M:%S.%f")[:-3]

        symbol = {
            DispatchKind.PREDICATE: "?",
            DispatchKind.ACTION: "→",
            DispatchKind.VALIDATION_ERROR: "✗",
        }.get(event.kind, "?")

        parts = [f"[{timestamp}]", f"[{event.source}]", symbol, event.label]

        if event.error:
            parts.append(f"ERROR: {event.error}")
        elif event.result is not None:
            parts.append("matched" if event.result else "not matched")

        text = " ".join(parts)

        if self.use_colors:
            color = self.KIND_COLORS.get(event.kind, "RESET")
            return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"
        return text


class DispatchLogger:
    """
    Logger for assertion dispatch.

    Provides:
    - History of evaluated predicates and fired actions
    - Console output with colors
    - JSON export for debugging
    """

    def __init__(
        self,
        name: str = "declarative_assertion",
        level: str = "INFO",
        log_to_console: bool = True,
        log_to_file: Optional[Path] = None,
        use_colors: bool = True,
    ):
        """
        Initialize dispatch logger.

        Args:
            name: Logger name.
            level: Logging level (DEBUG, INFO, WARNING, ERROR).
            log_to_console: Whether to log to console.
            log_to_file: Optional path to log file.
            use_colors: Whether to use colors in console output.
        """
        self._name = name
        self._logger = logging.getLogger(f"declarative_assertion.{name}")
        self._logger.setLevel(getattr(logging, level.upper()))
        self._events: List[DispatchEvent] = []

        # Prevent duplicate handlers
        self._logger.handlers.clear()

        if log_to_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(ColoredFormatter(use_colors=use_colors))
            self._logger.addHandler(console_handler)

        if log_to_file:
            file_handler = logging.FileHandler(log_to_file)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
            )
            self._logger.addHandler(file_handler)

    def log_predicate(self, source: str, label: str, result: bool) -> None:
        """
        Log the evaluation of a predicate.

        Args:
            source: Name of the assertion that evaluated it.
            label: Branch label the predicate guards.
            result: What the predicate returned.
        """
        self._record(
            DispatchEvent(
                timestamp=datetime.now(),
                kind=DispatchKind.PREDICATE,
                source=source,
                label=label,
                result=result,
            ),
            level=logging.DEBUG,
        )

    def log_action(self, source: str, label: str) -> None:
        """Log an action about to be invoked."""
        self._record(
            DispatchEvent(
                timestamp=datetime.now(),
                kind=DispatchKind.ACTION,
                source=source,
                label=label,
            )
        )

    def log_validation_error(self, source: str, error: Exception) -> None:
        """Log a configuration error found before dispatch."""
        code = getattr(error, "code", None)
        self._record(
            DispatchEvent(
                timestamp=datetime.now(),
                kind=DispatchKind.VALIDATION_ERROR,
                source=source,
                label=code.value if code is not None else type(error).__name__,
                error=str(error),
            ),
            level=logging.ERROR,
        )

    def _record(self, event: DispatchEvent, level: int = logging.INFO) -> None:
        self._events.append(event)

        if not self._logger.isEnabledFor(level):
            return

        record = self._logger.makeRecord(
            name=self._logger.name,
            level=level,
            fn="",
            lno=0,
            msg=str(event),
            args=(),
            exc_info=None,
        )
        record.dispatch_event = event
        self._logger.handle(record)

    def get_events(
        self,
        kind: Optional[DispatchKind] = None,
        label: Optional[str] = None,
    ) -> List[DispatchEvent]:
        """
        Get logged events with optional filtering.

        Args:
            kind: Filter by event kind.
            label: Filter by branch label.

        Returns:
            List of matching events.
        """
        events = self._events

        if kind:
            events = [e for e in events if e.kind == kind]

        if label:
            events = [e for e in events if e.label == label]

        return events

    def export_to_json(self, filepath: Path | str) -> None:
        """
        Export all events to JSON file.

        Args:
            filepath: Path to output JSON file.
        """
        data = [event.to_dict() for event in self._events]

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)

    def clear(self) -> None:
        """Clear event history."""
        self._events.clear()

    @property
    def event_count(self) -> int:
        """Get total number of logged events."""
        return len(self._events)
