"""Shared types for declarative assertions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Predicate = Callable[[T], bool]
Action = Callable[[T], Any]


@dataclass
class Branch(Generic[T]):
    """An action registered on a builder, optionally guarded by its own predicate."""

    label: str
    action: Action[T]
    predicate: Optional[Predicate[T]] = None

    def matches(self, subject: T) -> bool:
        """Check the guard predicate; unguarded branches always match."""
        if self.predicate is None:
            return True
        return bool(self.predicate(subject))

    def fire(self, subject: T) -> None:
        self.action(subject)


@dataclass
class DispatchOutcome:
    """Result of one evaluation of an API assertion."""

    successful: bool
    fired: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """True when at least one action was invoked."""
        return bool(self.fired)

    def __str__(self) -> str:
        status = "SUCCESS" if self.successful else "FAILURE"
        if not self.fired:
            return f"[{status}] no assertions fired"
        return f"[{status}] fired: {', '.join(self.fired)}"
