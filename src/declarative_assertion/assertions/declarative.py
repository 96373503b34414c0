"""Conditional assertions written in a declarative, readable style."""

from __future__ import annotations

import logging
from typing import Generic, Optional

from declarative_assertion.assertions.base import Action, Predicate, T

logger = logging.getLogger(__name__)


class DeclarativeAssertion(Generic[T]):
    """
    Run assertions on an object only when a condition holds.

    Usage:
        given(response).when(lambda r: r.status == 200).then(check_body)

    When no predicate was stored, ``then`` treats the condition as not
    satisfied and does nothing.
    """

    def __init__(self, subject: T):
        """
        Initialize the assertion.

        Args:
            subject: The object to be tested.
        """
        self._subject = subject
        self._predicate: Optional[Predicate[T]] = None

    @classmethod
    def create(cls, subject: T) -> DeclarativeAssertion[T]:
        """Wrap a subject for later conditional assertions."""
        return cls(subject)

    @property
    def subject(self) -> T:
        return self._subject

    def when(self, predicate: Predicate[T]) -> DeclarativeAssertion[T]:
        """Store the condition, replacing any previous one."""
        self._predicate = predicate
        return self

    def then(self, action: Action[T]) -> None:
        """
        Run the assertions on the stored subject if the condition holds.

        Args:
            action: Callable performing the assertions on the subject.
        """
        if self._predicate is None:
            logger.debug("No predicate defined, skipping assertions on %r", self._subject)
            return

        if self._predicate(self._subject):
            action(self._subject)


def given(subject: T) -> DeclarativeAssertion[T]:
    """Shorthand for ``DeclarativeAssertion.create``."""
    return DeclarativeAssertion.create(subject)
