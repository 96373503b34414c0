"""Factory creating and tracking the assertions built during one test."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, TypeVar

from declarative_assertion.assertions.api import ApiAssertion
from declarative_assertion.assertions.base import DispatchOutcome
from declarative_assertion.assertions.declarative import DeclarativeAssertion

if TYPE_CHECKING:
    from declarative_assertion.logging.dispatch_logger import DispatchLogger

R = TypeVar("R")


class _TrackedApiAssertion(ApiAssertion[R]):
    """ApiAssertion that reports its outcomes back to the factory."""

    def __init__(self, response: R, factory: AssertionFactory):
        super().__init__(response, dispatch_logger=factory.dispatch_logger)
        self._factory = factory

    def evaluate(self) -> DispatchOutcome:
        outcome = super().evaluate()
        self._factory._outcomes.append(outcome)
        return outcome


class AssertionFactory:
    """
    Create assertions bound to a shared dispatch logger.

    Keeps every ApiAssertion it creates so that assertions which were
    configured but never evaluated can be reported.
    """

    def __init__(self, dispatch_logger: Optional[DispatchLogger] = None):
        self._dispatch_logger = dispatch_logger
        self._created: List[ApiAssertion] = []
        self._outcomes: List[DispatchOutcome] = []

    @property
    def dispatch_logger(self) -> Optional[DispatchLogger]:
        return self._dispatch_logger

    @property
    def created(self) -> List[ApiAssertion]:
        """Get all API assertions created by this factory."""
        return self._created.copy()

    @property
    def outcomes(self) -> List[DispatchOutcome]:
        """Get the outcome of every completed evaluation, in order."""
        return self._outcomes.copy()

    @property
    def pending(self) -> List[ApiAssertion]:
        """Get the API assertions that were never evaluated."""
        return [a for a in self._created if not a.evaluated]

    def api(self, response: R) -> ApiAssertion[R]:
        """Create an ApiAssertion for ``response``."""
        assertion = _TrackedApiAssertion(response, self)
        self._created.append(assertion)
        return assertion

    def given(self, subject: R) -> DeclarativeAssertion[R]:
        """Create a DeclarativeAssertion for ``subject``."""
        return DeclarativeAssertion.create(subject)
