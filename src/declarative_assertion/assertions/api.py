"""Fluent success/failure assertions for API responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, List, Optional, TypeVar, Union

from declarative_assertion.assertions.base import Action, Branch, DispatchOutcome, Predicate
from declarative_assertion.assertions.errors import (
    AssertionConfigurationError,
    ConflictingFailureConfigurationError,
    DuplicateConfigurationError,
    MissingActionError,
    MissingPredicateError,
)

if TYPE_CHECKING:
    from declarative_assertion.logging.dispatch_logger import DispatchLogger

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ApiAssertion(Generic[R]):
    """
    Assertions on an API response, split between a success and a failure path.

    A response is tested against one ``is_successful`` predicate. Successful
    responses go to the ``on_success`` assertions. Failed responses go either
    to a single ``on_failure`` assertion or to every conditional
    ``on_failure(predicate, action)`` whose predicate matches; the two failure
    styles cannot be mixed.

    Usage:
        ApiAssertion(response) \\
            .is_successful(lambda r: r.status == 200) \\
            .on_success(check_ok) \\
            .on_failure(lambda r: r.status == 400, check_bad_request) \\
            .on_failure(lambda r: r.status == 401, check_unauthorized) \\
            .test()
    """

    def __init__(
        self,
        response: R,
        dispatch_logger: Optional[DispatchLogger] = None,
    ):
        """
        Initialize the assertion.

        Args:
            response: The API response to test.
            dispatch_logger: Optional logger recording evaluated predicates and fired actions.
        """
        self._response = response
        self._dispatch_logger = dispatch_logger
        self._success_predicate: Optional[Predicate[R]] = None
        self._success: Optional[Branch[R]] = None
        self._failure: Optional[Branch[R]] = None
        self._conditional_failures: List[Branch[R]] = []
        self._evaluated = False

    @property
    def response(self) -> R:
        return self._response

    @property
    def evaluated(self) -> bool:
        """Whether ``evaluate`` has been called on this assertion."""
        return self._evaluated

    @property
    def name(self) -> str:
        return f"ApiAssertion[{type(self._response).__name__}]"

    def is_successful(self, predicate: Predicate[R]) -> ApiAssertion[R]:
        """
        Define the predicate telling successful responses from failures.

        Raises:
            DuplicateConfigurationError: If a predicate was already defined.
        """
        if self._success_predicate is not None:
            raise DuplicateConfigurationError("isSuccessful")

        self._success_predicate = predicate
        return self

    def on_success(self, action: Action[R]) -> ApiAssertion[R]:
        """
        Define the assertions to run on a successful response.

        Raises:
            DuplicateConfigurationError: If success assertions were already defined.
        """
        if self._success is not None:
            raise DuplicateConfigurationError("onSuccess")

        self._success = Branch(label="on_success", action=action)
        return self

    def on_failure(
        self,
        predicate_or_action: Union[Predicate[R], Action[R]],
        action: Optional[Action[R]] = None,
    ) -> ApiAssertion[R]:
        """
        Define the assertions to run on a failed response.

        Called with one callable, it defines the single failure assertion.
        Called with a predicate and an action, it adds a conditional failure
        assertion; any number of these may be added and every one whose
        predicate matches will run, in the order they were added.

        Args:
            predicate_or_action: The failure action, or the condition of a conditional one.
            action: The action of a conditional failure assertion.

        Raises:
            DuplicateConfigurationError: If the single failure assertion was already defined.
        """
        if action is None:
            if self._failure is not None:
                raise DuplicateConfigurationError("onFailure")
            self._failure = Branch(label="on_failure", action=predicate_or_action)
            return self

        index = len(self._conditional_failures)
        self._conditional_failures.append(
            Branch(
                label=f"on_failure[{index}]",
                action=action,
                predicate=predicate_or_action,
            )
        )
        return self

    def _validate(self) -> None:
        if self._success_predicate is None:
            raise MissingPredicateError()

        if (
            self._success is None
            and self._failure is None
            and not self._conditional_failures
        ):
            raise MissingActionError()

        if self._failure is not None and self._conditional_failures:
            raise ConflictingFailureConfigurationError()

    def evaluate(self) -> DispatchOutcome:
        """
        Validate the configuration and run the matching assertions.

        The ``is_successful`` predicate is called exactly once. Errors raised
        by predicates or actions propagate unchanged; a failing conditional
        action stops the remaining ones.

        Returns:
            DispatchOutcome describing which assertions ran.

        Raises:
            MissingPredicateError: If no ``is_successful`` predicate was defined.
            MissingActionError: If no success or failure assertion was defined.
            ConflictingFailureConfigurationError: If simple and conditional
                failure assertions were both defined.
        """
        self._evaluated = True

        try:
            self._validate()
        except AssertionConfigurationError as e:
            if self._dispatch_logger:
                self._dispatch_logger.log_validation_error(self.name, e)
            raise

        successful = bool(self._success_predicate(self._response))
        self._log_predicate("is_successful", successful)

        outcome = DispatchOutcome(successful=successful)

        if successful:
            if self._success is not None:
                self._fire(self._success, outcome)
        elif self._failure is not None:
            self._fire(self._failure, outcome)
        else:
            for branch in self._conditional_failures:
                matched = branch.matches(self._response)
                self._log_predicate(branch.label, matched)
                if matched:
                    self._fire(branch, outcome)

        logger.debug(f"{self.name} evaluated: {outcome}")
        return outcome

    def test(self) -> DispatchOutcome:
        """Alias of ``evaluate``."""
        return self.evaluate()

    def _fire(self, branch: Branch[R], outcome: DispatchOutcome) -> None:
        if self._dispatch_logger:
            self._dispatch_logger.log_action(self.name, branch.label)
        outcome.fired.append(branch.label)
        branch.fire(self._response)

    def _log_predicate(self, label: str, result: bool) -> None:
        if self._dispatch_logger:
            self._dispatch_logger.log_predicate(self.name, label, result)

    def __repr__(self) -> str:
        configured = [
            name
            for name, value in (
                ("is_successful", self._success_predicate),
                ("on_success", self._success),
                ("on_failure", self._failure),
            )
            if value is not None
        ]
        if self._conditional_failures:
            configured.append(f"{len(self._conditional_failures)} conditional on_failure")
        return f"{self.name}({', '.join(configured) or 'unconfigured'})"
