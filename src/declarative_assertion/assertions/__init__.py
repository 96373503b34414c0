"""Assertion module for declarative and API response assertions."""

from declarative_assertion.assertions.base import Branch, DispatchOutcome
from declarative_assertion.assertions.declarative import DeclarativeAssertion, given
from declarative_assertion.assertions.api import ApiAssertion
from declarative_assertion.assertions.factory import AssertionFactory
from declarative_assertion.assertions.errors import (
    AssertionConfigurationError,
    ConflictingFailureConfigurationError,
    DuplicateConfigurationError,
    ErrorCode,
    MissingActionError,
    MissingPredicateError,
)

__all__ = [
    "Branch",
    "DispatchOutcome",
    "DeclarativeAssertion",
    "given",
    "ApiAssertion",
    "AssertionFactory",
    "AssertionConfigurationError",
    "ConflictingFailureConfigurationError",
    "DuplicateConfigurationError",
    "ErrorCode",
    "MissingActionError",
    "MissingPredicateError",
]
