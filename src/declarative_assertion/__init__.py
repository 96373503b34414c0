"""
declarative-assertion: Fluent, declarative assertions for test code.

This package provides a conditional assertion helper, a success/failure
assertion builder for API responses and a pytest plugin wiring them up.
"""

from declarative_assertion.config.models import AssertionConfig
from declarative_assertion.logging.dispatch_logger import DispatchLogger
from declarative_assertion.assertions.base import DispatchOutcome
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

__version__ = "0.1.0"

__all__ = [
    # Config
    "AssertionConfig",
    # Logging
    "DispatchLogger",
    # Assertions
    "DispatchOutcome",
    "DeclarativeAssertion",
    "given",
    "ApiAssertion",
    "AssertionFactory",
    # Errors
    "AssertionConfigurationError",
    "ConflictingFailureConfigurationError",
    "DuplicateConfigurationError",
    "ErrorCode",
    "MissingActionError",
    "MissingPredicateError",
]
