"""Configuration errors raised by the fluent assertion builders."""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Stable identifier of a configuration error kind."""

    MISSING_PREDICATE = "missing_predicate"
    MISSING_ACTION = "missing_action"
    CONFLICTING_FAILURE = "conflicting_failure"
    DUPLICATE_CONFIGURATION = "duplicate_configuration"


class AssertionConfigurationError(Exception):
    """
    Base class for misuse of the fluent assertion API.

    Callers should match on ``code`` rather than on the message text.
    """

    code: Optional[ErrorCode] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        if self.code is None:
            return f"{self.__class__.__name__}({self.message!r})"
        return f"{self.__class__.__name__}({self.code.value}: {self.message!r})"


class MissingPredicateError(AssertionConfigurationError):
    """No isSuccessful predicate was defined before evaluation."""

    code = ErrorCode.MISSING_PREDICATE

    def __init__(self, message: str = "Define at least API predicate"):
        super().__init__(message)


class MissingActionError(AssertionConfigurationError):
    """Neither success nor failure assertions were defined before evaluation."""

    code = ErrorCode.MISSING_ACTION

    def __init__(self, message: str = "Define at least API onSuccess or onFailure assertions"):
        super().__init__(message)


class ConflictingFailureConfigurationError(AssertionConfigurationError):
    """Both a simple and at least one conditional failure assertion were defined."""

    code = ErrorCode.CONFLICTING_FAILURE

    def __init__(self, message: str = "Define only simple or conditional failure assertions"):
        super().__init__(message)


class DuplicateConfigurationError(AssertionConfigurationError):
    """A single-use configuration call was made twice."""

    code = ErrorCode.DUPLICATE_CONFIGURATION

    def __init__(self, option: str, message: Optional[str] = None):
        self.option = option
        super().__init__(message or self._default_message(option))

    @staticmethod
    def _default_message(option: str) -> str:
        if option == "isSuccessful":
            return "Define only one isSuccessful predicate"
        return f"Define only one {option} assertion"
