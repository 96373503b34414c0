"""
Pytest configuration for declarative-assertion tests.

Provides sample API responses and spies for predicates and actions.
"""

from __future__ import annotations

from dataclasses import dataclass
from unittest.mock import Mock

import pytest


@dataclass
class ApiResponseMock:
    """Minimal stand-in for an HTTP response."""

    status: int
    response_text: str


# =============================================================================
# Response Fixtures
# =============================================================================


@pytest.fixture
def response_ok() -> ApiResponseMock:
    return ApiResponseMock(200, '{"status": "OK", "message": "response is successful"}')


@pytest.fixture
def response_ko() -> ApiResponseMock:
    return ApiResponseMock(400, '{"status": "KO", "message": "response is failure"}')


# =============================================================================
# Spy Fixtures
# =============================================================================


@pytest.fixture
def status_is():
    """Build a predicate spy matching a given status code."""

    def _status_is(status: int) -> Mock:
        return Mock(side_effect=lambda r: r.status == status)

    return _status_is
