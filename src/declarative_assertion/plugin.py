"""
Pytest plugin for declarative assertions.

This module provides fixtures and hooks that build API assertions bound to a
shared dispatch logger and report assertions that were never evaluated.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Generator

import pytest

from declarative_assertion.assertions.api import ApiAssertion
from declarative_assertion.assertions.factory import AssertionFactory
from declarative_assertion.config.loader import ConfigLoader
from declarative_assertion.config.models import AssertionConfig
from declarative_assertion.logging.dispatch_logger import DispatchLogger

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser

logger = logging.getLogger(__name__)

call_report_key = pytest.StashKey[pytest.TestReport]()


# =============================================================================
# Pytest Hooks - Configuration and Options
# =============================================================================


def pytest_addoption(parser: Parser) -> None:
    """Register pytest command-line and ini options."""
    group = parser.getgroup("assertion", "Declarative Assertion Options")

    group.addoption(
        "--assertion-config",
        dest="assertion_config",
        metavar="PATH",
        help="Path to assertion YAML configuration file",
    )

    group.addoption(
        "--assertion-log-level",
        dest="assertion_log_level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Dispatch log level",
    )

    group.addoption(
        "--assertion-log-file",
        dest="assertion_log_file",
        metavar="PATH",
        help="Path to write dispatch logs",
    )

    group.addoption(
        "--assertion-allow-unevaluated",
        action="store_true",
        dest="assertion_allow_unevaluated",
        help="Do not fail tests that build an ApiAssertion without evaluating it",
    )

    # INI options
    parser.addini(
        "assertion_config_file",
        help="Assertion configuration file path (default: search from the rootdir upward)",
        default="",
    )

    parser.addini(
        "assertion_log_dispatch",
        help="Print dispatch events to the console",
        type="bool",
        default=True,
    )


def pytest_configure(config: Config) -> None:
    """Register the plugin markers."""
    config.addinivalue_line(
        "markers",
        "allow_unevaluated: Do not fail this test for ApiAssertions that were never evaluated",
    )


# =============================================================================
# Session-scoped Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def assertion_config(request: pytest.FixtureRequest) -> AssertionConfig:
    """
    Load assertion configuration.

    This fixture loads configuration from:
    1. --assertion-config command line option
    2. assertion_config_file ini option
    3. The nearest assertions.yaml, assertions.yml, .assertions.yaml or
       .assertions.yml at or above the rootdir

    Command line options override values read from the file.

    Returns:
        AssertionConfig instance.
    """
    config_path = request.config.getoption("assertion_config")

    if config_path is None:
        config_path = request.config.getini("assertion_config_file") or None

    root_dir = Path(request.config.rootpath)

    try:
        base = ConfigLoader.load(config_path, root_dir)
    except FileNotFoundError as e:
        logger.warning(f"{e}, using defaults")
        base = AssertionConfig()

    overrides = {}

    log_level = request.config.getoption("assertion_log_level")
    if log_level is not None:
        overrides["log_level"] = log_level

    log_file = request.config.getoption("assertion_log_file")
    if log_file:
        overrides["log_file"] = Path(log_file)

    if request.config.getoption("assertion_allow_unevaluated"):
        overrides["require_evaluation"] = False

    return ConfigLoader.merge_configs(base, AssertionConfig(**overrides))


@pytest.fixture(scope="session")
def dispatch_logger(
    request: pytest.FixtureRequest,
    assertion_config: AssertionConfig,
) -> DispatchLogger:
    """
    Create the dispatch logger shared by all tests.

    Returns:
        DispatchLogger recording evaluated predicates and fired actions.
    """
    log_dispatch = assertion_config.log_dispatch and request.config.getini(
        "assertion_log_dispatch"
    )

    return DispatchLogger(
        name="session",
        level=assertion_config.log_level,
        log_to_console=log_dispatch,
        log_to_file=assertion_config.log_file,
        use_colors=assertion_config.use_colors,
    )


# =============================================================================
# Function-scoped Fixtures
# =============================================================================


@pytest.fixture
def assertion_factory(
    dispatch_logger: DispatchLogger,
    assertion_config: AssertionConfig,
    request: pytest.FixtureRequest,
) -> Generator[AssertionFactory, None, None]:
    """
    Function-scoped assertion factory.

    After the test, fails if an ApiAssertion created through the factory was
    never evaluated, unless disabled by configuration, by
    --assertion-allow-unevaluated or by @pytest.mark.allow_unevaluated.
    The check is also skipped when the test itself already failed.

    Returns:
        AssertionFactory instance.
    """
    factory = AssertionFactory(dispatch_logger)

    yield factory

    # No call report means setup failed and the test body never ran
    call_report = request.node.stash.get(call_report_key, None)

    skip_check = (
        not assertion_config.require_evaluation
        or request.node.get_closest_marker("allow_unevaluated") is not None
        or call_report is None
        or call_report.failed
    )

    pending = factory.pending
    if pending and not skip_check:
        names = ", ".join(repr(a) for a in pending)
        pytest.fail(
            f"{len(pending)} ApiAssertion(s) created but never evaluated: {names}. "
            f"Call .test() or .evaluate() on each of them."
        )


@pytest.fixture
def api_assertion(assertion_factory: AssertionFactory) -> Callable[..., ApiAssertion]:
    """
    Build an ApiAssertion for a response.

    Usage:
        def test_login(api_assertion):
            api_assertion(response) \\
                .is_successful(lambda r: r.status == 200) \\
                .on_success(check_token) \\
                .test()
    """
    return assertion_factory.api


# =============================================================================
# Pytest Hooks - Reporting
# =============================================================================


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call):
    """Attach dispatch outcomes to the test report."""
    outcome = yield
    rep = outcome.get_result()

    if rep.when == "call":
        item.stash[call_report_key] = rep

    if hasattr(item, "funcargs"):
        factory = item.funcargs.get("assertion_factory")
        if isinstance(factory, AssertionFactory):
            rep.dispatch_history = factory.outcomes


# Optional: pytest-html integration
try:
    import pytest_html

    @pytest.hookimpl(optionalhook=True)
    def pytest_html_results_table_header(cells):
        """Add dispatch column to HTML report."""
        cells.insert(2, "<th>Dispatches</th>")

    @pytest.hookimpl(optionalhook=True)
    def pytest_html_results_table_row(report, cells):
        """Add dispatch count to HTML report row."""
        count = len(getattr(report, "dispatch_history", []))
        cells.insert(2, f"<td>{count}</td>")

except ImportError:
    pass  # pytest-html not installed
