"""
Tests for the pytest plugin.

Each test runs an inner pytest session through the ``pytester`` fixture.
"""

import textwrap

import pytest


# =============================================================================
# Fixtures
# =============================================================================


def test_api_assertion_fixture(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        def test_status(api_assertion):
            fired = []
            api_assertion({"status": 400}) \\
                .is_successful(lambda r: r["status"] == 200) \\
                .on_failure(lambda r: r["status"] == 400, lambda r: fired.append(400)) \\
                .on_failure(lambda r: r["status"] == 401, lambda r: fired.append(401)) \\
                .test()
            assert fired == [400]
        """
    )

    result = pytester.runpytest()
    result.assert_outcomes(passed=1)


def test_unevaluated_assertion_fails_at_teardown(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        def test_forgotten(api_assertion):
            api_assertion(200).is_successful(lambda r: r == 200).on_success(lambda r: None)
        """
    )

    result = pytester.runpytest()
    result.assert_outcomes(passed=1, errors=1)
    result.stdout.fnmatch_lines(["*1 ApiAssertion(s) created but never evaluated*"])


def test_allow_unevaluated_marker(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        import pytest

        @pytest.mark.allow_unevaluated
        def test_forgotten(api_assertion):
            api_assertion(200).is_successful(lambda r: r == 200)
        """
    )

    result = pytester.runpytest()
    result.assert_outcomes(passed=1)


def test_allow_unevaluated_option(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        def test_forgotten(api_assertion):
            api_assertion(200).is_successful(lambda r: r == 200)
        """
    )

    result = pytester.runpytest("--assertion-allow-unevaluated")
    result.assert_outcomes(passed=1)


def test_failed_test_reports_no_unevaluated_error(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        def test_broken(api_assertion):
            assertion = api_assertion(500).is_successful(lambda r: r == 200)
            raise RuntimeError("client blew up before evaluation")
        """
    )

    result = pytester.runpytest()
    result.assert_outcomes(failed=1)
    result.stdout.no_fnmatch_line("*never evaluated*")


def test_require_evaluation_disabled_in_config_file(pytester: pytest.Pytester):
    pytester.makefile(".yaml", assertions="require_evaluation: false\n")
    pytester.makepyfile(
        """
        def test_forgotten(api_assertion):
            api_assertion(200).is_successful(lambda r: r == 200)
        """
    )

    result = pytester.runpytest()
    result.assert_outcomes(passed=1)


# =============================================================================
# Configuration
# =============================================================================


def test_dotfile_config_is_found(pytester: pytest.Pytester):
    pytester.makefile(".yml", **{".assertions": "require_evaluation: false\n"})
    pytester.makepyfile(
        """
        def test_forgotten(api_assertion):
            api_assertion(200).is_successful(lambda r: r == 200)
        """
    )

    result = pytester.runpytest()
    result.assert_outcomes(passed=1)


def test_config_in_parent_of_rootdir_is_found(pytester: pytest.Pytester):
    pytester.makefile(".yaml", assertions="require_evaluation: false\n")
    sub = pytester.mkdir("sub")
    (sub / "pytest.ini").write_text("[pytest]\n", encoding="utf-8")
    (sub / "test_forgotten.py").write_text(
        textwrap.dedent(
            """
            def test_forgotten(api_assertion, request):
                assert request.config.rootpath.name == "sub"
                api_assertion(200).is_successful(lambda r: r == 200)
            """
        ),
        encoding="utf-8",
    )

    result = pytester.runpytest("sub")
    result.assert_outcomes(passed=1)


def test_config_file_and_cli_precedence(pytester: pytest.Pytester):
    pytester.makefile(".yaml", assertions="log_level: WARNING\nlog_dispatch: false\n")
    pytester.makepyfile(
        """
        import pytest

        def test_config(assertion_config, request):
            expected = request.config.getoption("assertion_log_level") or "WARNING"
            assert assertion_config.log_level == expected
            assert assertion_config.log_dispatch is False
        """
    )

    pytester.runpytest().assert_outcomes(passed=1)
    pytester.runpytest("--assertion-log-level", "DEBUG").assert_outcomes(passed=1)


def test_explicit_config_option(pytester: pytest.Pytester):
    pytester.makefile(".yml", ci="log_level: ERROR\n")
    pytester.makepyfile(
        """
        def test_config(assertion_config):
            assert assertion_config.log_level == "ERROR"
        """
    )

    result = pytester.runpytest("--assertion-config", "ci.yml")
    result.assert_outcomes(passed=1)


def test_marker_registered(pytester: pytest.Pytester):
    result = pytester.runpytest("--markers")
    result.stdout.fnmatch_lines(["*allow_unevaluated*"])


# =============================================================================
# Reporting
# =============================================================================


def test_dispatch_history_attached_to_report(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        def test_dispatch(assertion_factory):
            assertion_factory.api(200) \\
                .is_successful(lambda r: r == 200) \\
                .on_success(lambda r: None) \\
                .test()
            assertion_factory.api(500) \\
                .is_successful(lambda r: r == 200) \\
                .on_failure(lambda r: None) \\
                .test()
        """
    )

    reprec = pytester.inline_run()
    reprec.assertoutcome(passed=1)

    [report] = [
        r for r in reprec.getreports("pytest_runtest_logreport") if r.when == "call"
    ]
    assert [o.fired for o in report.dispatch_history] == [["on_success"], ["on_failure"]]
