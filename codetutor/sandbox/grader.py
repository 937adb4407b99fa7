"""Grading of challenge code against a slide's test cases."""

import logging
import re
import textwrap
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .cleanup import clean_source
from .models import TestCase, TestResult
from .runner import ExecutionTimeoutError, error_message, time_limit


logger = logging.getLogger(__name__)

PASSED_MESSAGE = "Test passed!"
FAILED_MESSAGE = "Test failed"

Predicate = Callable[[str, list[str]], Any]


def compile_predicate(body: str) -> Predicate:
    """Turn a predicate test body into ``check(code, console_output)``.

    The body is dedented and placed under the ``def``; falling off the end
    returns None. ``re`` is available without an import.
    """
    source = (
        "def check(code, console_output):\n"
        + textwrap.indent(textwrap.dedent(body), "    ")
        + "\n    return None\n"
    )
    namespace: dict[str, Any] = {"re": re}
    exec(compile(source, "<test>", "exec"), namespace)  # noqa: S102
    return namespace["check"]


def _evaluate(test: TestCase, code: str, console_output: Sequence[str], timeout: float | None) -> bool:
    # Degenerate rows from the definition parser carry no validation; they never pass
    if not test.validation.strip():
        return False
    if test.kind == "predicate":
        check = compile_predicate(test.validation)
        with time_limit(timeout):
            return bool(check(code, list(console_output)))
    return re.search(test.validation, code) is not None


def run_tests(
    code: str,
    tests: Iterable[TestCase],
    console_output: Sequence[str] = (),
    *,
    timeout: float | None = None,
) -> list[TestResult]:
    """Run every test against the submitted code, one result per test, in order.

    A test that cannot be compiled or raises while running is reported as
    failed with an "Error running test" message; it never stops the others.
    """
    cleaned = clean_source(code).source
    results: list[TestResult] = []
    for test in tests:
        try:
            passed = _evaluate(test, cleaned, console_output, timeout)
        except (Exception, ExecutionTimeoutError) as exc:
            logger.debug("Test %s raised: %s", test.id, exc)
            results.append(
                TestResult(
                    id=test.id,
                    name=test.name,
                    passed=False,
                    message=f"Error running test: {error_message(exc)}",
                )
            )
            continue
        results.append(
            TestResult(
                id=test.id,
                name=test.name,
                passed=passed,
                message=PASSED_MESSAGE if passed else FAILED_MESSAGE,
            )
        )
    return results


def all_tests_passed(results: Sequence[TestResult]) -> bool:
    return len(results) > 0 and all(result.passed for result in results)


def format_results(results: Sequence[TestResult]) -> list[str]:
    """Console summary printed under the program output."""
    lines = ["--- Test Results ---"]
    for result in results:
        mark, outcome = ("✓", "Passed!") if result.passed else ("✗", "Failed")
        lines.append(f"{mark} Test: {result.name} - {outcome}")
    return lines
