"""Code execution and grading for challenge slides."""

from .cleanup import CleanedSource, clean_source
from .grader import all_tests_passed, format_results, run_tests
from .models import RunResult, TestCase, TestResult
from .parser import parse_tests
from .runner import ExecutionTimeoutError, run_code


__all__ = [
    "CleanedSource",
    "ExecutionTimeoutError",
    "RunResult",
    "TestCase",
    "TestResult",
    "all_tests_passed",
    "clean_source",
    "format_results",
    "parse_tests",
    "run_code",
    "run_tests",
]
