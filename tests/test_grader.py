"""Tests for grading code against pattern and predicate tests."""

from codetutor.sandbox import TestCase, TestResult, all_tests_passed, format_results, run_code, run_tests


def _pattern(validation: str, test_id: str = "test-1") -> TestCase:
    return TestCase(id=test_id, name=f"pattern {test_id}", validation=validation, kind="pattern")


def _predicate(body: str, test_id: str = "test-1") -> TestCase:
    return TestCase(id=test_id, name=f"predicate {test_id}", validation=body, kind="predicate")


def test_pattern_passes_on_a_substring_match() -> None:
    (result,) = run_tests("x = 1\ndef greet(name):\n    pass", [_pattern(r"def\s+greet")])

    assert result == TestResult(id="test-1", name="pattern test-1", passed=True, message="Test passed!")


def test_pattern_fails_without_a_match() -> None:
    (result,) = run_tests("print('hi')", [_pattern(r"def\s+greet")])

    assert result.passed is False
    assert result.message == "Test failed"


def test_predicate_checks_the_code_text() -> None:
    test = _predicate('return "X" in code')

    assert run_tests("X = 1", [test])[0].passed is True
    assert run_tests("y = 1", [test])[0].passed is False


def test_predicate_sees_the_console_output() -> None:
    code = "print('Woof!')"
    run = run_code(code)

    (result,) = run_tests(code, [_predicate("return 'Woof!' in console_output")], run.output)

    assert result.passed is True


def test_multiline_predicate_bodies_are_dedented() -> None:
    body = """
        total = 0
        for line in console_output:
            total += int(line)
        return total == 6
    """

    (result,) = run_tests("", [_predicate(body)], ["1", "2", "3"])

    assert result.passed is True


def test_predicate_without_return_fails() -> None:
    (result,) = run_tests("", [_predicate("x = 1")])

    assert result.passed is False
    assert result.message == "Test failed"


def test_predicate_cannot_mutate_the_callers_output() -> None:
    output = ["line"]

    run_tests("", [_predicate("console_output.append('extra')\nreturn True")], output)

    assert output == ["line"]


def test_predicate_can_use_re_without_importing_it() -> None:
    (result,) = run_tests("def f():\n    return 1", [_predicate(r"return re.search(r'def\s+f', code) is not None")])

    assert result.passed is True


def test_invalid_regex_fails_with_an_error_message() -> None:
    (result,) = run_tests("anything", [_pattern("(unclosed")])

    assert result.passed is False
    assert result.message.startswith("Error running test:")


def test_broken_predicates_fail_without_raising() -> None:
    results = run_tests(
        "code",
        [
            _predicate("return (", test_id="syntax"),
            _predicate("return 1 / 0", test_id="runtime"),
        ],
    )

    assert [r.passed for r in results] == [False, False]
    assert results[0].message.startswith("Error running test:")
    assert results[1].message == "Error running test: division by zero"


def test_one_failing_test_does_not_stop_the_others() -> None:
    tests = [_pattern("(", "test-1"), _pattern("print", "test-2"), _predicate("return True", "test-3")]

    results = run_tests("print('hi')", tests)

    assert [r.id for r in results] == ["test-1", "test-2", "test-3"]
    assert [r.passed for r in results] == [False, True, True]


def test_code_is_cleaned_before_grading() -> None:
    (result,) = run_tests("python\nprint('hi')", [_pattern(r"\Aprint")])

    assert result.passed is True


def test_predicate_timeout_fails_the_test() -> None:
    (result,) = run_tests("", [_predicate("while True:\n    pass")], timeout=0.1)

    assert result.passed is False
    assert result.message == "Error running test: Execution timed out after 0.1s"


def test_all_tests_passed() -> None:
    passed = TestResult(id="a", name="a", passed=True, message="Test passed!")
    failed = TestResult(id="b", name="b", passed=False, message="Test failed")

    assert all_tests_passed([]) is False
    assert all_tests_passed([passed]) is True
    assert all_tests_passed([passed, failed]) is False


def test_format_results_renders_the_console_summary() -> None:
    results = [
        TestResult(id="a", name="Function exists", passed=True, message="Test passed!"),
        TestResult(id="b", name="Correct message", passed=False, message="Test failed"),
    ]

    assert format_results(results) == [
        "--- Test Results ---",
        "✓ Test: Function exists - Passed!",
        "✗ Test: Correct message - Failed",
    ]


def test_legacy_type_field_is_normalized() -> None:
    regex = TestCase.model_validate({"id": "t", "name": "n", "validation": "x", "type": "regex"})
    script = TestCase.model_validate({"id": "t", "name": "n", "validation": "return True", "type": "js"})

    assert regex.kind == "pattern"
    assert script.kind == "predicate"


def test_blank_validation_never_passes() -> None:
    results = run_tests("x = 1", [_pattern(""), _pattern("   ", "test-2"), _predicate("\n", "test-3")])

    assert [r.passed for r in results] == [False, False, False]
    assert all(r.message == "Test failed" for r in results)
