"""Tests for in-process execution of learner code."""

import sys

from codetutor.sandbox import RunResult, clean_source, run_code


def test_print_is_captured() -> None:
    assert run_code("print(1+1)") == RunResult(output=["2"], error=None)


def test_uncaught_exception_becomes_the_error() -> None:
    assert run_code("raise Exception('boom')") == RunResult(output=["Error: boom"], error="boom")


def test_exception_without_message_reports_its_class_name() -> None:
    result = run_code("raise ValueError()")

    assert result.error == "ValueError"
    assert result.output == ["Error: ValueError"]


def test_output_before_an_error_is_kept_in_order() -> None:
    result = run_code("print('one')\nprint('two')\n1 / 0\nprint('never')")

    assert result.output == ["one", "two", "Error: division by zero"]
    assert result.error == "division by zero"


def test_callbacks_receive_lines_in_call_order() -> None:
    logged: list[str] = []
    errors: list[str] = []

    run_code("print('a')\nprint('b')\nraise RuntimeError('c')", on_log=logged.append, on_error=errors.append)

    assert logged == ["a", "b"]
    assert errors == ["c"]


def test_print_joins_arguments_with_sep() -> None:
    result = run_code("print('a', 1, True)\nprint('x', 'y', sep='-')")

    assert result.output == ["a 1 True", "x-y"]


def test_containers_are_pretty_printed_as_json() -> None:
    result = run_code("print({'a': 1, 'b': [1, 2]})\nprint([1, 'two'])")

    assert result.output[0] == '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'
    assert result.output[1] == '[\n  1,\n  "two"\n]'


def test_non_json_values_inside_containers_fall_back_to_str() -> None:
    result = run_code("class Box:\n    def __str__(self):\n        return 'box'\n\nprint({'item': Box()})")

    assert result.output == ['{\n  "item": "box"\n}']


def test_stderr_prints_are_reported_as_errors_without_failing_the_run() -> None:
    errors: list[str] = []

    result = run_code("import sys\nprint('oops', file=sys.stderr)\nprint('still running')", on_error=errors.append)

    assert result.output == ["Error: oops", "still running"]
    assert result.error is None
    assert errors == ["oops"]


def test_prints_to_other_streams_are_not_captured() -> None:
    code = "import io\nbuffer = io.StringIO()\nprint('hidden', file=buffer)\nprint(buffer.getvalue().strip())"

    assert run_code(code).output == ["hidden"]


def test_syntax_errors_are_reported() -> None:
    result = run_code("print(")

    assert result.error is not None
    assert result.output == [f"Error: {result.error}"]


def test_program_runs_as_main_with_fresh_globals() -> None:
    assert run_code("if __name__ == '__main__':\n    print('main')").output == ["main"]

    run_code("leftover = 1")
    result = run_code("print(leftover)")

    assert result.error == "name 'leftover' is not defined"


def test_sys_exit_zero_is_not_an_error() -> None:
    result = run_code("import sys\nprint('bye')\nsys.exit(0)")

    assert result == RunResult(output=["bye"], error=None)


def test_sys_exit_with_message_is_an_error() -> None:
    result = run_code("import sys\nsys.exit('fatal')")

    assert result.error == "fatal"


def test_leading_language_token_is_removed_with_a_note() -> None:
    result = run_code("python\nprint('hi')")

    assert result.output[0].startswith("# Note: 'python' language identifier")
    assert result.output[1:] == ["hi"]
    assert result.error is None


def test_script_tags_are_removed_with_a_note() -> None:
    result = run_code("<script>\nprint('inside')\n</script>")

    assert result.output[0] == "# Note: <script> tags detected. They were removed before execution."
    assert result.output[1:] == ["inside"]


def test_timeout_stops_an_infinite_loop() -> None:
    result = run_code("while True:\n    pass", timeout=0.2)

    assert result.error == "Execution timed out after 0.2s"
    assert result.output == ["Error: Execution timed out after 0.2s"]


def test_timeout_cannot_be_swallowed_by_learner_code() -> None:
    code = "try:\n    while True:\n        pass\nexcept Exception:\n    print('caught')"

    result = run_code(code, timeout=0.2)

    assert "caught" not in result.output
    assert result.error == "Execution timed out after 0.2s"


def test_trace_hook_is_restored_after_a_timed_run() -> None:
    before = sys.gettrace()

    run_code("print('quick')", timeout=1.0)

    assert sys.gettrace() is before


def test_clean_source_leaves_ordinary_code_alone() -> None:
    cleaned = clean_source("pyramid = 3\nprint(pyramid)")

    assert cleaned.source == "pyramid = 3\nprint(pyramid)"
    assert cleaned.notes == []


def test_clean_source_only_strips_a_token_alone_on_the_first_line() -> None:
    assert clean_source("python -m this").notes == []
    assert clean_source("  js\nprint(1)").source == "print(1)"
