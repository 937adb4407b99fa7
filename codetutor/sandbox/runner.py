"""In-process execution of learner code with captured console output.

Learner programs run in the host interpreter with a fresh globals dict.
``print`` is swapped for a capturing version through the program's own
builtins, so nothing process-wide is redirected and concurrent runs on
different threads do not see each other's output. The only thread state
touched is the trace hook used to enforce the optional time limit; it is
restored on exit.

There is no isolation: learner code can import anything and touch the host.
"""

import builtins
import json
import logging
import sys
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any

from .cleanup import clean_source
from .models import RunResult


logger = logging.getLogger(__name__)

LogCallback = Callable[[str], None]

SOURCE_FILENAME = "<lesson>"


class ExecutionTimeoutError(BaseException):
    """Raised inside learner code once its time budget is spent.

    Derives from BaseException so that ``except Exception`` in learner code
    cannot swallow it.
    """

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Execution timed out after {seconds}s")


def error_message(exc: BaseException) -> str:
    """Message shown to the learner for an exception."""
    return str(exc) or type(exc).__name__


def format_value(value: Any) -> str:
    """Render one print argument: containers as indented JSON, the rest with str()."""
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


@contextmanager
def time_limit(seconds: float | None) -> Iterator[None]:
    """Abort Python code started inside the block after ``seconds``.

    Works through the thread's trace hook, so it only fires between bytecode
    lines of frames entered after the block starts.
    """
    if seconds is None:
        yield
        return

    deadline = time.monotonic() + seconds

    def tracer(_frame: FrameType, _event: str, _arg: Any) -> Callable | None:
        if time.monotonic() > deadline:
            raise ExecutionTimeoutError(seconds)
        return tracer

    previous = sys.gettrace()
    sys.settrace(tracer)
    try:
        yield
    finally:
        sys.settrace(previous)


def run_code(
    source: str,
    on_log: LogCallback | None = None,
    on_error: LogCallback | None = None,
    *,
    timeout: float | None = None,
) -> RunResult:
    """Execute learner source and capture what it prints.

    Args:
        source: Python source as typed by the learner
        on_log: Called with every stdout line, in call order
        on_error: Called with every stderr line and with the terminal error
        timeout: Optional wall-clock budget in seconds

    Returns
    -------
        RunResult with the ordered console lines and the first uncaught
        error message (or None). Errors in learner code never propagate.
    """
    output: list[str] = []

    def log(line: str) -> None:
        output.append(line)
        if on_log is not None:
            on_log(line)

    def log_error(line: str) -> None:
        output.append(f"Error: {line}")
        if on_error is not None:
            on_error(line)

    def capturing_print(*args: Any, sep: str | None = " ", end: str | None = "\n", file: Any = None, flush: bool = False) -> None:  # noqa: ARG001
        line = (" " if sep is None else sep).join(format_value(arg) for arg in args)
        if file is None or file is sys.stdout:
            log(line)
        elif file is sys.stderr:
            log_error(line)
        else:
            # Learner-owned stream such as io.StringIO
            file.write(line + ("\n" if end is None else end))

    cleaned = clean_source(source)
    for note in cleaned.notes:
        log(note)

    program_builtins = dict(vars(builtins))
    program_builtins["print"] = capturing_print
    namespace: dict[str, Any] = {"__name__": "__main__", "__builtins__": program_builtins}

    error: str | None = None
    started = time.perf_counter()
    try:
        code = compile(cleaned.source, SOURCE_FILENAME, "exec")
        with time_limit(timeout):
            exec(code, namespace)  # noqa: S102
    except SystemExit as exc:
        if exc.code not in (None, 0):
            error = str(exc.code)
            log_error(error)
    except (Exception, ExecutionTimeoutError) as exc:
        error = error_message(exc)
        log_error(error)

    logger.debug(
        "Learner code finished in %.3fs (%d lines, error=%s)",
        time.perf_counter() - started,
        len(output),
        error is not None,
    )
    return RunResult(output=output, error=error)
