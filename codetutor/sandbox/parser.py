r"""Parser for the plain-text test definition format used by lesson authors.

One test per line::

    Has function | Checks that greet exists | def\s+greet | regex
    Prints hello | Output mentions hello   | return "hello" in " ".join(console_output) | py

``py`` in the fourth field makes a predicate test, as do ``predicate``, ``python``
and the ``js`` label of older lesson content. Anything else, including no fourth
field at all, gives a pattern test. A row without a validation never passes.
"""

from .models import TestCase, normalize_kind


FIELD_SEPARATOR = "|"


def parse_tests(definitions: str | None) -> list[TestCase]:
    """Parse test definitions; malformed rows become default test cases."""
    if not definitions:
        return []
    rows = [line for line in definitions.splitlines() if line.strip()]
    return [_parse_row(row, index) for index, row in enumerate(rows, start=1)]


def _parse_row(row: str, index: int) -> TestCase:
    fields = [part.strip() for part in row.split(FIELD_SEPARATOR)]
    fields.extend([""] * (4 - len(fields)))
    name, description, validation, kind = fields[:4]
    return TestCase(
        id=f"test-{index}",
        name=name or f"Test {index}",
        description=description,
        validation=validation,
        kind=normalize_kind(kind),
    )
