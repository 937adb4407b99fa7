"""Input cleanup applied before learner code is executed or graded.

The lesson editor sometimes hands over text copied out of an HTML page or a
chat bubble: ``<script>`` wrappers and a language name sitting on the first
line. Both are stripped, and every removal is reported back as a note so the
learner can see why the executed source differs from what they typed.
"""

import re
from dataclasses import dataclass, field


_SCRIPT_TAG = re.compile(r"</?script\b[^>]*>", re.IGNORECASE)
_LANGUAGE_TOKEN = re.compile(r"^(python3?|py|javascript|js)[ \t]*(?:\r?\n|$)", re.IGNORECASE)


@dataclass
class CleanedSource:
    source: str
    notes: list[str] = field(default_factory=list)


def clean_source(source: str) -> CleanedSource:
    """Strip pasted script tags and a leading language token."""
    notes: list[str] = []

    if _SCRIPT_TAG.search(source):
        source = _SCRIPT_TAG.sub("", source)
        notes.append("# Note: <script> tags detected. They were removed before execution.")

    stripped = source.strip()
    match = _LANGUAGE_TOKEN.match(stripped)
    if match:
        source = stripped[match.end() :]
        notes.append(f"# Note: '{match.group(1)}' language identifier at the start of the code was removed.")

    return CleanedSource(source=source, notes=notes)
