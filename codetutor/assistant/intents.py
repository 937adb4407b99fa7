"""Intent detection and slot extraction for chat messages."""

import re

from codetutor.lessons.styles import STYLES
from codetutor.storage.models import Difficulty


DEFAULT_TOPIC = "programming basics"
DEFAULT_LANGUAGE = "python"

NEW_LESSON_PATTERNS = [
    re.compile(r"create (a|new) lesson", re.IGNORECASE),
    re.compile(r"make (a|new) lesson", re.IGNORECASE),
    re.compile(r"generate (a|new) lesson", re.IGNORECASE),
    re.compile(r"teach me (about|how to)", re.IGNORECASE),
    re.compile(r"create (a|an) tutorial", re.IGNORECASE),
    re.compile(r"build (a|an) lesson", re.IGNORECASE),
]

SLIDE_EDIT_PATTERNS = [
    re.compile(rf"{verb} slide", re.IGNORECASE) for verb in ("edit", "update", "change", "modify", "improve")
]

STYLE_REQUEST_PATTERN = re.compile(r"\b(style|theme|look)\b", re.IGNORECASE)

# Checked in order; the first match wins
TOPIC_PATTERNS = [
    re.compile(r"\babout\s+([^,.]+)", re.IGNORECASE),
    re.compile(r"\bon\s+([^,.]+)", re.IGNORECASE),
    re.compile(r"\bfor\s+([^,.]+)", re.IGNORECASE),
    re.compile(r"\bcovering\s+([^,.]+)", re.IGNORECASE),
    re.compile(r"\bteach me\s+([^,.]+)", re.IGNORECASE),
]

# "loops in the neon racer style" -> "loops"
_STYLE_SUFFIX = re.compile(r"\s+(?:with|in|using)\s+(?:the\s+|a\s+)?[\w\s-]*\b(?:style|theme|look)\b.*$", re.IGNORECASE)

DIFFICULTY_PATTERNS: list[tuple[Difficulty, re.Pattern[str]]] = [
    ("beginner", re.compile(r"beginner|basic|simple", re.IGNORECASE)),
    ("intermediate", re.compile(r"intermediate|medium", re.IGNORECASE)),
    ("advanced", re.compile(r"advanced|expert|difficult", re.IGNORECASE)),
]

LANGUAGE_PATTERNS = [
    ("python", re.compile(r"\bpython\b", re.IGNORECASE)),
    ("javascript", re.compile(r"\b(javascript|js)\b", re.IGNORECASE)),
    ("html", re.compile(r"\bhtml\b", re.IGNORECASE)),
    ("css", re.compile(r"\bcss\b", re.IGNORECASE)),
]

# "neon-racer" also matches "neon racer" and "neon_racer"
STYLE_NAME_PATTERNS = {
    name: re.compile(r"\b" + r"[\s_-]?".join(map(re.escape, name.split("-"))) + r"\b", re.IGNORECASE)
    for name in STYLES
}


def is_new_lesson_request(message: str) -> bool:
    return any(pattern.search(message) for pattern in NEW_LESSON_PATTERNS)


def is_slide_edit_request(message: str) -> bool:
    return any(pattern.search(message) for pattern in SLIDE_EDIT_PATTERNS)


def mentions_style(message: str) -> bool:
    return STYLE_REQUEST_PATTERN.search(message) is not None


def detect_style(message: str) -> str | None:
    """Name of the first style template mentioned in the message, if any."""
    for name, pattern in STYLE_NAME_PATTERNS.items():
        if pattern.search(message):
            return name
    return None


def extract_topic(message: str) -> str:
    """Lesson topic named in a request, up to the first comma or period."""
    for pattern in TOPIC_PATTERNS:
        match = pattern.search(message)
        if match:
            topic = _STYLE_SUFFIX.sub("", match.group(1)).strip().rstrip("?!").strip()
            if topic:
                return topic
    return DEFAULT_TOPIC


def extract_difficulty(message: str) -> Difficulty:
    for difficulty, pattern in DIFFICULTY_PATTERNS:
        if pattern.search(message):
            return difficulty
    return "beginner"


def detect_language(message: str) -> str:
    for language, pattern in LANGUAGE_PATTERNS:
        if pattern.search(message):
            return language
    return DEFAULT_LANGUAGE
