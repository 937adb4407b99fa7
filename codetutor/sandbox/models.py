"""Data structures shared by the code runner, the grader and the test parser."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


TestKind = Literal["pattern", "predicate"]

# Labels accepted for a test kind, from definition rows and stored records.
# Older lesson content (and models that ignore the schema) says "regex" / "js".
_KIND_ALIASES: dict[str, TestKind] = {
    "pattern": "pattern",
    "regex": "pattern",
    "predicate": "predicate",
    "py": "predicate",
    "python": "predicate",
    "js": "predicate",
}


def normalize_kind(value: Any) -> TestKind:
    """Test kind for a label; anything unrecognized is a pattern test."""
    return _KIND_ALIASES.get(str(value or "").strip().lower(), "pattern")


def _new_test_id() -> str:
    return f"test-{uuid4().hex[:8]}"


class TestCase(BaseModel):
    """Validation rule for challenge code."""

    __test__: ClassVar[bool] = False

    id: str = Field(default_factory=_new_test_id, description="Unique within a slide")
    name: str = Field(..., description="Short test name shown to the learner")
    description: str = Field("", description="What the test checks")
    validation: str = Field("", description="Regex source (pattern) or predicate function body (predicate)")
    kind: TestKind = Field("pattern", description="How validation is applied")

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _accept_type_field(cls, data: Any) -> Any:
        if isinstance(data, dict) and "kind" not in data and "type" in data:
            data = {**data, "kind": data["type"]}
        return data

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> str:
        return normalize_kind(value)


class TestResult(BaseModel):
    """Outcome of one TestCase for one run. Never persisted."""

    __test__: ClassVar[bool] = False

    id: str
    name: str
    passed: bool
    message: str


@dataclass
class RunResult:
    """Ordered console lines of one evaluation plus its terminal error, if any."""

    output: list[str] = field(default_factory=list)
    error: str | None = None
