from pydantic import BaseModel, Field, field_validator

from codetutor.storage.models import Difficulty

from .models import TestCase, TestResult


class CodeRunRequest(BaseModel):
    """Learner code plus the tests to grade it with.

    Tests come from the first source present: ``tests``, then
    ``test_definitions``, then the stored slide named by ``slide_id``.
    """

    code: str
    tests: list[TestCase] | None = None
    test_definitions: str | None = Field(None, description="Pipe-delimited test definitions, one per line")
    slide_id: int | None = None

    @field_validator("code")
    @classmethod
    def _code_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Code is required"
            raise ValueError(msg)
        return value


class CodeRunResponse(BaseModel):
    output: list[str]
    error: str | None = None
    results: list[TestResult] = Field(default_factory=list)
    all_passed: bool = False
    summary: list[str] = Field(default_factory=list, description="Console lines summarizing the test results")


class ParseTestsRequest(BaseModel):
    definitions: str = ""


# === Code help ===


class CodeHelpRequest(BaseModel):
    """Code to analyze or explain."""

    code: str
    language: str = "python"

    @field_validator("code")
    @classmethod
    def _code_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Code is required"
            raise ValueError(msg)
        return value


class CodeExplainRequest(CodeHelpRequest):
    audience: Difficulty = "beginner"


class CodeAnalysisResponse(BaseModel):
    analysis: str


class CodeExplanationResponse(BaseModel):
    explanation: str


class GenerateTestsRequest(BaseModel):
    """Challenge description, optionally with a sample solution, to write tests for."""

    description: str
    language: str = "python"
    sample_code: str | None = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "Description is required"
            raise ValueError(msg)
        return value
