"""Pydantic models for structured completion output."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from codetutor.sandbox.models import TestCase


class GeneratedSlide(BaseModel):
    """One slide as produced by the lesson writer."""

    title: str = Field(description="Slide title")
    content: str = Field(description="Slide body in markdown")
    type: Literal["info", "challenge", "quiz"] = Field("info", description="Slide kind")
    tags: list[str] = Field(default_factory=list, description="Topic tags")
    initial_code: str | None = Field(None, description="Starter code for challenge slides")
    filename: str | None = Field(None, description="Editor filename for challenge slides")
    tests: list[TestCase] = Field(default_factory=list, description="Checks for challenge slides")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> str:
        text = str(value or "").strip().lower()
        return text if text in {"info", "challenge", "quiz"} else "info"


class GeneratedLesson(BaseModel):
    """Complete lesson returned by the lesson writer."""

    title: str = Field(description="Lesson title")
    description: str = Field("", description="One or two sentence summary")
    language: str = Field("python", description="Programming language taught")
    estimated_time: str | None = Field("15 min", description="Estimated completion time")
    slides: list[GeneratedSlide] = Field(default_factory=list, description="Slides in presentation order")


class SlideEdit(BaseModel):
    """Rewritten slide title and content."""

    title: str | None = Field(None, description="Improved slide title")
    content: str | None = Field(None, description="Improved slide content in markdown")


class GeneratedTests(BaseModel):
    tests: list[TestCase] = Field(default_factory=list)
