from pydantic import BaseModel, Field, field_validator

from codetutor.sandbox.models import TestCase
from codetutor.storage.models import Difficulty, Lesson, Slide, SlideType


class LessonCreateRequest(BaseModel):
    """Request schema for generating a new lesson."""

    topic: str = Field(..., description="What the lesson should teach")
    difficulty: Difficulty = "beginner"
    description: str = ""
    style: str | None = Field(None, description="Style template name; defaults to brown-markdown")

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "Topic is required"
            raise ValueError(msg)
        return value


class SlideCreateRequest(BaseModel):
    """Request schema for appending a slide to a lesson."""

    title: str
    content: str = ""
    type: SlideType = "info"
    tags: list[str] = Field(default_factory=list)
    initial_code: str | None = None
    filename: str | None = None
    css_content: str | None = None
    js_content: str | None = None
    tests: list[TestCase] = Field(default_factory=list)


class SlideUpdateRequest(BaseModel):
    """Partial slide update; only fields that are sent are changed."""

    title: str | None = None
    content: str | None = None
    type: SlideType | None = None
    order: int | None = None
    tags: list[str] | None = None
    completed: bool | None = None
    initial_code: str | None = None
    filename: str | None = None
    css_content: str | None = None
    js_content: str | None = None
    tests: list[TestCase] | None = None


class LessonDetailResponse(Lesson):
    """Lesson with its slides in presentation order."""

    slides: list[Slide] = Field(default_factory=list)


class StyleInfo(BaseModel):
    name: str
    label: str
    description: str
