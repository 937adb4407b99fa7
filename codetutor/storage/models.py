"""Records kept by the lesson store."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from codetutor.sandbox.models import TestCase


Difficulty = Literal["beginner", "intermediate", "advanced"]
SlideType = Literal["info", "challenge", "quiz"]
MessageRole = Literal["user", "assistant", "system"]


def utcnow() -> datetime:
    return datetime.now(UTC)


class LessonCreate(BaseModel):
    """Fields supplied when a lesson is created."""

    title: str
    description: str | None = None
    difficulty: Difficulty = "beginner"
    language: str = "python"
    format: Literal["markdown", "html"] = "markdown"
    estimated_time: str | None = None
    style_name: str | None = Field(None, description="Style template name, e.g. brown-markdown")
    css_content: str | None = Field(None, description="CSS shared by every slide")
    js_content: str | None = Field(None, description="Script shared by every slide")


class Lesson(LessonCreate):
    id: int
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class SlideCreate(BaseModel):
    """Fields supplied when a slide is created."""

    lesson_id: int
    title: str
    content: str
    type: SlideType = "info"
    order: int = 0
    tags: list[str] = Field(default_factory=list)
    completed: bool = False
    initial_code: str | None = None
    filename: str | None = None
    css_content: str | None = None
    js_content: str | None = None
    tests: list[TestCase] = Field(default_factory=list)


class Slide(SlideCreate):
    id: int


class ChatCreate(BaseModel):
    lesson_id: int | None = None
    title: str


class Chat(ChatCreate):
    id: int
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class MessageCreate(BaseModel):
    chat_id: int
    role: MessageRole = "user"
    content: str


class Message(MessageCreate):
    id: int
    timestamp: datetime = Field(default_factory=utcnow)
