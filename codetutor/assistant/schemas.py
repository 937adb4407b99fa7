from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from codetutor.storage.models import Chat, Message

from .personas import PersonaKey


# === Assistant replies ===


class PlainText(BaseModel):
    """Ordinary chat answer."""

    kind: Literal["text"] = "text"
    text: str


class LessonCreated(BaseModel):
    """A lesson was generated from the chat; the client may navigate to it."""

    kind: Literal["lesson_created"] = "lesson_created"
    text: str
    lesson_id: int
    lesson_title: str


class StyleChoice(BaseModel):
    """The learner asked for a styled lesson without naming a style."""

    kind: Literal["style_choice"] = "style_choice"
    text: str
    styles: list[str]


AssistantReply = Annotated[PlainText | LessonCreated | StyleChoice, Field(discriminator="kind")]


# === REST ===


class ChatCreateRequest(BaseModel):
    """Request schema for opening a chat."""

    lesson_id: int | None = None
    persona: PersonaKey | None = None


class ChatMessageRequest(BaseModel):
    """Request schema for posting a learner message."""

    content: str
    persona: PersonaKey | None = None
    client_message_id: str | None = Field(None, description="Client-chosen id; a repeat returns the first reply")

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Message content is required"
            raise ValueError(msg)
        return value


class ChatDetailResponse(Chat):
    """Chat with its messages in order."""

    messages: list[Message] = Field(default_factory=list)


class ChatMessageResponse(BaseModel):
    """Stored assistant message plus the typed reply it was built from."""

    message: Message
    reply: AssistantReply


# === WebSocket frames ===


class ChatMessageFrame(ChatMessageRequest):
    type: Literal["chat_message"]
    chat_id: int
    lesson_id: int | None = None


class ChatResponseFrame(BaseModel):
    type: Literal["chat_response"] = "chat_response"
    chat_id: int
    reply: AssistantReply


class ErrorFrame(BaseModel):
    type: Literal["error"] = "error"
    error: str
