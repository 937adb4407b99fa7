"""In-process store: one dict per record type, auto-increment integer ids.

Nothing is durable and relational lookups are linear scans. Records are
handed out as copies, so callers change state only through ``update_*``.
"""

import logging
from itertools import count
from typing import Any, TypeVar

from pydantic import BaseModel

from codetutor.exceptions import ResourceNotFoundError

from .base import AbstractStorage
from .models import (
    Chat,
    ChatCreate,
    Lesson,
    LessonCreate,
    Message,
    MessageCreate,
    Slide,
    SlideCreate,
    utcnow,
)
from .seed import SAMPLE_LESSON, sample_slides


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _apply(record: RecordT, changes: dict[str, Any], **extra: Any) -> RecordT:
    """Validated copy of ``record`` with ``changes`` merged in; ids are immutable."""
    data = record.model_dump()
    data.update({key: value for key, value in changes.items() if key != "id"})
    data.update(extra)
    return type(record).model_validate(data)


class MemoryStorage(AbstractStorage):
    """Dictionary-backed storage used by the running service and the tests."""

    def __init__(self, *, seed: bool = False) -> None:
        self._lessons: dict[int, Lesson] = {}
        self._slides: dict[int, Slide] = {}
        self._chats: dict[int, Chat] = {}
        self._messages: dict[int, Message] = {}

        self._lesson_ids = count(1)
        self._slide_ids = count(1)
        self._chat_ids = count(1)
        self._message_ids = count(1)

        if seed:
            self._seed()

    def _seed(self) -> None:
        lesson = self._add_lesson(SAMPLE_LESSON)
        for slide in sample_slides(lesson.id):
            self._add_slide(slide)
        logger.info("Seeded sample lesson %r (id=%d)", lesson.title, lesson.id)

    def _add_lesson(self, lesson: LessonCreate) -> Lesson:
        record = Lesson(id=next(self._lesson_ids), **lesson.model_dump())
        self._lessons[record.id] = record
        return record.model_copy(deep=True)

    def _add_slide(self, slide: SlideCreate) -> Slide:
        record = Slide(id=next(self._slide_ids), **slide.model_dump())
        self._slides[record.id] = record
        return record.model_copy(deep=True)

    # Lessons
    async def get_lessons(self) -> list[Lesson]:
        return [lesson.model_copy(deep=True) for lesson in self._lessons.values()]

    async def get_lesson(self, lesson_id: int) -> Lesson | None:
        lesson = self._lessons.get(lesson_id)
        return lesson.model_copy(deep=True) if lesson else None

    async def create_lesson(self, lesson: LessonCreate) -> Lesson:
        return self._add_lesson(lesson)

    async def update_lesson(self, lesson_id: int, changes: dict[str, Any]) -> Lesson:
        current = self._lessons.get(lesson_id)
        if current is None:
            raise ResourceNotFoundError("Lesson", lesson_id)
        updated = _apply(current, changes, updated_at=utcnow())
        self._lessons[lesson_id] = updated
        return updated.model_copy(deep=True)

    async def delete_lesson(self, lesson_id: int) -> bool:
        if self._lessons.pop(lesson_id, None) is None:
            return False
        for slide_id in [s.id for s in self._slides.values() if s.lesson_id == lesson_id]:
            del self._slides[slide_id]
        return True

    # Slides
    async def get_slide(self, slide_id: int) -> Slide | None:
        slide = self._slides.get(slide_id)
        return slide.model_copy(deep=True) if slide else None

    async def get_slides_by_lesson_id(self, lesson_id: int) -> list[Slide]:
        slides = [s.model_copy(deep=True) for s in self._slides.values() if s.lesson_id == lesson_id]
        return sorted(slides, key=lambda s: s.order)

    async def create_slide(self, slide: SlideCreate) -> Slide:
        return self._add_slide(slide)

    async def update_slide(self, slide_id: int, changes: dict[str, Any]) -> Slide:
        current = self._slides.get(slide_id)
        if current is None:
            raise ResourceNotFoundError("Slide", slide_id)
        updated = _apply(current, changes)
        self._slides[slide_id] = updated
        return updated.model_copy(deep=True)

    async def delete_slide(self, slide_id: int) -> bool:
        return self._slides.pop(slide_id, None) is not None

    # Chats
    async def get_chat(self, chat_id: int) -> Chat | None:
        chat = self._chats.get(chat_id)
        return chat.model_copy(deep=True) if chat else None

    async def get_chat_by_lesson_id(self, lesson_id: int) -> Chat | None:
        for chat in self._chats.values():
            if chat.lesson_id == lesson_id:
                return chat.model_copy(deep=True)
        return None

    async def create_chat(self, chat: ChatCreate) -> Chat:
        record = Chat(id=next(self._chat_ids), **chat.model_dump())
        self._chats[record.id] = record
        return record.model_copy(deep=True)

    async def update_chat(self, chat_id: int, changes: dict[str, Any]) -> Chat:
        current = self._chats.get(chat_id)
        if current is None:
            raise ResourceNotFoundError("Chat", chat_id)
        updated = _apply(current, changes, updated_at=utcnow())
        self._chats[chat_id] = updated
        return updated.model_copy(deep=True)

    async def delete_chat(self, chat_id: int) -> bool:
        if self._chats.pop(chat_id, None) is None:
            return False
        for message_id in [m.id for m in self._messages.values() if m.chat_id == chat_id]:
            del self._messages[message_id]
        return True

    # Messages
    async def get_message(self, message_id: int) -> Message | None:
        message = self._messages.get(message_id)
        return message.model_copy(deep=True) if message else None

    async def get_messages_by_chat_id(self, chat_id: int) -> list[Message]:
        return [m.model_copy(deep=True) for m in self._messages.values() if m.chat_id == chat_id]

    async def create_message(self, message: MessageCreate) -> Message:
        record = Message(id=next(self._message_ids), **message.model_dump())
        self._messages[record.id] = record
        return record.model_copy(deep=True)
