"""Abstract interface of the lesson/slide/chat store."""

from abc import ABC, abstractmethod
from typing import Any

from .models import Chat, ChatCreate, Lesson, LessonCreate, Message, MessageCreate, Slide, SlideCreate


class AbstractStorage(ABC):
    """CRUD operations keyed by integer id.

    ``get_*`` return None for unknown ids; ``update_*`` raise
    ResourceNotFoundError; ``delete_*`` report whether something was removed.
    """

    # Lessons
    @abstractmethod
    async def get_lessons(self) -> list[Lesson]:
        raise NotImplementedError

    @abstractmethod
    async def get_lesson(self, lesson_id: int) -> Lesson | None:
        raise NotImplementedError

    @abstractmethod
    async def create_lesson(self, lesson: LessonCreate) -> Lesson:
        raise NotImplementedError

    @abstractmethod
    async def update_lesson(self, lesson_id: int, changes: dict[str, Any]) -> Lesson:
        raise NotImplementedError

    @abstractmethod
    async def delete_lesson(self, lesson_id: int) -> bool:
        """Delete a lesson together with its slides."""
        raise NotImplementedError

    # Slides
    @abstractmethod
    async def get_slide(self, slide_id: int) -> Slide | None:
        raise NotImplementedError

    @abstractmethod
    async def get_slides_by_lesson_id(self, lesson_id: int) -> list[Slide]:
        """Slides of a lesson sorted by ``order``."""
        raise NotImplementedError

    @abstractmethod
    async def create_slide(self, slide: SlideCreate) -> Slide:
        raise NotImplementedError

    @abstractmethod
    async def update_slide(self, slide_id: int, changes: dict[str, Any]) -> Slide:
        raise NotImplementedError

    @abstractmethod
    async def delete_slide(self, slide_id: int) -> bool:
        raise NotImplementedError

    # Chats
    @abstractmethod
    async def get_chat(self, chat_id: int) -> Chat | None:
        raise NotImplementedError

    @abstractmethod
    async def get_chat_by_lesson_id(self, lesson_id: int) -> Chat | None:
        raise NotImplementedError

    @abstractmethod
    async def create_chat(self, chat: ChatCreate) -> Chat:
        raise NotImplementedError

    @abstractmethod
    async def update_chat(self, chat_id: int, changes: dict[str, Any]) -> Chat:
        raise NotImplementedError

    @abstractmethod
    async def delete_chat(self, chat_id: int) -> bool:
        """Delete a chat together with its messages."""
        raise NotImplementedError

    # Messages
    @abstractmethod
    async def get_message(self, message_id: int) -> Message | None:
        raise NotImplementedError

    @abstractmethod
    async def get_messages_by_chat_id(self, chat_id: int) -> list[Message]:
        """Messages of a chat in creation order."""
        raise NotImplementedError

    @abstractmethod
    async def create_message(self, message: MessageCreate) -> Message:
        raise NotImplementedError
