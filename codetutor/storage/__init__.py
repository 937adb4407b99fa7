"""In-memory lesson, slide, chat and message storage."""

from .base import AbstractStorage
from .factory import get_storage
from .memory import MemoryStorage
from .models import Chat, ChatCreate, Lesson, LessonCreate, Message, MessageCreate, Slide, SlideCreate


__all__ = [
    "AbstractStorage",
    "Chat",
    "ChatCreate",
    "Lesson",
    "LessonCreate",
    "Message",
    "MessageCreate",
    "MemoryStorage",
    "Slide",
    "SlideCreate",
    "get_storage",
]
