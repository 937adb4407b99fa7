"""Tests for the in-memory lesson, slide, chat and message store."""

import pytest

from codetutor.exceptions import ResourceNotFoundError
from codetutor.storage import ChatCreate, LessonCreate, MemoryStorage, MessageCreate, SlideCreate


@pytest.mark.asyncio
async def test_ids_auto_increment_per_entity(storage: MemoryStorage) -> None:
    first = await storage.create_lesson(LessonCreate(title="One"))
    second = await storage.create_lesson(LessonCreate(title="Two"))
    slide = await storage.create_slide(SlideCreate(lesson_id=first.id, title="S", content=""))

    assert (first.id, second.id) == (1, 2)
    assert slide.id == 1


@pytest.mark.asyncio
async def test_missing_records_return_none(storage: MemoryStorage) -> None:
    assert await storage.get_lesson(42) is None
    assert await storage.get_slide(42) is None
    assert await storage.get_chat(42) is None
    assert await storage.get_message(42) is None
    assert await storage.get_chat_by_lesson_id(42) is None


@pytest.mark.asyncio
async def test_slides_by_lesson_are_sorted_by_order(storage: MemoryStorage) -> None:
    lesson = await storage.create_lesson(LessonCreate(title="Sorted"))
    other = await storage.create_lesson(LessonCreate(title="Other"))
    await storage.create_slide(SlideCreate(lesson_id=lesson.id, title="second", content="", order=1))
    await storage.create_slide(SlideCreate(lesson_id=other.id, title="elsewhere", content="", order=0))
    await storage.create_slide(SlideCreate(lesson_id=lesson.id, title="first", content="", order=0))

    slides = await storage.get_slides_by_lesson_id(lesson.id)

    assert [s.title for s in slides] == ["first", "second"]


@pytest.mark.asyncio
async def test_updates_merge_changes_and_keep_the_id(storage: MemoryStorage) -> None:
    lesson = await storage.create_lesson(LessonCreate(title="Before"))

    updated = await storage.update_lesson(lesson.id, {"title": "After", "id": 99})

    assert updated.id == lesson.id
    assert updated.title == "After"
    assert updated.updated_at >= lesson.updated_at
    assert (await storage.get_lesson(lesson.id)).title == "After"


@pytest.mark.asyncio
async def test_updating_missing_records_raises(storage: MemoryStorage) -> None:
    with pytest.raises(ResourceNotFoundError, match="Lesson 7 not found"):
        await storage.update_lesson(7, {"title": "x"})
    with pytest.raises(ResourceNotFoundError):
        await storage.update_slide(7, {"title": "x"})
    with pytest.raises(ResourceNotFoundError):
        await storage.update_chat(7, {"title": "x"})


@pytest.mark.asyncio
async def test_returned_records_are_copies(storage: MemoryStorage) -> None:
    lesson = await storage.create_lesson(LessonCreate(title="Original"))
    lesson.title = "Changed locally"

    assert (await storage.get_lesson(lesson.id)).title == "Original"


@pytest.mark.asyncio
async def test_deleting_a_lesson_removes_its_slides(storage: MemoryStorage) -> None:
    lesson = await storage.create_lesson(LessonCreate(title="Doomed"))
    slide = await storage.create_slide(SlideCreate(lesson_id=lesson.id, title="S", content=""))

    assert await storage.delete_lesson(lesson.id) is True
    assert await storage.get_slide(slide.id) is None
    assert await storage.delete_lesson(lesson.id) is False


@pytest.mark.asyncio
async def test_chats_and_messages(storage: MemoryStorage) -> None:
    chat = await storage.create_chat(ChatCreate(lesson_id=3, title="Chat for X"))
    await storage.create_message(MessageCreate(chat_id=chat.id, role="assistant", content="hello"))
    await storage.create_message(MessageCreate(chat_id=chat.id, role="user", content="hi"))

    assert (await storage.get_chat_by_lesson_id(3)).id == chat.id
    assert [m.content for m in await storage.get_messages_by_chat_id(chat.id)] == ["hello", "hi"]

    assert await storage.delete_chat(chat.id) is True
    assert await storage.get_messages_by_chat_id(chat.id) == []


@pytest.mark.asyncio
async def test_seeded_store_holds_the_sample_lesson(seeded_storage: MemoryStorage) -> None:
    (lesson,) = await seeded_storage.get_lessons()
    slides = await seeded_storage.get_slides_by_lesson_id(lesson.id)

    assert lesson.title == "Python Basics"
    assert [s.type for s in slides] == ["info", "info", "challenge", "quiz"]
    assert [t.id for t in slides[2].tests] == ["test-1", "test-2", "test-3"]
