"""Assistant service: chats, persona replies and chat-driven lesson building."""

import logging
from typing import Annotated

from fastapi import Depends

from codetutor.ai.errors import AIRuntimeError
from codetutor.ai.service import AIService, get_ai_service
from codetutor.exceptions import DomainError, ResourceNotFoundError
from codetutor.lessons.schemas import LessonCreateRequest
from codetutor.lessons.service import generate_lesson
from codetutor.lessons.styles import style_names
from codetutor.storage import AbstractStorage, ChatCreate, MessageCreate, get_storage

from . import intents
from .personas import get_persona
from .schemas import (
    AssistantReply,
    ChatDetailResponse,
    ChatMessageResponse,
    LessonCreated,
    PlainText,
    StyleChoice,
)
from .sessions import ChatSession, ChatSessionRegistry, get_session_registry


logger = logging.getLogger(__name__)

TROUBLE_REPLY = "I'm having trouble responding right now. Error: {error}"


class AssistantService:
    """Chat operations on top of the store and the AI service."""

    def __init__(self, storage: AbstractStorage, ai_service: AIService, sessions: ChatSessionRegistry) -> None:
        self._storage = storage
        self._ai = ai_service
        self._sessions = sessions

    async def get_chat_for_lesson(self, lesson_id: int) -> ChatDetailResponse:
        chat = await self._storage.get_chat_by_lesson_id(lesson_id)
        if chat is None:
            raise ResourceNotFoundError("Chat for lesson", lesson_id)
        messages = await self._storage.get_messages_by_chat_id(chat.id)
        return ChatDetailResponse(**chat.model_dump(), messages=messages)

    async def create_chat(self, lesson_id: int | None = None, persona: str | None = None) -> ChatDetailResponse:
        """Open a chat, titled after its lesson when there is one, with a welcome message."""
        title = "New Chat"
        if lesson_id is not None:
            lesson = await self._storage.get_lesson(lesson_id)
            if lesson is not None:
                title = f"Chat for {lesson.title}"

        chat = await self._storage.create_chat(ChatCreate(lesson_id=lesson_id, title=title))
        welcome = await self._storage.create_message(
            MessageCreate(chat_id=chat.id, role="assistant", content=get_persona(persona).welcome)
        )
        return ChatDetailResponse(**chat.model_dump(), messages=[welcome])

    async def delete_chat(self, chat_id: int) -> None:
        """Delete a chat with its messages and release its session."""
        if not await self._storage.delete_chat(chat_id):
            raise ResourceNotFoundError("Chat", chat_id)
        self._sessions.discard(chat_id)
        logger.info("Deleted chat %s", chat_id)

    async def post_message(
        self,
        chat_id: int,
        content: str,
        *,
        persona: str | None = None,
        client_message_id: str | None = None,
        lesson_id: int | None = None,
    ) -> ChatMessageResponse:
        """
        Store a learner message, build the assistant reply and store it too.

        Args:
            chat_id: Target chat
            content: Learner message
            persona: Persona framing the reply (defaults to Mumu)
            client_message_id: Idempotency key; a repeat returns the first reply
            lesson_id: Lesson context override; defaults to the chat's lesson

        Raises
        ------
            ResourceNotFoundError: If the chat does not exist.
        """
        chat = await self._storage.get_chat(chat_id)
        if chat is None:
            raise ResourceNotFoundError("Chat", chat_id)

        session = self._sessions.get(chat_id)
        async with session.lock:
            if session.is_processed(client_message_id):
                logger.info("Skipping already processed message %s in chat %s", client_message_id, chat_id)
                return session.previous_reply(client_message_id)

            history = [
                {"role": m.role, "content": m.content}
                for m in await self._storage.get_messages_by_chat_id(chat_id)
                if m.role in ("user", "assistant")
            ]
            await self._storage.create_message(MessageCreate(chat_id=chat_id, role="user", content=content))

            reply = await self._reply(
                session,
                content,
                history=history,
                persona=persona,
                lesson_id=lesson_id if lesson_id is not None else chat.lesson_id,
            )
            message = await self._storage.create_message(
                MessageCreate(chat_id=chat_id, role="assistant", content=reply.text)
            )
            await self._storage.update_chat(chat_id, {})  # bumps updated_at

            response = ChatMessageResponse(message=message, reply=reply)
            session.remember(client_message_id, response)
            return response

    async def _reply(
        self,
        session: ChatSession,
        content: str,
        *,
        history: list[dict[str, str]],
        persona: str | None,
        lesson_id: int | None,
    ) -> AssistantReply:
        if intents.is_new_lesson_request(content):
            return await self._create_lesson_from_chat(content)

        try:
            if lesson_id is not None and intents.is_slide_edit_request(content):
                return await self._edit_slide(lesson_id, content)

            text = await self._ai.generate_reply(
                content,
                history=history,
                persona=get_persona(persona).key,
                lesson_context=await self._lesson_context(lesson_id),
            )
        except AIRuntimeError as e:
            logger.warning("Assistant reply failed in chat %s: %s", session.chat_id, e)
            return PlainText(text=TROUBLE_REPLY.format(error=e))
        return PlainText(text=text)

    async def _create_lesson_from_chat(self, content: str) -> AssistantReply:
        topic = intents.extract_topic(content)
        style = intents.detect_style(content)
        if style is None and intents.mentions_style(content):
            return StyleChoice(
                text=f"I'd love to build a lesson about {topic}! Which style would you like?",
                styles=style_names(),
            )

        difficulty = intents.extract_difficulty(content)
        language = intents.detect_language(content)
        request = LessonCreateRequest(
            topic=topic,
            difficulty=difficulty,
            description=f"Teach it in {language}." if language != intents.DEFAULT_LANGUAGE else "",
            style=style,
        )
        try:
            lesson = await generate_lesson(self._storage, self._ai, request)
        except (AIRuntimeError, DomainError, ValueError) as e:
            logger.exception("Error creating lesson about '%s' from chat", topic)
            return PlainText(text=f"I'm sorry, I couldn't create a lesson about {topic}. Error: {e}")

        return LessonCreated(
            text=f"I've created a new lesson about {topic}. It's ready for you to explore!",
            lesson_id=lesson.id,
            lesson_title=lesson.title,
        )

    async def _edit_slide(self, lesson_id: int, content: str) -> AssistantReply:
        slides = await self._storage.get_slides_by_lesson_id(lesson_id)
        if not slides:
            return PlainText(text="I couldn't find any slides for this lesson.")

        # The request does not say which slide; edit the first one
        slide = slides[0]
        edit = await self._ai.rewrite_slide(slide, content)
        changes = edit.model_dump(exclude_none=True)
        if not changes:
            return PlainText(text="I couldn't come up with changes for that slide.")

        updated = await self._storage.update_slide(slide.id, changes)
        return PlainText(text=f'I\'ve updated the slide "{updated.title}". Take a look!')

    async def _lesson_context(self, lesson_id: int | None) -> dict | None:
        if lesson_id is None:
            return None
        lesson = await self._storage.get_lesson(lesson_id)
        if lesson is None:
            return None
        slides = await self._storage.get_slides_by_lesson_id(lesson_id)
        return {
            "title": lesson.title,
            "language": lesson.language,
            "difficulty": lesson.difficulty,
            "slide_titles": [s.title for s in slides],
        }


def get_assistant_service(
    storage: Annotated[AbstractStorage, Depends(get_storage)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
    sessions: Annotated[ChatSessionRegistry, Depends(get_session_registry)],
) -> AssistantService:
    """FastAPI dependency wiring the service to the shared store and sessions."""
    return AssistantService(storage, ai_service, sessions)
