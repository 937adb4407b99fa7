"""Per-chat session state carried through message handling."""

import asyncio
import logging
from dataclasses import dataclass, field

from starlette.requests import HTTPConnection

from .schemas import ChatMessageResponse


logger = logging.getLogger(__name__)


@dataclass
class ChatSession:
    """Replies already produced for one chat, keyed by client message id.

    ``lock`` serializes message handling within the chat so that a retried
    message cannot race its original.
    """

    chat_id: int
    processed: dict[str, ChatMessageResponse] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def is_processed(self, client_message_id: str | None) -> bool:
        return client_message_id is not None and client_message_id in self.processed

    def previous_reply(self, client_message_id: str) -> ChatMessageResponse:
        return self.processed[client_message_id]

    def remember(self, client_message_id: str | None, response: ChatMessageResponse) -> None:
        if client_message_id is not None:
            self.processed[client_message_id] = response


class ChatSessionRegistry:
    """Owns one ChatSession per chat id."""

    def __init__(self) -> None:
        self._sessions: dict[int, ChatSession] = {}

    def get(self, chat_id: int) -> ChatSession:
        """Get or create the session for a chat."""
        session = self._sessions.get(chat_id)
        if session is None:
            session = ChatSession(chat_id=chat_id)
            self._sessions[chat_id] = session
            logger.debug("Opened chat session %s", chat_id)
        return session

    def discard(self, chat_id: int) -> None:
        """Drop a deleted chat's session; later messages to that id start fresh."""
        if self._sessions.pop(chat_id, None) is not None:
            logger.debug("Closed chat session %s", chat_id)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._sessions


def get_session_registry(connection: HTTPConnection) -> ChatSessionRegistry:
    """Chat sessions owned by the running app; works for HTTP and WebSocket routes."""
    return connection.app.state.chat_sessions
