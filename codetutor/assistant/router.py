import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError as PydanticValidationError

from codetutor.exceptions import DomainError
from codetutor.middleware.security import ai_route_limit

from .schemas import (
    ChatCreateRequest,
    ChatDetailResponse,
    ChatMessageFrame,
    ChatMessageRequest,
    ChatMessageResponse,
    ChatResponseFrame,
    ErrorFrame,
)
from .service import AssistantService, get_assistant_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chats", tags=["assistant"], dependencies=[Depends(ai_route_limit)])
ws_router = APIRouter(tags=["assistant"])

AssistantDep = Annotated[AssistantService, Depends(get_assistant_service)]


@router.get("/{lesson_id}")
async def get_lesson_chat(lesson_id: int, assistant: AssistantDep) -> ChatDetailResponse:
    """Get the chat attached to a lesson, with its messages."""
    return await assistant.get_chat_for_lesson(lesson_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_chat(request: ChatCreateRequest, assistant: AssistantDep) -> ChatDetailResponse:
    """Open a chat with a persona welcome message."""
    return await assistant.create_chat(request.lesson_id, request.persona)


@router.post("/{chat_id}/messages")
async def post_message(chat_id: int, request: ChatMessageRequest, assistant: AssistantDep) -> ChatMessageResponse:
    """Send a learner message and get the assistant's reply."""
    return await assistant.post_message(
        chat_id,
        request.content,
        persona=request.persona,
        client_message_id=request.client_message_id,
    )


@router.delete("/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat(chat_id: int, assistant: AssistantDep) -> Response:
    """Delete a chat and its messages."""
    await assistant.delete_chat(chat_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _describe_frame_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"Invalid message frame: {location + ': ' if location else ''}{first['msg']}"


@ws_router.websocket("/ws")
async def chat_websocket(websocket: WebSocket, assistant: AssistantDep) -> None:
    """Chat over a WebSocket; every frame gets exactly one response frame."""
    await websocket.accept()
    logger.info("WebSocket client connected")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = ChatMessageFrame.model_validate_json(raw)
                response = await assistant.post_message(
                    frame.chat_id,
                    frame.content,
                    persona=frame.persona,
                    client_message_id=frame.client_message_id,
                    lesson_id=frame.lesson_id,
                )
                outgoing: ChatResponseFrame | ErrorFrame = ChatResponseFrame(
                    chat_id=frame.chat_id, reply=response.reply
                )
            except PydanticValidationError as e:
                logger.info("Rejected WebSocket frame: %s", e)
                outgoing = ErrorFrame(error=_describe_frame_error(e))
            except DomainError as e:
                outgoing = ErrorFrame(error=e.message)
            except Exception as e:
                logger.exception("Error processing WebSocket message")
                outgoing = ErrorFrame(error=str(e))

            await websocket.send_text(outgoing.model_dump_json())
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
