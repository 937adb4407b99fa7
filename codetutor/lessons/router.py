from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from codetutor.ai.service import AIService, get_ai_service
from codetutor.middleware.security import api_route_limit
from codetutor.storage import AbstractStorage, Lesson, Slide, get_storage

from .schemas import (
    LessonCreateRequest,
    LessonDetailResponse,
    SlideCreateRequest,
    SlideUpdateRequest,
    StyleInfo,
)
from .service import add_slide, delete_slide, generate_lesson, get_lesson_detail, list_lessons, update_slide
from .styles import STYLES


router = APIRouter(prefix="/api/lessons", tags=["lessons"], dependencies=[Depends(api_route_limit)])

StorageDep = Annotated[AbstractStorage, Depends(get_storage)]
AIServiceDep = Annotated[AIService, Depends(get_ai_service)]


@router.get("")
async def list_lessons_endpoint(storage: StorageDep) -> list[Lesson]:
    """List all lessons."""
    return await list_lessons(storage)


@router.get("/styles")
async def list_styles_endpoint() -> list[StyleInfo]:
    """List the style templates a lesson can be created with."""
    return [StyleInfo(name=s.name, label=s.label, description=s.description) for s in STYLES.values()]


@router.get("/{lesson_id}")
async def get_lesson_endpoint(lesson_id: int, storage: StorageDep) -> LessonDetailResponse:
    """Retrieve a lesson with its slides in order."""
    return await get_lesson_detail(storage, lesson_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_lesson_endpoint(
    request: LessonCreateRequest,
    storage: StorageDep,
    ai_service: AIServiceDep,
) -> LessonDetailResponse:
    """Generate a new lesson for a topic."""
    return await generate_lesson(storage, ai_service, request)


@router.post("/{lesson_id}/slides", status_code=status.HTTP_201_CREATED)
async def create_slide_endpoint(lesson_id: int, request: SlideCreateRequest, storage: StorageDep) -> Slide:
    """Append a slide to a lesson."""
    return await add_slide(storage, lesson_id, request)


@router.patch("/{lesson_id}/slides/{slide_id}")
async def update_slide_endpoint(
    lesson_id: int,
    slide_id: int,
    request: SlideUpdateRequest,
    storage: StorageDep,
) -> Slide:
    """Update a slide of a lesson."""
    return await update_slide(storage, lesson_id, slide_id, request)


@router.delete("/{lesson_id}/slides/{slide_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slide_endpoint(lesson_id: int, slide_id: int, storage: StorageDep) -> Response:
    """Delete a slide and renumber the rest."""
    await delete_slide(storage, lesson_id, slide_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
