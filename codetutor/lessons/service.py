import logging

from codetutor.ai.service import AIService
from codetutor.exceptions import ResourceNotFoundError, ValidationError
from codetutor.lessons.schemas import LessonCreateRequest, LessonDetailResponse, SlideCreateRequest, SlideUpdateRequest
from codetutor.lessons.styles import DEFAULT_STYLE, STYLES, render_style
from codetutor.storage import AbstractStorage, Lesson, LessonCreate, Slide, SlideCreate


logger = logging.getLogger(__name__)


async def list_lessons(storage: AbstractStorage) -> list[Lesson]:
    return await storage.get_lessons()


async def get_lesson_detail(storage: AbstractStorage, lesson_id: int) -> LessonDetailResponse:
    """Fetch a lesson together with its slides sorted by ``order``.

    Raises
    ------
        ResourceNotFoundError: If the lesson does not exist.
    """
    lesson = await storage.get_lesson(lesson_id)
    if lesson is None:
        raise ResourceNotFoundError("Lesson", lesson_id)

    slides = sorted(await storage.get_slides_by_lesson_id(lesson_id), key=lambda s: s.order)
    return LessonDetailResponse(**lesson.model_dump(), slides=slides)


async def generate_lesson(
    storage: AbstractStorage,
    ai_service: AIService,
    request: LessonCreateRequest,
) -> LessonDetailResponse:
    """
    Generate a new lesson, store it with its slides, and apply a style template.

    Args:
        storage: Lesson store
        ai_service: Lesson writer
        request: Topic, difficulty, optional description and style

    Returns
    -------
        LessonDetailResponse: The stored lesson with its slides in order.
    """
    generated = await ai_service.generate_lesson(request.topic, request.difficulty, request.description)

    style_name = request.style if request.style in STYLES else DEFAULT_STYLE
    style = render_style(style_name, request.topic)

    lesson = await storage.create_lesson(
        LessonCreate(
            title=generated.title,
            description=generated.description or request.description or None,
            difficulty=request.difficulty,
            language=generated.language or "python",
            estimated_time=generated.estimated_time,
            style_name=style_name,
            css_content=style["css_content"],
            js_content=style["js_content"],
        )
    )

    slides: list[Slide] = []
    for order, slide in enumerate(generated.slides):
        slides.append(
            await storage.create_slide(
                SlideCreate(
                    lesson_id=lesson.id,
                    title=slide.title,
                    content=slide.content,
                    type=slide.type,
                    order=order,
                    tags=slide.tags,
                    initial_code=slide.initial_code,
                    filename=slide.filename,
                    tests=slide.tests,
                )
            )
        )

    logger.info(
        "Created lesson %s '%s' with %d slides",
        lesson.id,
        lesson.title,
        len(slides),
        extra={"lesson_id": lesson.id, "style": style_name},
    )
    return LessonDetailResponse(**lesson.model_dump(), slides=slides)


async def _get_lesson_slide(storage: AbstractStorage, lesson_id: int, slide_id: int) -> Slide:
    if await storage.get_lesson(lesson_id) is None:
        raise ResourceNotFoundError("Lesson", lesson_id)
    slide = await storage.get_slide(slide_id)
    if slide is None or slide.lesson_id != lesson_id:
        raise ResourceNotFoundError("Slide", slide_id)
    return slide


async def add_slide(storage: AbstractStorage, lesson_id: int, request: SlideCreateRequest) -> Slide:
    """Append a slide after the lesson's existing slides."""
    if await storage.get_lesson(lesson_id) is None:
        raise ResourceNotFoundError("Lesson", lesson_id)

    existing = await storage.get_slides_by_lesson_id(lesson_id)
    return await storage.create_slide(
        SlideCreate(lesson_id=lesson_id, order=len(existing), **request.model_dump())
    )


async def update_slide(
    storage: AbstractStorage,
    lesson_id: int,
    slide_id: int,
    request: SlideUpdateRequest,
) -> Slide:
    """Apply a partial update; ``order`` must stay within the lesson's slide positions.

    Raises
    ------
        ResourceNotFoundError: If the lesson or slide does not exist.
        ValidationError: If ``order`` is outside 0..n-1.
    """
    await _get_lesson_slide(storage, lesson_id, slide_id)
    changes = request.model_dump(exclude_unset=True)
    if "order" in changes:
        slide_count = len(await storage.get_slides_by_lesson_id(lesson_id))
        if changes["order"] is None or not 0 <= changes["order"] < slide_count:
            msg = f"Slide order must be between 0 and {slide_count - 1}"
            raise ValidationError(msg)
    return await storage.update_slide(slide_id, changes)


async def delete_slide(storage: AbstractStorage, lesson_id: int, slide_id: int) -> None:
    """Delete a slide and renumber the remaining ones to 0..n-1."""
    await _get_lesson_slide(storage, lesson_id, slide_id)
    await storage.delete_slide(slide_id)

    remaining = sorted(await storage.get_slides_by_lesson_id(lesson_id), key=lambda s: s.order)
    for order, slide in enumerate(remaining):
        if slide.order != order:
            await storage.update_slide(slide.id, {"order": order})
