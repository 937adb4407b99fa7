# Lessons package: lesson generation, slide editing and style templates.
from codetutor.lessons.router import router
from codetutor.lessons.schemas import LessonCreateRequest, LessonDetailResponse, SlideCreateRequest, SlideUpdateRequest
from codetutor.lessons.service import add_slide, delete_slide, generate_lesson, get_lesson_detail, list_lessons, update_slide


__all__ = [
    "LessonCreateRequest",
    "LessonDetailResponse",
    "SlideCreateRequest",
    "SlideUpdateRequest",
    "add_slide",
    "delete_slide",
    "generate_lesson",
    "get_lesson_detail",
    "list_lessons",
    "router",
    "update_slide",
]
