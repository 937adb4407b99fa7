"""Centralized AI Service for all AI operations.

This service acts as the single entry point for all AI-related functionality
in the application, providing a clean interface that hides implementation details.
"""

import logging
from typing import Any

from codetutor.ai.client import LLMClient
from codetutor.ai.errors import AIRuntimeError
from codetutor.ai.fallback import build_template_lesson
from codetutor.ai.models import GeneratedLesson, GeneratedTests, SlideEdit
from codetutor.ai.prompts import (
    BALOO_SYSTEM_PROMPT,
    CHAT_STYLE_GUIDELINES,
    CODE_ANALYSIS_PROMPT,
    CODE_EXPLANATION_PROMPT,
    LESSON_CONTEXT_PROMPT,
    LESSON_GENERATION_PROMPT,
    MUMU_SYSTEM_PROMPT,
    SLIDE_EDIT_PROMPT,
    TEST_GENERATION_PROMPT,
)
from codetutor.config.settings import get_settings
from codetutor.sandbox.models import TestCase
from codetutor.storage.models import Slide


logger = logging.getLogger(__name__)

PERSONA_PROMPTS = {
    "mumu": MUMU_SYSTEM_PROMPT,
    "baloo": BALOO_SYSTEM_PROMPT,
}


class AIService:
    """ALL AI operations go through here."""

    def __init__(self, llm_client: LLMClient | None = None) -> None:
        self._llm_client = llm_client or LLMClient()

    # Lesson operations
    async def generate_lesson(
        self,
        topic: str,
        difficulty: str = "beginner",
        description: str = "",
    ) -> GeneratedLesson:
        """Generate a complete lesson, falling back to the offline template."""
        if not get_settings().ai_configured:
            logger.warning("No completion model configured, using template lesson for '%s'", topic)
            return build_template_lesson(topic, difficulty)

        details = f"Additional details: {description}" if description else ""
        messages = [
            {"role": "system", "content": "You are an expert programming teacher who writes lessons as JSON."},
            {
                "role": "user",
                "content": LESSON_GENERATION_PROMPT.format(topic=topic, difficulty=difficulty, description=details),
            },
        ]
        try:
            lesson = await self._llm_client.get_completion(messages=messages, response_model=GeneratedLesson)
        except AIRuntimeError as e:
            logger.warning("Lesson generation failed (%s), using template lesson for '%s'", e.category.value, topic)
            return build_template_lesson(topic, difficulty)

        if not lesson.slides:
            logger.warning("Generated lesson for '%s' had no slides, using template lesson", topic)
            return build_template_lesson(topic, difficulty)
        return lesson

    async def rewrite_slide(self, slide: Slide, request: str) -> SlideEdit:
        """Rewrite a slide's title and content according to a learner request."""
        messages = [
            {"role": "system", "content": SLIDE_EDIT_PROMPT.format(title=slide.title, content=slide.content)},
            {"role": "user", "content": request},
        ]
        return await self._llm_client.get_completion(messages=messages, response_model=SlideEdit)

    # Chat operations
    async def generate_reply(
        self,
        message: str,
        history: list[dict[str, str]] | None = None,
        persona: str = "mumu",
        lesson_context: dict[str, Any] | None = None,
    ) -> str:
        """Persona-framed chat reply with optional lesson context."""
        system_prompt = PERSONA_PROMPTS.get(persona, MUMU_SYSTEM_PROMPT)
        if lesson_context:
            system_prompt += "\n\n" + LESSON_CONTEXT_PROMPT.format(
                title=lesson_context.get("title", ""),
                language=lesson_context.get("language", "python"),
                difficulty=lesson_context.get("difficulty", "beginner"),
                slide_count=len(lesson_context.get("slide_titles", [])),
                slide_titles=", ".join(lesson_context.get("slide_titles", [])),
            )
        system_prompt += "\n\n" + CHAT_STYLE_GUIDELINES

        messages = [{"role": "system", "content": system_prompt}]
        if history:
            messages.extend(history)
        messages.append({"role": "user", "content": message})

        response = await self._llm_client.get_completion(messages=messages, format_json=False)
        return str(response)

    # Code help operations
    async def analyze_code(self, code: str, language: str = "python") -> str:
        messages = [
            {"role": "system", "content": "You are an expert programming teacher for teenagers."},
            {"role": "user", "content": CODE_ANALYSIS_PROMPT.format(language=language, code=code)},
        ]
        return str(await self._llm_client.get_completion(messages=messages, temperature=0.3))

    async def explain_code(self, code: str, language: str = "python", audience: str = "beginner") -> str:
        messages = [
            {"role": "system", "content": "You are an expert programming teacher for teenagers."},
            {
                "role": "user",
                "content": CODE_EXPLANATION_PROMPT.format(language=language, code=code, audience=audience),
            },
        ]
        return str(await self._llm_client.get_completion(messages=messages, temperature=0.5))

    async def generate_tests(
        self,
        description: str,
        language: str = "python",
        sample_code: str | None = None,
    ) -> list[TestCase]:
        """Generate checks for a challenge, numbered test-1, test-2, ..."""
        sample = f"Sample solution:\n```{language}\n{sample_code}\n```" if sample_code else ""
        messages = [
            {"role": "system", "content": "You are an expert at writing tests for coding challenges."},
            {
                "role": "user",
                "content": TEST_GENERATION_PROMPT.format(
                    description=description, language=language, sample_code=sample
                ),
            },
        ]
        generated = await self._llm_client.get_completion(
            messages=messages, response_model=GeneratedTests, temperature=0.5
        )
        return [test.model_copy(update={"id": f"test-{n}"}) for n, test in enumerate(generated.tests, start=1)]


# Singleton instance
_ai_service: AIService | None = None


def get_ai_service() -> AIService:
    """Get the singleton AI service instance."""
    global _ai_service  # noqa: PLW0603
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service
