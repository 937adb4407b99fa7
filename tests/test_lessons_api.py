"""Tests for the lessons API."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from codetutor.ai.errors import AIProviderError, AIRateLimitOrQuotaError, AITimeoutError
from codetutor.ai.models import GeneratedLesson, GeneratedSlide
from codetutor.sandbox.models import TestCase


@pytest.mark.asyncio
async def test_list_lessons_empty(client: AsyncClient) -> None:
    response = await client.get("/api/lessons")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_seeded_lesson_with_ordered_slides(seeded_client: AsyncClient) -> None:
    lessons = (await seeded_client.get("/api/lessons")).json()
    assert [lesson["title"] for lesson in lessons] == ["Python Basics"]

    response = await seeded_client.get(f"/api/lessons/{lessons[0]['id']}")

    assert response.status_code == 200
    lesson = response.json()
    assert [s["order"] for s in lesson["slides"]] == [0, 1, 2, 3]
    challenge = lesson["slides"][2]
    assert challenge["type"] == "challenge"
    assert [t["id"] for t in challenge["tests"]] == ["test-1", "test-2", "test-3"]


@pytest.mark.asyncio
async def test_unknown_lesson_returns_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/lessons/99")

    assert response.status_code == 404
    assert response.json() == {
        "error": {
            "category": "RESOURCE_NOT_FOUND",
            "code": "NOT_FOUND",
            "detail": "Lesson 99 not found",
            "metadata": {"resource_type": "Lesson", "resource_id": "99"},
        }
    }


@pytest.mark.asyncio
async def test_list_styles(client: AsyncClient) -> None:
    response = await client.get("/api/lessons/styles")

    assert response.status_code == 200
    styles = response.json()
    assert [s["name"] for s in styles] == ["brown-markdown", "neon-racer", "interaction-galore", "practical-project"]
    assert styles[1]["label"] == "Neon Racer"


class TestCreateLesson:
    @pytest.mark.asyncio
    async def test_template_lesson_when_no_model_is_configured(self, client: AsyncClient, llm: MagicMock) -> None:
        response = await client.post("/api/lessons", json={"topic": "  loops ", "style": "neon-racer"})

        assert response.status_code == 201
        lesson = response.json()
        assert lesson["title"] == "Introduction to Loops"
        assert lesson["style_name"] == "neon-racer"
        assert "/* Neon Racer - loops */" in lesson["css_content"]
        assert lesson["js_content"]
        assert [s["order"] for s in lesson["slides"]] == [0, 1, 2, 3]
        assert all(s["lesson_id"] == lesson["id"] for s in lesson["slides"])
        llm.get_completion.assert_not_awaited()

        stored = (await client.get(f"/api/lessons/{lesson['id']}")).json()
        assert stored == lesson

    @pytest.mark.asyncio
    async def test_unknown_style_uses_the_default(self, client: AsyncClient) -> None:
        lesson = (await client.post("/api/lessons", json={"topic": "lists", "style": "disco"})).json()

        assert lesson["style_name"] == "brown-markdown"

    @pytest.mark.asyncio
    async def test_generated_lesson_is_stored(self, client: AsyncClient, llm: MagicMock) -> None:
        llm.get_completion.return_value = GeneratedLesson(
            title="Racing Loops",
            description="Loops with race cars",
            estimated_time="20 min",
            slides=[
                GeneratedSlide(title="Laps", content="Count laps with a loop"),
                GeneratedSlide(
                    title="Lap Counter",
                    content="Print every lap",
                    type="challenge",
                    initial_code="# your code\n",
                    filename="main.py",
                    tests=[TestCase(id="test-1", name="Loops", validation=r"\bfor\b")],
                ),
            ],
        )

        with patch("codetutor.ai.service.get_settings", return_value=MagicMock(ai_configured=True)):
            response = await client.post("/api/lessons", json={"topic": "loops", "difficulty": "intermediate"})

        assert response.status_code == 201
        lesson = response.json()
        assert lesson["title"] == "Racing Loops"
        assert lesson["difficulty"] == "intermediate"
        assert lesson["estimated_time"] == "20 min"
        assert [s["title"] for s in lesson["slides"]] == ["Laps", "Lap Counter"]
        assert lesson["slides"][1]["tests"][0]["validation"] == r"\bfor\b"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"topic": "   "}, {}, {"topic": "loops", "difficulty": "expert"}])
    async def test_invalid_requests_are_rejected(self, client: AsyncClient, payload: dict) -> None:
        response = await client.post("/api/lessons", json=payload)

        assert response.status_code == 422


class TestSlides:
    @pytest.mark.asyncio
    async def test_add_slide_appends(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.post("/api/lessons/1/slides", json={"title": "Recap", "content": "Well done!"})

        assert response.status_code == 201
        slide = response.json()
        assert slide["order"] == 4
        assert slide["lesson_id"] == 1

        lesson = (await seeded_client.get("/api/lessons/1")).json()
        assert lesson["slides"][-1]["title"] == "Recap"

    @pytest.mark.asyncio
    async def test_add_slide_to_unknown_lesson(self, client: AsyncClient) -> None:
        response = await client.post("/api/lessons/5/slides", json={"title": "Recap"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_changes_only_sent_fields(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.patch("/api/lessons/1/slides/2", json={"completed": True})

        assert response.status_code == 200
        slide = response.json()
        assert slide["completed"] is True
        assert slide["title"] == "What is a Function?"

    @pytest.mark.asyncio
    async def test_update_slide_of_another_lesson_is_not_found(self, seeded_client: AsyncClient) -> None:
        other = (await seeded_client.post("/api/lessons", json={"topic": "loops"})).json()
        foreign_slide = other["slides"][0]["id"]

        response = await seeded_client.patch(f"/api/lessons/1/slides/{foreign_slide}", json={"title": "Hijacked"})

        assert response.status_code == 404
        assert response.json()["error"]["detail"] == f"Slide {foreign_slide} not found"

    @pytest.mark.asyncio
    async def test_move_slide_within_the_lesson(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.patch("/api/lessons/1/slides/2", json={"order": 3})

        assert response.status_code == 200
        assert response.json()["order"] == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("order", [4, 9, -1, None])
    async def test_out_of_range_order_is_rejected(self, seeded_client: AsyncClient, order: int | None) -> None:
        response = await seeded_client.patch("/api/lessons/1/slides/2", json={"order": order})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["category"] == "VALIDATION_ERROR"
        assert error["code"] == "INVALID_INPUT"
        assert error["detail"] == "Slide order must be between 0 and 3"
        slide = (await seeded_client.get("/api/lessons/1")).json()["slides"][1]
        assert slide["order"] == 1

    @pytest.mark.asyncio
    async def test_delete_renumbers_remaining_slides(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.delete("/api/lessons/1/slides/2")

        assert response.status_code == 204
        slides = (await seeded_client.get("/api/lessons/1")).json()["slides"]
        assert [s["id"] for s in slides] == [1, 3, 4]
        assert [s["order"] for s in slides] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_delete_unknown_slide(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.delete("/api/lessons/1/slides/42")

        assert response.status_code == 404


class TestAIErrorResponses:
    @pytest.fixture
    def failing_app(self, app: FastAPI) -> FastAPI:
        errors = {
            "quota": AIRateLimitOrQuotaError("Model provider rate limit or quota exceeded"),
            "timeout": AITimeoutError("Model completion timed out"),
            "provider": AIProviderError("Model completion failed"),
        }

        @app.get("/fail/{kind}")
        async def fail(kind: str) -> None:
            raise errors[kind]

        return app

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("kind", "status_code", "code"),
        [("quota", 429, "RATE_LIMITED"), ("timeout", 504, "TIMEOUT"), ("provider", 503, "SERVICE_UNAVAILABLE")],
    )
    async def test_ai_errors_map_to_status_codes(
        self, failing_app: FastAPI, kind: str, status_code: int, code: str
    ) -> None:
        async with AsyncClient(transport=ASGITransport(app=failing_app), base_url="http://test") as http:
            response = await http.get(f"/fail/{kind}")

        assert response.status_code == status_code
        error = response.json()["error"]
        assert error["category"] == "EXTERNAL_SERVICE_ERROR"
        assert error["code"] == code
        assert error["suggestions"]
