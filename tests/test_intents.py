"""Tests for chat intent detection and lesson style templates."""

import pytest

from codetutor.assistant import intents
from codetutor.lessons.styles import DEFAULT_STYLE, get_style, render_style, style_names


class TestIntentDetection:
    @pytest.mark.parametrize(
        "message",
        [
            "Can you create a lesson about Python loops?",
            "make a lesson on dictionaries",
            "Please generate new lesson for sorting",
            "teach me how to write functions",
            "Could you build a lesson covering classes",
        ],
    )
    def test_new_lesson_requests(self, message: str) -> None:
        assert intents.is_new_lesson_request(message)

    @pytest.mark.parametrize("message", ["What is a lesson?", "How do I create a list?", "I finished the lesson"])
    def test_ordinary_messages_are_not_lesson_requests(self, message: str) -> None:
        assert not intents.is_new_lesson_request(message)

    def test_slide_edit_requests(self) -> None:
        assert intents.is_slide_edit_request("Please improve slide 2")
        assert intents.is_slide_edit_request("can you CHANGE SLIDE one to be shorter")
        assert not intents.is_slide_edit_request("What is a slide rule?")

    def test_style_mentions(self) -> None:
        assert intents.mentions_style("make a lesson about loops with a cool style")
        assert intents.mentions_style("I want a dark theme")
        assert not intents.mentions_style("make a lesson about lookup tables")


class TestSlotExtraction:
    @pytest.mark.parametrize(
        ("message", "topic"),
        [
            ("Can you create a lesson about Python loops?", "Python loops"),
            ("create a lesson on list comprehensions, for beginners", "list comprehensions"),
            ("create a lesson for data science.", "data science"),
            ("teach me about recursion in the neon racer style", "recursion"),
            ("make a lesson covering classes!", "classes"),
        ],
    )
    def test_extract_topic(self, message: str, topic: str) -> None:
        assert intents.extract_topic(message) == topic

    def test_topic_defaults_when_none_is_named(self) -> None:
        assert intents.extract_topic("create a lesson") == intents.DEFAULT_TOPIC

    def test_words_ending_in_on_do_not_start_a_topic(self) -> None:
        assert intents.extract_topic("build a lesson for functions") == "functions"

    @pytest.mark.parametrize(
        ("message", "difficulty"),
        [
            ("create a lesson about loops for beginners", "beginner"),
            ("a medium lesson about classes", "intermediate"),
            ("an expert lesson about decorators", "advanced"),
            ("a lesson about loops", "beginner"),
        ],
    )
    def test_extract_difficulty(self, message: str, difficulty: str) -> None:
        assert intents.extract_difficulty(message) == difficulty

    @pytest.mark.parametrize(
        ("message", "language"),
        [
            ("a lesson about arrays in JavaScript", "javascript"),
            ("teach me about js promises", "javascript"),
            ("create a lesson about HTML forms", "html"),
            ("a lesson about loops", "python"),
        ],
    )
    def test_detect_language(self, message: str, language: str) -> None:
        assert intents.detect_language(message) == language

    @pytest.mark.parametrize(
        ("message", "style"),
        [
            ("teach me about recursion in the neon racer style", "neon-racer"),
            ("use practical_project please", "practical-project"),
            ("Interaction-Galore theme", "interaction-galore"),
            ("make it look nice", None),
        ],
    )
    def test_detect_style(self, message: str, style: str | None) -> None:
        assert intents.detect_style(message) == style


class TestStyles:
    def test_style_names(self) -> None:
        assert style_names() == ["brown-markdown", "neon-racer", "interaction-galore", "practical-project"]

    def test_unknown_style_falls_back_to_default(self) -> None:
        assert get_style("disco").name == DEFAULT_STYLE
        assert get_style(None).name == DEFAULT_STYLE

    def test_render_includes_palette_and_topic(self) -> None:
        rendered = render_style("neon-racer", "loops")

        assert rendered["css_content"].startswith("/* Neon Racer - loops */")
        assert "--primary-color: #FF00FF;" in rendered["css_content"]
        assert "@keyframes neon-glow" in rendered["css_content"]
        assert "// Neon Racer - helpers for loops" in rendered["js_content"]
        assert rendered["js_content"].rstrip().endswith("});")
