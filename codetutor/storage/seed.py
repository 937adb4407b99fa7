"""Sample lesson loaded into a fresh store."""

from codetutor.sandbox.models import TestCase

from .models import LessonCreate, SlideCreate


SAMPLE_LESSON = LessonCreate(
    title="Python Basics",
    description="Learn the fundamentals of the Python programming language.",
    difficulty="beginner",
    language="python",
    estimated_time="15 min",
    style_name="brown-markdown",
)


def sample_slides(lesson_id: int) -> list[SlideCreate]:
    return [
        SlideCreate(
            lesson_id=lesson_id,
            title="Introduction to Python",
            content=(
                "Python is a programming language known for code that reads almost like English. "
                "It powers websites, games, science and a lot of automation.\n\n"
                "> Python was created by Guido van Rossum and first released in 1991.\n\n"
                "In this lesson, we'll learn the basics of Python functions."
            ),
            type="info",
            order=0,
            tags=["introduction", "history"],
        ),
        SlideCreate(
            lesson_id=lesson_id,
            title="What is a Function?",
            content=(
                "Functions are reusable blocks of code that perform a specific task.\n\n"
                '```python\ndef greet():\n    print("Hello, world!")\n\n# Call the function\ngreet()\n```\n\n'
                "Functions help us organize code, make it reusable, and easier to maintain."
            ),
            type="info",
            order=1,
            tags=["functions"],
        ),
        SlideCreate(
            lesson_id=lesson_id,
            title="Creating Your First Function",
            content=(
                "Functions are like mini-programs that can be used over and over.\n\n"
                '> Function Syntax\n```python\ndef name_of_function():\n    print("Hello from the function!")\n```\n\n'
                "Your Challenge:\n\n"
                "Create a function called `build_doghouse` that prints "
                '`"Woof! Thanks for my new home!"` when called.\n\n'
                "HINT: Remember, you need to both define your function and then call it for something to happen!"
            ),
            type="challenge",
            order=2,
            tags=["functions", "challenge"],
            initial_code="# Write your build_doghouse function here\n\n\n# Call your function below\n",
            filename="main.py",
            tests=[
                TestCase(
                    id="test-1",
                    name="Function exists",
                    description="Your code should define a function called build_doghouse",
                    validation=r"def\s+build_doghouse\s*\(",
                    kind="pattern",
                ),
                TestCase(
                    id="test-2",
                    name="Function is called",
                    description="Your code should call build_doghouse()",
                    validation=r"(?m)^build_doghouse\s*\(\s*\)",
                    kind="pattern",
                ),
                TestCase(
                    id="test-3",
                    name="Correct message",
                    description='The output should contain "Woof! Thanks for my new home!"',
                    validation='return "Woof! Thanks for my new home!" in console_output',
                    kind="predicate",
                ),
            ],
        ),
        SlideCreate(
            lesson_id=lesson_id,
            title="Test Your Knowledge",
            content=(
                "1. Which keyword starts a function definition in Python?\n"
                "   a) function\n   b) def\n   c) func\n   d) lambda\n\n"
                "2. What happens if you define a function but never call it?\n"
                "   a) It runs once automatically\n   b) Python raises an error\n"
                "   c) Nothing - its code never runs\n   d) It runs at the end of the program"
            ),
            type="quiz",
            order=3,
            tags=["quiz"],
        ),
    ]
