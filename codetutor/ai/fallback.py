"""Offline lesson content used when no completion model is available."""

from codetutor.ai.models import GeneratedLesson, GeneratedSlide
from codetutor.sandbox.models import TestCase


_DEFAULT = "default"

DEFINITIONS = {
    "function": "A reusable block of code designed to perform a particular task",
    "variable": "A name that refers to a value stored in memory",
    "loop": "A control structure that repeats a sequence of instructions",
    "list": "A data structure that stores multiple values in order",
    "dict": "A collection of key-value pairs for looking things up by name",
    "class": "A blueprint for objects that bundle related data and behavior",
    "conditional": "A statement that runs different code depending on whether a condition is true",
    _DEFAULT: "A coding concept that helps organize and structure your programs",
}

USAGES = {
    "function": "Functions wrap up a task so you can call it again and again with different inputs",
    "variable": "Variables store values so your program can read and change them later",
    "loop": "Loops run the same block of code many times without copying it",
    "list": "Lists hold related values you can reach by position or loop over",
    "dict": "Dictionaries map keys to values, like a phone book maps names to numbers",
    "class": "Classes model real-world things by keeping their data and actions together",
    "conditional": "Conditionals let a program make decisions",
    _DEFAULT: "This concept is used to solve specific problems and keep code tidy",
}

BEST_PRACTICES = {
    "function": "Give functions descriptive names and keep each one focused on a single task",
    "variable": "Use descriptive snake_case names that say what the value means",
    "loop": "Make sure every while loop can finish, and prefer for loops over ranges and lists",
    "list": "Use comprehensions to build new lists instead of long append loops",
    "dict": "Use .get() when a key might be missing",
    "class": "Keep classes small and name methods after what they do",
    "conditional": "Keep conditions short and readable; use elif for several cases",
    _DEFAULT: "Write clean, readable code with helpful comments",
}

EXAMPLES = {
    "function": 'def calculate_sum(a, b):\n    return a + b\n\n\nresult = calculate_sum(5, 3)\nprint(result)  # 8',
    "variable": 'name = "Alex"\nage = 16\nis_student = True\n\nprint(f"{name} is {age} years old.")\nage = 17\nprint(f"Now {name} is {age} years old.")',
    "loop": 'fruits = ["apple", "banana", "orange"]\n\nfor fruit in fruits:\n    print(fruit)\n\nfor i in range(3):\n    print("Lap", i + 1)',
    "list": 'colors = ["red", "green", "blue"]\ncolors.append("yellow")\n\nprint(colors[0])\nfor color in colors:\n    print(f"I like {color}")',
    "dict": 'student = {"name": "Alex", "age": 16}\nstudent["grade"] = 10\n\nfor key, value in student.items():\n    print(key, value)',
    "class": 'class Dog:\n    def __init__(self, name):\n        self.name = name\n\n    def bark(self):\n        print(f"{self.name} says woof!")\n\n\nDog("Rex").bark()',
    "conditional": 'age = 16\n\nif age >= 18:\n    print("You are an adult")\nelif age >= 13:\n    print("You are a teenager")\nelse:\n    print("You are a child")',
    _DEFAULT: 'value = 42\nprint(f"The value is {value}")\n\n\ndef double_all(numbers):\n    return [n * 2 for n in numbers]\n\n\nprint(double_all([1, 2, 3]))',
}

CHALLENGES = {
    "function": "Write a function called `calculate_discount(price, percent)` that returns the price after the discount. Print the result for a price of 50 and a 10 percent discount.",
    "variable": "Create three variables for a video game character: `character_name` (a string), `health_points` (a number) and `has_weapon` (a boolean). Print a status message that uses all three.",
    "loop": "Write a loop that counts from 1 to 10 and prints only the even numbers.",
    "list": "Make a list of your favorite movies. Add one more, remove the first, and print the updated list.",
    "dict": "Build a dictionary describing a book with `title`, `author` and `year`, then print each key and value.",
    "class": "Write a class `Book` with a `describe()` method that returns a sentence about the book. Print the description of one book.",
    "conditional": "Store a temperature in a variable and print clothing advice for hot, warm, cool or cold weather.",
    _DEFAULT: "Write a short program that uses what you learned and prints its result.",
}

HINTS = {
    "function": "final_price = price - price * percent / 100",
    "variable": "f-strings make it easy to mix variables into text: f\"{character_name} has {health_points} HP\"",
    "loop": "The modulo operator tells you if a number is even: number % 2 == 0",
    "list": "Lists have append() to add and pop(0) to remove the first item",
    "dict": "Loop over book.items() to get keys and values together",
    "class": "Methods are functions defined inside the class that take self first",
    "conditional": "Use if / elif / else to cover each temperature range",
    _DEFAULT: "Break the problem into small steps and print as you go",
}


def _lookup(table: dict[str, str], topic: str) -> str:
    """First entry whose key appears in the topic, else the default entry."""
    for key, value in table.items():
        if key != _DEFAULT and key in topic:
            return value
    return table[_DEFAULT]


def _title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split())


def _challenge_tests(topic: str) -> list[TestCase]:
    tests = [
        TestCase(
            id="test-1",
            name="Code runs and prints something",
            description="Your program should print at least one line",
            validation="return len(console_output) > 0",
            kind="predicate",
        )
    ]
    if "function" in topic:
        tests.append(
            TestCase(
                id="test-2",
                name="Function defined",
                description="Define a function called calculate_discount",
                validation=r"def\s+calculate_discount\s*\(",
                kind="pattern",
            )
        )
    elif "class" in topic:
        tests.append(
            TestCase(
                id="test-2",
                name="Class defined",
                description="Define a class called Book",
                validation=r"class\s+Book\b",
                kind="pattern",
            )
        )
    elif "loop" in topic:
        tests.append(
            TestCase(
                id="test-2",
                name="Uses a loop",
                description="Use a for or while loop",
                validation=r"\b(for|while)\b",
                kind="pattern",
            )
        )
    else:
        tests.append(
            TestCase(
                id="test-2",
                name="Uses print",
                description="Show your result with print()",
                validation=r"print\s*\(",
                kind="pattern",
            )
        )
    return tests


def build_template_lesson(topic: str, difficulty: str = "beginner", language: str = "python") -> GeneratedLesson:
    """Build a four-slide lesson (intro, concepts, challenge, quiz) for a topic."""
    topic = topic.strip() or "programming basics"
    key = topic.lower()
    nice_topic = _title_case(topic)
    example = _lookup(EXAMPLES, key)

    intro = GeneratedSlide(
        title=f"Introduction to {nice_topic}",
        content=(
            f"Welcome to this interactive lesson on {topic}! You'll learn the basics of {topic} "
            f"and how to use them in real programs.\n\n"
            f"> {nice_topic} is an essential idea in {language} programming.\n\n"
            f"Let's start by exploring what {topic} is and why it matters."
        ),
        type="info",
        tags=["introduction"],
    )
    concepts = GeneratedSlide(
        title=f"Key Concepts in {nice_topic}",
        content=(
            f"Here is what you need to know about {topic}:\n\n"
            f"1. **Definition**: {_lookup(DEFINITIONS, key)}\n"
            f"2. **Usage**: {_lookup(USAGES, key)}\n"
            f"3. **Best practices**: {_lookup(BEST_PRACTICES, key)}\n\n"
            f"```{language}\n{example}\n```"
        ),
        type="info",
        tags=[key, "concepts"],
    )
    challenge = GeneratedSlide(
        title=f"Your First {nice_topic} Challenge",
        content=(
            f"It's time for a challenge! Let's put your knowledge of {topic} to the test.\n\n"
            f"```{language}\n{example}\n```\n\n"
            f"**Your Challenge:** {_lookup(CHALLENGES, key)}\n\n"
            f"HINT: {_lookup(HINTS, key)}"
        ),
        type="challenge",
        tags=[key, "challenge"],
        initial_code=f"# Your {topic} code goes here\n",
        filename="main.py",
        tests=_challenge_tests(key),
    )
    quiz = GeneratedSlide(
        title=f"Test Your Knowledge: {nice_topic} Quiz",
        content=(
            f"Let's check your understanding of {topic}!\n\n"
            f"1. What is {topic}?\n"
            f"   a) A way to make code run faster\n"
            f"   b) {_lookup(DEFINITIONS, key)}\n"
            f"   c) A file format\n\n"
            f"2. Which of these is a good habit?\n"
            f"   a) {_lookup(BEST_PRACTICES, key)}\n"
            f"   b) Always use one-letter names\n"
            f"   c) Never write comments"
        ),
        type="quiz",
        tags=[key, "quiz"],
    )

    minutes = {"beginner": 15, "intermediate": 25, "advanced": 35}.get(difficulty, 15)
    return GeneratedLesson(
        title=f"Introduction to {nice_topic}",
        description=f"A {difficulty} lesson about {topic}.",
        language=language,
        estimated_time=f"{minutes} min",
        slides=[intro, concepts, challenge, quiz],
    )
