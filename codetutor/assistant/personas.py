"""Chat personas: how the assistant introduces itself and frames replies."""

from dataclasses import dataclass
from typing import Literal


PersonaKey = Literal["mumu", "baloo"]

DEFAULT_PERSONA: PersonaKey = "mumu"


@dataclass(frozen=True)
class Persona:
    key: PersonaKey
    name: str
    emoji: str
    welcome: str


PERSONAS: dict[str, Persona] = {
    "mumu": Persona(
        key="mumu",
        name="Mumu the Coding Ninja",
        emoji="🐯",
        welcome="Hi there! I'm Mumu, your coding mentor. How can I help you with your coding journey today?",
    ),
    "baloo": Persona(
        key="baloo",
        name="Baloo the Lesson Creator",
        emoji="🐻",
        welcome=(
            "Hey there! I'm Baloo, the Lesson Creator. Tell me what you'd like to learn and I'll "
            'build a lesson for you. Try "create a lesson about loops".'
        ),
    ),
}


def get_persona(key: str | None) -> Persona:
    """Persona by key; unknown or missing keys get Mumu."""
    return PERSONAS.get(key or DEFAULT_PERSONA, PERSONAS[DEFAULT_PERSONA])
