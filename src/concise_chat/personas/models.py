"""Persona data model."""

from pydantic import BaseModel, ConfigDict, Field


class Persona(BaseModel):
    """A selectable conversation mode backed by a system prompt."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique persona key")
    display_name: str = Field(description="Human-readable persona name")
    system_prompt: str = Field(description="Instruction text prefixed to every request")
    icon: str = Field(default="*", description="Presentation-only icon token")
    color: str = Field(default="$primary", description="Presentation-only color token")

    def greeting(self) -> str:
        """Greeting used to seed a fresh transcript for this persona."""
        return f"Hello! I'm your {self.display_name}. How can I help you today?"
