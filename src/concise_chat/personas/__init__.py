"""Persona catalog for concise_chat."""

from .models import Persona
from .registry import DEFAULT_PERSONA_ID, PersonaRegistry, create_default_registry

__all__ = [
    "DEFAULT_PERSONA_ID",
    "Persona",
    "PersonaRegistry",
    "create_default_registry",
]
