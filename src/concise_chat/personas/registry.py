"""Closed catalog of personas.

The registry is fixed at construction time. Lookups by id either fail
loudly (get) or fall back to the default persona (resolve); the
conversation layer only ever uses the latter, since the default is
always valid.
"""

import logging
from collections.abc import Iterable

from ..errors import NotFoundError
from .models import Persona
from .prompts import load_prompt

logger = logging.getLogger(__name__)

DEFAULT_PERSONA_ID = "general"


class PersonaRegistry:
    """Ordered, immutable set of personas with a designated default."""

    def __init__(self, personas: Iterable[Persona], default_id: str | None = None) -> None:
        self._personas: dict[str, Persona] = {}
        for persona in personas:
            if persona.id in self._personas:
                raise ValueError(f"Duplicate persona id: {persona.id}")
            self._personas[persona.id] = persona

        if not self._personas:
            raise ValueError("PersonaRegistry requires at least one persona")

        default_id = default_id or next(iter(self._personas))
        if default_id not in self._personas:
            raise ValueError(f"Default persona {default_id!r} is not registered")
        self._default_id = default_id

    @property
    def default(self) -> Persona:
        """The fallback persona."""
        return self._personas[self._default_id]

    def list(self) -> tuple[Persona, ...]:
        """All personas in registration order."""
        return tuple(self._personas.values())

    def get(self, persona_id: str) -> Persona:
        """Look up a persona.

        Raises:
            NotFoundError: If persona_id is not registered
        """
        try:
            return self._personas[persona_id]
        except KeyError:
            raise NotFoundError("Persona", persona_id) from None

    def resolve(self, persona_id: str | None) -> Persona:
        """Look up a persona, falling back to the default for unknown ids."""
        if persona_id is None:
            return self.default
        try:
            return self.get(persona_id)
        except NotFoundError:
            logger.warning(
                "Unknown persona %r, falling back to %r", persona_id, self._default_id
            )
            return self.default

    def __contains__(self, persona_id: object) -> bool:
        return persona_id in self._personas

    def __len__(self) -> int:
        return len(self._personas)


def create_default_registry() -> PersonaRegistry:
    """Build the registry of built-in personas."""
    personas = [
        Persona(
            id="general",
            display_name="General Assistant",
            system_prompt=load_prompt("general"),
            icon="💬",
            color="$primary",
        ),
        Persona(
            id="developer",
            display_name="Developer Assistant (Hindi)",
            system_prompt=load_prompt("developer"),
            icon="</>",
            color="$success",
        ),
        Persona(
            id="support",
            display_name="Customer Support",
            system_prompt=load_prompt("support"),
            icon="🤝",
            color="$secondary",
        ),
    ]
    return PersonaRegistry(personas, default_id=DEFAULT_PERSONA_ID)
