"""Persona system prompts.

Prompt texts live in ``<persona_id>.txt`` files next to this module.
A ``./prompts/<persona_id>.txt`` file in the working directory takes
precedence, so prompts can be tuned without touching the package.
"""

from functools import lru_cache
from pathlib import Path

_PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a persona prompt by name.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: concise_chat/personas/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text with surrounding whitespace removed

    Raises:
        FileNotFoundError: If the prompt file is not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").strip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").strip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = ["clear_cache", "load_prompt"]
