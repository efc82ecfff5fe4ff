"""Unit tests for the persona registry."""
import pytest

from concise_chat.errors import NotFoundError
from concise_chat.personas import (
    DEFAULT_PERSONA_ID,
    Persona,
    PersonaRegistry,
    create_default_registry,
)
from concise_chat.personas.prompts import clear_cache, load_prompt


class TestPersona:
    """Tests for the Persona model."""

    def test_greeting_embeds_display_name(self):
        """Test the greeting text format."""
        persona = Persona(id="x", display_name="Test Bot", system_prompt="p")
        assert persona.greeting() == "Hello! I'm your Test Bot. How can I help you today?"

    def test_persona_is_frozen(self):
        """Test that personas are immutable."""
        persona = Persona(id="x", display_name="Test Bot", system_prompt="p")
        with pytest.raises(ValueError):
            persona.system_prompt = "changed"  # type: ignore[misc]


class TestPersonaRegistry:
    """Tests for PersonaRegistry."""

    def test_list_preserves_insertion_order(self, registry):
        """Test that list returns personas in registration order."""
        assert [p.id for p in registry.list()] == ["general", "support"]

    def test_get_known_persona(self, registry):
        """Test looking up an existing persona."""
        assert registry.get("support").display_name == "Customer Support"

    def test_get_unknown_persona_raises(self, registry):
        """Test that get fails loudly on unknown ids."""
        with pytest.raises(NotFoundError):
            registry.get("pirate")

    def test_resolve_falls_back_to_default(self, registry):
        """Test that resolve never fails for unknown ids."""
        assert registry.resolve("pirate") == registry.default
        assert registry.resolve(None) == registry.default
        assert registry.resolve("support").id == "support"

    def test_contains_and_len(self, registry):
        """Test membership and size."""
        assert "general" in registry
        assert "pirate" not in registry
        assert len(registry) == 2

    def test_default_is_first_when_unspecified(self):
        """Test default selection without an explicit id."""
        registry = PersonaRegistry([
            Persona(id="a", display_name="A", system_prompt="a"),
            Persona(id="b", display_name="B", system_prompt="b"),
        ])
        assert registry.default.id == "a"

    def test_empty_registry_fails(self):
        """Test that a registry must have at least one persona."""
        with pytest.raises(ValueError):
            PersonaRegistry([])

    def test_duplicate_ids_fail(self):
        """Test that persona ids must be unique."""
        persona = Persona(id="a", display_name="A", system_prompt="a")
        with pytest.raises(ValueError, match="Duplicate"):
            PersonaRegistry([persona, persona])

    def test_unknown_default_fails(self):
        """Test that the default must be registered."""
        with pytest.raises(ValueError):
            PersonaRegistry(
                [Persona(id="a", display_name="A", system_prompt="a")],
                default_id="b",
            )


class TestDefaultRegistry:
    """Tests for the built-in personas."""

    def test_builtin_personas(self):
        """Test the built-in catalog contents and order."""
        registry = create_default_registry()
        assert [p.id for p in registry.list()] == ["general", "developer", "support"]
        assert registry.default.id == DEFAULT_PERSONA_ID
        assert registry.default.display_name == "General Assistant"
        assert registry.get("developer").display_name == "Developer Assistant (Hindi)"

    def test_builtin_prompts_are_loaded(self):
        """Test that every persona carries its packaged prompt."""
        registry = create_default_registry()
        for persona in registry.list():
            assert persona.system_prompt
            assert persona.system_prompt == persona.system_prompt.strip()
        assert "Concise Chat Assist" in registry.get("support").system_prompt


class TestLoadPrompt:
    """Tests for prompt file loading."""

    def test_working_directory_override(self, tmp_path, monkeypatch):
        """Test that ./prompts/<name>.txt takes precedence."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "general.txt").write_text("Custom prompt\n")
        monkeypatch.chdir(tmp_path)
        clear_cache()
        try:
            assert load_prompt("general") == "Custom prompt"
        finally:
            clear_cache()

    def test_missing_prompt_raises(self, tmp_path, monkeypatch):
        """Test that unknown prompt names fail."""
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError):
            load_prompt("does-not-exist")
