"""Unit tests for settings and logging configuration."""
import logging

import pytest
from pydantic import ValidationError

from concise_chat.config import Settings, load_settings
from concise_chat.logging_utils import PACKAGE_LOGGER, LogPanelHandler, configure_logging


class TestLoadSettings:
    """Tests for load_settings with an explicit environment."""

    def test_defaults(self):
        """Test the settings of an empty environment."""
        settings = load_settings({})

        assert settings.provider == "gemini"
        assert settings.api_key is None
        assert settings.model == "gemini-2.0-flash"
        assert settings.request_timeout == 30.0
        assert settings.persona == "general"
        assert settings.log_level == "warning"

    def test_gemini_key_and_model(self):
        """Test reading the Gemini variables."""
        settings = load_settings({"GEMINI_API_KEY": "g-key", "GEMINI_MODEL": "gemini-pro"})
        assert settings.api_key == "g-key"
        assert settings.model == "gemini-pro"

    def test_provider_switch(self):
        """Test that the key variable follows the selected provider."""
        settings = load_settings({
            "CHAT_PROVIDER": "OpenAI",
            "GEMINI_API_KEY": "g-key",
            "OPENAI_API_KEY": "o-key",
        })
        assert settings.provider == "openai"
        assert settings.api_key == "o-key"
        assert settings.model == "gpt-4o-mini"

    def test_claude_alias(self):
        """Test that claude selects the anthropic provider."""
        settings = load_settings({"CHAT_PROVIDER": "claude", "ANTHROPIC_API_KEY": "a-key"})
        assert settings.provider == "anthropic"
        assert settings.api_key == "a-key"

    def test_session_options(self):
        """Test timeout, persona and log level variables."""
        settings = load_settings({
            "CHAT_REQUEST_TIMEOUT": "12.5",
            "CHAT_PERSONA": "support",
            "CHAT_LOG_LEVEL": "DEBUG",
        })
        assert settings.request_timeout == 12.5
        assert settings.persona == "support"
        assert settings.log_level == "debug"

    @pytest.mark.parametrize("environ", [
        {"CHAT_PROVIDER": "deepseek"},
        {"CHAT_REQUEST_TIMEOUT": "0"},
        {"CHAT_REQUEST_TIMEOUT": "soon"},
        {"CHAT_LOG_LEVEL": "chatty"},
    ])
    def test_invalid_values_fail(self, environ):
        """Test that bad values are reported as validation errors."""
        with pytest.raises(ValidationError):
            load_settings(environ)

    def test_client_config(self):
        """Test the keyword arguments handed to the client factory."""
        settings = Settings(api_key="k", model="m", request_timeout=3)
        assert settings.client_config() == {"api_key": "k", "model": "m", "request_timeout": 3}


class TestLogging:
    """Tests for logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

    def test_configure_replaces_handlers(self):
        """Test that repeated calls keep exactly one handler."""
        configure_logging("info")
        logger = configure_logging("debug")

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert not logger.propagate

    def test_unknown_level_fails(self):
        """Test that unknown level names are rejected."""
        with pytest.raises(ValueError):
            configure_logging("chatty")

    def test_panel_handler_forwards_records(self):
        """Test that records reach the sink with level and component."""
        records = []
        configure_logging("info", handler=LogPanelHandler(lambda *args: records.append(args)))

        logging.getLogger("concise_chat.conversation.controller").info("Switched persona to %s", "support")
        logging.getLogger("concise_chat.transcript.store").debug("hidden")

        assert records == [("info", "controller", "Switched persona to support")]
