"""Runtime configuration.

Settings are read from environment variables (a ``.env`` file in the
working directory is loaded first). Hides the configuration source from
the launcher and the TUI.

Environment variables:
    CHAT_PROVIDER: gemini, openai or anthropic (default: gemini)
    GEMINI_API_KEY / GEMINI_MODEL (default model: gemini-2.0-flash)
    OPENAI_API_KEY / OPENAI_CHAT_MODEL (default model: gpt-4o-mini)
    ANTHROPIC_API_KEY / ANTHROPIC_MODEL (default model: claude-sonnet-4-20250514)
    CHAT_REQUEST_TIMEOUT: seconds per completion request (default: 30)
    CHAT_PERSONA: initial persona id (default: general)
    CHAT_LOG_LEVEL: debug, info, warning or error (default: warning)
"""

import os
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .llm import DEFAULT_REQUEST_TIMEOUT, SUPPORTED_PROVIDERS
from .personas import DEFAULT_PERSONA_ID

# Per-provider (api key variable, model variable, default model)
PROVIDER_ENV = {
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL", "gemini-2.0-flash"),
    "openai": ("OPENAI_API_KEY", "OPENAI_CHAT_MODEL", "gpt-4o-mini"),
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL", "claude-sonnet-4-20250514"),
}

LOG_LEVELS = ("debug", "info", "warning", "error")


class Settings(BaseModel):
    """Validated runtime settings."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="gemini", description="Completion provider")
    api_key: str | None = Field(default=None, description="Credential for the provider")
    model: str = Field(default="gemini-2.0-flash", description="Provider model name")
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    persona: str = Field(default=DEFAULT_PERSONA_ID, description="Initial persona id")
    log_level: str = Field(default="warning")

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, value: str) -> str:
        value = value.lower()
        if value == "claude":
            value = "anthropic"
        if value not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported provider: {value}. Supported: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}. Expected one of {LOG_LEVELS}")
        return value

    def client_config(self) -> dict[str, Any]:
        """Keyword arguments for create_completion_client."""
        return {
            "api_key": self.api_key,
            "model": self.model,
            "request_timeout": self.request_timeout,
        }


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read instead of os.environ (no .env loading then)

    Raises:
        pydantic.ValidationError: If a value is invalid
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    provider = environ.get("CHAT_PROVIDER", "gemini").lower()
    if provider == "claude":
        provider = "anthropic"
    key_var, model_var, default_model = PROVIDER_ENV.get(provider, (None, None, ""))

    return Settings(
        provider=provider,
        api_key=environ.get(key_var) if key_var else None,
        model=environ.get(model_var, default_model) if model_var else default_model,
        request_timeout=environ.get("CHAT_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)),
        persona=environ.get("CHAT_PERSONA", DEFAULT_PERSONA_ID),
        log_level=environ.get("CHAT_LOG_LEVEL", "warning"),
    )
