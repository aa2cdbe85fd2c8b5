"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = """
You are NetWise, an AI that ONLY answers Computer Networking questions:
OSI layers, TCP/IP, routing, switching, DNS, DHCP, ARP, network security, IoT protocols.
Politely refuse non-networking questions.
You may greet when user says hi or hello.
Tone: short, technical, helpful.
"""


class Settings(BaseSettings):
    """Immutable process-wide configuration, read once at startup."""

    gemini_api_key: str = Field(alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    gemini_timeout: float | None = Field(
        default=None,
        alias="GEMINI_TIMEOUT",
        description="Seconds; unset keeps the HTTP client's default",
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION, alias="SYSTEM_INSTRUCTION"
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
