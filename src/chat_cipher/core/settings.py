"""Library settings and configuration.

This module defines the configuration options for the chat cipher.
Settings are loaded from environment variables with defaults that stay
wire-compatible with payloads already written by the marketplace client.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_KDF_ITERATIONS = 100_000


class Settings(BaseSettings):
    """Cipher settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Changing the key derivation values makes previously stored payloads
    unreadable, so deployments sharing a message store must agree on them.
    """

    # Key derivation
    kdf_iterations: int = Field(
        default=MIN_KDF_ITERATIONS,
        ge=MIN_KDF_ITERATIONS,
        alias="CHAT_CIPHER_KDF_ITERATIONS",
    )
    salt_separator: str = Field(
        default="|",
        min_length=1,
        alias="CHAT_CIPHER_SALT_SEPARATOR",
    )

    # Read-path placeholders
    message_placeholder: str = Field(
        default="[Message could not be decrypted]",
        alias="CHAT_CIPHER_MESSAGE_PLACEHOLDER",
    )
    attachment_placeholder: str = Field(
        default="/placeholder.svg",
        alias="CHAT_CIPHER_ATTACHMENT_PLACEHOLDER",
    )

    # Degraded path for runtimes without the required primitives
    allow_plaintext_fallback: bool = Field(
        default=False,
        alias="CHAT_CIPHER_ALLOW_PLAINTEXT_FALLBACK",
    )

    log_level: str = Field(default="WARNING", alias="CHAT_CIPHER_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def numeric_log_level(self) -> int:
        """Return the configured log level as a ``logging`` constant.

        Unknown level names fall back to ``logging.WARNING``.
        """
        level = logging.getLevelName(self.log_level.upper())
        if isinstance(level, int):
            return level
        return logging.WARNING


def configure_logging(config: Settings | None = None) -> logging.Logger:
    """Apply the configured log level to the ``chat_cipher`` logger."""
    active = config or settings
    package_logger = logging.getLogger("chat_cipher")
    package_logger.setLevel(active.numeric_log_level)
    return package_logger


settings = Settings()
