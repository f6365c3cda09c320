"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Formatter configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Ambient message properties (defaults for every encode call)
    soap_version: Optional[str] = None  # "soap11" | "soap12" | None
    character_set_encoding: Optional[str] = None  # Charset for plain text fields
    decode_multipart_data: bool = False  # Base64-decode ad hoc file fields
    set_content_type_character_encoding: bool = False  # Add charset to the message Content-Type

    # Processing limits
    max_nesting_depth: int = 64
    max_request_size_mb: int = 25

    # Framing
    default_mime_boundary: Optional[str] = None  # Random boundary when unset

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
