"""
Per-call ambient properties and output framing options.
"""

import secrets
from typing import Optional

from pydantic import BaseModel, Field

from ..config import Settings

SOAP_11 = "soap11"
SOAP_12 = "soap12"


class ResolutionContext(BaseModel):
    """
    Immutable bag of ambient properties for one encode pass.

    Never mutated by the encoder; build a new one per call when values change.
    """

    soap_version: Optional[str] = Field(
        None, description="SOAP version tag selecting how nested XML is wrapped"
    )
    character_set_encoding: Optional[str] = Field(
        None, description="Global charset for plain text fields"
    )
    decode_multipart_data: bool = Field(
        False, description="Base64-decode ad hoc file fields before framing"
    )
    set_content_type_character_encoding: bool = Field(
        False, description="Append the charset to the message Content-Type header"
    )
    max_nesting_depth: int = Field(64, ge=1, description="Maximum nested structure depth")

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, config: Settings, **overrides) -> "ResolutionContext":
        """
        Build a context from application settings.

        Args:
            config: Settings instance
            **overrides: Field values taking precedence over settings (None values ignored)

        Returns:
            ResolutionContext instance
        """
        values = {
            "soap_version": config.soap_version,
            "character_set_encoding": config.character_set_encoding,
            "decode_multipart_data": config.decode_multipart_data,
            "set_content_type_character_encoding": config.set_content_type_character_encoding,
            "max_nesting_depth": config.max_nesting_depth,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def generate_boundary() -> str:
    """Generate a random MIME boundary token."""
    return "MIMEBoundary_" + secrets.token_hex(24)


class OutputFormat(BaseModel):
    """Framing options handed to the part writer."""

    mime_boundary: str = Field(default_factory=generate_boundary, min_length=1, max_length=70)
    charset_encoding: Optional[str] = Field(
        None, description="Charset advertised in the message Content-Type"
    )

    model_config = {"frozen": True}
