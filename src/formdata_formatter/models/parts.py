"""
Multipart part models - the encoder's output.

Each top-level child of the payload becomes exactly one part. Parts are
immutable and carry only what the part writer needs to frame them.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class TextPart(BaseModel):
    """Plain form field."""

    kind: Literal["text"] = "text"
    field_name: str = Field(description="Form field name")
    value: str = Field(description="Field value")
    charset: str = Field(description="Charset used to encode the value")
    content_type: Optional[str] = Field(
        None, description="Explicit Content-Type override (text/plain when unset)"
    )

    model_config = {"frozen": True}


class FilePart(BaseModel):
    """Uploaded file field."""

    kind: Literal["file"] = "file"
    field_name: str = Field(description="Form field name")
    file_name: str = Field(description="File name sent in Content-Disposition")
    data: bytes = Field(description="Raw file bytes")
    content_type: Optional[str] = Field(
        None, description="File MIME type (application/octet-stream when unset)"
    )
    charset: Optional[str] = Field(None, description="Charset parameter (ISO-8859-1 when unset)")

    model_config = {"frozen": True}


class NestedXmlPart(BaseModel):
    """Field carrying a re-serialized XML fragment."""

    kind: Literal["xml"] = "xml"
    field_name: str = Field(description="Form field name")
    serialized_xml: str = Field(description="Serialized XML fragment")
    charset: Optional[str] = Field(None, description="Charset (US-ASCII when unset)")
    content_type: Optional[str] = Field(
        None, description="Content-Type (application/xml when unset)"
    )

    model_config = {"frozen": True}


Part = Annotated[Union[TextPart, FilePart, NestedXmlPart], Field(discriminator="kind")]
