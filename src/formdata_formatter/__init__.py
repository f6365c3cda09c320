"""
XML to multipart/form-data formatter.

Walks the top-level children of an XML payload and re-expresses each one as a
multipart/form-data part (plain field, file upload or nested XML fragment).
"""

from .encoding import MultipartFormDataFormatter, encode
from .exceptions import (
    DecodeError,
    FormatterError,
    MalformedInputError,
    NestingDepthError,
    PartWriteError,
    XmlParseError,
)
from .models import FilePart, NestedXmlPart, OutputFormat, ResolutionContext, TextPart

__all__ = [
    "encode",
    "MultipartFormDataFormatter",
    "ResolutionContext",
    "OutputFormat",
    "TextPart",
    "FilePart",
    "NestedXmlPart",
    "FormatterError",
    "DecodeError",
    "MalformedInputError",
    "NestingDepthError",
    "PartWriteError",
    "XmlParseError",
]
