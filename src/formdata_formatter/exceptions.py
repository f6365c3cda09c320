"""
Error types raised while turning an XML payload into multipart/form-data.

Every failure aborts the whole encode call; no partial part list is returned.
"""


class FormatterError(Exception):
    """Base class for all formatter errors."""


class DecodeError(FormatterError, ValueError):
    """Base64 content of a file field could not be decoded."""


class MalformedInputError(FormatterError, ValueError):
    """Element is structurally inconsistent (e.g. binary leaf without data)."""


class NestingDepthError(MalformedInputError):
    """Nested structure exceeds the configured maximum depth."""


class XmlParseError(FormatterError, ValueError):
    """Input bytes are not well-formed XML."""


class PartWriteError(FormatterError, IOError):
    """Framing the parts into the output stream failed."""
