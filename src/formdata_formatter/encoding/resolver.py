"""
Attribute and charset resolution for form parts.

Reserved attributes on a payload child act as directives to the encoder
(field name, file name, content type, charset). Values resolve in layers:
explicit attribute, then what the content type string embeds, then ambient
properties, then fixed defaults.
"""

import re
from enum import Enum
from typing import Optional, Tuple

from ..models.context import ResolutionContext
from ..models.element import XmlElement, clark_name

FORM_DATA_NS = "http://org.apache.axis2/xsd/form-data"

# Reserved element marking a base64 encoded file field
FILE_FIELD_QNAME = clark_name(FORM_DATA_NS, "file")

DEFAULT_FILE_NAME = "esb-generated-file"
DEFAULT_FILE_FIELD_NAME = "file"
DEFAULT_CONTENT_TYPE = "text/plain"
DEFAULT_FILE_CHARSET = "ISO-8859-1"
DEFAULT_TEXT_CHARSET = "US-ASCII"

_CHARSET_PATTERN = re.compile(r"(?:^|;)\s*charset\s*=\s*\"?([^\";\s]*)\"?", re.IGNORECASE)


class ReservedAttribute(str, Enum):
    """Unqualified attribute names the encoder treats as directives."""

    FILENAME = "filename"
    NAME = "name"
    CONTENT_TYPE = "content-type"
    CHARSET = "charset"


def lookup(element: XmlElement, attribute: ReservedAttribute) -> Optional[str]:
    """Return the reserved attribute's value, or None when absent."""
    return element.get_attribute(attribute.value)


def attribute_value(element: XmlElement, qualified_name: str, default: str) -> str:
    """
    Return an attribute value or a default.

    Args:
        element: Element to inspect
        qualified_name: Attribute name in Clark notation
        default: Value returned when the attribute is absent

    Returns:
        Attribute value (possibly empty) or default
    """
    value = element.get_attribute(qualified_name)
    return default if value is None else value


def extract_charset(content_type: Optional[str]) -> Optional[str]:
    """
    Extract the charset parameter from a Content-Type value.

    Matching is case-insensitive and surrounding quotes are dropped. The charset
    name itself is not validated.

    Args:
        content_type: Content-Type value, e.g. "text/plain; charset=UTF-8"

    Returns:
        Charset name, or None if there is no (non-empty) charset parameter
    """
    if not content_type:
        return None
    match = _CHARSET_PATTERN.search(content_type)
    if match is None or not match.group(1):
        return None
    return match.group(1)


def strip_charset(content_type: str) -> str:
    """
    Remove charset parameters from a Content-Type value.

    Remaining parameters are kept and re-joined with "; " so no stray separators
    are left behind.

    Args:
        content_type: Content-Type value, e.g. "text/plain; charset=UTF-8"

    Returns:
        Content-Type without charset, e.g. "text/plain"
    """
    kept = []
    for segment in content_type.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key = segment.split("=", 1)[0].strip().lower()
        if "=" in segment and key == "charset":
            continue
        kept.append(segment)
    return "; ".join(kept)


def resolve_text_charset(element: XmlElement, context: ResolutionContext) -> str:
    """
    Charset of a plain text field.

    Order: charset attribute, ambient character encoding, US-ASCII.
    """
    charset = lookup(element, ReservedAttribute.CHARSET)
    if charset is not None:
        return charset
    if context.character_set_encoding is not None:
        return context.character_set_encoding
    return DEFAULT_TEXT_CHARSET


def resolve_file_content_type(element: XmlElement) -> Tuple[str, str]:
    """
    Content type and charset of an ad hoc file field.

    A charset embedded in the content-type attribute wins over the charset
    attribute and is removed from the returned content type, since some
    consumers reject a charset in both places.

    Returns:
        Tuple of (content_type, charset)
    """
    content_type = attribute_value(
        element, ReservedAttribute.CONTENT_TYPE.value, DEFAULT_CONTENT_TYPE
    )
    charset = extract_charset(content_type)
    if charset is None:
        return content_type, attribute_value(
            element, ReservedAttribute.CHARSET.value, DEFAULT_FILE_CHARSET
        )
    return strip_charset(content_type), charset
