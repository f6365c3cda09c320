"""
Part classification and encoding.

Walks the top-level children of a payload element and turns each into one
multipart part. Classification is ordered, the first matching rule wins:

1. nested structure      -> NestedXmlPart (flattened copy of the subtree)
2. reserved file element -> FilePart, base64 decoded
3. filename attribute    -> FilePart, optionally base64 decoded
4. disk-backed binary    -> FilePart from the attachment's name/content type
5. anything else         -> TextPart
"""

import base64
import binascii
import re
from typing import List, Optional

import structlog
from lxml import etree

from ..exceptions import DecodeError, FormatterError, NestingDepthError
from ..models.context import SOAP_11, SOAP_12, ResolutionContext
from ..models.element import XmlElement
from ..models.parts import FilePart, NestedXmlPart, Part, TextPart
from .resolver import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_FILE_CHARSET,
    DEFAULT_FILE_FIELD_NAME,
    DEFAULT_FILE_NAME,
    FILE_FIELD_QNAME,
    ReservedAttribute,
    attribute_value,
    extract_charset,
    lookup,
    resolve_file_content_type,
    resolve_text_charset,
)
from .serializer import create_element, serialize_fragment

logger = structlog.get_logger(__name__)

# Content type wrapping for nested XML per SOAP version tag
SOAP_CONTENT_TYPES = {
    SOAP_11: "text/xml",
    "1.1": "text/xml",
    SOAP_12: "application/soap+xml",
    "1.2": "application/soap+xml",
}

_WHITESPACE = re.compile(r"\s+")


def decode_base64(text: str, field_name: str) -> bytes:
    """
    Decode base64 text, ignoring whitespace (line-wrapped content is common).

    Raises:
        DecodeError: If text is not valid base64
    """
    compact = _WHITESPACE.sub("", text)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 content in field '{field_name}': {e}") from e


def flatten(element: XmlElement, max_depth: int, depth: int = 1) -> etree._Element:
    """
    Build a namespace-preserving copy of element's structure.

    Child subtrees are copied recursively; leaves keep their name, namespace
    and text. Attributes and mixed text of non-leaf elements are not copied.

    Args:
        element: Element with children
        max_depth: Maximum allowed nesting depth
        depth: Depth of element (top-level field is 1)

    Returns:
        Newly built lxml element

    Raises:
        NestingDepthError: If the structure nests deeper than max_depth
    """
    if depth > max_depth:
        raise NestingDepthError(
            f"Element '{element.qname}' exceeds maximum nesting depth {max_depth}"
        )

    node = create_element(element)
    for child in element.children:
        if child.has_children:
            node.append(flatten(child, max_depth, depth + 1))
        else:
            leaf = create_element(child)
            leaf.text = child.text_content
            node.append(leaf)
    return node


def _nested_part(element: XmlElement, context: ResolutionContext) -> NestedXmlPart:
    serialized = serialize_fragment(flatten(element, context.max_nesting_depth))
    field_name = element.local_name

    if context.soap_version is None:
        return NestedXmlPart(field_name=field_name, serialized_xml=serialized)

    content_type = SOAP_CONTENT_TYPES.get(context.soap_version)
    if content_type is None:
        return NestedXmlPart(field_name=field_name, serialized_xml=serialized)

    charset = extract_charset(
        attribute_value(element, ReservedAttribute.CONTENT_TYPE.value, DEFAULT_CONTENT_TYPE)
    )
    return NestedXmlPart(
        field_name=field_name,
        serialized_xml=serialized,
        charset=charset,
        content_type=content_type,
    )


def _reserved_file_part(element: XmlElement) -> FilePart:
    field_name = attribute_value(
        element, ReservedAttribute.NAME.value, DEFAULT_FILE_FIELD_NAME
    )
    return FilePart(
        field_name=field_name,
        file_name=attribute_value(element, ReservedAttribute.FILENAME.value, DEFAULT_FILE_NAME),
        data=decode_base64(element.text_content, field_name),
        content_type=attribute_value(
            element, ReservedAttribute.CONTENT_TYPE.value, DEFAULT_CONTENT_TYPE
        ),
        charset=attribute_value(element, ReservedAttribute.CHARSET.value, DEFAULT_FILE_CHARSET),
    )


def _ad_hoc_file_part(element: XmlElement, context: ResolutionContext) -> FilePart:
    field_name = attribute_value(element, ReservedAttribute.NAME.value, element.local_name)
    content_type, charset = resolve_file_content_type(element)

    if context.decode_multipart_data:
        data = decode_base64(element.text_content, field_name)
    else:
        data = element.text_content.encode("utf-8")

    return FilePart(
        field_name=field_name,
        file_name=attribute_value(element, ReservedAttribute.FILENAME.value, DEFAULT_FILE_NAME),
        data=data,
        content_type=content_type,
        charset=charset,
    )


def _binary_file_part(element: XmlElement) -> Optional[FilePart]:
    source = element.disk_data_source()
    if source is None:
        return None
    # File bytes are the text form the element exposes for its binary content
    return FilePart(
        field_name=element.local_name,
        file_name=source.name,
        data=element.text_content.encode("ascii"),
        content_type=source.content_type,
    )


def _text_part(element: XmlElement, context: ResolutionContext) -> TextPart:
    charset = resolve_text_charset(element, context)
    if element.prefix:
        return TextPart(
            field_name=f"{element.prefix}:{element.local_name}",
            value=element.text_content,
            charset=charset,
        )
    return TextPart(
        field_name=element.local_name,
        value=element.text_content,
        charset=charset,
        content_type=lookup(element, ReservedAttribute.CONTENT_TYPE),
    )


def classify(element: XmlElement, context: ResolutionContext) -> Part:
    """
    Turn one top-level payload child into a part.

    Args:
        element: Top-level child of the payload element
        context: Ambient properties for this pass

    Returns:
        TextPart, FilePart or NestedXmlPart

    Raises:
        DecodeError: If a file field holds invalid base64
        MalformedInputError: If a binary leaf has no data, or nesting is too deep
    """
    if element.has_children:
        return _nested_part(element, context)
    if element.qname == FILE_FIELD_QNAME:
        return _reserved_file_part(element)
    if lookup(element, ReservedAttribute.FILENAME) is not None:
        return _ad_hoc_file_part(element, context)

    part = _binary_file_part(element)
    if part is not None:
        return part
    return _text_part(element, context)


def encode(
    document_body: Optional[XmlElement], context: ResolutionContext
) -> List[Part]:
    """
    Encode the children of a payload element as multipart parts.

    Exactly one part is produced per top-level child, in document order. Any
    failure aborts the whole call.

    Args:
        document_body: Payload element (None yields no parts)
        context: Ambient properties for this pass

    Returns:
        Ordered list of parts

    Raises:
        DecodeError: If a file field holds invalid base64
        MalformedInputError: If an element is structurally inconsistent
    """
    if document_body is None:
        return []

    parts: List[Part] = []
    for child in document_body.children:
        try:
            part = classify(child, context)
        except FormatterError as e:
            logger.error(
                "part_encoding_failed",
                element=child.qname,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise
        logger.debug("part_classified", element=child.qname, kind=part.kind, field=part.field_name)
        parts.append(part)

    logger.info(
        "multipart_parts_created",
        payload=document_body.qname,
        parts_count=len(parts),
        soap_version=context.soap_version,
    )
    return parts
