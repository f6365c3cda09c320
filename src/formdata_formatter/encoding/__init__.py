# Multipart encoding module

from .classifier import classify, decode_base64, encode, flatten
from .formatter import MEDIA_TYPE_MULTIPART_FORM_DATA, MultipartFormDataFormatter
from .resolver import (
    FILE_FIELD_QNAME,
    ReservedAttribute,
    attribute_value,
    extract_charset,
    resolve_file_content_type,
    resolve_text_charset,
    strip_charset,
)
from .serializer import create_element, serialize_fragment
from .writer import frame_parts, write_parts

__all__ = [
    "encode",
    "classify",
    "flatten",
    "decode_base64",
    "MultipartFormDataFormatter",
    "MEDIA_TYPE_MULTIPART_FORM_DATA",
    "FILE_FIELD_QNAME",
    "ReservedAttribute",
    "attribute_value",
    "extract_charset",
    "strip_charset",
    "resolve_text_charset",
    "resolve_file_content_type",
    "create_element",
    "serialize_fragment",
    "frame_parts",
    "write_parts",
]
