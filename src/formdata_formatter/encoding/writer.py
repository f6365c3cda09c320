"""
multipart/form-data part writer.

Frames an ordered part list into bytes:

    --<boundary>
    Content-Disposition: form-data; name="<field>"[; filename="<file>"]
    Content-Type: <type>[; charset=<charset>]
    Content-Transfer-Encoding: <8bit|binary>

    <body>
    ...
    --<boundary>--

Lines end with CRLF. Header values are ASCII.
"""

import codecs
import io
from typing import BinaryIO, Optional, Sequence, Tuple

from ..exceptions import PartWriteError
from ..models.parts import FilePart, NestedXmlPart, Part, TextPart

CRLF = b"\r\n"
EXTRA = b"--"

TEXT_DEFAULT_CONTENT_TYPE = "text/plain"
FILE_DEFAULT_CONTENT_TYPE = "application/octet-stream"
FILE_DEFAULT_CHARSET = "ISO-8859-1"
XML_DEFAULT_CONTENT_TYPE = "application/xml"
XML_DEFAULT_CHARSET = "US-ASCII"


def _ascii(value: str) -> bytes:
    return value.encode("ascii", errors="replace")


def _header_value(value: str, quoted: bool = False) -> bytes:
    """
    Encode a header value, rejecting line breaks.

    Quoted values (field and file names) get backslash escapes for '"' and '\\'.

    Raises:
        PartWriteError: If value contains CR or LF
    """
    if "\r" in value or "\n" in value:
        raise PartWriteError(f"Line break in multipart header value {value!r}")
    if quoted:
        value = value.replace("\\", "\\\\").replace('"', '\\"')
    return _ascii(value)


def _encode_body(value: str, charset: str, errors: str) -> bytes:
    try:
        codecs.lookup(charset)
        return value.encode(charset, errors=errors)
    except LookupError as e:
        # Also raised by non-text codecs such as "hex"
        raise PartWriteError(f"Unsupported charset '{charset}'") from e


def part_headers(part: Part) -> Tuple[Optional[str], str, Optional[str], str]:
    """
    Resolve header values for a part, applying per-kind defaults.

    Returns:
        Tuple of (file_name, content_type, charset, transfer_encoding)
    """
    if isinstance(part, TextPart):
        return None, part.content_type or TEXT_DEFAULT_CONTENT_TYPE, part.charset, "8bit"
    if isinstance(part, FilePart):
        return (
            part.file_name,
            part.content_type or FILE_DEFAULT_CONTENT_TYPE,
            part.charset or FILE_DEFAULT_CHARSET,
            "binary",
        )
    if isinstance(part, NestedXmlPart):
        return (
            None,
            part.content_type or XML_DEFAULT_CONTENT_TYPE,
            part.charset or XML_DEFAULT_CHARSET,
            "8bit",
        )
    raise TypeError(f"Unsupported part type: {type(part).__name__}")


def part_body(part: Part) -> bytes:
    """Body bytes of a part in its charset."""
    if isinstance(part, FilePart):
        return part.data
    if isinstance(part, TextPart):
        # Unmappable characters become "?"
        return _encode_body(part.value, part.charset, "replace")
    _, _, charset, _ = part_headers(part)
    return _encode_body(part.serialized_xml, charset, "xmlcharrefreplace")


def write_part(part: Part, boundary: bytes, stream: BinaryIO) -> None:
    """Write one framed part (boundary line, headers, body) to stream."""
    file_name, content_type, charset, transfer_encoding = part_headers(part)

    disposition = b'Content-Disposition: form-data; name="' + _header_value(part.field_name, quoted=True) + b'"'
    if file_name is not None:
        disposition += b'; filename="' + _header_value(file_name, quoted=True) + b'"'
    type_line = b"Content-Type: " + _header_value(content_type)
    if charset is not None:
        type_line += b"; charset=" + _header_value(charset)
    body = part_body(part)

    stream.write(EXTRA + boundary + CRLF)
    stream.write(disposition)
    stream.write(CRLF + type_line)
    stream.write(CRLF + b"Content-Transfer-Encoding: " + _ascii(transfer_encoding))
    stream.write(CRLF + CRLF)
    stream.write(body)
    stream.write(CRLF)


def write_parts(parts: Sequence[Part], boundary: str, stream: BinaryIO) -> None:
    """
    Frame all parts into stream, followed by the closing boundary.

    Args:
        parts: Ordered parts
        boundary: MIME boundary token
        stream: Binary output stream

    Raises:
        PartWriteError: If a charset is unknown, a header value holds a line
            break, or the stream fails
    """
    if not boundary:
        raise ValueError("MIME boundary must not be empty")
    boundary_bytes = _ascii(boundary)
    try:
        for part in parts:
            write_part(part, boundary_bytes, stream)
        stream.write(EXTRA + boundary_bytes + EXTRA + CRLF)
    except OSError as e:
        if isinstance(e, PartWriteError):
            raise
        raise PartWriteError(f"Failed to write multipart body: {e}") from e


def frame_parts(parts: Sequence[Part], boundary: str) -> bytes:
    """Frame parts into a byte string."""
    buffer = io.BytesIO()
    write_parts(parts, boundary, buffer)
    return buffer.getvalue()
