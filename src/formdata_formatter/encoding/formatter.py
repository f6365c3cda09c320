"""
Message formatter facade producing multipart/form-data request bodies.

Ties the encoder and the part writer together and builds the message-level
Content-Type header.
"""

from typing import BinaryIO, Optional

from ..exceptions import PartWriteError
from ..logging_config import get_logger
from ..models.context import OutputFormat, ResolutionContext
from ..models.element import XmlElement
from .classifier import encode
from .writer import frame_parts

logger = get_logger(__name__)

MEDIA_TYPE_MULTIPART_FORM_DATA = "multipart/form-data"


class MultipartFormDataFormatter:
    """
    Formats an XML payload as a multipart/form-data body.

    Stateless: one instance can serve concurrent callers with independent inputs.

    Example, for the payload

        <data><town><name>Frejus</name></town><date>2026-10-18</date></data>

    the body carries a "town" part holding the serialized <town> fragment and
    a "date" text part holding "2026-10-18".
    """

    def get_bytes(
        self,
        body: Optional[XmlElement],
        context: ResolutionContext,
        output_format: OutputFormat,
    ) -> bytes:
        """
        Encode body and frame it into bytes.

        Args:
            body: Payload element whose children become form fields
            context: Ambient properties
            output_format: Boundary and charset options

        Returns:
            Multipart body, or b"" when there are no parts

        Raises:
            DecodeError: If a file field holds invalid base64
            MalformedInputError: If an element is structurally inconsistent
            PartWriteError: If framing fails
        """
        parts = encode(body, context)
        if not parts:
            return b""
        data = frame_parts(parts, output_format.mime_boundary)
        logger.debug("multipart_body_framed", parts_count=len(parts), size_bytes=len(data))
        return data

    def write_to(
        self,
        body: Optional[XmlElement],
        context: ResolutionContext,
        output_format: OutputFormat,
        stream: BinaryIO,
    ) -> None:
        """
        Write the formatted body to stream (only flushes it when empty).

        Raises:
            PartWriteError: If writing to the stream fails
        """
        data = self.get_bytes(body, context, output_format)
        try:
            if data:
                stream.write(data)
            else:
                stream.flush()
        except OSError as e:
            logger.error("multipart_write_failed", error=str(e))
            raise PartWriteError("An error occurred while writing the request") from e

    def get_content_type(
        self, context: ResolutionContext, output_format: OutputFormat
    ) -> str:
        """
        Content-Type header for the whole message.

        The charset is included only when the output format has one and the
        context asks for it; the boundary is always included.
        """
        content_type = MEDIA_TYPE_MULTIPART_FORM_DATA
        encoding = output_format.charset_encoding
        if encoding and context.set_content_type_character_encoding:
            content_type += f"; charset={encoding}"
        return f"{content_type}; boundary={output_format.mime_boundary}"

    def format_soap_action(self, soap_action: Optional[str]) -> Optional[str]:
        """SOAP action is sent unchanged."""
        return soap_action
