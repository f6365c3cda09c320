"""
Formatting endpoint - turns an XML payload into a multipart/form-data body.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog

from ...config import settings
from ...encoding import MultipartFormDataFormatter
from ...exceptions import FormatterError
from ...models.api_models import ErrorResponse
from ...models.context import OutputFormat, ResolutionContext
from ...parsing import detect_soap_version, element_from_lxml, find_payload_element, parse_xml_bytes

logger = structlog.get_logger(__name__)
router = APIRouter()

formatter = MultipartFormDataFormatter()


@router.post(
    "/format",
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
)
async def format_payload(
    request: Request,
    soap_version: Optional[str] = Query(
        default=None, description="SOAP version tag (soap11, soap12); detected from the envelope when omitted"
    ),
    charset_encoding: Optional[str] = Query(
        default=None, description="Charset for plain text fields"
    ),
    decode_multipart_data: Optional[bool] = Query(
        default=None, description="Base64-decode file fields marked with a filename attribute"
    ),
    boundary: Optional[str] = Query(
        default=None, min_length=1, max_length=70, description="MIME boundary token"
    ),
    set_content_type_charset: Optional[bool] = Query(
        default=None, description="Advertise charset_encoding in the Content-Type header"
    ),
) -> Response:
    """
    Format the XML request body as multipart/form-data.

    The body may be a SOAP envelope (the first element in Body is the payload)
    or a plain XML document (the root is the payload). Each child of the
    payload becomes one form field.
    """
    xml_bytes = await request.body()

    size_mb = len(xml_bytes) / (1024 * 1024)
    if size_mb > settings.max_request_size_mb:
        raise HTTPException(
            status_code=413,
            detail=f"Payload size ({size_mb:.1f}MB) exceeds maximum ({settings.max_request_size_mb}MB)",
        )

    try:
        root = parse_xml_bytes(xml_bytes)
        payload = find_payload_element(root)
        body = element_from_lxml(payload) if payload is not None else None

        context = ResolutionContext.from_settings(
            settings,
            soap_version=soap_version or settings.soap_version or detect_soap_version(root),
            character_set_encoding=charset_encoding,
            decode_multipart_data=decode_multipart_data,
            set_content_type_character_encoding=set_content_type_charset,
        )
        output_format = OutputFormat(
            mime_boundary=boundary or settings.default_mime_boundary or OutputFormat().mime_boundary,
            charset_encoding=charset_encoding or settings.character_set_encoding,
        )

        data = formatter.get_bytes(body, context, output_format)
        content_type = formatter.get_content_type(context, output_format)

    except (FormatterError, ValidationError) as e:
        logger.warning("payload_format_failed", error_type=type(e).__name__, error=str(e))
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=str(e), error_type=type(e).__name__).model_dump(),
        )

    logger.info(
        "Payload formatted",
        size_bytes=len(data),
        soap_version=context.soap_version,
    )
    return Response(content=data, media_type=content_type)
