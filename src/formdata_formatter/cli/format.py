"""
Command-line interface for formatting XML payloads as multipart/form-data.

Usage:
    # Plain XML document, body to stdout
    python -m formdata_formatter.cli.format payload.xml

    # SOAP 1.2 envelope with an XOP attachment, body to a file
    python -m formdata_formatter.cli.format envelope.xml \\
        --attachment photo-1=/tmp/photo.png --output body.bin --print-content-type
"""

import argparse
import mimetypes
import sys
from pathlib import Path
from typing import Dict, List, Optional

import structlog

from formdata_formatter.config import settings
from formdata_formatter.encoding import MultipartFormDataFormatter
from formdata_formatter.exceptions import FormatterError
from formdata_formatter.logging_config import setup_logging
from formdata_formatter.models.context import OutputFormat, ResolutionContext
from formdata_formatter.models.element import DataSource
from formdata_formatter.parsing import (
    detect_soap_version,
    element_from_lxml,
    find_payload_element,
    parse_xml_bytes,
)

setup_logging(stream=sys.stderr)
logger = structlog.get_logger(__name__)


def parse_attachment(value: str) -> tuple:
    """
    Parse an attachment argument of the form CID=PATH[;CONTENT_TYPE].

    The file is read eagerly and recorded as a disk-backed data source.

    Returns:
        Tuple of (content_id, DataSource)

    Raises:
        argparse.ArgumentTypeError: If the argument is malformed or unreadable
    """
    content_id, sep, rest = value.partition("=")
    if not sep or not content_id or not rest:
        raise argparse.ArgumentTypeError(f"Expected CID=PATH[;TYPE], got '{value}'")

    path_str, _, content_type = rest.partition(";")
    path = Path(path_str)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Cannot read attachment '{path}': {e}") from e

    if not content_type:
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    return content_id, DataSource(name=path.name, content_type=content_type, data=data, on_disk=True)


def format_file(
    input_path: Path,
    attachments: Dict[str, DataSource],
    soap_version: Optional[str] = None,
    charset_encoding: Optional[str] = None,
    decode_multipart_data: bool = False,
    boundary: Optional[str] = None,
) -> tuple:
    """
    Format one XML file.

    Returns:
        Tuple of (body_bytes, content_type_header)

    Raises:
        FormatterError: On parse, decode or framing errors
    """
    root = parse_xml_bytes(input_path.read_bytes())
    payload = find_payload_element(root)
    body = element_from_lxml(payload, attachments) if payload is not None else None

    context = ResolutionContext.from_settings(
        settings,
        soap_version=soap_version or detect_soap_version(root),
        character_set_encoding=charset_encoding,
        decode_multipart_data=decode_multipart_data or None,
    )
    output_format = OutputFormat(
        mime_boundary=boundary or settings.default_mime_boundary or OutputFormat().mime_boundary,
        charset_encoding=charset_encoding or settings.character_set_encoding,
    )

    formatter = MultipartFormDataFormatter()
    data = formatter.get_bytes(body, context, output_format)
    return data, formatter.get_content_type(context, output_format)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format an XML or SOAP payload as a multipart/form-data body",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s payload.xml
  %(prog)s envelope.xml --soap-version soap11 --output body.bin
  %(prog)s envelope.xml --attachment img=/tmp/a.png;image/png --print-content-type
        """,
    )
    parser.add_argument("input", type=Path, help="XML document or SOAP envelope")
    parser.add_argument("--output", "-o", type=Path, help="Write the body here (default: stdout)")
    parser.add_argument("--boundary", help="MIME boundary token (default: random)")
    parser.add_argument("--soap-version", help="SOAP version tag: soap11 or soap12")
    parser.add_argument("--charset-encoding", help="Charset for plain text fields")
    parser.add_argument(
        "--decode-multipart-data",
        action="store_true",
        help="Base64-decode fields marked with a filename attribute",
    )
    parser.add_argument(
        "--attachment",
        action="append",
        default=[],
        type=parse_attachment,
        metavar="CID=PATH[;TYPE]",
        help="Attachment referenced by xop:Include (repeatable)",
    )
    parser.add_argument(
        "--print-content-type",
        action="store_true",
        help="Print the Content-Type header to stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if not args.input.exists():
        logger.error("input_not_found", path=str(args.input))
        return 1

    try:
        data, content_type = format_file(
            args.input,
            attachments=dict(args.attachment),
            soap_version=args.soap_version,
            charset_encoding=args.charset_encoding,
            decode_multipart_data=args.decode_multipart_data,
            boundary=args.boundary,
        )
    except FormatterError as e:
        logger.error("format_failed", path=str(args.input), error_type=type(e).__name__, error=str(e))
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(data)
        logger.info("output_written", path=str(args.output), size_bytes=len(data))
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()

    if args.print_content_type:
        print(f"Content-Type: {content_type}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
