"""
XML payload loader built on lxml.

Parses raw request bytes, locates the payload element (first child of a SOAP
Body, or the document root) and converts it into the immutable element view
the encoder consumes. XOP includes are resolved against a caller supplied
attachment map so binary content shows up as binary leaves.
"""

from typing import Dict, Mapping, Optional

import structlog
from lxml import etree

from ..exceptions import XmlParseError
from ..models.context import SOAP_11, SOAP_12
from ..models.element import BinaryContent, DataSource, XmlElement

logger = structlog.get_logger(__name__)

SOAP11_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP12_ENV_NS = "http://www.w3.org/2003/05/soap-envelope"
XOP_NS = "http://www.w3.org/2004/08/xop/include"

_ENVELOPE_VERSIONS = {
    SOAP11_ENV_NS: SOAP_11,
    SOAP12_ENV_NS: SOAP_12,
}


def _make_parser() -> etree.XMLParser:
    # lxml parsers must not be shared between threads
    return etree.XMLParser(
        remove_comments=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


def parse_xml_bytes(xml_bytes: bytes) -> etree._Element:
    """
    Parse raw XML bytes into an lxml tree.

    Args:
        xml_bytes: Raw XML document

    Returns:
        Root element

    Raises:
        XmlParseError: If the bytes are not well-formed XML
    """
    try:
        return etree.fromstring(xml_bytes, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        logger.error("xml_syntax_error", error=str(e))
        raise XmlParseError(f"Invalid XML: {e}") from e


def detect_soap_version(root: etree._Element) -> Optional[str]:
    """
    Detect the SOAP version of an envelope.

    Returns:
        "soap11" or "soap12" when root is a SOAP Envelope, else None
    """
    qname = etree.QName(root)
    if qname.localname != "Envelope":
        return None
    return _ENVELOPE_VERSIONS.get(qname.namespace)


def find_payload_element(root: etree._Element) -> Optional[etree._Element]:
    """
    Locate the payload element whose children become form fields.

    For a SOAP envelope this is the first element inside Body (None when the
    body is empty); any other document is its own payload.
    """
    version = detect_soap_version(root)
    if version is None:
        return root

    namespace = etree.QName(root).namespace
    body = root.find(f"{{{namespace}}}Body")
    if body is None:
        return None
    for child in body:
        if isinstance(child.tag, str):
            return child
    return None


def _declared_namespaces(node: etree._Element) -> Dict[Optional[str], str]:
    parent = node.getparent()
    inherited = parent.nsmap if parent is not None else {}
    return {
        prefix: uri
        for prefix, uri in node.nsmap.items()
        if inherited.get(prefix) != uri
    }


def _xop_content_id(node: etree._Element) -> Optional[str]:
    """Return the content id when node's only child is an xop:Include, else None."""
    children = [child for child in node if isinstance(child.tag, str)]
    if len(children) != 1 or children[0].tag != f"{{{XOP_NS}}}Include":
        return None
    href = children[0].get("href", "")
    return href[4:] if href.startswith("cid:") else href


def element_from_lxml(
    node: etree._Element,
    attachments: Optional[Mapping[str, DataSource]] = None,
) -> XmlElement:
    """
    Convert an lxml element into the immutable element view.

    Args:
        node: lxml element
        attachments: Attachment data sources keyed by content id

    Returns:
        XmlElement mirroring node and its descendants
    """
    attachments = attachments or {}
    qname = etree.QName(node)
    attributes = {str(key): value for key, value in node.attrib.items()}
    common = dict(
        local_name=qname.localname,
        namespace=qname.namespace,
        prefix=node.prefix,
        attributes=attributes,
        declared_namespaces=_declared_namespaces(node),
    )

    content_id = _xop_content_id(node)
    if content_id is not None:
        source = attachments.get(content_id)
        if source is None:
            logger.warning("xop_attachment_missing", content_id=content_id, element=qname.text)
        return XmlElement(binary=BinaryContent(data_source=source), **common)

    children = tuple(
        element_from_lxml(child, attachments)
        for child in node
        if isinstance(child.tag, str)
    )
    if children:
        return XmlElement(children=children, **common)
    return XmlElement(text="".join(node.itertext()), **common)


def load_document(
    xml_bytes: bytes,
    attachments: Optional[Mapping[str, DataSource]] = None,
) -> Optional[XmlElement]:
    """
    Parse XML bytes and return the payload element view.

    Args:
        xml_bytes: Raw XML (SOAP envelope or plain document)
        attachments: Attachment data sources keyed by content id

    Returns:
        Payload element, or None for an empty SOAP body

    Raises:
        XmlParseError: If the bytes are not well-formed XML
    """
    root = parse_xml_bytes(xml_bytes)
    payload = find_payload_element(root)
    if payload is None:
        logger.info("empty_payload", soap_version=detect_soap_version(root))
        return None
    return element_from_lxml(payload, attachments)
