# XML payload loading module

from .xml_parser import (
    SOAP11_ENV_NS,
    SOAP12_ENV_NS,
    XOP_NS,
    detect_soap_version,
    element_from_lxml,
    find_payload_element,
    load_document,
    parse_xml_bytes,
)

__all__ = [
    "parse_xml_bytes",
    "detect_soap_version",
    "find_payload_element",
    "element_from_lxml",
    "load_document",
    "SOAP11_ENV_NS",
    "SOAP12_ENV_NS",
    "XOP_NS",
]
