# Data models for the multipart/form-data formatter

from .element import BinaryContent, DataSource, XmlElement, clark_name
from .parts import FilePart, NestedXmlPart, Part, TextPart
from .context import SOAP_11, SOAP_12, OutputFormat, ResolutionContext, generate_boundary
from .api_models import ErrorResponse, HealthResponse, VersionResponse

__all__ = [
    "XmlElement",
    "BinaryContent",
    "DataSource",
    "clark_name",
    "Part",
    "TextPart",
    "FilePart",
    "NestedXmlPart",
    "ResolutionContext",
    "OutputFormat",
    "generate_boundary",
    "SOAP_11",
    "SOAP_12",
    "ErrorResponse",
    "HealthResponse",
    "VersionResponse",
]
