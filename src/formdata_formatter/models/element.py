"""
Read-only element view consumed by the encoder.

This module defines the minimal XML object model the encoder walks: qualified
names, attributes, declared namespaces, children and text-or-binary leaf content.
Instances are built by the parsing module and never mutated afterwards.
"""

import base64
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..exceptions import MalformedInputError


def clark_name(namespace: Optional[str], local_name: str) -> str:
    """Return the qualified name in Clark notation ({ns}local, or local without namespace)."""
    if namespace:
        return f"{{{namespace}}}{local_name}"
    return local_name


@dataclass(frozen=True)
class DataSource:
    """
    Attachment data behind a binary leaf.

    Attributes:
        name: File name recorded for the data (usually the on-disk file name)
        content_type: MIME type recorded for the data
        data: Raw attachment bytes
        on_disk: True when the data was buffered to / read from disk storage
    """

    name: str
    content_type: str
    data: bytes = b""
    on_disk: bool = False


@dataclass(frozen=True)
class BinaryContent:
    """Binary leaf content. A missing data source means the node lost its data handler."""

    data_source: Optional[DataSource] = None


@dataclass(frozen=True)
class XmlElement:
    """
    Immutable view of one XML element.

    An element has child elements XOR leaf content (text or binary).

    Attributes:
        local_name: Local part of the element name
        namespace: Namespace URI, None for no namespace
        prefix: Namespace prefix as written in the source, None for default/no namespace
        attributes: Attribute values keyed by Clark name ("name" or "{ns}name")
        declared_namespaces: Namespaces declared on this element (prefix -> URI,
            None key for the default namespace)
        children: Child elements in document order
        text: Text content of a text leaf
        binary: Binary content of a binary leaf
    """

    local_name: str
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    declared_namespaces: Dict[Optional[str], str] = field(default_factory=dict)
    children: Tuple["XmlElement", ...] = ()
    text: Optional[str] = None
    binary: Optional[BinaryContent] = None

    @property
    def qname(self) -> str:
        return clark_name(self.namespace, self.local_name)

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def is_binary(self) -> bool:
        return self.binary is not None

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the value of the attribute with the given Clark name, or None."""
        return self.attributes.get(name)

    @property
    def text_content(self) -> str:
        """
        Text form of the leaf content.

        Binary leaves expose the base64 encoding of their data, the same text an
        XML infoset carries for inlined binary content.

        Raises:
            MalformedInputError: If the element is a binary leaf without data
        """
        if self.binary is not None:
            source = self._require_data_source()
            return base64.b64encode(source.data).decode("ascii")
        return self.text or ""

    def disk_data_source(self) -> Optional[DataSource]:
        """
        Return the data source of a disk-backed binary leaf.

        Returns None for text leaves, elements with children and binary leaves
        whose data does not come from disk storage.

        Raises:
            MalformedInputError: If the element is a binary leaf without data
        """
        if self.binary is None:
            return None
        source = self._require_data_source()
        return source if source.on_disk else None

    def _require_data_source(self) -> DataSource:
        source = self.binary.data_source if self.binary is not None else None
        if source is None:
            raise MalformedInputError(
                f"Binary element '{self.qname}' has no data handler"
            )
        return source
