"""
Namespace-preserving XML fragment construction and serialization.
"""

from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from lxml import etree

from ..models.element import XmlElement

_ATTR_ENTITIES = {'"': "&quot;"}


def namespace_map(element: XmlElement) -> Dict[Optional[str], str]:
    """
    Namespace declarations for a rebuilt copy of element.

    The element's own namespace comes first; every namespace declared on the
    source element is re-declared unless it is that same namespace or would
    rebind its prefix.
    """
    nsmap: Dict[Optional[str], str] = {}
    if element.namespace:
        nsmap[element.prefix] = element.namespace
    for prefix, uri in element.declared_namespaces.items():
        if prefix in nsmap:
            continue
        if prefix is None and not element.namespace:
            # A default namespace would capture the un-namespaced element
            continue
        nsmap[prefix] = uri
    return nsmap


def create_element(element: XmlElement) -> etree._Element:
    """Create an empty lxml element with element's name and namespace declarations."""
    return etree.Element(element.qname, nsmap=namespace_map(element))


def _own_declarations(node: etree._Element) -> Dict[Optional[str], str]:
    parent = node.getparent()
    if parent is None:
        return dict(node.nsmap)
    inherited = parent.nsmap
    return {p: uri for p, uri in node.nsmap.items() if inherited.get(p) != uri}


def _write_node(
    node: etree._Element, scope: Dict[Optional[str], str], out: List[str]
) -> None:
    qname = etree.QName(node)
    namespace = qname.namespace
    prefix = node.prefix if namespace else None

    declarations: Dict[Optional[str], str] = {}
    for p, uri in _own_declarations(node).items():
        if p is None and not namespace:
            continue
        if scope.get(p) != uri:
            declarations[p] = uri
    if namespace and scope.get(prefix) != namespace:
        declarations[prefix] = namespace
    if not namespace and scope.get(None):
        # Undeclare the default namespace inherited from an ancestor
        declarations[None] = ""

    tag = f"{prefix}:{qname.localname}" if prefix else qname.localname
    out.append("<" + tag)
    for p, uri in declarations.items():
        name = f"xmlns:{p}" if p else "xmlns"
        out.append(f' {name}="{escape(uri, _ATTR_ENTITIES)}"')

    children = list(node)
    if not children and not node.text:
        out.append("/>")
        return
    out.append(">")
    if node.text:
        out.append(escape(node.text))

    child_scope = {**scope, **declarations}
    for child in children:
        _write_node(child, child_scope, out)
    out.append(f"</{tag}>")


def serialize_fragment(node: etree._Element) -> str:
    """
    Serialize a rebuilt lxml element as text, without XML declaration.

    Namespace declarations are written from the scope actually emitted, so an
    un-namespaced element below a default namespace gets an explicit
    xmlns="" undeclaration.
    """
    out: List[str] = []
    _write_node(node, {}, out)
    return "".join(out)
