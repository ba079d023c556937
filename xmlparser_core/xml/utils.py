"""
Node Utilities
==============

Stateless helpers for reading a single node of a parsed document: child and
sibling navigation, text and attribute access, and inner/outer serialization.
These functions work with lxml elements; text and attribute selections
returned by XPath (lxml "smart strings") are accepted wherever a node is, and
behave like text nodes.
"""

from html import escape
from typing import Any, Dict, Optional, Tuple
import logging

from lxml import etree

logger = logging.getLogger(__name__)


def is_element(node: Any) -> bool:
    """True for element nodes (not comments, processing instructions or text)."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def local_name(node: Any) -> str:
    """
    Extract local name from element tag, stripping any namespace prefix.

    Attribute strings returned by XPath are named after their attribute and
    text strings are named "text".

    Args:
        node: XML element, or a text/attribute string produced by XPath

    Returns:
        Local tag name without namespace, or "" for comments and
        processing instructions

    Example:
        >>> elem = etree.Element("{http://docbook.org}para")
        >>> local_name(elem)
        'para'
    """
    if isinstance(node, str):
        attrname = getattr(node, "attrname", None)
        if getattr(node, "is_attribute", False) and attrname:
            return attrname.split("}", 1)[-1]
        if getattr(node, "is_text", False) or getattr(node, "is_tail", False):
            return "text"
        return ""
    if not isinstance(node, etree._Element):
        return ""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def get_child(node: Any, name: str) -> Optional[Any]:
    """
    Find the first direct element child with the given local name.

    Args:
        node: Parent element
        name: Local name to look for

    Returns:
        Child element or None
    """
    if not isinstance(node, etree._Element):
        return None
    for child in node:
        if is_element(child) and local_name(child) == name:
            return child
    return None


def get_next_sibling(node: Any) -> Optional[Any]:
    """
    Get the next element sibling in document order.

    Text is never a sibling in lxml; comments and processing instructions
    are skipped here, so only elements are returned.
    """
    if not isinstance(node, etree._Element):
        return None
    sibling = node.getnext()
    while sibling is not None and not is_element(sibling):
        sibling = sibling.getnext()
    return sibling


def inner_text(node: Any) -> str:
    """
    Get the first text run directly under a node.

    Text after the first child element is not included. A node whose
    content starts with an element, or has no content, yields "". When
    the content starts with a comment or processing instruction, that
    node's content is returned.

    Args:
        node: XML element, or a text/attribute string produced by XPath

    Returns:
        Text content or empty string
    """
    if isinstance(node, str):
        return str(node)
    if not isinstance(node, etree._Element):
        return ""
    if node.text is not None:
        return node.text
    # comments and processing instructions carry their content in .text
    if len(node) and not is_element(node[0]):
        return node[0].text or ""
    return ""


def inner_xml(node: Any, pretty_print: bool = False) -> str:
    """
    Serialize the content of a node without its own tag.

    Args:
        node: XML element
        pretty_print: Use debug (indented) formatting for child elements

    Returns:
        Leading text followed by every child with its tail
    """
    if isinstance(node, str):
        return escape(str(node), quote=False)
    if not is_element(node):
        return ""

    parts = []
    if node.text:
        parts.append(escape(node.text, quote=False))
    for child in node:
        parts.append(etree.tostring(child, encoding="unicode",
                                    with_tail=True, pretty_print=pretty_print))
    return "".join(parts)


def outer_xml(node: Any, pretty_print: bool = False) -> str:
    """
    Serialize a node including its own opening and closing tags.

    The tail text following the node is not part of the result, so the
    output re-parses into an equivalent standalone document.

    Args:
        node: XML element
        pretty_print: Use debug (indented) formatting

    Returns:
        Serialized XML or empty string
    """
    if isinstance(node, str):
        return escape(str(node), quote=False)
    if not isinstance(node, etree._Element):
        return ""
    return etree.tostring(node, encoding="unicode",
                          with_tail=False, pretty_print=pretty_print)


def get_child_content(node: Any, name: str,
                      default: Optional[str] = None) -> Tuple[bool, Optional[str]]:
    """
    Get the inner text of the first child with the given local name.

    Returns:
        (True, text) if the child exists, otherwise (False, default)
    """
    child = get_child(node, name)
    if child is None:
        return False, default
    return True, inner_text(child)


def get_attribute(node: Any, name: str,
                  default: Optional[str] = None) -> Tuple[bool, Optional[str]]:
    """
    Look up an attribute by name.

    The exact attribute key is tried first (``"id"`` or ``"{uri}id"``);
    namespaced attributes are also matched by their local name.

    Returns:
        (True, value) if present, otherwise (False, default)
    """
    if not is_element(node):
        return False, default

    value = node.get(name)
    if value is not None:
        return True, value

    for key, value in node.attrib.items():
        if key.startswith("{") and key.split("}", 1)[1] == name:
            return True, value
    return False, default


def get_attributes(node: Any) -> Dict[str, str]:
    """
    Get all attributes of an element keyed by local name.

    Args:
        node: XML element

    Returns:
        Attribute dict in document order (empty for non-elements)
    """
    if not is_element(node):
        return {}
    attributes = {}
    for key, value in node.attrib.items():
        if key.startswith("{"):
            key = key.split("}", 1)[1]
        attributes[key] = value
    return attributes


def get_element_path(node: Any) -> str:
    """
    Get XPath-like path to an element for debugging.

    Args:
        node: XML element

    Returns:
        Path string like "/book/chapter[2]/para[1]"
    """
    if not isinstance(node, etree._Element):
        return ""

    parts = []
    current = node

    while current is not None:
        name = local_name(current) or "node()"
        parent = current.getparent()

        if parent is not None:
            # Count same-named siblings
            index = 1
            for sibling in parent:
                if sibling is current:
                    break
                if local_name(sibling) == local_name(current):
                    index += 1
            parts.append(f"{name}[{index}]")
        else:
            parts.append(name)

        current = parent

    return "/" + "/".join(reversed(parts))
