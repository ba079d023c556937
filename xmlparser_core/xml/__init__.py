"""
Node Utilities
==============

Helpers for reading single nodes of a parsed document.
"""

from xmlparser_core.xml.utils import (
    is_element,
    local_name,
    get_child,
    get_next_sibling,
    inner_text,
    inner_xml,
    outer_xml,
    get_child_content,
    get_attribute,
    get_attributes,
    get_element_path,
)

__all__ = [
    "is_element",
    "local_name",
    "get_child",
    "get_next_sibling",
    "inner_text",
    "inner_xml",
    "outer_xml",
    "get_child_content",
    "get_attribute",
    "get_attributes",
    "get_element_path",
]
