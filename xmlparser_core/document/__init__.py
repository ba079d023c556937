"""
Document Access
===============

Parsed documents, XPath node-sets and node enumerators.
"""

from xmlparser_core.document.nodeset import NodeSet
from xmlparser_core.document.context import DocumentContext, NodeSetHandler
from xmlparser_core.document.enumerator import NodeEnumerator

__all__ = [
    "NodeSet",
    "DocumentContext",
    "NodeSetHandler",
    "NodeEnumerator",
]
