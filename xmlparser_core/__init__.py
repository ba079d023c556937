"""
XML Parser Core Library
=======================

A small library for pulling values out of XML documents by XPath:

- Parsing with tolerant recovery of malformed real-world input
- Single values, name -> text maps and attribute maps by expression
- Restartable enumerators over node-sets
- Handler dispatch over node-sets with guaranteed release
- Inner/outer XML serialization and document output

Architecture
------------

    xmlparser_core/
    ├── document/      - Document context, node-sets, enumerators
    ├── xml/           - Node utilities (children, siblings, text, attributes)
    ├── diagnostics/   - Parser diagnostics reporting
    ├── config/        - Configuration management
    └── cli.py         - Command line entry point

Usage
-----

    from xmlparser_core import DocumentContext, NodeEnumerator
    from xmlparser_core.xml import get_child_content

    with DocumentContext(xml_text, suppress_errors=True) as doc:
        ok, title = doc.extract_single_value("/msg/appmsg/title")
        ok, attrs = doc.extract_all_attributes("/msg/img")

        with NodeEnumerator(doc, "//item") as items:
            while items.has_next():
                ok, url = get_child_content(items.next_node(), "url")

Failures never raise: a malformed document gives an invalid context and
a malformed expression or an empty match gives ``False``.
"""

__version__ = "1.0.0"

from xmlparser_core.errors import (
    XmlParserError,
    ResourceReleasedError,
)

from xmlparser_core.config.settings import (
    ParserConfig,
    load_config,
    save_config,
    get_default_config,
)

from xmlparser_core.diagnostics.report import ParseReport

from xmlparser_core.document import (
    DocumentContext,
    NodeEnumerator,
    NodeSet,
    NodeSetHandler,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "XmlParserError",
    "ResourceReleasedError",
    # Config
    "ParserConfig",
    "load_config",
    "save_config",
    "get_default_config",
    # Diagnostics
    "ParseReport",
    # Documents
    "DocumentContext",
    "NodeEnumerator",
    "NodeSet",
    "NodeSetHandler",
]
