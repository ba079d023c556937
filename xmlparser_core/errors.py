"""
Error Types
===========

Exceptions raised for contract violations. Parse failures, malformed
expressions and empty matches are never raised; they are reported through
return values (see ``DocumentContext``).
"""


class XmlParserError(Exception):
    """Base class for xmlparser_core errors."""
    pass


class ResourceReleasedError(XmlParserError):
    """A node-set was read after it had been released."""
    pass
