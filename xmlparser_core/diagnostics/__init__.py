"""
Parse Diagnostics
=================
"""

from xmlparser_core.diagnostics.report import ParseReport

__all__ = [
    "ParseReport",
]
