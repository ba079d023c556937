"""
Parse Diagnostics
=================

Collects the parser error log of a document so that diagnostics can be
reported to the embedding application instead of aborting the parse.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ParseReport:
    """
    Container for parse diagnostics.

    Attributes:
        recovered: Whether the parser had to recover from errors
        error_count: Number of ERROR/FATAL entries
        warning_count: Number of WARNING entries
        entries: List of entry dictionaries with keys:
            - line: Line number (optional)
            - column: Column number (optional)
            - type: libxml2 error type name
            - message: Error description
            - severity: 'Error', 'Warning', or 'Info'
    """
    recovered: bool = False
    error_count: int = 0
    warning_count: int = 0
    entries: List[Dict[str, Any]] = field(default_factory=list)

    def add_entry(self,
                  message: str,
                  error_type: str = "Parse Error",
                  line: Optional[int] = None,
                  column: Optional[int] = None,
                  severity: str = "Error") -> None:
        """Record one diagnostic."""
        self.entries.append({
            'line': line,
            'column': column,
            'type': error_type,
            'message': message,
            'severity': severity,
        })

        if severity == "Error":
            self.error_count += 1
            self.recovered = True
        elif severity == "Warning":
            self.warning_count += 1

    @classmethod
    def from_error_log(cls, error_log: Any) -> 'ParseReport':
        """
        Build a report from an lxml ``_ListErrorLog``.

        Args:
            error_log: Error log of an ``XMLParser`` or ``XMLSyntaxError``

        Returns:
            ParseReport with one entry per log entry
        """
        report = cls()
        for entry in error_log:
            level = entry.level_name
            if level in ('ERROR', 'FATAL'):
                severity = "Error"
            elif level == 'WARNING':
                severity = "Warning"
            else:
                severity = "Info"
            report.add_entry(
                message=entry.message.strip(),
                error_type=entry.type_name,
                line=entry.line,
                column=entry.column,
                severity=severity,
            )
        return report

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def log(self, log: Optional[logging.Logger] = None) -> None:
        """Emit every entry as a WARNING on ``log``."""
        log = log or logger
        for entry in self.entries:
            log.warning(
                f"XML {entry['severity'].lower()} at line {entry['line']}, "
                f"column {entry['column']}: {entry['message']} ({entry['type']})"
            )

    def summary(self) -> str:
        """Generate a text summary of the diagnostics."""
        if not self.entries:
            return "Parse completed - no diagnostics"

        lines = [f"Parse completed with {self.error_count} error(s), {self.warning_count} warning(s)"]
        for entry in self.entries:
            lines.append(f"  line {entry['line']}: {entry['message']}")
        return "\n".join(lines)
