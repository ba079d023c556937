"""
Node-Set Results
================

The ordered result of one XPath evaluation. A node-set borrows nodes from
its document and must be released before the document is closed; use
``DocumentContext.evaluate`` to get one that is released automatically.
"""

from collections.abc import Sequence
from typing import Any, List, Optional
import logging

from xmlparser_core.errors import ResourceReleasedError

logger = logging.getLogger(__name__)


class NodeSet(Sequence):
    """
    Read-only, ordered sequence of the nodes matched by one expression.

    A node-set built from ``None`` is *invalid*: the evaluation produced no
    result at all (malformed expression, closed document, foreign scope
    node). An invalid node-set is empty, but an empty node-set is not
    necessarily invalid.
    """

    def __init__(self, nodes: Optional[List[Any]], expression: str = ""):
        self.expression = expression
        self._invalid = nodes is None
        self._nodes: List[Any] = list(nodes) if nodes is not None else []
        self._count = len(self._nodes)
        self._released = False

    @property
    def is_invalid(self) -> bool:
        return self._invalid

    @property
    def released(self) -> bool:
        return self._released

    @property
    def count(self) -> int:
        """Number of matched nodes, fixed at evaluation time."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index):
        self._check_released()
        return self._nodes[index]

    def __iter__(self):
        self._check_released()
        return iter(self._nodes)

    def first(self) -> Optional[Any]:
        """First node in document order, or None."""
        self._check_released()
        return self._nodes[0] if self._nodes else None

    def release(self) -> bool:
        """
        Drop the references to the matched nodes.

        Returns:
            True if this call released the node-set, False if it had
            already been released
        """
        if self._released:
            return False
        self._nodes = []
        self._released = True
        return True

    def _check_released(self) -> None:
        if self._released:
            raise ResourceReleasedError(
                f"Node-set for {self.expression!r} has already been released"
            )

    def __repr__(self) -> str:
        state = "invalid" if self._invalid else f"{self._count} node(s)"
        if self._released:
            state += ", released"
        return f"<NodeSet {self.expression!r}: {state}>"
