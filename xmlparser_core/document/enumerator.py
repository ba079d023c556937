"""
Node Enumerator
===============

Forward-only cursor over the node-set of one XPath evaluation.
"""

from typing import Any, Optional
import logging

from xmlparser_core.document.context import DocumentContext

logger = logging.getLogger(__name__)


class NodeEnumerator:
    """
    Cursor over the nodes matching an expression, over the whole document
    or under a scope node.

    Example:
        with NodeEnumerator(doc, "/msg/appmsg/mmreader/category/item") as items:
            while items.has_next():
                item = items.next_node()
                ok, title = get_child_content(item, "title")

    Always check ``has_next()`` before ``next_node()``. The enumerator owns
    its node-set until ``close()``; ``reset()`` restarts the traversal
    without evaluating again.
    """

    def __init__(self, context: DocumentContext, expr: str, node: Optional[Any] = None):
        self._node_set = context.acquire(expr, node)
        self._count = self._node_set.count
        self._cursor = -1

    @property
    def count(self) -> int:
        return self._count

    @property
    def cursor(self) -> int:
        """Index of the last node returned; -1 before the first."""
        return self._cursor

    def is_invalid(self) -> bool:
        """True if the evaluation produced no result (not merely no match)."""
        return self._node_set.is_invalid

    def has_next(self) -> bool:
        return self._cursor < self._count - 1

    def next_node(self) -> Any:
        """
        Advance the cursor and return the node under it.

        Raises:
            IndexError: If there is no next node
            ResourceReleasedError: If the enumerator has been closed
        """
        if not self.has_next():
            raise IndexError(
                f"No node after position {self._cursor} for {self._node_set.expression!r}"
            )
        node = self._node_set[self._cursor + 1]
        self._cursor += 1
        return node

    def reset(self) -> None:
        self._cursor = -1

    def close(self) -> None:
        if self._node_set.release():
            logger.debug(f"Released node-set for {self._node_set.expression!r}")

    def __enter__(self) -> 'NodeEnumerator':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> 'NodeEnumerator':
        return self

    def __next__(self) -> Any:
        if not self.has_next():
            raise StopIteration
        return self.next_node()

    def __repr__(self) -> str:
        return f"<NodeEnumerator {self._cursor + 1}/{self._count} {self._node_set.expression!r}>"
