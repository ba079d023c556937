"""
Document Context
================

Owns a parsed document and the XPath evaluator bound to it, and extracts
text, attribute and subtree values by XPath expression.

Every operation reports failure through its return value: a malformed
document produces an invalid context, a malformed expression or an empty
match produces ``False`` with the caller's output left untouched.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union
import logging
import weakref

from lxml import etree

from xmlparser_core.config.settings import ParserConfig, get_default_config
from xmlparser_core.diagnostics.report import ParseReport
from xmlparser_core.document.nodeset import NodeSet
from xmlparser_core.xml.utils import (
    get_attribute,
    get_attributes,
    get_element_path,
    inner_text,
    inner_xml,
    local_name,
    outer_xml,
)

logger = logging.getLogger(__name__)

NodeSetHandler = Callable[[NodeSet], bool]


class DocumentContext:
    """
    A parsed XML document plus its XPath evaluator.

    Example:
        with DocumentContext(xml_text, suppress_errors=True) as doc:
            ok, title = doc.extract_single_value("/msg/appmsg/title")
            ok, fields = doc.extract_many_values("/msg/appmsg/*")
            ok, url = doc.extract_attribute_value("/msg/img", "cdnurl")

    Nodes handed out by a context (through node-sets, enumerators or
    handlers) are borrowed from its document and must not be used after
    ``close()``.
    """

    def __init__(self,
                 text: Union[str, bytes],
                 suppress_errors: bool = False,
                 config: Optional[ParserConfig] = None):
        """
        Parse ``text`` and bind an evaluator to the resulting document.

        Args:
            text: XML document as str or bytes
            suppress_errors: Do not record or log parser diagnostics
            config: Parser settings (defaults to ``get_default_config()``)
        """
        self.config = config or get_default_config()
        self.suppress_errors = suppress_errors
        self.parse_report = ParseReport()

        self._tree: Optional[etree._ElementTree] = None
        self._root: Optional[etree._Element] = None
        self._evaluator: Optional[etree.XPathDocumentEvaluator] = None
        self._open_node_sets: 'weakref.WeakSet[NodeSet]' = weakref.WeakSet()

        self._parse(text)

    def _build_parser(self, encoding: Optional[str] = None) -> etree.XMLParser:
        return etree.XMLParser(
            recover=self.config.recover,
            resolve_entities=self.config.resolve_entities,
            no_network=self.config.no_network,
            remove_blank_text=self.config.remove_blank_text,
            huge_tree=self.config.huge_tree,
            encoding=encoding,
        )

    def _parse(self, text: Union[str, bytes]) -> None:
        if isinstance(text, str):
            # lxml rejects str input carrying an encoding declaration;
            # lone surrogates become "?" like any other damaged input
            data = text.encode("utf-8", errors="replace")
            parser = self._build_parser(encoding="utf-8")
        else:
            data = bytes(text)
            parser = self._build_parser()

        root = None
        try:
            root = etree.fromstring(data, parser)
            error_log = parser.error_log
        except etree.XMLSyntaxError as e:
            error_log = e.error_log

        if not self.suppress_errors:
            self.parse_report = ParseReport.from_error_log(error_log)
            self.parse_report.log(logger)

        if root is None:
            if self.suppress_errors:
                logger.debug("Document could not be parsed; context is invalid")
            else:
                logger.warning("Document could not be parsed; context is invalid")
            return

        self._root = root
        self._tree = root.getroottree()
        self._evaluator = etree.XPathDocumentEvaluator(
            self._tree, namespaces=self.config.namespaces or None
        )
        logger.debug(f"Parsed document with root <{local_name(root)}>")

    @property
    def is_valid(self) -> bool:
        """True while the context holds a parsed document."""
        return self._tree is not None and self._evaluator is not None

    @property
    def root(self) -> Optional[etree._Element]:
        """Root element, or None for an invalid or closed context."""
        return self._root

    def owns(self, node: Any) -> bool:
        """True if ``node`` is an element of this context's document."""
        if not self.is_valid or not isinstance(node, etree._Element):
            return False
        return node.getroottree().getroot() is self._root

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Release open node-sets, then the evaluator, then the document.

        Safe to call more than once.
        """
        if self._tree is None and self._evaluator is None:
            return

        pending = [node_set for node_set in self._open_node_sets if not node_set.released]
        if pending:
            logger.debug(f"Releasing {len(pending)} open node-set(s) on close")
        for node_set in pending:
            node_set.release()
        self._open_node_sets.clear()

        self._evaluator = None
        self._root = None
        self._tree = None
        logger.debug("Document context closed")

    def __enter__(self) -> 'DocumentContext':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def acquire(self, expr: str, node: Optional[Any] = None) -> NodeSet:
        """
        Evaluate ``expr`` and return a node-set the caller must release.

        Prefer ``evaluate()``, which releases the node-set on exit. This is
        the entry point for objects that own a node-set across calls, such
        as ``NodeEnumerator``.

        Args:
            expr: XPath expression
            node: Optional scope node; relative expressions are evaluated
                under it

        Returns:
            NodeSet, invalid if the context is invalid, ``node`` belongs to
            another document, or the expression is malformed
        """
        if not self.is_valid:
            return NodeSet(None, expr)

        if node is not None and not self.owns(node):
            logger.debug(f"Scope node for {expr!r} does not belong to this document")
            return NodeSet(None, expr)

        try:
            if node is None:
                result = self._evaluator(expr)
            else:
                result = node.xpath(expr, namespaces=self.config.namespaces or None)
        except etree.XPathError as e:
            logger.debug(f"Invalid XPath expression {expr!r}: {e}")
            return NodeSet(None, expr)

        # numbers, strings and booleans carry no nodes
        node_set = NodeSet(result if isinstance(result, list) else [], expr)
        self._open_node_sets.add(node_set)
        return node_set

    @contextmanager
    def evaluate(self, expr: str, node: Optional[Any] = None) -> Iterator[NodeSet]:
        """
        Evaluate ``expr`` for the duration of a ``with`` block.

        Example:
            with doc.evaluate("//img") as images:
                for image in images:
                    ...

        The node-set is released when the block exits, whether normally,
        early or through an exception.
        """
        node_set = self.acquire(expr, node)
        try:
            yield node_set
        finally:
            node_set.release()

    # ------------------------------------------------------------------
    # Value extraction
    # ------------------------------------------------------------------

    def extract_single_value(self, expr: str,
                             default: Optional[str] = None) -> Tuple[bool, Optional[str]]:
        """
        Get the inner text of the first node matching ``expr``.

        Returns:
            (True, text) on a match, otherwise (False, default)
        """
        with self.evaluate(expr) as node_set:
            if not node_set:
                return False, default
            return True, inner_text(node_set[0])

    def extract_many_values(self, expr: str,
                            values: Optional[Dict[str, str]] = None) -> Tuple[bool, Dict[str, str]]:
        """
        Map the local name of every node matching ``expr`` to its inner text.

        Intended for wildcard expressions such as ``/msg/appmsg/*``. Nodes
        sharing a name overwrite earlier ones (last match wins).

        Args:
            expr: XPath expression
            values: Optional dict updated in place; left untouched when
                nothing matches

        Returns:
            (matched, values)
        """
        return self._collect_values(expr, None, values)

    def extract_many_values_from_node(self, node: Any, expr: str,
                                      values: Optional[Dict[str, str]] = None) -> Tuple[bool, Dict[str, str]]:
        """Same as ``extract_many_values`` with ``expr`` evaluated under ``node``."""
        return self._collect_values(expr, node, values)

    def _collect_values(self, expr: str, node: Optional[Any],
                        values: Optional[Dict[str, str]]) -> Tuple[bool, Dict[str, str]]:
        if values is None:
            values = {}

        with self.evaluate(expr, node) as node_set:
            if not node_set:
                return False, values
            for item in node_set:
                values[local_name(item)] = inner_text(item)

        return True, values

    def extract_attribute_value(self, expr: str, attr_name: str,
                                default: Optional[str] = None) -> Tuple[bool, Optional[str]]:
        """
        Get an attribute of the first node matching ``expr``.

        Returns:
            (True, value) if a node matched and carries the attribute,
            otherwise (False, default)
        """
        with self.evaluate(expr) as node_set:
            if not node_set:
                return False, default
            return get_attribute(node_set[0], attr_name, default)

    def extract_all_attributes(self, expr: str,
                               values: Optional[Dict[str, str]] = None) -> Tuple[bool, Dict[str, str]]:
        """
        Get every attribute of the first node matching ``expr``.

        Returns:
            (matched, values); a matched node without attributes gives
            (True, values) with nothing added
        """
        if values is None:
            values = {}

        with self.evaluate(expr) as node_set:
            if not node_set:
                return False, values
            values.update(get_attributes(node_set[0]))

        return True, values

    def evaluate_with_handler(self, expr: str, handler: NodeSetHandler) -> bool:
        """
        Hand the nodes matching ``expr`` to ``handler``.

        The handler is called only for a non-empty match and must not keep
        the node-set; it is released when this call returns, including when
        the handler raises.

        Returns:
            The handler's result, or False if nothing matched
        """
        with self.evaluate(expr) as node_set:
            if not node_set:
                return False
            logger.debug(f"Dispatching {node_set.count} node(s) for {expr!r} "
                         f"starting at {get_element_path(node_set[0])}")
            return bool(handler(node_set))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def inner_xml(self, node: Any) -> str:
        """Serialize the content of ``node`` using the configured formatting."""
        return inner_xml(node, pretty_print=self.config.pretty_print)

    def outer_xml(self, node: Any) -> str:
        """Serialize ``node`` with its own tag using the configured formatting."""
        return outer_xml(node, pretty_print=self.config.pretty_print)

    def serialize_to_file(self, output_path: Union[str, Path]) -> bool:
        """
        Write the whole document to ``output_path``.

        Parent directories are created as needed. The document is not
        modified.

        Returns:
            True on success, False for an invalid context or an I/O error
        """
        if not self.is_valid:
            logger.warning(f"Cannot serialize invalid document to {output_path}")
            return False

        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._tree.write(
                str(output_path),
                encoding=self.config.encoding,
                xml_declaration=self.config.xml_declaration,
                pretty_print=self.config.pretty_print,
            )
        except (OSError, etree.SerialisationError) as e:
            logger.error(f"Failed to write document to {output_path}: {e}")
            return False

        logger.info(f"Document written to {output_path}")
        return True

    def __repr__(self) -> str:
        if not self.is_valid:
            return "<DocumentContext invalid>"
        return f"<DocumentContext root=<{local_name(self._root)}>>"
