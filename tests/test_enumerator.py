"""
Node Enumerator Tests

Run with: pytest tests/test_enumerator.py -v
"""

import pytest

from xmlparser_core import DocumentContext, NodeEnumerator, ResourceReleasedError
from xmlparser_core.xml import get_child_content, local_name


class TestEnumeration:
    """Tests for has_next/next_node traversal."""

    def test_visits_every_match_in_order(self, doc):
        titles = []
        with NodeEnumerator(doc, "//item") as items:
            assert items.count == 2
            while items.has_next():
                found, title = get_child_content(items.next_node(), "title")
                assert found
                titles.append(title)
        assert titles == ["First", "Second"]

    def test_next_calls_equal_match_count(self, doc):
        with NodeEnumerator(doc, "/msg/appmsg/*") as children:
            calls = 0
            while children.has_next():
                children.next_node()
                calls += 1
            assert calls == children.count == 5

    def test_has_next_false_only_at_last_position(self, doc):
        with NodeEnumerator(doc, "//url") as urls:
            assert urls.cursor == -1
            while urls.has_next():
                assert urls.cursor < urls.count - 1
                urls.next_node()
            assert urls.cursor == urls.count - 1

    def test_next_past_end_raises(self, doc):
        with NodeEnumerator(doc, "/msg/fromusername") as nodes:
            nodes.next_node()
            with pytest.raises(IndexError):
                nodes.next_node()
            assert nodes.cursor == 0

    def test_reset_restarts(self, doc):
        with NodeEnumerator(doc, "//item/title") as titles:
            first_pass = [t.text for t in titles]
            titles.reset()
            assert titles.cursor == -1
            second_pass = [t.text for t in titles]
        assert first_pass == second_pass == ["First", "Second"]

    def test_iteration_resumes_from_cursor(self, doc):
        with NodeEnumerator(doc, "//item/title") as titles:
            titles.next_node()
            assert [t.text for t in titles] == ["Second"]

    def test_repr(self, doc):
        with NodeEnumerator(doc, "//item") as items:
            items.next_node()
            assert repr(items) == "<NodeEnumerator 1/2 '//item'>"


class TestValidity:
    """Tests for invalid and empty results."""

    def test_empty_result_is_valid(self, doc):
        with NodeEnumerator(doc, "//nothing") as nodes:
            assert not nodes.is_invalid()
            assert nodes.count == 0
            assert not nodes.has_next()

    def test_malformed_expression_is_invalid(self, doc):
        with NodeEnumerator(doc, "//[") as nodes:
            assert nodes.is_invalid()
            assert not nodes.has_next()

    def test_non_node_result_is_valid_and_empty(self, doc):
        with NodeEnumerator(doc, "count(//item)") as nodes:
            assert not nodes.is_invalid()
            assert nodes.count == 0

    def test_invalid_context(self, invalid_doc):
        with NodeEnumerator(invalid_doc, "/r") as nodes:
            assert nodes.is_invalid()
            assert not nodes.has_next()


class TestScopedEnumeration:
    """Tests for enumerators scoped under a node."""

    def test_relative_expression_under_scope(self, doc):
        category = doc.root.find("appmsg/mmreader/category")
        with NodeEnumerator(doc, "item", category) as items:
            assert items.count == 2
            assert [local_name(item) for item in items] == ["item", "item"]

    def test_nested_enumerators(self, doc):
        urls = []
        with NodeEnumerator(doc, "//item") as items:
            for item in items:
                with NodeEnumerator(doc, "url", item) as item_urls:
                    urls.extend(url.text for url in item_urls)
        assert urls == ["https://example.com/1", "https://example.com/2"]

    def test_foreign_scope_is_invalid(self, doc):
        with DocumentContext("<r><item/></r>") as other:
            with NodeEnumerator(doc, "item", other.root) as items:
                assert items.is_invalid()


class TestRelease:
    """Tests for node-set release."""

    def test_close_is_idempotent(self, doc):
        items = NodeEnumerator(doc, "//item")
        items.close()
        items.close()

    def test_next_after_close_raises(self, doc):
        items = NodeEnumerator(doc, "//item")
        items.close()
        with pytest.raises(ResourceReleasedError):
            items.next_node()
        assert items.cursor == -1

    def test_context_close_releases_enumerator(self, message_xml):
        doc = DocumentContext(message_xml)
        items = NodeEnumerator(doc, "//item")
        doc.close()
        with pytest.raises(ResourceReleasedError):
            items.next_node()
