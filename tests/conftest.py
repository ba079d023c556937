"""Shared fixtures for xmlparser_core tests."""

import pytest

from xmlparser_core import DocumentContext


MESSAGE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<msg>
    <appmsg appid="wx123" sdkver="0">
        <title>Weekly digest</title>
        <des>Five articles</des>
        <type>5</type>
        <url>https://example.com/digest</url>
        <mmreader>
            <category type="20" count="2">
                <name>Digest</name>
                <item>
                    <title>First</title>
                    <url>https://example.com/1</url>
                </item>
                <!-- promoted -->
                <item>
                    <title>Second</title>
                    <url>https://example.com/2</url>
                </item>
            </category>
        </mmreader>
    </appmsg>
    <img cdnurl="https://cdn.example.com/a.jpg" length="1024" md5="abc"/>
    <fromusername>alice</fromusername>
</msg>
"""


@pytest.fixture
def message_xml():
    """Sample message document."""
    return MESSAGE_XML


@pytest.fixture
def doc(message_xml):
    """Open document context over the sample message."""
    context = DocumentContext(message_xml)
    yield context
    context.close()


@pytest.fixture
def invalid_doc():
    """Context over input that cannot be parsed at all."""
    context = DocumentContext("this is not xml", suppress_errors=True)
    yield context
    context.close()
