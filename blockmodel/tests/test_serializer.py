"""
Unit tests for the XmlFieldWriter serialization sink.

Tests cover:
- Start/end tags, attributes, and text content
- Escaping of attribute values and text
- Self-closing elements with no content
- Attribute order and stream errors
- Misuse: attributes after content, mismatched end tags
- Base Field serialization wraps the inner content
"""

import io
from unittest.mock import MagicMock

import pytest

from blockmodel.core.field import Field
from blockmodel.core.schema import FieldType
from blockmodel.core.serializer import XmlFieldWriter


@pytest.fixture
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def writer(buffer) -> XmlFieldWriter:
    return XmlFieldWriter(buffer)


class TestXmlFieldWriter:
    """Tests for writing markup through XmlFieldWriter."""

    def test_element_with_attribute_and_text(self, writer, buffer):
        writer.start_tag("field").attribute("name", "DATE").text("2016-02-29").end_tag("field")
        assert buffer.getvalue() == '<field name="DATE">2016-02-29</field>'

    def test_nested_elements(self, writer, buffer):
        writer.start_tag("block").start_tag("field").text("x").end_tag("field").end_tag("block")
        assert buffer.getvalue() == "<block><field>x</field></block>"

    def test_text_is_escaped(self, writer, buffer):
        writer.start_tag("field").text("a < b & c").end_tag("field")
        assert buffer.getvalue() == "<field>a &lt; b &amp; c</field>"

    def test_attribute_is_escaped(self, writer, buffer):
        writer.start_tag("field").attribute("name", "a&b").end_tag("field")
        assert buffer.getvalue() == '<field name="a&amp;b"/>'

    def test_empty_element_self_closes(self, writer, buffer):
        writer.start_tag("field").end_tag("field")
        assert buffer.getvalue() == "<field/>"

    def test_attribute_after_text_rejected(self, writer):
        writer.start_tag("field").text("x")
        with pytest.raises(RuntimeError, match="outside of a start tag"):
            writer.attribute("name", "DATE")

    def test_mismatched_end_tag_rejected(self, writer):
        writer.start_tag("field")
        with pytest.raises(RuntimeError, match="does not match"):
            writer.end_tag("block")

    def test_flush_keeps_element_open(self, writer, buffer):
        writer.start_tag("field").attribute("name", "DATE").text("x")
        writer.flush()
        assert buffer.getvalue() == '<field name="DATE">x'

    def test_attribute_order_preserved(self, writer, buffer):
        writer.start_tag("field").attribute("name", "DATE").attribute("id", "7").end_tag("field")
        assert buffer.getvalue() == '<field name="DATE" id="7"/>'

    def test_stream_errors_propagate(self):
        stream = MagicMock(spec=io.StringIO)
        stream.write.side_effect = OSError("broken pipe")
        writer = XmlFieldWriter(stream)
        with pytest.raises(OSError, match="broken pipe"):
            writer.start_tag("field").text("x")


class TestFieldSerialization:
    """Tests for the base Field serialize() contract."""

    def test_base_field_wraps_serialized_value(self, buffer):
        class ConstantField(Field):
            def get_serialized_value(self):
                return "value"

        ConstantField("NAME", FieldType.DATE).serialize(XmlFieldWriter(buffer))
        assert buffer.getvalue() == '<field name="NAME">value</field>'

    def test_base_field_value_handling_is_abstract(self):
        field = Field("NAME", FieldType.DATE)
        with pytest.raises(NotImplementedError):
            field.set_from_string("x")
        with pytest.raises(NotImplementedError):
            field.get_serialized_value()
        with pytest.raises(NotImplementedError):
            field.clone()
