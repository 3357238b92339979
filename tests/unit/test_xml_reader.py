"""
Unit tests for the XML reader and the parsed tree shape.
"""

import pytest
from lxml import etree

from posts_pipeline.batch.readers import (
    ScalarNode,
    SequenceNode,
    XmlReader,
    element_to_node,
    ensure_sequence,
    record_from_node,
)
from posts_pipeline.core.errors import FileReadError, XmlParseError


class TestEnsureSequence:
    """Tests for the single-vs-many normalization"""

    def test_none_is_empty(self):
        assert ensure_sequence(None) == ()

    def test_scalar_is_wrapped(self):
        node = ScalarNode({"Id": ScalarNode("1")})
        assert ensure_sequence(node) == (node,)

    def test_sequence_is_unwrapped(self):
        first, second = ScalarNode("a"), ScalarNode("b")
        assert ensure_sequence(SequenceNode((first, second))) == (first, second)


class TestElementToNode:
    """Tests for element conversion"""

    def test_text_only_element(self):
        node = element_to_node(etree.fromstring("<Title>Hello</Title>"))
        assert node == ScalarNode("Hello")
        assert node.is_text

    def test_empty_element_is_empty_text(self):
        assert element_to_node(etree.fromstring("<row/>")) == ScalarNode("")

    def test_attributes_and_children_share_one_mapping(self):
        node = element_to_node(etree.fromstring('<row Id="7"><Title>T</Title></row>'))
        assert node.fields == {"Id": ScalarNode("7"), "Title": ScalarNode("T")}

    def test_repeated_children_become_sequence(self):
        node = element_to_node(etree.fromstring("<posts><row Id='1'/><row Id='2'/></posts>"))
        rows = node.get("row")
        assert isinstance(rows, SequenceNode)
        assert len(rows) == 2

    def test_single_child_stays_scalar(self):
        node = element_to_node(etree.fromstring("<posts><row Id='1'/></posts>"))
        assert isinstance(node.get("row"), ScalarNode)

    def test_mixed_text_kept_under_underscore(self):
        node = element_to_node(etree.fromstring('<Title lang="en">Hello</Title>'))
        assert node.fields["_"] == ScalarNode("Hello")
        assert node.fields["lang"] == ScalarNode("en")

    def test_record_drops_nested_values(self):
        node = element_to_node(etree.fromstring('<row Id="1"><Meta><a>x</a></Meta></row>'))
        assert record_from_node(node) == {"Id": "1"}


class TestXmlReader:
    """Tests for reading files into raw records"""

    def test_reads_every_row(self, posts_xml):
        records = XmlReader().read_records(posts_xml)
        assert [record["Id"] for record in records] == ["1", "2", "3", "4"]

    def test_attributes_are_decoded_text(self, posts_xml):
        first = XmlReader().read_records(posts_xml)[0]
        assert first["channel"] == "1"
        assert first["Body"] == "<p>How should I elicit priors?</p>"
        assert first["Tags"] == "&lt;bayesian&gt;&lt;prior&gt;"

    def test_single_row_is_a_sequence_of_one(self, write_xml):
        path = write_xml('<posts><row Id="9" ViewCount="3"/></posts>')
        assert XmlReader().read_records(path) == [{"Id": "9", "ViewCount": "3"}]

    def test_child_elements_merge_with_attributes(self, write_xml):
        path = write_xml('<posts><row Id="9"><Title>From child</Title></row></posts>')
        assert XmlReader().read_records(path) == [{"Id": "9", "Title": "From child"}]

    def test_empty_root_has_no_records(self, write_xml):
        assert XmlReader().read_records(write_xml("<posts></posts>")) == []

    def test_wrong_root_raises(self, write_xml):
        with pytest.raises(XmlParseError) as exc_info:
            XmlReader().read_records(write_xml("<users><row Id='1'/></users>"))
        assert "<posts>" in str(exc_info.value)

    def test_missing_file_raises_read_error(self, tmp_path):
        with pytest.raises(FileReadError):
            XmlReader().read(tmp_path / "missing.xml")

    def test_malformed_xml_raises_parse_error(self, write_xml):
        with pytest.raises(XmlParseError):
            XmlReader().read(write_xml("<posts><row Id='1'></posts>"))

    def test_empty_file_raises_parse_error(self, write_xml):
        with pytest.raises(XmlParseError):
            XmlReader().read(write_xml(""))

    def test_document_node_is_keyed_by_root(self, write_xml):
        document = XmlReader().read(write_xml("<posts/>"))
        assert document.fields == {"posts": ScalarNode("")}

    def test_deeply_nested_row_content_is_dropped(self, write_xml):
        depth = 1500
        nested = "<a>" * depth + "deep" + "</a>" * depth
        path = write_xml(f'<posts><row Id="1" ViewCount="5">{nested}</row><row Id="2"/></posts>')

        records = XmlReader().read_records(path)

        assert records == [{"Id": "1", "ViewCount": "5"}, {"Id": "2"}]
