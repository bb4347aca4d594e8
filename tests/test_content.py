# tests/test_content.py

import pytest
from sysml_diagram import ContentIndex, ContentKind, Symbol, classify, format_content_line
from sysml_diagram.content import CONTENT_SEPARATOR, last_segment


def _symbol(**kwargs) -> Symbol:
    kwargs.setdefault("qualifiedName", f"P::{kwargs['name']}")
    return Symbol(**kwargs)


class TestClassify:

    @pytest.mark.parametrize("node_type", ["PortUsage", "PortDef", "ConjugatedPortUsage"])
    def test_port_types(self, node_type):
        assert classify(node_type) is ContentKind.PORT

    @pytest.mark.parametrize("node_type", ["AttributeUsage", "AttributeDef", "ReferenceUsage", "Feature"])
    def test_property_types(self, node_type):
        assert classify(node_type) is ContentKind.PROPERTY

    @pytest.mark.parametrize("node_type", ["PartDef", "ActionUsage", "Package", "NotARealType", ""])
    def test_everything_else_is_structural(self, node_type):
        assert classify(node_type) is ContentKind.STRUCTURAL


class TestFormatting:

    def test_last_segment(self):
        assert last_segment("A::B::C") == "C"
        assert last_segment("Plain") == "Plain"

    def test_name_only(self):
        assert format_content_line(_symbol(name="x", nodeType="AttributeUsage")) == "x"

    def test_name_and_type(self):
        line = format_content_line(_symbol(name="x", nodeType="AttributeUsage", typedBy="Lib::Units::T"))
        assert line == "x : T"

    def test_direction_name_and_type(self):
        line = format_content_line(_symbol(name="p", nodeType="PortUsage", direction="inout", typedBy="Q"))
        assert line == "inout p : Q"


class TestContentIndex:

    def test_properties_then_separator_then_ports(self):
        parent = _symbol(name="P", qualifiedName="P", nodeType="PartDef")
        index = ContentIndex.collect([
            parent,
            _symbol(name="x", nodeType="AttributeUsage", parent="P", typedBy="T"),
            _symbol(name="p", nodeType="PortUsage", parent="P", direction="in"),
        ])

        assert index.merge(parent) == ["x : T", CONTENT_SEPARATOR, "in p"]

    def test_features_come_last(self):
        parent = _symbol(name="P", qualifiedName="P", nodeType="PartDef", features=["do run"])
        index = ContentIndex.collect([
            _symbol(name="p", nodeType="PortUsage", parent="P"),
            parent,
        ])

        assert index.merge(parent) == [CONTENT_SEPARATOR, "p", "do run"]

    def test_no_separator_without_ports(self):
        parent = _symbol(name="P", qualifiedName="P", nodeType="PartDef")
        index = ContentIndex.collect([
            _symbol(name="a", nodeType="AttributeUsage", parent="P"),
            _symbol(name="b", nodeType="ReferenceUsage", parent="P"),
        ])

        assert index.merge(parent) == ["a", "b"]

    def test_input_order_is_preserved(self):
        parent = _symbol(name="P", qualifiedName="P", nodeType="PartDef")
        names = ["z", "a", "m"]
        index = ContentIndex.collect(
            [_symbol(name=n, nodeType="AttributeUsage", parent="P") for n in names]
        )

        assert index.merge(parent) == names

    def test_parentless_and_structural_symbols_are_not_consumed(self):
        index = ContentIndex()
        assert index.add(_symbol(name="lonely", nodeType="AttributeUsage")) is False
        assert index.add(_symbol(name="part", nodeType="PartUsage", parent="P")) is False
        assert index.add(_symbol(name="attr", nodeType="AttributeUsage", parent="P")) is True

    def test_empty_features_are_dropped(self):
        parent = _symbol(name="P", qualifiedName="P", nodeType="PartDef", features=["", "keep"])
        assert ContentIndex().merge(parent) == ["keep"]
