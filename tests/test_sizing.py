# tests/test_sizing.py

from sysml_diagram import GraphNode
from sysml_diagram.sizing import (
    HEADER_ONLY_HEIGHT,
    NODE_SIZING,
    container_top_padding,
    content_height,
    group_feature_counts,
    node_size,
)


class TestFeatureGrouping:

    def test_keyword_sections(self):
        counts = group_feature_counts([
            "action drive",       # action
            "attribute speed",    # attribute (keyword)
            "plain",              # attribute (no type separator)
            "engine : Engine",    # part
        ])

        assert (counts.parts, counts.attrs, counts.actions) == (1, 2, 1)
        assert counts.section_count == 3

    def test_empty(self):
        assert group_feature_counts([]).section_count == 0


class TestNodeSize:

    def test_empty_leaf_is_header_only(self):
        size = node_size([], is_container=False)

        assert size.height == HEADER_ONLY_HEIGHT
        assert size.width == NODE_SIZING.default_width

    def test_unsized_graph_node_matches_empty_leaf(self):
        assert GraphNode(id="n", type="PartDef").size == node_size([], is_container=False)

    def test_first_line_adds_section_and_item(self):
        empty = node_size([], is_container=False).height
        one = node_size(["x : T"], is_container=False).height

        assert one - empty >= NODE_SIZING.section_header_height + NODE_SIZING.item_height

    def test_line_in_existing_section_adds_one_item(self):
        one = content_height(["x : T"])
        two = content_height(["x : T", "y : U"])

        assert two - one == NODE_SIZING.item_height

    def test_new_section_adds_header(self):
        one = content_height(["x : T"])
        two = content_height(["x : T", "action go"])

        assert two - one == NODE_SIZING.item_height + NODE_SIZING.section_header_height

    def test_container_floor(self):
        size = node_size([], is_container=True)

        assert size.width == NODE_SIZING.min_container_width
        assert size.height == NODE_SIZING.min_container_height

    def test_container_grows_with_content(self):
        lines = [f"p{i} : T" for i in range(10)]
        size = node_size(lines, is_container=True)

        assert size.height == content_height(lines) + NODE_SIZING.container_extra_height
        assert size.height > NODE_SIZING.min_container_height

    def test_deterministic(self):
        lines = ["x : T", "---", "in p"]
        assert node_size(lines, True) == node_size(list(lines), True)


class TestTopPadding:

    def test_top_padding_clears_content(self):
        lines = ["x : T", "---", "in p"]
        assert container_top_padding(lines) == content_height(lines) + NODE_SIZING.child_gap

    def test_top_padding_without_content(self):
        assert container_top_padding([]) == HEADER_ONLY_HEIGHT + NODE_SIZING.child_gap
