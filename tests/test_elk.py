# tests/test_elk.py

import asyncio
import json

import httpx
import pytest
from sysml_diagram import (
    ElkLayoutOptions,
    GraphEdge,
    GraphNode,
    HttpElkEngine,
    LayoutEngineError,
    Symbol,
    apply_elk_layout,
    build_elk_graph,
    build_graph,
)
from sysml_diagram.elk import DEFAULT_ELK_OPTIONS, ROOT_ID, apply_elk_positions
from sysml_diagram.sizing import container_top_padding


class TestLayoutOptions:

    def test_defaults(self):
        assert ElkLayoutOptions().to_layout_options() == DEFAULT_ELK_OPTIONS

    def test_overrides(self):
        options = ElkLayoutOptions(direction="RIGHT", node_spacing=60, padding=40).to_layout_options()

        assert options["elk.direction"] == "RIGHT"
        assert options["elk.spacing.nodeNode"] == "60"
        assert options["elk.padding"] == "[top=40,left=40,bottom=40,right=40]"
        assert options["elk.algorithm"] == "layered"


class TestBuildElkGraph:

    def test_nesting_and_sizes(self, symbols, relationships):
        graph = build_graph(symbols, relationships)
        elk = build_elk_graph(graph.nodes, graph.edges)

        assert elk["id"] == ROOT_ID
        assert [c["id"] for c in elk["children"]] == ["Pkg_Vehicle", "Pkg_Engine"]

        vehicle = elk["children"][0]
        assert [c["id"] for c in vehicle["children"]] == ["Pkg_Vehicle_engine", "Pkg_Vehicle_wheels"]
        assert vehicle["width"] == graph.get_node("Pkg_Vehicle").size.width

    def test_container_padding_uses_content_height(self, symbols, relationships):
        graph = build_graph(symbols, relationships)
        vehicle = build_elk_graph(graph.nodes, graph.edges)["children"][0]

        top = format(container_top_padding(graph.get_node("Pkg_Vehicle").content), "g")
        options = vehicle["layoutOptions"]
        assert options["elk.algorithm"] == "rectpacking"
        assert options["elk.padding"] == f"[top={top},left=20,bottom=30,right=20]"

    def test_leaves_have_no_layout_options(self, symbols, relationships):
        graph = build_graph(symbols, relationships)
        engine_def = build_elk_graph(graph.nodes, graph.edges)["children"][1]

        assert "layoutOptions" not in engine_def
        assert "children" not in engine_def

    def test_edges_are_filtered_again(self):
        nodes = [GraphNode(id="a", type="PartDef")]
        edges = [
            GraphEdge(id="e0", source="a", target="a", type="flow"),
            GraphEdge(id="e1", source="a", target="ghost", type="flow"),
        ]

        elk = build_elk_graph(nodes, edges)

        assert elk["edges"] == [{"id": "e0", "sources": ["a"], "targets": ["a"]}]

    def test_parent_cycle_does_not_lose_nodes(self):
        nodes = [
            GraphNode(id="a", type="PartDef", parent_id="b"),
            GraphNode(id="b", type="PartDef", parent_id="a"),
        ]

        elk = build_elk_graph(nodes, [])

        assert elk["children"][0]["id"] == "a"
        assert elk["children"][0]["children"][0]["id"] == "b"


class TestApplyPositions:

    def test_nested_positions_and_resize(self):
        nodes = [
            GraphNode(id="p", type="PartDef", is_container=True),
            GraphNode(id="c", type="PartUsage", parent_id="p"),
            GraphNode(id="lost", type="PartUsage"),
        ]
        nodes[2].position.x = 7

        laid_out = {
            "id": "root",
            "children": [{
                "id": "p", "x": 10, "y": 20, "width": 500, "height": 400,
                "children": [{"id": "c", "x": 30, "y": 240}],
            }],
        }

        apply_elk_positions(nodes, laid_out)

        assert (nodes[0].position.x, nodes[0].position.y) == (10, 20)
        assert (nodes[0].size.width, nodes[0].size.height) == (500, 400)
        assert (nodes[1].position.x, nodes[1].position.y) == (30, 240)
        assert nodes[1].size.width == 200
        assert nodes[2].position.x == 7

    def test_node_named_like_the_root_is_positioned(self):
        graph = build_graph([Symbol(name="root", qualifiedName="root", nodeType="PartDef")], [])
        request = build_elk_graph(graph.nodes, graph.edges)

        assert request["id"] != "root"
        assert request["children"][0]["id"] == "root"

        laid_out = dict(request, children=[{"id": "root", "x": 111, "y": 222}])
        apply_elk_positions(graph.nodes, laid_out)

        assert (graph.nodes[0].position.x, graph.nodes[0].position.y) == (111, 222)


class TestApplyElkLayout:

    def test_one_request_and_positions_applied(self, symbols, relationships, fake_engine):
        graph = build_graph(symbols, relationships)

        asyncio.run(apply_elk_layout(graph.nodes, graph.edges, fake_engine))

        assert len(fake_engine.requests) == 1
        positions = {n.id: (n.position.x, n.position.y) for n in graph.nodes}
        assert positions["Pkg_Vehicle"] == (0, 0)
        assert positions["Pkg_Vehicle_engine"] == (10, 20)
        assert positions["Pkg_Engine"] == (30, 60)

    def test_empty_graph_is_noop(self, fake_engine):
        assert asyncio.run(apply_elk_layout([], [], fake_engine)) == []
        assert fake_engine.requests == []

    def test_engine_failure_propagates(self, symbols, relationships, failing_engine):
        graph = build_graph(symbols, relationships)

        with pytest.raises(RuntimeError, match="engine crashed"):
            asyncio.run(apply_elk_layout(graph.nodes, graph.edges, failing_engine))


class TestHttpElkEngine:

    def test_posts_graph_and_returns_result(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            graph = json.loads(request.content)
            return httpx.Response(200, json=dict(graph, width=100, height=50))

        engine = HttpElkEngine(url="http://elk.test/layout", transport=httpx.MockTransport(handler))
        result = asyncio.run(engine.layout({"id": "root", "children": [], "edges": []}))

        assert seen["url"] == "http://elk.test/layout"
        assert result["width"] == 100

    def test_error_status_raises(self):
        engine = HttpElkEngine(
            url="http://elk.test/layout",
            transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
        )

        with pytest.raises(LayoutEngineError, match="500"):
            asyncio.run(engine.layout({"id": "root"}))

    def test_invalid_json_raises(self):
        engine = HttpElkEngine(
            url="http://elk.test/layout",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
        )

        with pytest.raises(LayoutEngineError, match="invalid JSON"):
            asyncio.run(engine.layout({"id": ROOT_ID}))

    def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        engine = HttpElkEngine(url="http://elk.test/layout", transport=httpx.MockTransport(handler))

        with pytest.raises(LayoutEngineError, match="unreachable"):
            asyncio.run(engine.layout({"id": "root"}))
