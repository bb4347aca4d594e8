"""
ELK layout adapter.

Converts graph nodes/edges into the ELK JSON graph format, runs an external
ELK layout engine, and copies the computed positions back onto the nodes.

The engine is a collaborator: anything with an async `layout(graph) -> graph`
method. `HttpElkEngine` talks to an ELK layout service over HTTP.

Hierarchy:
- Nodes with a `parent_id` become `children` of their parent's ELK node
- Container nodes get rectpacking and a top padding that leaves room for
  the parent's own header and content lines
"""

import logging
import os
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel

from .models import GraphEdge, GraphNode, LayoutDirection
from .sizing import container_top_padding

logger = logging.getLogger(__name__)

# ELK layout service endpoint used by HttpElkEngine
ELK_SERVICE_URL = os.environ.get("SYSML_DIAGRAM_ELK_URL", "http://127.0.0.1:8766/layout")

# Id of the synthetic root graph; results are read from its children only
ROOT_ID = "__root__"

# Default ELK layout options for SysML diagrams
DEFAULT_ELK_OPTIONS: dict[str, str] = {
    "elk.algorithm": "layered",
    "elk.direction": "DOWN",
    "elk.spacing.nodeNode": "40",
    "elk.spacing.edgeNode": "20",
    "elk.layered.spacing.nodeNodeBetweenLayers": "60",
    "elk.layered.spacing.edgeNodeBetweenLayers": "20",
    "elk.hierarchyHandling": "INCLUDE_CHILDREN",
    "elk.padding": "[top=20,left=20,bottom=20,right=20]",
    "elk.layered.crossingMinimization.strategy": "LAYER_SWEEP",
    "elk.layered.nodePlacement.strategy": "NETWORK_SIMPLEX",
    "elk.separateConnectedComponents": "true",
    # Prefer more square layouts
    "elk.aspectRatio": "1.6",
    "elk.layered.wrapping.strategy": "MULTI_EDGE",
    "elk.layered.wrapping.additionalEdgeSpacing": "20",
}

# Container sub-layout: grid-like packing of children
CONTAINER_SPACING = 30
CONTAINER_PADDING_LEFT = 20
CONTAINER_PADDING_BOTTOM = 30
CONTAINER_PADDING_RIGHT = 20
CONTAINER_TARGET_WIDTH = 600

ELK_DIRECTIONS = {
    LayoutDirection.TB.value: "DOWN",
    LayoutDirection.BT.value: "UP",
    LayoutDirection.LR.value: "RIGHT",
    LayoutDirection.RL.value: "LEFT",
}


class LayoutEngineError(Exception):
    """Raised when the external layout engine rejects or fails a request."""
    pass


class LayoutEngine(Protocol):
    """An external hierarchical layout engine (one request, one response)."""

    async def layout(self, graph: dict) -> dict:
        ...


class ElkLayoutOptions(BaseModel):
    """Overrides applied on top of DEFAULT_ELK_OPTIONS."""
    algorithm: Optional[str] = None       # 'layered', 'rectpacking', 'force', ...
    direction: Optional[str] = None       # 'DOWN', 'RIGHT', 'UP', 'LEFT'
    node_spacing: Optional[float] = None  # Spacing between sibling nodes
    layer_spacing: Optional[float] = None  # Spacing between layers
    padding: Optional[float] = None       # Padding inside the root graph

    def to_layout_options(self) -> dict[str, str]:
        """Build the root `layoutOptions` dict."""
        options = dict(DEFAULT_ELK_OPTIONS)
        if self.algorithm:
            options["elk.algorithm"] = self.algorithm
        if self.direction:
            options["elk.direction"] = self.direction
        if self.node_spacing:
            options["elk.spacing.nodeNode"] = _num(self.node_spacing)
        if self.layer_spacing:
            options["elk.layered.spacing.nodeNodeBetweenLayers"] = _num(self.layer_spacing)
        if self.padding:
            p = _num(self.padding)
            options["elk.padding"] = f"[top={p},left={p},bottom={p},right={p}]"
        return options


class HttpElkEngine:
    """
    ELK engine reached over HTTP.

    POSTs the ELK JSON graph and expects the laid-out graph back as JSON.
    """

    def __init__(
        self,
        url: str = ELK_SERVICE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def layout(self, graph: dict) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.url, json=graph)
            except httpx.HTTPError as exc:
                raise LayoutEngineError(f"Layout engine unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise LayoutEngineError(
                f"Layout engine error {response.status_code}: {response.text}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise LayoutEngineError(f"Layout engine returned invalid JSON: {exc}") from exc


def _num(value: float) -> str:
    """Format a number for ELK option strings (no trailing .0)."""
    return format(value, "g")


def _container_options(node: GraphNode) -> dict[str, str]:
    top = _num(container_top_padding(node.content))
    return {
        "elk.algorithm": "rectpacking",
        "elk.spacing.nodeNode": str(CONTAINER_SPACING),
        "elk.padding": (
            f"[top={top},left={CONTAINER_PADDING_LEFT},"
            f"bottom={CONTAINER_PADDING_BOTTOM},right={CONTAINER_PADDING_RIGHT}]"
        ),
        # Target width controls how many children per row
        "elk.rectpacking.widthApproximation.targetWidth": str(CONTAINER_TARGET_WIDTH),
        # Allow container to grow to fit children
        "elk.nodeSize.constraints": "MINIMUM_SIZE",
    }


def build_elk_graph(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    layout_options: Optional[dict[str, str]] = None,
) -> dict:
    """
    Build an ELK JSON graph from graph nodes/edges.

    Args:
        nodes: Nodes (may reference a parent via `parent_id`)
        edges: Edges; those with an unknown endpoint are left out
        layout_options: Root layout options (defaults to DEFAULT_ELK_OPTIONS)

    Returns:
        Root ELK node with nested `children` and a flat `edges` list
    """
    node_ids = {n.id for n in nodes}

    children_map: dict[Optional[str], list[GraphNode]] = {}
    for node in nodes:
        parent_id = node.parent_id if node.parent_id in node_ids else None
        children_map.setdefault(parent_id, []).append(node)

    visited: set[str] = set()

    def build_elk_node(node: GraphNode) -> dict:
        visited.add(node.id)
        children = [c for c in children_map.get(node.id, []) if c.id not in visited]

        elk_node = {
            "id": node.id,
            "width": node.size.width,
            "height": node.size.height,
        }
        if children:
            elk_node["layoutOptions"] = _container_options(node)
            elk_node["children"] = [build_elk_node(c) for c in children]
        return elk_node

    elk_children = [build_elk_node(n) for n in children_map.get(None, [])]

    # Parent cycles leave nodes unreachable from the root; lay them out at top level
    for node in nodes:
        if node.id not in visited:
            elk_children.append(build_elk_node(node))

    elk_edges = [
        {"id": e.id, "sources": [e.source], "targets": [e.target]}
        for e in edges
        if e.source in node_ids and e.target in node_ids
    ]

    return {
        "id": ROOT_ID,
        "layoutOptions": layout_options if layout_options is not None else dict(DEFAULT_ELK_OPTIONS),
        "children": elk_children,
        "edges": elk_edges,
    }


def apply_elk_positions(nodes: list[GraphNode], laid_out: dict) -> list[GraphNode]:
    """
    Copy positions (and resized dimensions) from an ELK result onto nodes.

    Coordinates are taken as ELK reports them: relative to the parent node.
    Nodes missing from the result keep their current position.

    Returns:
        The same list of nodes (modified in-place)
    """
    reported: dict[str, dict] = {}

    def collect(elk_node: dict) -> None:
        reported[elk_node["id"]] = elk_node
        for child in elk_node.get("children") or []:
            collect(child)

    # The top-level dict is the root graph itself, not a node
    for child in laid_out.get("children") or []:
        collect(child)

    for node in nodes:
        elk_node = reported.get(node.id)
        if elk_node is None:
            logger.debug("Layout engine did not report node %s", node.id)
            continue

        node.position.x = elk_node.get("x") or 0
        node.position.y = elk_node.get("y") or 0
        if elk_node.get("width"):
            node.size.width = elk_node["width"]
        if elk_node.get("height"):
            node.size.height = elk_node["height"]

    return nodes


async def apply_elk_layout(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    engine: LayoutEngine,
    options: Optional[ElkLayoutOptions] = None,
) -> list[GraphNode]:
    """
    Lay out nodes with an external ELK engine.

    Issues exactly one engine request. Engine failures propagate to the
    caller; there is no retry and no fallback layout.

    Returns:
        The same list of nodes with positions set
    """
    if not nodes:
        return nodes

    layout_options = (options or ElkLayoutOptions()).to_layout_options()
    graph = build_elk_graph(nodes, edges, layout_options)

    laid_out = await engine.layout(graph)

    return apply_elk_positions(nodes, laid_out)
