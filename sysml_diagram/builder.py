"""
Graph builder - turn flat symbols and relationships into a sized graph.

Steps:
1. Drop symbols whose type fails the view's node-type filter
2. Route properties/ports into their parent's content lines
3. Build one node per structural symbol with merged content and size
4. Link parents that survived filtering
5. Build edges whose endpoints both survived

Malformed input never raises: unknown types fall back to `default`, dangling
parents drop nesting, and dangling relationships drop the edge.
"""

import logging

from .content import ContentIndex, ContentKind, classify
from .models import (
    DEFAULT_VIEW_CONFIG,
    GraphEdge,
    GraphNode,
    LayoutResult,
    Relationship,
    Symbol,
    ViewConfig,
)
from .node_types import NodeType, get_edge_config, get_node_config, resolve_node_type
from .sizing import node_size

logger = logging.getLogger(__name__)


def to_node_id(qualified_name: str) -> str:
    """Stable node id for a qualified name (`A::B` -> `A_B`)."""
    return qualified_name.replace("::", "_")


def assign_node_ids(symbols: list[Symbol]) -> dict[str, str]:
    """
    Map qualified names to unique node ids.

    Names whose `to_node_id` form is already taken (`A::B` and `A_B`) get a
    numeric suffix in input order, so the first symbol keeps the plain id.
    A repeated qualified name keeps its first id.
    """
    ids: dict[str, str] = {}
    taken: set[str] = set()

    for symbol in symbols:
        if symbol.qualified_name in ids:
            continue
        base = to_node_id(symbol.qualified_name)
        node_id = base
        n = 2
        while node_id in taken:
            node_id = f"{base}__{n}"
            n += 1
        if node_id != base:
            logger.debug("Node id %s already taken, using %s for %s",
                         base, node_id, symbol.qualified_name)
        taken.add(node_id)
        ids[symbol.qualified_name] = node_id

    return ids


def build_graph(
    symbols: list[Symbol],
    relationships: list[Relationship],
    config: ViewConfig | None = None,
) -> LayoutResult:
    """
    Build the node and edge set for one layout call.

    Args:
        symbols: All model elements of the view
        relationships: All candidate relationships
        config: View configuration with type filters (defaults to GeneralView)

    Returns:
        Unpositioned graph; every node sits at (0, 0) until a layout runs
    """
    config = config or DEFAULT_VIEW_CONFIG

    content = ContentIndex()
    structural: list[Symbol] = []

    for symbol in symbols:
        if not config.should_show_node_type(symbol.node_type):
            continue
        if classify(symbol.node_type) is ContentKind.STRUCTURAL:
            structural.append(symbol)
        else:
            content.add(symbol)

    node_ids = assign_node_ids(structural)
    nodes = _build_nodes(structural, node_ids, content, config)
    edges = _build_edges(relationships, node_ids, config)

    logger.debug(
        "Built graph: %d nodes, %d edges from %d symbols, %d relationships",
        len(nodes), len(edges), len(symbols), len(relationships),
    )
    return LayoutResult(nodes=nodes, edges=edges)


def _build_nodes(
    symbols: list[Symbol],
    node_ids: dict[str, str],
    content: ContentIndex,
    config: ViewConfig,
) -> list[GraphNode]:
    # Nodes that some other retained structural node names as its parent
    has_children: set[str] = set()
    if config.show_nesting:
        for symbol in symbols:
            if symbol.parent in node_ids and symbol.parent != symbol.qualified_name:
                has_children.add(node_ids[symbol.parent])

    nodes: list[GraphNode] = []
    seen: set[str] = set()

    for symbol in symbols:
        if symbol.qualified_name in seen:
            logger.debug("Skipping duplicate qualified name %s", symbol.qualified_name)
            continue
        seen.add(symbol.qualified_name)
        node_id = node_ids[symbol.qualified_name]

        node_type = resolve_node_type(symbol.node_type)
        if node_type == NodeType.DEFAULT.value:
            logger.debug("Unknown node type %r for %s, using default",
                         symbol.node_type, symbol.qualified_name)
        node_config = get_node_config(node_type)

        lines = content.merge(symbol)
        is_container = node_id in has_children

        parent_id = None
        if config.show_nesting and symbol.parent:
            candidate = node_ids.get(symbol.parent)
            if candidate is not None and candidate != node_id:
                parent_id = candidate
            else:
                logger.debug("Dropping nesting of %s: parent %s not in view",
                             symbol.qualified_name, symbol.parent)

        nodes.append(GraphNode(
            id=node_id,
            type=node_type,
            parent_id=parent_id,
            content=lines,
            is_container=is_container,
            size=node_size(lines, is_container),
            data={
                "name": symbol.name,
                "qualifiedName": symbol.qualified_name,
                "stereotype": node_config.stereotype,
                "category": node_config.category.value,
                "features": lines or None,
                "typedBy": symbol.typed_by,
                "direction": symbol.direction,
            },
        ))

    return nodes


def _build_edges(
    relationships: list[Relationship],
    node_ids: dict[str, str],
    config: ViewConfig,
) -> list[GraphEdge]:
    visible = [r for r in relationships if config.should_show_edge_type(r.type)]
    edges: list[GraphEdge] = []

    for i, rel in enumerate(visible):
        source_id = node_ids.get(rel.source)
        target_id = node_ids.get(rel.target)

        # Only create edge if both endpoints are structural nodes in the view
        if source_id is None or target_id is None:
            logger.debug("Dropping %s edge %s -> %s: endpoint not in view",
                         rel.type, rel.source, rel.target)
            continue

        edge_config = get_edge_config(rel.type)
        edges.append(GraphEdge(
            id=f"edge_{i}",
            source=source_id,
            target=target_id,
            type=rel.type,
            label=rel.label if rel.label is not None else rel.type,
            multiplicity=rel.multiplicity,
            stereotype=edge_config.label,
            dashed=edge_config.dashed,
        ))

    return edges
