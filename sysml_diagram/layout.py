"""
Self-contained layout algorithms for graph nodes.

Provides the simple layout strategies used by view rendering:
- Level: Breadth-first rank from root nodes, one row (or column) per rank
- Grid: Square-ish grid in input order, no edge awareness

Plus post-processing helpers for rendered views (label/detail stripping).

Layout functions modify node positions in-place and return the same list.
Both are deterministic and treat an empty node list as a no-op.
"""

import math
from collections import defaultdict, deque
from typing import Callable, Optional

from pydantic import BaseModel

from .models import GraphEdge, GraphNode, LayoutDirection


class LevelLayoutOptions(BaseModel):
    """Spacing used by the level and grid layouts."""
    node_width: float = 160
    node_height: float = 80
    horizontal_gap: float = 80
    vertical_gap: float = 100
    direction: str = LayoutDirection.TB.value
    center_x: float = 300  # Each level is centered on this coordinate
    start_y: float = 50    # Offset of the first level


def build_adjacency(edges: list[GraphEdge]) -> dict[str, list[str]]:
    """Build outgoing adjacency (source -> targets) from edges."""
    graph: dict[str, list[str]] = defaultdict(list)
    for edge in edges:
        graph[edge.source].append(edge.target)
    return dict(graph)


def calculate_levels(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    roots: Optional[list[str]] = None,
) -> dict[str, int]:
    """
    Assign each node its shortest hop distance from any root.

    Roots are the nodes without incoming edges unless given explicitly.
    Nodes unreachable from every root get the deepest level observed, so
    they render on the last row rather than on top of the roots.

    Args:
        nodes: Nodes to rank
        edges: Directed edges
        roots: Explicit start node IDs (optional)

    Returns:
        Mapping of node ID to level
    """
    graph = build_adjacency(edges)

    if roots is None:
        has_incoming = {e.target for e in edges}
        roots = [n.id for n in nodes if n.id not in has_incoming]

    # Multi-source BFS
    levels: dict[str, int] = {}
    queue: deque[str] = deque()
    for root in roots:
        if root not in levels:
            levels[root] = 0
            queue.append(root)

    while queue:
        node_id = queue.popleft()
        for neighbor in graph.get(node_id, []):
            if neighbor not in levels:
                levels[neighbor] = levels[node_id] + 1
                queue.append(neighbor)

    # Unvisited nodes (e.g. pure cycles) go to the deepest level
    max_level = max(levels.values(), default=0)
    for node in nodes:
        if node.id not in levels:
            levels[node.id] = max_level

    return levels


def level_layout(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    options: Optional[LevelLayoutOptions] = None,
) -> list[GraphNode]:
    """
    Arrange nodes in levels based on edge directions.

    Nodes of the same level are spread evenly along one axis and centered;
    levels advance along the other. TB/BT stack levels vertically, LR/RL
    horizontally. BT and RL reverse the level order.

    Args:
        nodes: Nodes to arrange
        edges: Edges defining the ranking
        options: Spacing and direction

    Returns:
        The same list of nodes (modified in-place)
    """
    if not nodes:
        return nodes

    opts = options or LevelLayoutOptions()
    direction = opts.direction
    if direction not in {d.value for d in LayoutDirection}:
        direction = LayoutDirection.TB.value

    levels = calculate_levels(nodes, edges)
    max_level = max(levels.values(), default=0)

    # Group by level, keeping input order within each level
    by_level: dict[int, list[GraphNode]] = defaultdict(list)
    for node in nodes:
        by_level[levels[node.id]].append(node)

    for level, level_nodes in by_level.items():
        count = len(level_nodes)
        total_width = count * opts.node_width + (count - 1) * opts.horizontal_gap

        rank = level
        if direction in (LayoutDirection.BT.value, LayoutDirection.RL.value):
            rank = max_level - level

        for idx, node in enumerate(level_nodes):
            across = idx * (opts.node_width + opts.horizontal_gap) - total_width / 2 + opts.center_x
            down = rank * (opts.node_height + opts.vertical_gap) + opts.start_y

            if direction in (LayoutDirection.TB.value, LayoutDirection.BT.value):
                node.position.x, node.position.y = across, down
            else:  # horizontal
                node.position.x, node.position.y = down, across

    return nodes


def grid_layout(
    nodes: list[GraphNode],
    options: Optional[LevelLayoutOptions] = None,
) -> list[GraphNode]:
    """
    Arrange nodes in a square-ish grid, row by row in input order.

    Args:
        nodes: Nodes to arrange
        options: Cell size and gaps (direction is ignored)

    Returns:
        The same list of nodes (modified in-place)
    """
    if not nodes:
        return nodes

    opts = options or LevelLayoutOptions()
    columns = math.ceil(math.sqrt(len(nodes)))

    for i, node in enumerate(nodes):
        row = i // columns
        col = i % columns
        node.position.x = col * (opts.node_width + opts.horizontal_gap)
        node.position.y = row * (opts.node_height + opts.vertical_gap)

    return nodes


def categorize_nodes(
    nodes: list[GraphNode],
    categories: dict[str, Callable[[GraphNode], bool]],
) -> dict[str, list[GraphNode]]:
    """
    Bucket nodes by the first matching predicate.

    Nodes matching no predicate land in `other`.
    """
    result: dict[str, list[GraphNode]] = {key: [] for key in categories}
    result.setdefault("other", [])

    for node in nodes:
        for key, matcher in categories.items():
            if matcher(node):
                result[key].append(node)
                break
        else:
            result["other"].append(node)

    return result


def strip_edge_labels(edges: list[GraphEdge]) -> list[GraphEdge]:
    """Return copies of the edges with their labels removed."""
    return [e.model_copy(update={"label": None}) for e in edges]


def strip_node_data(nodes: list[GraphNode], keys: list[str]) -> list[GraphNode]:
    """Return deep copies of the nodes without the given data keys. Positions are kept."""
    result = []
    for n in nodes:
        copy = n.model_copy(deep=True)
        copy.data = {k: v for k, v in n.data.items() if k not in keys}
        result.append(copy)
    return result
