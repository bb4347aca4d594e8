"""
SysML Diagram - Layout pipeline for SysML v2 model diagrams.

Turns flat symbols and relationships into a sized, nested, positioned graph
ready for a renderer, using either an external ELK engine or the built-in
level and grid layouts.
"""

from .models import (
    # Enums
    ViewType,
    LayoutDirection,
    # Input models
    Symbol,
    Relationship,
    ViewConfig,
    DEFAULT_VIEW_CONFIG,
    # Graph models
    Size,
    Position,
    GraphNode,
    GraphEdge,
    LayoutResult,
)

from .node_types import (
    NodeType,
    EdgeType,
    NodeCategory,
    NodeConfig,
    EdgeConfig,
    get_node_config,
    get_edge_config,
    is_valid_node_type,
)
from .content import ContentKind, ContentIndex, classify, format_content_line
from .sizing import NODE_SIZING, node_size, content_height, container_top_padding
from .builder import assign_node_ids, build_graph, to_node_id
from .layout import (
    LevelLayoutOptions,
    calculate_levels,
    level_layout,
    grid_layout,
    categorize_nodes,
    strip_edge_labels,
    strip_node_data,
)
from .elk import (
    LayoutEngine,
    LayoutEngineError,
    HttpElkEngine,
    ElkLayoutOptions,
    build_elk_graph,
    apply_elk_layout,
)
from .strategy import GeneralViewLayout, SimpleViewLayout, create_layout_strategy
from .views import ResolvedView, render_view
from .validation import inspect_input, validation_summary, ValidationIssue, IssueSeverity

__all__ = [
    # Enums
    "ViewType",
    "LayoutDirection",
    "NodeType",
    "EdgeType",
    "NodeCategory",
    # Models
    "Symbol",
    "Relationship",
    "ViewConfig",
    "DEFAULT_VIEW_CONFIG",
    "Size",
    "Position",
    "GraphNode",
    "GraphEdge",
    "LayoutResult",
    # Type registry
    "NodeConfig",
    "EdgeConfig",
    "get_node_config",
    "get_edge_config",
    "is_valid_node_type",
    # Content and sizing
    "ContentKind",
    "ContentIndex",
    "classify",
    "format_content_line",
    "NODE_SIZING",
    "node_size",
    "content_height",
    "container_top_padding",
    # Graph building
    "build_graph",
    "assign_node_ids",
    "to_node_id",
    # Layout
    "LevelLayoutOptions",
    "calculate_levels",
    "level_layout",
    "grid_layout",
    "categorize_nodes",
    "strip_edge_labels",
    "strip_node_data",
    # ELK
    "LayoutEngine",
    "LayoutEngineError",
    "HttpElkEngine",
    "ElkLayoutOptions",
    "build_elk_graph",
    "apply_elk_layout",
    # Strategies and views
    "GeneralViewLayout",
    "SimpleViewLayout",
    "create_layout_strategy",
    "ResolvedView",
    "render_view",
    # Validation
    "inspect_input",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
]
