"""
View rendering - pick a layout for a resolved view and post-process it.

The layout choice is a fixed table keyed by view type:
- InterconnectionView -> grid
- GeneralView, ActionFlowView, StateTransitionView and anything else -> level

After layout, edge labels and view-specific detail fields can be stripped.
Nothing is kept between calls.
"""

import logging
from typing import Callable, Optional

from pydantic import BaseModel, Field

from .layout import (
    LevelLayoutOptions,
    grid_layout,
    level_layout,
    strip_edge_labels,
    strip_node_data,
)
from .models import GraphEdge, GraphNode, LayoutDirection, LayoutResult, ViewType

logger = logging.getLogger(__name__)

LayoutFn = Callable[[list[GraphNode], list[GraphEdge], LevelLayoutOptions], list[GraphNode]]


def _grid(nodes: list[GraphNode], edges: list[GraphEdge], options: LevelLayoutOptions) -> list[GraphNode]:
    return grid_layout(nodes, options)


LAYOUT_BY_VIEW_TYPE: dict[str, LayoutFn] = {
    ViewType.INTERCONNECTION.value: _grid,
    ViewType.ACTION_FLOW.value: level_layout,
    ViewType.STATE_TRANSITION.value: level_layout,
    ViewType.GENERAL.value: level_layout,
}

# Data keys hidden when details are turned off
HIDDEN_DATA_KEYS: dict[str, list[str]] = {
    ViewType.STATE_TRANSITION.value: ["entryAction", "exitAction", "doActivity"],
}


class ResolvedView(BaseModel):
    """A view whose nodes and edges have already been resolved upstream."""
    view_type: Optional[str] = None
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


def layout_for_view_type(view_type: Optional[str]) -> LayoutFn:
    """Get the layout function for a view type (level layout by default)."""
    return LAYOUT_BY_VIEW_TYPE.get(view_type or ViewType.GENERAL.value, level_layout)


def hidden_data_keys(view_type: Optional[str]) -> list[str]:
    return HIDDEN_DATA_KEYS.get(view_type or "", [])


def render_view(
    view: ResolvedView,
    direction: str = LayoutDirection.TB.value,
    show_labels: bool = True,
    show_details: bool = True,
    options: Optional[LevelLayoutOptions] = None,
) -> LayoutResult:
    """
    Lay out a resolved view for the renderer.

    Args:
        view: Resolved view (left untouched; nodes are copied before layout)
        direction: Level direction (TB, BT, LR, RL)
        show_labels: Keep edge labels
        show_details: Keep view-specific detail fields on nodes
        options: Spacing overrides

    Returns:
        Positioned nodes and edges
    """
    view_type = view.view_type or ViewType.GENERAL.value
    opts = (options or LevelLayoutOptions()).model_copy(update={"direction": direction})

    nodes = [n.model_copy(deep=True) for n in view.nodes]
    edges = list(view.edges)

    layout_fn = layout_for_view_type(view_type)
    nodes = layout_fn(nodes, edges, opts)

    if not show_labels:
        edges = strip_edge_labels(edges)

    if not show_details:
        nodes = strip_node_data(nodes, hidden_data_keys(view_type))

    logger.debug("Rendered %s: %d nodes, %d edges", view_type, len(nodes), len(edges))
    return LayoutResult(nodes=nodes, edges=edges)
