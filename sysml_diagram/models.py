"""
Core data models for SysML diagrams.

These models define the canonical schema passed through the layout pipeline:
- Symbols and relationships coming from the upstream model adapter
- View configuration (view type, direction, type allow-lists)
- Graph nodes and edges produced by the graph builder and positioned by layout

Field Naming Convention:
- Python attributes are snake_case
- Input accepts the camelCase names used by model adapters (`qualifiedName`,
  `nodeType`, `typedBy`, ...) as aliases
- `LayoutResult.to_json_dict()` emits camelCase for the rendering side
"""

from enum import Enum
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class ViewType(str, Enum):
    """Standard SysML v2 view types."""
    GENERAL = "GeneralView"
    INTERCONNECTION = "InterconnectionView"
    ACTION_FLOW = "ActionFlowView"
    STATE_TRANSITION = "StateTransitionView"
    SEQUENCE = "SequenceView"


class LayoutDirection(str, Enum):
    """Direction in which levels (or ELK layers) progress."""
    TB = "TB"  # top to bottom
    BT = "BT"  # bottom to top
    LR = "LR"  # left to right
    RL = "RL"  # right to left


PortDirection = Literal["in", "out", "inout"]


# --- Input Models ---

class Symbol(BaseModel):
    """A model element to render either as a node or as a line inside one."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    qualified_name: str = Field(alias="qualifiedName")  # Unique, basis for node id
    node_type: str = Field(alias="nodeType")
    parent: Optional[str] = None  # Qualified name of the containing symbol
    features: Optional[list[str]] = None  # Pre-formatted content lines
    typed_by: Optional[str] = Field(default=None, alias="typedBy")
    direction: Optional[PortDirection] = None


class Relationship(BaseModel):
    """A typed connection between two symbols."""
    type: str
    source: str  # Source symbol's qualified name
    target: str  # Target symbol's qualified name
    label: Optional[str] = None
    multiplicity: Optional[str] = None  # e.g. "4", "*"


class ViewConfig(BaseModel):
    """
    Configuration for how to render a view.

    `type` and `direction` are plain strings so that unrecognized values from
    upstream fall back to the general view instead of failing validation.
    """
    model_config = ConfigDict(populate_by_name=True)

    type: str = ViewType.GENERAL.value
    direction: str = LayoutDirection.TB.value
    include_node_types: Optional[list[str]] = Field(default=None, alias="includeNodeTypes")
    include_edge_types: Optional[list[str]] = Field(default=None, alias="includeEdgeTypes")
    show_nesting: bool = Field(default=True, alias="showNesting")

    def should_show_node_type(self, node_type: str) -> bool:
        """Allow-list test: empty or missing list shows everything."""
        if not self.include_node_types:
            return True
        return node_type in self.include_node_types

    def should_show_edge_type(self, edge_type: str) -> bool:
        """Allow-list test: empty or missing list shows everything."""
        if not self.include_edge_types:
            return True
        return edge_type in self.include_edge_types


DEFAULT_VIEW_CONFIG = ViewConfig()


# --- Graph Models ---

class Size(BaseModel):
    width: float
    height: float


class Position(BaseModel):
    x: float = 0
    y: float = 0


def _header_only_size() -> Size:
    # Same as a built leaf with no content lines
    from .sizing import node_size
    return node_size([], False)


class GraphNode(BaseModel):
    """
    A structural node ready for layout.

    `content` holds the merged display lines (properties, ports, features).
    `data` is the payload handed to the renderer; view-specific detail keys
    (e.g. `entryAction`) may be added to it by upstream view resolvers.
    """
    id: str
    type: str
    parent_id: Optional[str] = None
    content: list[str] = Field(default_factory=list)
    is_container: bool = False
    size: Size = Field(default_factory=_header_only_size)
    position: Position = Field(default_factory=Position)
    data: dict[str, Any] = Field(default_factory=dict)

    def to_json_dict(self) -> dict:
        """Convert to the renderer's node shape."""
        result = {
            "id": self.id,
            "type": self.type,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": dict(self.data),
            "style": {"width": self.size.width, "height": self.size.height},
        }
        if self.parent_id:
            result["parentId"] = self.parent_id
        return result


class GraphEdge(BaseModel):
    """An edge between two retained graph nodes."""
    id: str
    source: str  # Source node id
    target: str  # Target node id
    type: str
    label: Optional[str] = None
    multiplicity: Optional[str] = None
    stereotype: Optional[str] = None  # e.g. ":" for typing, "specializes"
    dashed: bool = False

    def to_json_dict(self) -> dict:
        """Convert to the renderer's edge shape."""
        result = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
        }
        # Only include optional fields if they're set
        if self.label is not None:
            result["label"] = self.label
        data = {}
        if self.multiplicity is not None:
            data["multiplicity"] = self.multiplicity
        if self.stereotype is not None:
            data["stereotype"] = self.stereotype
        if self.dashed:
            data["dashed"] = True
        if data:
            result["data"] = data
        return result


class LayoutResult(BaseModel):
    """
    The positioned graph handed to the rendering collaborator.
    Built fresh for every layout call and never reused.
    """
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Get a node by ID (O(n))."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict with renderer field names."""
        return {
            "nodes": [n.to_json_dict() for n in self.nodes],
            "edges": [e.to_json_dict() for e in self.edges],
        }
