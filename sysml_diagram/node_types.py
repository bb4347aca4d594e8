"""
SysML v2 node and edge type registry.

Every known type tag maps to one immutable config record. Lookups never fail:
unknown tags resolve to the reserved `default` record so that partial or
evolving upstream data still renders.
"""

from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    """SysML v2 / KerML element kinds that render as nodes."""
    # Structural
    PACKAGE = "Package"
    PART_DEF = "PartDef"
    PART_USAGE = "PartUsage"
    ITEM_DEF = "ItemDef"
    ITEM_USAGE = "ItemUsage"
    ATTRIBUTE_DEF = "AttributeDef"
    ATTRIBUTE_USAGE = "AttributeUsage"
    OCCURRENCE_DEF = "OccurrenceDef"
    OCCURRENCE_USAGE = "OccurrenceUsage"
    INDIVIDUAL_DEF = "IndividualDef"
    INDIVIDUAL_USAGE = "IndividualUsage"
    SNAPSHOT_USAGE = "SnapshotUsage"
    TIMESLICE_USAGE = "TimesliceUsage"
    REFERENCE_USAGE = "ReferenceUsage"
    FEATURE = "Feature"
    # Interfaces
    PORT_DEF = "PortDef"
    PORT_USAGE = "PortUsage"
    INTERFACE_DEF = "InterfaceDef"
    INTERFACE_USAGE = "InterfaceUsage"
    CONNECTION_DEF = "ConnectionDef"
    CONNECTION_USAGE = "ConnectionUsage"
    FLOW_DEF = "FlowDef"
    FLOW_USAGE = "FlowUsage"
    # Behavioral
    ACTION_DEF = "ActionDef"
    ACTION_USAGE = "ActionUsage"
    PERFORM_ACTION_USAGE = "PerformActionUsage"
    STATE_DEF = "StateDef"
    STATE_USAGE = "StateUsage"
    EXHIBIT_STATE_USAGE = "ExhibitStateUsage"
    CALCULATION_DEF = "CalculationDef"
    CALCULATION_USAGE = "CalculationUsage"
    # Requirements
    REQUIREMENT_DEF = "RequirementDef"
    REQUIREMENT_USAGE = "RequirementUsage"
    SATISFY_REQUIREMENT_USAGE = "SatisfyRequirementUsage"
    CONCERN_DEF = "ConcernDef"
    CONCERN_USAGE = "ConcernUsage"
    CONSTRAINT_DEF = "ConstraintDef"
    CONSTRAINT_USAGE = "ConstraintUsage"
    # Cases
    CASE_DEF = "CaseDef"
    CASE_USAGE = "CaseUsage"
    USE_CASE_DEF = "UseCaseDef"
    INCLUDE_USE_CASE_USAGE = "IncludeUseCaseUsage"
    ANALYSIS_CASE_DEF = "AnalysisCaseDef"
    VERIFICATION_CASE_DEF = "VerificationCaseDef"
    # Views
    VIEW_DEF = "ViewDef"
    VIEW_USAGE = "ViewUsage"
    VIEWPOINT_DEF = "ViewpointDef"
    RENDERING_DEF = "RenderingDef"
    # Other
    ALLOCATION_DEF = "AllocationDef"
    ALLOCATION_USAGE = "AllocationUsage"
    ENUMERATION_DEF = "EnumerationDef"
    ENUMERATION_USAGE = "EnumerationUsage"
    METADATA_DEF = "MetadataDef"
    # Fallback for unrecognized tags
    DEFAULT = "default"


class NodeCategory(str, Enum):
    """Display grouping for node types."""
    STRUCTURAL = "structural"
    INTERFACE = "interface"
    BEHAVIORAL = "behavioral"
    REQUIREMENT = "requirement"
    CASE = "case"
    VIEW = "view"
    OTHER = "other"


class EdgeType(str, Enum):
    """SysML v2 relationship kinds that render as edges."""
    # Core
    SPECIALIZATION = "specialization"
    TYPING = "typing"
    REDEFINITION = "redefinition"
    SUBSETTING = "subsetting"
    REFERENCE_SUBSETTING = "reference_subsetting"
    CROSS_SUBSETTING = "cross_subsetting"
    DEPENDENCY = "dependency"
    MEMBERSHIP = "membership"
    # Structural
    COMPOSITION = "composition"
    ALLOCATION = "allocation"
    # Interfaces
    CONNECTION = "connection"
    BINDING = "binding"
    FLOW = "flow"
    CONJUGATION = "conjugation"
    INCLUDE = "include"
    ASSERT = "assert"
    # Behavioral
    PERFORM = "perform"
    EXHIBIT = "exhibit"
    SUCCESSION = "succession"
    # Requirements
    SATISFY = "satisfy"
    VERIFY = "verify"


@dataclass(frozen=True)
class NodeConfig:
    """Display parameters for one node type."""
    category: NodeCategory
    stereotype: str  # e.g. "part def", "port"
    show_features: bool = False
    show_direction: bool = False


@dataclass(frozen=True)
class EdgeConfig:
    """Display parameters for one edge type."""
    category: NodeCategory
    label: str | None = None  # Relationship stereotype shown on the edge
    dashed: bool = False
    open_arrow: bool = False


# --- Config builders ---

def _def(category: NodeCategory, name: str) -> NodeConfig:
    return NodeConfig(category, f"{name} def", show_features=True)


def _def_dir(category: NodeCategory, name: str) -> NodeConfig:
    return NodeConfig(category, f"{name} def", show_direction=True)


def _usage(category: NodeCategory, name: str) -> NodeConfig:
    return NodeConfig(category, name, show_features=True)


def _usage_dir(category: NodeCategory, name: str) -> NodeConfig:
    return NodeConfig(category, name, show_direction=True)


_S = NodeCategory.STRUCTURAL
_I = NodeCategory.INTERFACE
_B = NodeCategory.BEHAVIORAL
_R = NodeCategory.REQUIREMENT
_C = NodeCategory.CASE
_V = NodeCategory.VIEW
_O = NodeCategory.OTHER

NODE_CONFIGS: dict[str, NodeConfig] = {
    NodeType.PACKAGE.value: _usage(_O, "package"),
    NodeType.PART_DEF.value: _def(_S, "part"),
    NodeType.PART_USAGE.value: _usage(_S, "part"),
    NodeType.ITEM_DEF.value: _def(_S, "item"),
    NodeType.ITEM_USAGE.value: _usage(_S, "item"),
    NodeType.ATTRIBUTE_DEF.value: _def(_S, "attribute"),
    NodeType.ATTRIBUTE_USAGE.value: _usage(_S, "attribute"),
    NodeType.OCCURRENCE_DEF.value: _def(_S, "occurrence"),
    NodeType.OCCURRENCE_USAGE.value: _usage(_S, "occurrence"),
    NodeType.INDIVIDUAL_DEF.value: _def(_S, "individual"),
    NodeType.INDIVIDUAL_USAGE.value: _usage(_S, "individual"),
    NodeType.SNAPSHOT_USAGE.value: _usage(_S, "snapshot"),
    NodeType.TIMESLICE_USAGE.value: _usage(_S, "timeslice"),
    NodeType.REFERENCE_USAGE.value: _usage_dir(_S, "ref"),
    NodeType.FEATURE.value: _usage(_S, "feature"),

    NodeType.PORT_DEF.value: _def_dir(_I, "port"),
    NodeType.PORT_USAGE.value: _usage_dir(_I, "port"),
    NodeType.INTERFACE_DEF.value: _def(_I, "interface"),
    NodeType.INTERFACE_USAGE.value: _usage(_I, "interface"),
    NodeType.CONNECTION_DEF.value: _def(_I, "connection"),
    NodeType.CONNECTION_USAGE.value: _usage(_I, "connection"),
    NodeType.FLOW_DEF.value: _def_dir(_I, "flow"),
    NodeType.FLOW_USAGE.value: _usage_dir(_I, "flow"),

    NodeType.ACTION_DEF.value: _def(_B, "action"),
    NodeType.ACTION_USAGE.value: _usage(_B, "action"),
    NodeType.PERFORM_ACTION_USAGE.value: _usage(_B, "perform"),
    NodeType.STATE_DEF.value: _def(_B, "state"),
    NodeType.STATE_USAGE.value: _usage(_B, "state"),
    NodeType.EXHIBIT_STATE_USAGE.value: _usage(_B, "exhibit"),
    NodeType.CALCULATION_DEF.value: _def(_B, "calculation"),
    NodeType.CALCULATION_USAGE.value: _usage(_B, "calc"),

    NodeType.REQUIREMENT_DEF.value: _def(_R, "requirement"),
    NodeType.REQUIREMENT_USAGE.value: _usage(_R, "requirement"),
    NodeType.SATISFY_REQUIREMENT_USAGE.value: _usage(_R, "satisfy"),
    NodeType.CONCERN_DEF.value: _def(_R, "concern"),
    NodeType.CONCERN_USAGE.value: _usage(_R, "concern"),
    NodeType.CONSTRAINT_DEF.value: _def(_R, "constraint"),
    NodeType.CONSTRAINT_USAGE.value: _usage(_R, "constraint"),

    NodeType.CASE_DEF.value: _def(_C, "case"),
    NodeType.CASE_USAGE.value: _usage(_C, "case"),
    NodeType.USE_CASE_DEF.value: _def(_C, "use case"),
    NodeType.INCLUDE_USE_CASE_USAGE.value: _usage(_C, "include"),
    NodeType.ANALYSIS_CASE_DEF.value: _def(_C, "analysis case"),
    NodeType.VERIFICATION_CASE_DEF.value: _def(_C, "verification case"),

    NodeType.VIEW_DEF.value: _def(_V, "view"),
    NodeType.VIEW_USAGE.value: _usage(_V, "view"),
    NodeType.VIEWPOINT_DEF.value: _def(_V, "viewpoint"),
    NodeType.RENDERING_DEF.value: _def(_V, "rendering"),

    NodeType.ALLOCATION_DEF.value: _def(_O, "allocation"),
    NodeType.ALLOCATION_USAGE.value: _usage(_O, "allocate"),
    NodeType.ENUMERATION_DEF.value: _def(_O, "enumeration"),
    NodeType.ENUMERATION_USAGE.value: _usage(_O, "enum"),
    NodeType.METADATA_DEF.value: _def(_O, "metadata"),

    NodeType.DEFAULT.value: NodeConfig(_O, "element", show_features=True),
}

EDGE_CONFIGS: dict[str, EdgeConfig] = {
    EdgeType.SPECIALIZATION.value: EdgeConfig(_O, "specializes"),
    EdgeType.TYPING.value: EdgeConfig(_O, ":", dashed=True, open_arrow=True),
    EdgeType.REDEFINITION.value: EdgeConfig(_O, "redefines", dashed=True, open_arrow=True),
    EdgeType.SUBSETTING.value: EdgeConfig(_O, "subsets", dashed=True, open_arrow=True),
    EdgeType.REFERENCE_SUBSETTING.value: EdgeConfig(_O, "references", dashed=True, open_arrow=True),
    EdgeType.CROSS_SUBSETTING.value: EdgeConfig(_O, "cross-subsets", dashed=True, open_arrow=True),
    EdgeType.DEPENDENCY.value: EdgeConfig(_O, "«dependency»", dashed=True, open_arrow=True),
    EdgeType.MEMBERSHIP.value: EdgeConfig(_O, None, dashed=True, open_arrow=True),

    EdgeType.COMPOSITION.value: EdgeConfig(_S),
    EdgeType.ALLOCATION.value: EdgeConfig(_O, "«allocate»", dashed=True),

    EdgeType.CONNECTION.value: EdgeConfig(_I, "connect"),
    EdgeType.BINDING.value: EdgeConfig(_I, "="),
    EdgeType.FLOW.value: EdgeConfig(_I, "flow", open_arrow=True),
    EdgeType.CONJUGATION.value: EdgeConfig(_I, "~", open_arrow=True),
    EdgeType.INCLUDE.value: EdgeConfig(_I, "«include»", dashed=True),
    EdgeType.ASSERT.value: EdgeConfig(_I, "«assert»", dashed=True),

    EdgeType.PERFORM.value: EdgeConfig(_B, "«perform»"),
    EdgeType.EXHIBIT.value: EdgeConfig(_B, "«exhibit»"),
    EdgeType.SUCCESSION.value: EdgeConfig(_B, "then"),

    EdgeType.SATISFY.value: EdgeConfig(_R, "«satisfy»", dashed=True),
    EdgeType.VERIFY.value: EdgeConfig(_R, "«verify»", dashed=True),
}

DEFAULT_EDGE_CONFIG = EdgeConfig(_O)

_VALID_NODE_TYPES = {t.value for t in NodeType if t is not NodeType.DEFAULT}


def is_valid_node_type(node_type: str) -> bool:
    """Check whether a tag is a registered node type (the fallback tag is not)."""
    return node_type in _VALID_NODE_TYPES


def resolve_node_type(node_type: str) -> str:
    """Return the tag itself if registered, otherwise the fallback tag."""
    if is_valid_node_type(node_type):
        return node_type
    return NodeType.DEFAULT.value


def get_node_config(node_type: str) -> NodeConfig:
    return NODE_CONFIGS.get(node_type, NODE_CONFIGS[NodeType.DEFAULT.value])


def get_edge_config(edge_type: str) -> EdgeConfig:
    return EDGE_CONFIGS.get(edge_type, DEFAULT_EDGE_CONFIG)
