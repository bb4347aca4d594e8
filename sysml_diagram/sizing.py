"""
Shared sizing constants and node size calculation.

Single source of truth for:
- node width/height computed by the graph builder
- container top padding handed to the hierarchical layout engine, so that
  nested children start below the parent's header and content lines

All functions are pure: identical content always yields identical sizes.
"""

from dataclasses import dataclass

from .models import Size


@dataclass(frozen=True)
class NodeSizing:
    """Sizing constants in pixels."""
    header_height: float = 60          # Stereotype + name + padding
    header_only_padding: float = 10    # Extra space below header when empty
    section_header_height: float = 24  # Section title like "attributes", "parts"
    item_height: float = 26            # Each content line
    bottom_padding: float = 20         # Bottom padding inside content area
    child_gap: float = 20              # Gap between parent content and children
    min_height: float = 70             # Minimum leaf height (header only)
    min_container_height: float = 200
    default_width: float = 200
    min_container_width: float = 300
    container_extra_height: float = 60  # Room reserved for nested children


NODE_SIZING = NodeSizing()

HEADER_ONLY_HEIGHT = NODE_SIZING.header_height + NODE_SIZING.header_only_padding


@dataclass(frozen=True)
class FeatureCounts:
    """Number of content lines per display section."""
    parts: int = 0
    attrs: int = 0
    actions: int = 0

    @property
    def section_count(self) -> int:
        return sum(1 for n in (self.parts, self.attrs, self.actions) if n > 0)


def group_feature_counts(lines: list[str]) -> FeatureCounts:
    """
    Sort content lines into display sections by keyword.

    - mentions "action" -> actions
    - mentions "attr" (incl. "attribute") or has no type separator -> attributes
    - everything else -> parts
    """
    parts = attrs = actions = 0

    for line in lines:
        lower = line.lower()
        if "action" in lower:
            actions += 1
        elif "attr" in lower or ":" not in line:
            attrs += 1
        else:
            parts += 1

    return FeatureCounts(parts=parts, attrs=attrs, actions=actions)


def content_height(lines: list[str]) -> float:
    """Total height of header plus content lines, without container room."""
    if not lines:
        return HEADER_ONLY_HEIGHT

    counts = group_feature_counts(lines)
    feature_height = (
        counts.section_count * NODE_SIZING.section_header_height
        + len(lines) * NODE_SIZING.item_height
        + NODE_SIZING.bottom_padding
    )
    return NODE_SIZING.header_height + feature_height


def node_size(lines: list[str], is_container: bool) -> Size:
    """
    Calculate node dimensions.

    Args:
        lines: Merged content lines of the node
        is_container: Whether structural children are nested inside

    Returns:
        Width and height in pixels
    """
    height = content_height(lines)

    if is_container:
        return Size(
            width=NODE_SIZING.min_container_width,
            height=max(NODE_SIZING.min_container_height,
                       height + NODE_SIZING.container_extra_height),
        )

    return Size(
        width=NODE_SIZING.default_width,
        height=max(NODE_SIZING.min_height, height),
    )


def container_top_padding(lines: list[str]) -> float:
    """Where nested children start: below the header and content lines."""
    return content_height(lines) + NODE_SIZING.child_gap
