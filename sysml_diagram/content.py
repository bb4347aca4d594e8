"""
Content classification and aggregation.

Properties, attributes and ports are not drawn as boxes of their own. They are
rendered as text lines inside their structural parent:

    properties...
    ---
    ports...
    features...

The ordering above is fixed so renderers can rely on it for grouping.
"""

from collections import defaultdict
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Symbol


CONTENT_SEPARATOR = "---"
NAMESPACE_SEPARATOR = "::"

# Tags rendered as property lines inside their parent
PROPERTY_TYPES = frozenset({"AttributeUsage", "AttributeDef", "ReferenceUsage", "Feature"})


class ContentKind(str, Enum):
    """How a symbol is rendered."""
    STRUCTURAL = "structural"  # Own box in the diagram
    PROPERTY = "property"      # Text line inside parent
    PORT = "port"              # Text line inside parent, after the separator


def classify(node_type: str) -> ContentKind:
    """Classify a node type tag. Unknown tags are structural."""
    if "Port" in node_type:
        return ContentKind.PORT
    if node_type in PROPERTY_TYPES:
        return ContentKind.PROPERTY
    return ContentKind.STRUCTURAL


def last_segment(qualified_name: str) -> str:
    """Text after the final namespace separator."""
    return qualified_name.split(NAMESPACE_SEPARATOR)[-1]


def format_content_line(symbol: "Symbol") -> str:
    """Format a property or port as `direction name : Type`."""
    text = symbol.name
    if symbol.direction:
        text = f"{symbol.direction} {text}"
    if symbol.typed_by:
        text += f" : {last_segment(symbol.typed_by)}"
    return text


class ContentIndex:
    """
    Formatted property and port lines grouped by parent qualified name.

    Lines are kept in input order. Lines whose parent never becomes a node are
    simply never asked for.
    """

    def __init__(self):
        self.properties: dict[str, list[str]] = defaultdict(list)
        self.ports: dict[str, list[str]] = defaultdict(list)

    @classmethod
    def collect(cls, symbols: list["Symbol"]) -> "ContentIndex":
        """Build an index from every property/port symbol that has a parent."""
        index = cls()
        for symbol in symbols:
            index.add(symbol)
        return index

    def add(self, symbol: "Symbol") -> bool:
        """
        Add a symbol's line if it is inline content with a parent.

        Returns:
            True if the symbol was consumed as a content line
        """
        kind = classify(symbol.node_type)
        if kind is ContentKind.STRUCTURAL or not symbol.parent:
            return False

        target = self.ports if kind is ContentKind.PORT else self.properties
        target[symbol.parent].append(format_content_line(symbol))
        return True

    def merge(self, symbol: "Symbol") -> list[str]:
        """Merged content for a structural symbol: properties, ports, features."""
        properties = self.properties.get(symbol.qualified_name, [])
        ports = self.ports.get(symbol.qualified_name, [])

        lines = list(properties)
        if ports:
            lines.append(CONTENT_SEPARATOR)
            lines.extend(ports)
        lines.extend(symbol.features or [])

        return [line for line in lines if line]
