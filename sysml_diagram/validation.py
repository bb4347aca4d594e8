"""
Input diagnostics - report structural anomalies in layout input.

The layout pipeline is lenient and never fails on malformed input. This
module tells callers what the pipeline will silently degrade, so upstream
adapters can be fixed. It does not check model semantics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .node_types import is_valid_node_type

if TYPE_CHECKING:
    from .models import Relationship, Symbol


class IssueSeverity(str, Enum):
    """Severity levels for input issues."""
    ERROR = "error"      # Input breaks an invariant (output is unpredictable)
    WARNING = "warning"  # Something will be dropped from the diagram
    INFO = "info"        # Degraded but rendered


@dataclass
class ValidationIssue:
    """A single issue found in layout input."""
    severity: IssueSeverity
    message: str
    qualified_name: str | None = None
    relationship_index: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.qualified_name:
            result["qualified_name"] = self.qualified_name
        if self.relationship_index is not None:
            result["relationship_index"] = self.relationship_index
        return result


def inspect_input(
    symbols: list["Symbol"],
    relationships: list["Relationship"],
) -> list[ValidationIssue]:
    """
    Inspect symbols and relationships and return a list of issues.

    Checks for:
    - Empty input - INFO
    - Duplicate qualified names - ERROR
    - Unknown node types (rendered with the fallback type) - INFO
    - Parents that reference no symbol (nesting dropped) - WARNING
    - Relationship endpoints that reference no symbol (edge dropped) - WARNING

    Args:
        symbols: Symbols passed to the graph builder
        relationships: Relationships passed to the graph builder

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    if not symbols:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="No symbols to render"
        ))
        return issues

    # Duplicate qualified names
    known: set[str] = set()
    for symbol in symbols:
        if symbol.qualified_name in known:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Duplicate qualified name: {symbol.qualified_name}",
                qualified_name=symbol.qualified_name
            ))
        known.add(symbol.qualified_name)

    for symbol in symbols:
        if not is_valid_node_type(symbol.node_type):
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message=f"Unknown node type '{symbol.node_type}', rendered as default",
                qualified_name=symbol.qualified_name
            ))
        if symbol.parent and symbol.parent not in known:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Parent not found: {symbol.parent}",
                qualified_name=symbol.qualified_name
            ))

    for i, rel in enumerate(relationships):
        for end in (rel.source, rel.target):
            if end not in known:
                issues.append(ValidationIssue(
                    severity=IssueSeverity.WARNING,
                    message=f"Relationship '{rel.type}' references unknown symbol: {end}",
                    relationship_index=i
                ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of input issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    errors = len([i for i in issues if i.severity == IssueSeverity.ERROR])
    return {
        "total": len(issues),
        "errors": errors,
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": errors == 0
    }
