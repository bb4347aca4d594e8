"""
Layout strategies: symbols + relationships + view config -> positioned graph.

Layout is async because the hierarchical engine runs out of process. The
simple strategy does no I/O but keeps the same contract so callers can swap
them freely.
"""

import logging
from typing import Optional, Protocol

from .builder import build_graph
from .elk import ELK_DIRECTIONS, ElkLayoutOptions, LayoutEngine, apply_elk_layout
from .layout import LevelLayoutOptions
from .models import LayoutResult, Relationship, Symbol, ViewConfig, ViewType
from .views import layout_for_view_type

logger = logging.getLogger(__name__)

# Spacing used for general views laid out by ELK
GENERAL_VIEW_OPTIONS = ElkLayoutOptions(
    algorithm="layered",
    node_spacing=60,
    layer_spacing=80,
    padding=40,
)


class LayoutStrategy(Protocol):
    async def apply(
        self,
        symbols: list[Symbol],
        relationships: list[Relationship],
        config: ViewConfig,
    ) -> LayoutResult:
        ...


class GeneralViewLayout:
    """
    Hierarchical layout through an external ELK engine.

    Properties, attributes and ports are rendered as text inside their
    parent; nested structural elements become ELK children.
    """

    def __init__(self, engine: LayoutEngine, options: Optional[ElkLayoutOptions] = None):
        self.engine = engine
        self.options = options or GENERAL_VIEW_OPTIONS

    async def apply(
        self,
        symbols: list[Symbol],
        relationships: list[Relationship],
        config: ViewConfig,
    ) -> LayoutResult:
        result = build_graph(symbols, relationships, config)

        options = self.options
        if options.direction is None:
            options = options.model_copy(
                update={"direction": ELK_DIRECTIONS.get(config.direction, "DOWN")}
            )

        await apply_elk_layout(result.nodes, result.edges, self.engine, options)

        logger.info("Laid out %s with ELK: %d nodes, %d edges",
                    config.type, len(result.nodes), len(result.edges))
        return result


class SimpleViewLayout:
    """Level or grid layout chosen by view type; no external engine."""

    def __init__(self, options: Optional[LevelLayoutOptions] = None):
        self.options = options or LevelLayoutOptions()

    async def apply(
        self,
        symbols: list[Symbol],
        relationships: list[Relationship],
        config: ViewConfig,
    ) -> LayoutResult:
        result = build_graph(symbols, relationships, config)

        options = self.options.model_copy(update={"direction": config.direction})
        layout_fn = layout_for_view_type(config.type)
        layout_fn(result.nodes, result.edges, options)

        logger.info("Laid out %s: %d nodes, %d edges",
                    config.type, len(result.nodes), len(result.edges))
        return result


def create_layout_strategy(
    view_type: Optional[str] = None,
    engine: Optional[LayoutEngine] = None,
) -> LayoutStrategy:
    """
    Create the layout strategy for a view type.

    With an engine, general, flow and state views (and unknown types) use
    hierarchical ELK layout; interconnection views always use the grid.
    Without an engine everything uses the simple level/grid layouts.
    """
    if engine is not None and view_type != ViewType.INTERCONNECTION.value:
        return GeneralViewLayout(engine)
    return SimpleViewLayout()
