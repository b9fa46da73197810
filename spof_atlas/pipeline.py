"""
spof_atlas/pipeline.py — Single-call collaboration pipeline.

Provides run_collaboration_pipeline(), which runs the filter → layout and
filter → insights branches over an already-built Graph and returns every
intermediate result.

Usage:
    from spof_atlas.graph.synthetic import generate_collaboration_graph
    from spof_atlas.pipeline import run_collaboration_pipeline

    graph = generate_collaboration_graph("team-7", ["Ada", "Grace", "Linus"], "3m")
    result = run_collaboration_pipeline(graph, threshold=0.7, layout="shell")
    for insight in result.insights:
        print(insight.text)
"""

import logging
from dataclasses import dataclass

from spof_atlas.config import DEFAULT_CONFIG, SpofAtlasConfig
from spof_atlas.graph.models import ChartInsight, FilteredGraph, Graph, PositionedGraph
from spof_atlas.graph.threshold import filter_by_spof_threshold
from spof_atlas.layout.engine import LayoutType, layout_graph, resolve_layout
from spof_atlas.metrics.insights import generate_collaboration_insights
from spof_atlas.metrics.structure import CollaborationStructure, collaboration_structure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollaborationResult:
    """
    Complete output of a single pipeline run.

    The layout and the insights are independent consumers of `filtered`.
    """

    graph: Graph
    threshold: float
    layout: LayoutType
    filtered: FilteredGraph
    positioned: PositionedGraph
    insights: list[ChartInsight]
    structure: CollaborationStructure


def run_collaboration_pipeline(
    graph: Graph | None,
    threshold: float | None = None,
    width: float | None = None,
    height: float | None = None,
    layout: "LayoutType | str | None" = None,
    remove_isolated: bool | None = None,
    config: SpofAtlasConfig = DEFAULT_CONFIG,
) -> CollaborationResult:
    """
    Threshold, lay out and summarize a collaboration graph in one call.

    Dependency order:
        1. filter_by_spof_threshold()
        2. layout_graph()                       (uses 1)
        3. generate_collaboration_insights()    (uses 1)
        4. collaboration_structure()            (uses 1)

    Args:
        graph:           Builder output (real-data or synthetic). None → empty.
        threshold:       SPOF threshold (default config.spof_threshold).
        width, height:   Canvas size (default config.canvas_width / canvas_height).
        layout:          Layout selector (default config.default_layout).
        remove_isolated: Drop isolates (default config.remove_isolated).
        config:          SpofAtlasConfig with every tunable.

    Returns:
        CollaborationResult with every intermediate result.
    """
    threshold = config.spof_threshold if threshold is None else threshold
    strategy = resolve_layout(layout, config)

    filtered = filter_by_spof_threshold(graph, threshold, remove_isolated, config)
    positioned = layout_graph(filtered, width, height, strategy, config)
    insights = generate_collaboration_insights(graph, filtered, threshold)
    structure = collaboration_structure(filtered)

    logger.info(
        "Collaboration pipeline complete: %d nodes positioned (%s), %d insights, %d bridges.",
        len(positioned.nodes),
        strategy.value,
        len(insights),
        len(structure.bridges),
    )
    return CollaborationResult(
        graph=graph if graph is not None else Graph(),
        threshold=threshold,
        layout=strategy,
        filtered=filtered,
        positioned=positioned,
        insights=insights,
        structure=structure,
    )
