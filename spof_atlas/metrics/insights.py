"""
spof_atlas/metrics/insights.py — Natural-language summaries of a collaboration graph.

Turns a thresholded graph into three short sentences for the dashboard's
insight panel:

    collab-threshold — how much of the team survives the SPOF threshold
    collab-top-doa   — who holds the most concentrated ownership
    collab-hub       — who is the best-connected collaborator, plus density
                       and mean DOA of the surviving network

Numbers are formatted half-up (2.5 → "3"), never banker's rounding.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from spof_atlas.graph.models import ChartInsight, FilteredGraph, Graph

logger = logging.getLogger(__name__)

NO_DATA_INSIGHT = ChartInsight(
    id="collab-no-data",
    text=(
        "No connected collaborators at this SPOF threshold. "
        "Lower the threshold to reveal weaker collaboration paths."
    ),
)


def edge_density(node_count: int, edge_count: int) -> float:
    """edges / (n(n-1)/2) for n > 1, else 0."""
    if node_count <= 1:
        return 0.0
    return edge_count / (node_count * (node_count - 1) / 2)


def generate_collaboration_insights(
    graph: Graph | None,
    filtered: FilteredGraph,
    threshold: float,
) -> list[ChartInsight]:
    """
    Summarize a filtered collaboration graph as an ordered list of insights.

    Args:
        graph:     Pre-filter builder output. None means no data was available.
        filtered:  Output of filter_by_spof_threshold(graph, threshold).
        threshold: The spof threshold that produced filtered.

    Returns:
        [NO_DATA_INSIGHT] when nothing survives the threshold; otherwise
        exactly three insights (threshold summary, top ownership, hub).

    Notes:
        - Ties on DOA or degree resolve to the earliest node in filtered.nodes.
    """
    if graph is None or not filtered.nodes:
        logger.debug("No nodes survive threshold %.2f; emitting guidance insight.", threshold)
        return [NO_DATA_INSIGHT]

    nodes = filtered.nodes
    top_node = max(nodes, key=lambda node: node.doa_normalized)
    hub = max(nodes, key=lambda node: node.degree)
    avg_doa = sum(node.doa_normalized for node in nodes) / len(nodes)
    density = edge_density(len(nodes), len(filtered.edges))

    insights = [
        ChartInsight(
            id="collab-threshold",
            text=(
                f"SPOF threshold {_to_fixed(threshold, 2)} keeps {len(nodes)}/{filtered.total_nodes} "
                f"collaborators and {len(filtered.edges)} weighted links "
                f"({filtered.isolated_count} isolated removed)."
            ),
        ),
        ChartInsight(
            id="collab-top-doa",
            text=(
                f"{top_node.label} has the highest normalized DOA "
                f"({_to_fixed(top_node.doa_normalized, 2)}), indicating concentrated "
                f"ownership risk across the team."
            ),
        ),
        ChartInsight(
            id="collab-hub",
            text=(
                f"{hub.label} is the top collaboration hub with {hub.degree} active links; "
                f"graph density is {_to_fixed(density * 100, 0)}% and average DOA is "
                f"{_to_fixed(avg_doa, 2)}."
            ),
        ),
    ]

    logger.debug(
        "Insights: top DOA=%s (%.2f), hub=%s (degree %d), density=%.3f.",
        top_node.id,
        top_node.doa_normalized,
        hub.id,
        hub.degree,
        density,
    )
    return insights


def _to_fixed(value: float, digits: int) -> str:
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
