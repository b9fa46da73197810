"""
spof_atlas/graph/threshold.py — SPOF risk-threshold projection.

Prerequisite for both the layout engine and the insight generator. The raw
collaboration graph links every pair that works together; only links whose
spof_score clears the threshold describe concentrated, risky collaboration,
so everything below it is pruned before layout and analysis.

The projection is monotonic: raising the threshold can only remove edges.
"""

import logging

from spof_atlas.config import DEFAULT_CONFIG, SpofAtlasConfig
from spof_atlas.graph.models import FilteredGraph, Graph, GraphNode

logger = logging.getLogger(__name__)


def filter_by_spof_threshold(
    graph: Graph | None,
    threshold: float | None = None,
    remove_isolated: bool | None = None,
    config: SpofAtlasConfig = DEFAULT_CONFIG,
) -> FilteredGraph:
    """
    Project a collaboration graph onto its risky links only.

    Algorithm (O(V + E)):
        1. Keep edges with spof_score >= threshold.
        2. Degree map over ALL original nodes (initialized to 0); each surviving
           edge increments both endpoints.
        3. isolated_count = nodes with degree 0 (counted before any removal).
        4. If remove_isolated, drop zero-degree nodes.
        5. Keep only edges whose endpoints are both in the output node set.

    Args:
        graph:           Builder output. None is treated as an empty graph.
        threshold:       Minimum spof_score (default config.spof_threshold = 0.7).
        remove_isolated: Drop isolates (default config.remove_isolated = True).
        config:          SpofAtlasConfig supplying the defaults.

    Returns:
        FilteredGraph with per-node degree, total_nodes and isolated_count.

    Notes:
        - Edges naming an unknown node still survive step 1 but are removed in
          step 5 and never contribute to a known node's degree, so
          sum(degree) == 2 * len(edges) always holds on the output.
        - Node order of the input is preserved.
    """
    if graph is None:
        return FilteredGraph()

    threshold = config.spof_threshold if threshold is None else threshold
    remove_isolated = config.remove_isolated if remove_isolated is None else remove_isolated

    thresholded = [edge for edge in graph.edges if edge.spof_score >= threshold]

    known_ids = {node.id for node in graph.nodes}
    resolvable = [e for e in thresholded if e.source in known_ids and e.target in known_ids]
    if len(resolvable) != len(thresholded):
        logger.debug(
            "%d thresholded edges reference unknown nodes and were dropped.",
            len(thresholded) - len(resolvable),
        )

    degree: dict[str, int] = {node.id: 0 for node in graph.nodes}
    for edge in resolvable:
        degree[edge.source] += 1
        degree[edge.target] += 1

    isolated_count = sum(1 for d in degree.values() if d == 0)

    nodes = tuple(
        GraphNode(
            id=node.id,
            label=node.label,
            doa_normalized=node.doa_normalized,
            degree=degree[node.id],
        )
        for node in graph.nodes
        if not remove_isolated or degree[node.id] > 0
    )

    node_ids = {node.id for node in nodes}
    edges = tuple(e for e in resolvable if e.source in node_ids and e.target in node_ids)

    logger.info(
        "SPOF threshold %.2f: %d/%d nodes, %d/%d edges retained (%d isolated%s).",
        threshold,
        len(nodes),
        len(graph.nodes),
        len(edges),
        len(graph.edges),
        isolated_count,
        ", removed" if remove_isolated else "",
    )

    return FilteredGraph(
        nodes=nodes,
        edges=edges,
        total_nodes=len(graph.nodes),
        isolated_count=isolated_count,
    )
