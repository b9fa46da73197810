"""
spof_atlas/metrics/structure.py — Structural single points of failure.

Where the insight generator describes who owns the most and who links the
most, this module asks what breaks: which collaboration links and which
people hold the thresholded network together.

    bridges             — links whose removal splits a connected group in two
                          (Tarjan, O(V + E), via nx.bridges).
    articulation_points — contributors whose absence disconnects others.
    components          — number of connected collaboration groups.
"""

import logging
from dataclasses import dataclass

import networkx as nx

from spof_atlas.graph.models import FilteredGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollaborationStructure:
    """
    Fields:
        components:          Number of connected components.
        bridges:             (u, v) id pairs, each sorted so u <= v, in sorted order.
        articulation_points: Node ids, in sorted order.
    """

    components: int
    bridges: tuple[tuple[str, str], ...]
    articulation_points: tuple[str, ...]


def collaboration_structure(filtered: FilteredGraph) -> CollaborationStructure:
    """
    Analyse the connectivity of a thresholded collaboration graph.

    Args:
        filtered: Output of filter_by_spof_threshold().

    Returns:
        CollaborationStructure. An empty graph has zero components and no
        bridges or articulation points.

    Notes:
        - Parallel edges between the same pair collapse into one link.
    """
    G = filtered.to_networkx()

    bridges = tuple(sorted(tuple(sorted(edge)) for edge in nx.bridges(G)))
    articulation_points = tuple(sorted(nx.articulation_points(G)))
    components = nx.number_connected_components(G)

    logger.debug(
        "Collaboration structure: %d components, %d bridges, %d articulation points.",
        components,
        len(bridges),
        len(articulation_points),
    )
    return CollaborationStructure(
        components=components,
        bridges=bridges,
        articulation_points=articulation_points,
    )
