"""
spof_atlas/layout/engine.py — Assign canvas coordinates to a filtered graph.

Strategies (selected by LayoutType):
    circular      — every node on one ring at equal angles, in input order.
    shell         — three concentric rings by degree rank; hubs innermost.
    spring / force — force-directed simulation (spring_params).
    kamada_kawai  — tighter, longer-running force variant (kamada_kawai_params).

Every strategy clamps its output into [padding, dimension - padding] and
resolves edge endpoints to the positioned node objects, so renderers never
need a second lookup.
"""

import logging
import math
from enum import Enum

from spof_atlas.config import DEFAULT_CONFIG, SpofAtlasConfig
from spof_atlas.graph.models import (
    FilteredGraph,
    GraphNode,
    PositionedEdge,
    PositionedGraph,
    PositionedNode,
)
from spof_atlas.graph.noise import clamp
from spof_atlas.layout.force import run_force_simulation

logger = logging.getLogger(__name__)


class LayoutType(str, Enum):
    CIRCULAR = "circular"
    SHELL = "shell"
    FORCE = "force"
    SPRING = "spring"
    KAMADA_KAWAI = "kamada_kawai"


def resolve_layout(layout: "LayoutType | str | None", config: SpofAtlasConfig = DEFAULT_CONFIG) -> LayoutType:
    """Parse a layout selector; None means config.default_layout, unknown means spring."""
    if layout is None:
        layout = config.default_layout
    try:
        return LayoutType(layout)
    except ValueError:
        logger.warning("Unknown layout '%s' — using the spring force layout.", layout)
        return LayoutType.SPRING


def layout_graph(
    graph: FilteredGraph,
    width: float | None = None,
    height: float | None = None,
    layout: "LayoutType | str | None" = None,
    config: SpofAtlasConfig = DEFAULT_CONFIG,
) -> PositionedGraph:
    """
    Lay out a filtered collaboration graph on a width x height canvas.

    Args:
        graph:  Output of filter_by_spof_threshold().
        width:  Canvas width in pixels (default config.canvas_width).
        height: Canvas height in pixels (default config.canvas_height).
        layout: LayoutType or its string value (default config.default_layout).
        config: SpofAtlasConfig supplying canvas, ring and force constants.

    Returns:
        PositionedGraph. Node order matches the input; total_nodes and
        isolated_count are carried over unchanged.

    Notes:
        - Edges whose endpoint id is not among the nodes are silently dropped.
        - circular and shell are closed-form; spring/kamada_kawai are
          deterministic for identical inputs.
    """
    width = config.canvas_width if width is None else width
    height = config.canvas_height if height is None else height
    strategy = resolve_layout(layout, config)
    cx, cy = width / 2, height / 2

    if strategy is LayoutType.CIRCULAR:
        coords = _circular(graph.nodes, cx, cy, width, height, config)
    elif strategy is LayoutType.SHELL:
        coords = _shell(graph.nodes, cx, cy, config)
    else:
        coords = _force(graph, cx, cy, strategy, config)

    lo_x, hi_x = config.padding, width - config.padding
    lo_y, hi_y = config.padding, height - config.padding

    nodes = tuple(
        PositionedNode(
            id=node.id,
            label=node.label,
            doa_normalized=node.doa_normalized,
            degree=node.degree,
            x=clamp(x, lo_x, hi_x),
            y=clamp(y, lo_y, hi_y),
        )
        for node, (x, y) in zip(graph.nodes, coords)
    )
    edges = _resolve_edges(graph, {node.id: node for node in nodes})

    logger.info(
        "Laid out %d nodes and %d edges with '%s' on %gx%g canvas.",
        len(nodes),
        len(edges),
        strategy.value,
        width,
        height,
    )
    return PositionedGraph(
        nodes=nodes,
        edges=edges,
        total_nodes=graph.total_nodes,
        isolated_count=graph.isolated_count,
    )


# ── Strategies ────────────────────────────────────────────────────────────────

def _ring_position(index: int, count: int, radius: float, cx: float, cy: float) -> tuple[float, float]:
    angle = (index / max(count, 1)) * math.pi * 2
    return cx + math.cos(angle) * radius, cy + math.sin(angle) * radius


def _circular(nodes, cx, cy, width, height, config: SpofAtlasConfig) -> list[tuple[float, float]]:
    radius = max(config.circular_min_radius, min(width, height) * config.circular_radius_ratio)
    return [_ring_position(i, len(nodes), radius, cx, cy) for i in range(len(nodes))]


def _shell(nodes: tuple[GraphNode, ...], cx, cy, config: SpofAtlasConfig) -> list[tuple[float, float]]:
    """
    Shell 1 holds the top ceil(20%) by degree, shell 2 the next ceil(35%),
    shell 3 the rest. Ties keep input order.
    """
    n = len(nodes)
    inner_r, middle_r, outer_r = config.shell_radii
    inner_count = max(1, math.ceil(n * config.shell_inner_fraction))
    middle_count = max(1, math.ceil(n * config.shell_middle_fraction))
    outer_count = max(1, n - inner_count - middle_count)

    ranked = sorted(range(n), key=lambda i: nodes[i].degree, reverse=True)
    coords: list[tuple[float, float]] = [(cx, cy)] * n

    for rank, i in enumerate(ranked):
        if rank < inner_count:
            coords[i] = _ring_position(rank, inner_count, inner_r, cx, cy)
        elif rank < inner_count + middle_count:
            coords[i] = _ring_position(rank - inner_count, middle_count, middle_r, cx, cy)
        else:
            coords[i] = _ring_position(rank - inner_count - middle_count, outer_count, outer_r, cx, cy)
    return coords


def _force(graph: FilteredGraph, cx, cy, strategy: LayoutType, config: SpofAtlasConfig):
    params = config.kamada_kawai_params if strategy is LayoutType.KAMADA_KAWAI else config.spring_params
    node_ids = [node.id for node in graph.nodes]
    known = set(node_ids)
    links = [
        (edge.source, edge.target, edge.spof_score)
        for edge in graph.edges
        if edge.source in known and edge.target in known
    ]
    positions = run_force_simulation(
        node_ids,
        [node.degree for node in graph.nodes],
        links,
        cx,
        cy,
        params,
        config,
    )
    return [(float(x), float(y)) for x, y in positions]


def _resolve_edges(graph: FilteredGraph, by_id: dict[str, PositionedNode]) -> tuple[PositionedEdge, ...]:
    edges = []
    for edge in graph.edges:
        source = by_id.get(edge.source)
        target = by_id.get(edge.target)
        if source is None or target is None:
            logger.debug("Dropping edge %s–%s with unresolved endpoint.", edge.source, edge.target)
            continue
        edges.append(
            PositionedEdge(
                source=source,
                target=target,
                spof_score=edge.spof_score,
                collaboration_strength=edge.collaboration_strength,
            )
        )
    return tuple(edges)
