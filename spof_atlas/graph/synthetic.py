"""
spof_atlas/graph/synthetic.py — Deterministic synthetic collaboration graphs.

Used when no ownership artifact is available for a team or repository. The
graph is a pure function of (entity_id, member names, time range): all
variation comes from noise() seeded by hashed identifiers, so the same inputs
always reproduce the same graph and no global random state is touched.

Structure:
    - One node per member. doa_normalized = clamp(0.05 + 0.95·noise + shift, 0.05, 1),
      where shift is a noise-derived perturbation scaled by the range's volatility.
    - Ring backbone: member i ↔ member (i+1) mod n with spof_score in [0.70, 0.95],
      so the default 0.7 threshold still yields a connected, readable network.
    - Organic edges: every other pair whose affinity noise clears the range's
      affinity_cutoff. spof_score = mean pair DOA nudged by affinity.
"""

import logging
from collections.abc import Sequence

from spof_atlas.config import (
    DEFAULT_TIME_RANGE,
    TIME_RANGE_CONFIGS,
    TimeRangeConfig,
)
from spof_atlas.graph.models import Edge, Graph, Node
from spof_atlas.graph.noise import clamp, noise, normalize_developer_name, seed_from_text

logger = logging.getLogger(__name__)

_CONTEXT_NAMES = {"team": "Team Collaboration", "repo": "Repository Collaboration"}


def get_range_config(time_range: str) -> TimeRangeConfig:
    """Look up the constants for a time range key; unknown keys fall back to 'max'."""
    range_config = TIME_RANGE_CONFIGS.get(time_range)
    if range_config is None:
        logger.warning(
            "Unknown time range '%s' — falling back to '%s'.", time_range, DEFAULT_TIME_RANGE
        )
        range_config = TIME_RANGE_CONFIGS[DEFAULT_TIME_RANGE]
    return range_config


def generate_collaboration_graph(
    entity_id: str,
    member_names: Sequence[str],
    time_range: str = DEFAULT_TIME_RANGE,
    context_type: str = "team",
) -> Graph:
    """
    Generate the synthetic collaboration graph for a team or repository.

    Args:
        entity_id:    Team or repository id; seeds every noise draw.
        member_names: Display names, in the order they should appear on the ring.
        time_range:   '1m' | '3m' | '1y' | 'max'. Shorter ranges are noisier and sparser.
        context_type: 'team' or 'repo'; selects the hashing purpose and graph name.

    Returns:
        Graph with id '{entity_id}-collaboration'. Empty when member_names is empty.

    Notes:
        - Members whose normalized ids collide keep only the first occurrence;
          the survivors keep their original list index in their seed.
        - With two members the ring has a single edge (the pair is not doubled).
    """
    graph_id = f"{entity_id}-collaboration"
    graph_name = _CONTEXT_NAMES.get(context_type, f"{context_type.title()} Collaboration")

    if not member_names:
        logger.debug("No members for '%s'; returning empty graph.", entity_id)
        return Graph(id=graph_id, name=graph_name)

    range_config = get_range_config(time_range)
    module_seed = (
        seed_from_text(f"{entity_id}:{context_type}-collaboration:{time_range}")
        + range_config.seed_offset
    )

    # ── Nodes ─────────────────────────────────────────────────────────────────
    nodes: list[Node] = []
    seen_ids: set[str] = set()
    for member_index, name in enumerate(member_names):
        node_id = normalize_developer_name(name)
        if node_id in seen_ids:
            logger.debug("Duplicate member id '%s' (from '%s') skipped.", node_id, name)
            continue
        seen_ids.add(node_id)

        node_seed = seed_from_text(f"{entity_id}:{name}:overall:{member_index}")
        base_doa = 0.05 + noise(node_seed + module_seed) * 0.95
        range_shift = (noise(node_seed + module_seed + 13) - 0.5) * range_config.doa_volatility
        nodes.append(
            Node(
                id=node_id,
                label=name,
                doa_normalized=clamp(base_doa + range_shift, 0.05, 1.0),
            )
        )

    # ── Ring backbone ─────────────────────────────────────────────────────────
    edges: list[Edge] = []
    existing_pairs: set[tuple[str, str]] = set()
    n = len(nodes)

    for i in range(n):
        current = nodes[i]
        following = nodes[(i + 1) % n]
        pair = _pair_key(current.id, following.id)
        if current.id == following.id or pair in existing_pairs:
            continue

        ring_seed = seed_from_text(f"{current.id}:{following.id}:ring:{module_seed}")
        edges.append(
            Edge(
                source=current.id,
                target=following.id,
                spof_score=clamp(0.7 + noise(ring_seed + 19) * 0.25, 0.0, 1.0),
                collaboration_strength=clamp(0.6 + noise(ring_seed + 47) * 0.4, 0.15, 1.0),
            )
        )
        existing_pairs.add(pair)

    ring_edges = len(edges)

    # ── Affinity edges ────────────────────────────────────────────────────────
    for i in range(n):
        for j in range(i + 1, n):
            a, b = nodes[i], nodes[j]
            if _pair_key(a.id, b.id) in existing_pairs:
                continue

            pair_seed = seed_from_text(f"{a.id}:{b.id}:{module_seed}")
            affinity = noise(pair_seed + 31)
            if affinity < range_config.affinity_cutoff:
                continue

            edges.append(
                Edge(
                    source=a.id,
                    target=b.id,
                    spof_score=clamp(
                        (a.doa_normalized + b.doa_normalized) / 2 + (affinity - 0.5) * 0.35,
                        0.0,
                        1.0,
                    ),
                    collaboration_strength=clamp(0.15 + noise(pair_seed + 67) * 0.85, 0.15, 1.0),
                )
            )

    logger.info(
        "Synthetic %s graph for '%s' (%s): %d nodes, %d ring + %d affinity edges.",
        context_type,
        entity_id,
        time_range,
        n,
        ring_edges,
        len(edges) - ring_edges,
    )
    return Graph(nodes=tuple(nodes), edges=tuple(edges), id=graph_id, name=graph_name)


def _pair_key(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a <= b else (b, a)
