"""
spof_atlas/graph/builder.py — Shared-file collaboration network construction.

Builds a contributor network from per-file ownership records (the output of
a degree-of-authorship analysis). Two developers are linked when both are
significant owners of the same file; the link weight is the number of such
shared files.

Pipeline:
    FileScore records
        → filter to significant owners (normalized_doa >= doa_threshold)
        → per-developer DOA totals          → ContributorNode
        → per-file unordered developer pairs → SharedFileEdge
        → CollaborationNetwork
        → network_to_graph()                → Graph (common builder output)

Developer identity is normalized (lowercase, whitespace → hyphen) so that
'Ada Lovelace' and 'ada  lovelace' collapse into one node; the first display
name encountered is kept as the label.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from itertools import combinations

import pandas as pd

from spof_atlas.config import DEFAULT_CONFIG, SpofAtlasConfig
from spof_atlas.graph.models import (
    CollaborationNetwork,
    ContributorNode,
    Edge,
    FileScore,
    Graph,
    NetworkStats,
    Node,
    SharedFileEdge,
)
from spof_atlas.graph.noise import normalize_developer_name, round_half_up

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = (
    ("filePath", "file_path"),
    ("developer",),
    ("normalizedDOA", "normalized_doa"),
)


def build_collaboration_network(
    file_scores: Iterable[FileScore | dict],
    module_name: str | None = None,
    doa_threshold: float | None = None,
    min_shared_files: int | None = None,
    config: SpofAtlasConfig = DEFAULT_CONFIG,
) -> CollaborationNetwork:
    """
    Build the shared-file collaboration network from ownership records.

    Algorithm:
        1. Keep records for module_name (all records when module_name is falsy).
        2. Keep only significant records: normalized_doa >= doa_threshold.
        3. Per normalized developer id, sum normalized_doa and count records.
           normalized_total_doa = total / max(total across developers).
        4. Per file, take the unique significant developers and count every
           unordered pair (keyed by the sorted id pair).
        5. Emit an edge for every pair with count >= min_shared_files,
           normalized_weight = count / max(count). Edges sorted by weight desc.

    Args:
        file_scores:      FileScore records, or dicts in the artifact's camelCase
                          ({filePath, developer, normalizedDOA, isAuthor}) or snake_case.
        module_name:      Restrict to records tagged with this module.
        doa_threshold:    Significance cutoff (default config.doa_threshold = 0.5).
        min_shared_files: Minimum shared files per edge (default config.min_shared_files = 1).
        config:           SpofAtlasConfig supplying the defaults.

    Returns:
        CollaborationNetwork. Totals and normalized values are rounded half-up
        to 2 decimals.

    Notes:
        - No significant records → empty network with all stats zero. Never raises.
        - A developer listed twice on the same file adds to total_doa twice but
          forms only one pair per co-owner on that file.
    """
    doa_threshold = config.doa_threshold if doa_threshold is None else doa_threshold
    min_shared_files = config.min_shared_files if min_shared_files is None else min_shared_files

    df = _file_scores_frame(file_scores)
    if module_name and not df.empty:
        df = df[df["module"] == module_name]

    significant = df[df["normalized_doa"] >= doa_threshold] if not df.empty else df
    if significant.empty:
        logger.info(
            "No significant file records (module=%s, doa_threshold=%.2f); returning empty network.",
            module_name or "<all>",
            doa_threshold,
        )
        return CollaborationNetwork()

    significant = significant.assign(
        developer_id=significant["developer"].map(normalize_developer_name)
    )

    # ── Per-developer DOA totals ──────────────────────────────────────────────
    dev_stats = significant.groupby("developer_id", sort=False).agg(
        total_doa=("normalized_doa", "sum"),
        file_count=("normalized_doa", "size"),
        display_name=("developer", "first"),
    )
    max_doa = float(dev_stats["total_doa"].max()) or 1.0

    nodes = tuple(
        ContributorNode(
            id=dev_id,
            name=row.display_name,
            total_doa=round_half_up(float(row.total_doa)),
            normalized_total_doa=round_half_up(float(row.total_doa) / max_doa),
            file_count=int(row.file_count),
        )
        for dev_id, row in dev_stats.iterrows()
    )

    # ── Shared-file pair counts ───────────────────────────────────────────────
    shared_counts: Counter[tuple[str, str]] = Counter()
    for _, devs in significant.groupby("file_path", sort=False)["developer_id"]:
        for pair in combinations(devs.unique(), 2):
            shared_counts[tuple(sorted(pair))] += 1

    max_shared_files = max(shared_counts.values(), default=0)

    edges = [
        SharedFileEdge(
            source=d1,
            target=d2,
            weight=count,
            normalized_weight=round_half_up(count / (max_shared_files or 1)),
        )
        for (d1, d2), count in shared_counts.items()
        if count >= min_shared_files
    ]
    edges.sort(key=lambda e: e.weight, reverse=True)

    network = CollaborationNetwork(
        nodes=nodes,
        edges=tuple(edges),
        stats=NetworkStats(
            total_contributors=len(nodes),
            total_connections=len(edges),
            max_shared_files=max_shared_files,
            max_doa=round_half_up(max_doa),
        ),
    )

    logger.info(
        "Collaboration network built: %d contributors, %d shared-file links "
        "(module=%s, doa_threshold=%.2f, min_shared_files=%d).",
        len(nodes),
        len(edges),
        module_name or "<all>",
        doa_threshold,
        min_shared_files,
    )
    return network


def network_to_graph(
    network: CollaborationNetwork,
    graph_id: str = "",
    name: str = "Repository",
) -> Graph:
    """
    Adapt a CollaborationNetwork to the common Graph consumed by the filter.

    Mapping:
        Node.doa_normalized        ← ContributorNode.normalized_total_doa
        Edge.spof_score            ← SharedFileEdge.normalized_weight
        Edge.collaboration_strength ← SharedFileEdge.normalized_weight

    The most-shared pair therefore always scores 1.0 and survives any
    threshold <= 1.
    """
    return Graph(
        nodes=tuple(
            Node(id=n.id, label=n.name, doa_normalized=n.normalized_total_doa)
            for n in network.nodes
        ),
        edges=tuple(
            Edge(
                source=e.source,
                target=e.target,
                spof_score=e.normalized_weight,
                collaboration_strength=e.normalized_weight,
            )
            for e in network.edges
        ),
        id=graph_id,
        name=name,
    )


def build_graph_from_file_scores(
    file_scores: Iterable[FileScore | dict],
    repo_id: str = "repository",
    module_name: str | None = None,
    doa_threshold: float | None = None,
    min_shared_files: int | None = None,
    config: SpofAtlasConfig = DEFAULT_CONFIG,
) -> Graph:
    """
    Convenience: build_collaboration_network() followed by network_to_graph().

    The graph id is '{repo_id}-collab' whatever the module filter; the module
    name (or 'Repository') only becomes the graph name.
    """
    network = build_collaboration_network(
        file_scores,
        module_name=module_name,
        doa_threshold=doa_threshold,
        min_shared_files=min_shared_files,
        config=config,
    )
    return network_to_graph(
        network,
        graph_id=f"{repo_id}-collab",
        name=module_name or "Repository",
    )


def flatten_bus_factor_modules(modules: Mapping[str, Mapping]) -> list[FileScore]:
    """
    Flatten a parsed ownership artifact's per-module file scores.

    Args:
        modules: {module_name: {"fileScores": [record, ...], ...}}
                 (snake_case "file_scores" is accepted too).

    Returns:
        FileScore list in module order, each tagged with its module name.
    """
    flat: list[FileScore] = []
    for module_name, module_data in modules.items():
        records = module_data.get("fileScores") or module_data.get("file_scores") or []
        for record in records:
            score = _coerce_record(record, module=module_name)
            if score is not None:
                flat.append(score)
    return flat


def collaboration_module_options(modules: Mapping[str, Mapping]) -> list[dict[str, str]]:
    """
    Module filter options: an 'All Repository' entry then one per module key
    of the ownership artifact, in artifact order. Modules with no file scores
    are listed too.
    """
    options = [{"value": "", "label": "All Repository"}]
    for module_name in modules:
        options.append({"value": module_name, "label": module_name})
    return options


# ── Internal helpers ──────────────────────────────────────────────────────────

def _coerce_record(record: FileScore | dict, module: str | None = None) -> FileScore | None:
    if isinstance(record, FileScore):
        return record
    for keys in _REQUIRED_KEYS:
        if all(record.get(k) is None for k in keys):
            logger.debug("Skipping file score missing %s: %s", keys[0], record)
            return None
    return FileScore.from_dict(record, module=module)


def _file_scores_frame(file_scores: Iterable[FileScore | dict]) -> pd.DataFrame:
    rows = []
    for record in file_scores:
        score = _coerce_record(record)
        if score is None:
            continue
        rows.append(
            {
                "file_path": score.file_path,
                "developer": score.developer,
                "normalized_doa": score.normalized_doa,
                "module": score.module,
            }
        )
    return pd.DataFrame(rows, columns=["file_path", "developer", "normalized_doa", "module"])
