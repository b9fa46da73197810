"""
spof_atlas/graph/models.py — Immutable value types shared by every stage.

Each stage of the pipeline returns a fresh structure built from its input;
nothing is mutated after construction, so all types are frozen dataclasses
holding tuples rather than lists.

    Graph            — builder output (nodes + weighted edges)
    FilteredGraph    — Graph after risk thresholding, with per-node degree
    PositionedGraph  — FilteredGraph with (x, y) on every node and edges
                       resolved to node objects
    ChartInsight     — one natural-language line with a stable id
"""

from dataclasses import dataclass, field

import networkx as nx


# ── Builder output ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Node:
    """A contributor. doa_normalized is ownership concentration in [0, 1]."""

    id: str
    label: str
    doa_normalized: float


@dataclass(frozen=True)
class Edge:
    """
    A collaboration link between two contributors.

    Fields:
        source / target:        Node ids.
        spof_score:             Risk metric in [0, 1]; drives the threshold filter.
        collaboration_strength: Visual weight in [0, 1]; never used for filtering.
    """

    source: str
    target: str
    spof_score: float
    collaboration_strength: float


@dataclass(frozen=True)
class Graph:
    """Nodes + weighted edges. Every edge endpoint should name a node id."""

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    id: str = ""
    name: str = ""

    def to_networkx(self) -> nx.Graph:
        return _to_networkx(self.nodes, self.edges)


# ── Filter output ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GraphNode:
    """A Node annotated with its post-threshold degree."""

    id: str
    label: str
    doa_normalized: float
    degree: int


@dataclass(frozen=True)
class FilteredGraph:
    """
    Graph after risk thresholding.

    Fields:
        nodes:          Surviving nodes with their degree.
        edges:          Edges with spof_score >= threshold whose endpoints survive.
        total_nodes:    Node count before isolate removal.
        isolated_count: Nodes with zero degree, counted before removal.
    """

    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[Edge, ...] = ()
    total_nodes: int = 0
    isolated_count: int = 0

    def to_networkx(self) -> nx.Graph:
        return _to_networkx(self.nodes, self.edges)


# ── Layout output ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PositionedNode:
    id: str
    label: str
    doa_normalized: float
    degree: int
    x: float
    y: float


@dataclass(frozen=True)
class PositionedEdge:
    """An Edge whose endpoints are resolved to PositionedNode objects."""

    source: PositionedNode
    target: PositionedNode
    spof_score: float
    collaboration_strength: float


@dataclass(frozen=True)
class PositionedGraph:
    nodes: tuple[PositionedNode, ...] = ()
    edges: tuple[PositionedEdge, ...] = ()
    total_nodes: int = 0
    isolated_count: int = 0


# ── Insights ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChartInsight:
    id: str
    text: str


# ── Real-data builder types ───────────────────────────────────────────────────

@dataclass(frozen=True)
class FileScore:
    """
    One developer's ownership of one file, as emitted by the ownership analysis.

    Fields:
        file_path:      Path of the file within the repository.
        developer:      Developer display name.
        normalized_doa: Degree of authorship on this file, in [0, 1].
        is_author:      Whether the analysis flags the developer as an author.
        raw_doa:        Unnormalized DOA, when present.
        module:         Module the file belongs to, when known.
    """

    file_path: str
    developer: str
    normalized_doa: float
    is_author: bool = False
    raw_doa: float | None = None
    module: str | None = None

    @classmethod
    def from_dict(cls, data: dict, module: str | None = None) -> "FileScore":
        """Build from a camelCase (JSON artifact) or snake_case dict."""
        raw_doa = data.get("rawDOA", data.get("raw_doa"))
        return cls(
            file_path=str(data.get("filePath") or data.get("file_path")),
            developer=str(data.get("developer")),
            normalized_doa=float(data.get("normalizedDOA", data.get("normalized_doa"))),
            is_author=bool(data.get("isAuthor", data.get("is_author", False))),
            raw_doa=float(raw_doa) if raw_doa is not None else None,
            module=data.get("module", module),
        )


@dataclass(frozen=True)
class ContributorNode:
    """
    A developer in the shared-file network.

    Fields:
        id:                   Normalized developer id (lowercase, spaces → hyphens).
        name:                 First display name seen for this id.
        total_doa:            Sum of normalized DOA over the developer's significant files.
        normalized_total_doa: total_doa / max total_doa across developers.
        file_count:           Number of significant file records for the developer.
    """

    id: str
    name: str
    total_doa: float
    normalized_total_doa: float
    file_count: int


@dataclass(frozen=True)
class SharedFileEdge:
    """weight = number of files both developers significantly own."""

    source: str
    target: str
    weight: int
    normalized_weight: float


@dataclass(frozen=True)
class NetworkStats:
    total_contributors: int = 0
    total_connections: int = 0
    max_shared_files: int = 0
    max_doa: float = 0.0


@dataclass(frozen=True)
class CollaborationNetwork:
    nodes: tuple[ContributorNode, ...] = ()
    edges: tuple[SharedFileEdge, ...] = ()
    stats: NetworkStats = field(default_factory=NetworkStats)


def _to_networkx(nodes, edges) -> nx.Graph:
    """Undirected NetworkX view; node and edge fields become attributes."""
    G = nx.Graph()
    for node in nodes:
        attrs = {k: v for k, v in vars(node).items() if k != "id"}
        G.add_node(node.id, **attrs)
    for edge in edges:
        if edge.source in G and edge.target in G:
            G.add_edge(
                edge.source,
                edge.target,
                spof_score=edge.spof_score,
                collaboration_strength=edge.collaboration_strength,
            )
    return G
