"""
spof_atlas/tests/conftest.py — Shared pytest fixtures for the SPOF Atlas test suite.

Fixtures:
    two_file_scores  — Two files co-owned by D1 (0.8) and D2 (0.6).
    module_scores    — Parsed ownership artifact with two modules.
    team_members     — Five member names for the synthetic builder.
    team_graph       — Synthetic graph for team_members ('max' range).
    hub_graph        — Hand-built graph: one hub linked to four spokes + a ring pair.
    make_graph       — Factory for small hand-built graphs.
"""

import pytest

from spof_atlas.graph.models import Edge, Graph, Node
from spof_atlas.graph.synthetic import generate_collaboration_graph


TEAM_MEMBERS = ["Ada Lovelace", "Grace Hopper", "Linus Torvalds", "Margaret Hamilton", "Ken Thompson"]


def _build_graph(node_doas: dict[str, float], edges: list[tuple[str, str, float]]) -> Graph:
    """Build a Graph from {id: doa} and (source, target, spof_score) triples."""
    return Graph(
        nodes=tuple(Node(id=i, label=i.upper(), doa_normalized=d) for i, d in node_doas.items()),
        edges=tuple(
            Edge(source=s, target=t, spof_score=score, collaboration_strength=0.5)
            for s, t, score in edges
        ),
    )


@pytest.fixture
def make_graph():
    """Factory fixture: make_graph({id: doa}, [(source, target, spof_score), ...]) → Graph."""
    return _build_graph


@pytest.fixture
def two_file_scores() -> list[dict]:
    return [
        {"filePath": "src/a.py", "developer": "D1", "normalizedDOA": 0.8, "isAuthor": True},
        {"filePath": "src/a.py", "developer": "D2", "normalizedDOA": 0.6, "isAuthor": False},
        {"filePath": "src/b.py", "developer": "D1", "normalizedDOA": 0.8, "isAuthor": True},
        {"filePath": "src/b.py", "developer": "D2", "normalizedDOA": 0.6, "isAuthor": False},
    ]


@pytest.fixture
def module_scores() -> dict:
    return {
        "core": {
            "moduleName": "core",
            "busFactor": 1,
            "fileCount": 2,
            "fileScores": [
                {"filePath": "core/x.py", "developer": "Ada Lovelace", "normalizedDOA": 0.9},
                {"filePath": "core/x.py", "developer": "Grace Hopper", "normalizedDOA": 0.7},
                {"filePath": "core/y.py", "developer": "ada lovelace", "normalizedDOA": 1.0},
                {"filePath": "core/y.py", "developer": "Grace Hopper", "normalizedDOA": 0.2},
            ],
        },
        "web": {
            "moduleName": "web",
            "busFactor": 2,
            "fileCount": 1,
            "fileScores": [
                {"filePath": "web/z.py", "developer": "Grace Hopper", "normalizedDOA": 0.8},
                {"filePath": "web/z.py", "developer": "Linus Torvalds", "normalizedDOA": 0.6},
            ],
        },
    }


@pytest.fixture
def team_members() -> list[str]:
    return list(TEAM_MEMBERS)


@pytest.fixture
def team_graph(team_members) -> Graph:
    return generate_collaboration_graph("team-42", team_members, "max")


@pytest.fixture
def hub_graph() -> Graph:
    """
    hub ── a, b, c, d (spof 0.9, 0.8, 0.75, 0.4); a ── b (0.95); e isolated.

    At threshold 0.7: hub degree 3, a 2, b 2, c 1, d 0, e 0.
    """
    return _build_graph(
        {"hub": 0.6, "a": 0.9, "b": 0.3, "c": 0.5, "d": 0.2, "e": 0.1},
        [
            ("hub", "a", 0.9),
            ("hub", "b", 0.8),
            ("hub", "c", 0.75),
            ("hub", "d", 0.4),
            ("a", "b", 0.95),
        ],
    )
