"""
spof_atlas/tests/test_synthetic.py — Tests for the deterministic synthetic builder.

Tests verify:
- Identical inputs produce identical graphs; different ranges differ.
- Every member gets a node with DOA in [0.05, 1].
- The ring backbone links member i to member (i+1) mod n with spof_score >= 0.7.
- Affinity edges never duplicate a ring pair.
- Empty member lists and unknown time ranges degrade gracefully.
- noise() and seed_from_text() are pure and bounded.
"""

import logging

import networkx as nx
import pytest

from spof_atlas.config import TIME_RANGE_CONFIGS
from spof_atlas.graph.noise import clamp, noise, round_half_up, seed_from_text
from spof_atlas.graph.synthetic import generate_collaboration_graph, get_range_config
from spof_atlas.graph.threshold import filter_by_spof_threshold

TIME_RANGES = ["1m", "3m", "1y", "max"]


# ── Noise helpers ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("seed", [0, 1, 17, 4242, 123456, 9.5])
def test_noise_in_unit_interval(seed):
    value = noise(seed)
    assert 0.0 <= value < 1.0
    assert noise(seed) == value


def test_seed_from_text_weights_by_position():
    # 'a' = 97, 'b' = 98 → 97*1 + 98*2
    assert seed_from_text("ab") == 293
    assert seed_from_text("ba") == 98 + 97 * 2
    assert seed_from_text("") == 0


def test_seed_from_text_counts_utf16_units():
    # U+1F600 is a surrogate pair: 0xD83D, 0xDE00
    assert seed_from_text("😀") == 0xD83D * 1 + 0xDE00 * 2


def test_seed_from_text_accepts_lone_surrogate():
    assert seed_from_text("a\ud83d") == 97 * 1 + 0xD83D * 2


def test_clamp_and_round_half_up():
    assert clamp(1.4, 0.0, 1.0) == 1.0
    assert clamp(-0.2, 0.05, 1.0) == 0.05
    assert round_half_up(0.125) == 0.13
    assert round_half_up(0.745, 1) == 0.7


# ── Determinism ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize("time_range", TIME_RANGES)
def test_identical_inputs_identical_graphs(team_members, time_range):
    first = generate_collaboration_graph("team-42", team_members, time_range)
    second = generate_collaboration_graph("team-42", list(team_members), time_range)
    assert first == second
    assert repr(first) == repr(second)


def test_time_range_changes_graph(team_members):
    one_month = generate_collaboration_graph("team-42", team_members, "1m")
    all_time = generate_collaboration_graph("team-42", team_members, "max")
    assert [n.doa_normalized for n in one_month.nodes] != [n.doa_normalized for n in all_time.nodes]


def test_entity_id_changes_graph(team_members):
    a = generate_collaboration_graph("team-1", team_members)
    b = generate_collaboration_graph("team-2", team_members)
    assert a != b


# ── Nodes ─────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("time_range", TIME_RANGES)
def test_one_node_per_member_with_bounded_doa(team_members, time_range):
    graph = generate_collaboration_graph("team-42", team_members, time_range)

    assert [n.label for n in graph.nodes] == team_members
    assert graph.nodes[0].id == "ada-lovelace"
    for node in graph.nodes:
        assert 0.05 <= node.doa_normalized <= 1.0


def test_duplicate_member_ids_kept_once():
    graph = generate_collaboration_graph("t", ["Ada", "ada", "Grace"])
    assert [n.id for n in graph.nodes] == ["ada", "grace"]


def test_graph_identity_follows_context():
    team = generate_collaboration_graph("t", ["A", "B"], context_type="team")
    repo = generate_collaboration_graph("r", ["A", "B"], context_type="repo")
    assert (team.id, team.name) == ("t-collaboration", "Team Collaboration")
    assert (repo.id, repo.name) == ("r-collaboration", "Repository Collaboration")


# ── Ring backbone ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("time_range", TIME_RANGES)
def test_ring_backbone_present(team_members, time_range):
    graph = generate_collaboration_graph("team-42", team_members, time_range)
    ids = [n.id for n in graph.nodes]
    ring = graph.edges[: len(ids)]

    for i, edge in enumerate(ring):
        assert (edge.source, edge.target) == (ids[i], ids[(i + 1) % len(ids)])
        assert 0.7 <= edge.spof_score <= 0.95
        assert 0.6 <= edge.collaboration_strength <= 1.0


@pytest.mark.parametrize("time_range", TIME_RANGES)
def test_ring_survives_threshold_069(team_members, time_range):
    graph = generate_collaboration_graph("team-42", team_members, time_range)
    filtered = filter_by_spof_threshold(graph, 0.69, remove_isolated=True)

    assert len(filtered.nodes) == 5
    assert filtered.isolated_count == 0
    G = filtered.to_networkx()
    assert nx.is_connected(G)
    ring_pairs = {frozenset((e.source, e.target)) for e in graph.edges[:5]}
    surviving = {frozenset((e.source, e.target)) for e in filtered.edges}
    assert ring_pairs <= surviving


def test_threshold_above_every_score_isolates_all(team_graph):
    filtered = filter_by_spof_threshold(team_graph, 1.01)
    assert filtered.nodes == ()
    assert filtered.isolated_count == 5


def test_no_duplicate_pairs(team_graph):
    pairs = [frozenset((e.source, e.target)) for e in team_graph.edges]
    assert len(pairs) == len(set(pairs))


def test_two_members_single_ring_edge():
    graph = generate_collaboration_graph("t", ["Ada", "Grace"])
    assert len(graph.edges) == 1


def test_single_member_has_no_edges():
    graph = generate_collaboration_graph("t", ["Ada"])
    assert len(graph.nodes) == 1
    assert graph.edges == ()


# ── Affinity edges ────────────────────────────────────────────────────────────

def test_affinity_edge_scores_bounded():
    names = [f"Member {i}" for i in range(12)]
    graph = generate_collaboration_graph("big-team", names, "max")

    assert len(graph.edges) > 12
    for edge in graph.edges[12:]:
        assert 0.0 <= edge.spof_score <= 1.0
        assert 0.15 <= edge.collaboration_strength <= 1.0


def test_shorter_range_is_sparser():
    names = [f"Member {i}" for i in range(20)]
    counts = {
        tr: len(generate_collaboration_graph("big-team", names, tr).edges) for tr in ("1m", "max")
    }
    assert counts["1m"] < counts["max"]


# ── Degenerate inputs ─────────────────────────────────────────────────────────

def test_empty_members_returns_empty_graph():
    graph = generate_collaboration_graph("t", [])
    assert graph.nodes == () and graph.edges == ()


def test_unknown_time_range_falls_back_to_max(caplog):
    with caplog.at_level(logging.WARNING):
        config = get_range_config("6w")
    assert config == TIME_RANGE_CONFIGS["max"]
    assert "Unknown time range" in caplog.text
