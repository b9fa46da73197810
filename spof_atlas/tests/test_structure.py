"""
spof_atlas/tests/test_structure.py — Tests for structural SPOF metrics.

Tests verify:
- A pendant collaborator's only link is a bridge; its neighbour is an articulation point.
- A cycle has no bridges and no articulation points.
- Retained isolates count as their own components.
"""

from spof_atlas.graph.models import FilteredGraph
from spof_atlas.graph.synthetic import generate_collaboration_graph
from spof_atlas.graph.threshold import filter_by_spof_threshold
from spof_atlas.metrics.structure import CollaborationStructure, collaboration_structure


def test_pendant_link_is_bridge(hub_graph):
    structure = collaboration_structure(filter_by_spof_threshold(hub_graph, 0.7))

    assert structure.components == 1
    assert structure.bridges == (("c", "hub"),)
    assert structure.articulation_points == ("hub",)


def test_isolates_are_components(hub_graph):
    structure = collaboration_structure(filter_by_spof_threshold(hub_graph, 0.7, remove_isolated=False))
    # hub-a-b-c plus isolated d and e
    assert structure.components == 3


def test_ring_has_no_single_points(team_members):
    graph = generate_collaboration_graph("team-42", team_members, "max")
    ring_only = filter_by_spof_threshold(graph, 0.69)
    structure = collaboration_structure(ring_only)

    assert structure.components == 1
    assert structure.bridges == ()
    assert structure.articulation_points == ()


def test_empty_graph():
    assert collaboration_structure(FilteredGraph()) == CollaborationStructure(
        components=0, bridges=(), articulation_points=()
    )
