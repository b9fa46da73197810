"""
spof_atlas.metrics — Read-only analysis of a thresholded collaboration graph.

Modules:
    insights   — Ordered natural-language insights for the dashboard panel.
    structure  — Bridges, articulation points and component count (NetworkX).

All metrics operate on the FilteredGraph returned by
spof_atlas.graph.threshold.filter_by_spof_threshold().
"""
