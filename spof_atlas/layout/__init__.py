"""
spof_atlas.layout — Canvas coordinates for a thresholded collaboration graph.

Modules:
    engine  — layout_graph() dispatcher, circular and shell strategies.
    force   — Force-directed simulation (spring / kamada_kawai variants).
"""

from spof_atlas.layout.engine import LayoutType, layout_graph
