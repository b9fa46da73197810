"""
spof_atlas — Contributor collaboration graphs and single-point-of-failure analysis.

Turns per-file ownership records (or deterministic synthetic data) into a
weighted contributor graph, thresholds it by SPOF risk, lays it out on a
canvas and summarizes it in plain language.

Components:
- Graph Builder      (spof_atlas.graph.builder, spof_atlas.graph.synthetic)
- Graph Filter       (spof_atlas.graph.threshold)
- Layout Engine      (spof_atlas.layout.engine, spof_atlas.layout.force)
- Insight Generator  (spof_atlas.metrics.insights, spof_atlas.metrics.structure)
"""

__version__ = "0.1.0"
