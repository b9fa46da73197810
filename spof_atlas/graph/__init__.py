"""
spof_atlas.graph — Collaboration graph construction and thresholding.

Modules:
    models     — Immutable value types shared by every stage.
    noise      — Deterministic noise, seeding and rounding helpers.
    builder    — Shared-file network from per-file ownership records.
    synthetic  — Deterministic synthetic graph for a team or repository.
    threshold  — SPOF risk-threshold projection with per-node degree.
"""
