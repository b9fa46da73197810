"""
spof_atlas/config.py — All tunable parameters for SPOF Atlas.

No threshold should ever be hardcoded in a graph or layout module. Every
ownership cutoff, risk threshold, canvas constant and force-simulation knob
lives here so that calibration changes are a single-file diff.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimeRangeConfig:
    """
    Per-time-range constants for the synthetic collaboration generator.

    Shorter ranges are noisier (higher doa_volatility) and sparser (higher
    affinity_cutoff) than longer ones.
    """

    seed_offset: int
    affinity_cutoff: float
    doa_volatility: float


TIME_RANGE_CONFIGS: dict[str, TimeRangeConfig] = {
    "1m": TimeRangeConfig(seed_offset=101, affinity_cutoff=0.58, doa_volatility=0.18),
    "3m": TimeRangeConfig(seed_offset=211, affinity_cutoff=0.50, doa_volatility=0.12),
    "1y": TimeRangeConfig(seed_offset=307, affinity_cutoff=0.44, doa_volatility=0.08),
    "max": TimeRangeConfig(seed_offset=401, affinity_cutoff=0.40, doa_volatility=0.04),
}

DEFAULT_TIME_RANGE = "max"


@dataclass(frozen=True)
class ForceParams:
    """Tuning constants for one force-directed layout variant."""

    link_distance: float
    link_strength: float
    charge_strength: float
    ticks: int


@dataclass(frozen=True)
class SpofAtlasConfig:
    """
    Immutable configuration for the SPOF Atlas collaboration pipeline.

    All fields have documented defaults matching the dashboard the graphs are
    drawn in. Override by constructing a new SpofAtlasConfig with the desired
    values.
    """

    # ── Real-data builder ─────────────────────────────────────────────────────
    doa_threshold: float = 0.5
    # A developer counts as a significant contributor on a file only when
    # their normalized DOA on that file is >= this value.

    min_shared_files: int = 1
    # Minimum number of co-owned files before two developers get an edge.

    # ── Graph filter ──────────────────────────────────────────────────────────
    spof_threshold: float = 0.7
    # Edges with spof_score below this value are dropped.

    remove_isolated: bool = True
    # Drop nodes left with zero degree after thresholding.

    # ── Canvas ────────────────────────────────────────────────────────────────
    canvas_width: float = 748.0
    canvas_height: float = 476.0
    # 820 x 540 chart minus the frame chrome.

    padding: float = 44.0
    # Every laid-out coordinate is clamped into [padding, dimension - padding].

    default_layout: str = "shell"

    # ── Circular layout ───────────────────────────────────────────────────────
    circular_radius_ratio: float = 0.37
    circular_min_radius: float = 90.0

    # ── Shell layout ──────────────────────────────────────────────────────────
    shell_inner_fraction: float = 0.20
    shell_middle_fraction: float = 0.35
    shell_radii: tuple[float, float, float] = (80.0, 165.0, 245.0)
    # Inner (hubs) → middle → outer ring radii in pixels.

    # ── Force-directed layout ─────────────────────────────────────────────────
    spring_params: ForceParams = field(
        default_factory=lambda: ForceParams(
            link_distance=125.0, link_strength=0.22, charge_strength=-190.0, ticks=260
        )
    )
    kamada_kawai_params: ForceParams = field(
        default_factory=lambda: ForceParams(
            link_distance=150.0, link_strength=0.36, charge_strength=-260.0, ticks=360
        )
    )
    # The tighter kamada_kawai variant pulls harder, repels harder and runs longer.

    link_distance_spof_scale: float = 65.0
    # Target link distance = link_distance - spof_score * this. Riskier pairs sit closer.

    collide_base_radius: float = 16.0
    collide_degree_scale: float = 1.8
    collide_iterations: int = 2
    # Collision radius per node = base + degree * scale.

    alpha_min: float = 0.001
    alpha_decay_ticks: int = 300
    velocity_decay: float = 0.4
    # Cooling schedule: alpha decays from 1 to alpha_min over alpha_decay_ticks.
    # Velocities are multiplied by (1 - velocity_decay) every tick.

    initial_radius: float = 10.0
    # Phyllotaxis seed spacing for the starting positions.


# Singleton default: import this everywhere instead of constructing anew.
DEFAULT_CONFIG = SpofAtlasConfig()
