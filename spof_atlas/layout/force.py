"""
spof_atlas/layout/force.py — Force-directed collaboration layout.

A velocity-Verlet force simulation in the style of d3-force, run for a fixed
number of ticks with no convergence detection. Four forces act every tick,
in this order:

    link      — pulls linked nodes toward a target distance that shrinks as
                spof_score grows (riskier collaboration sits closer).
    charge    — many-body repulsion between every pair of nodes (exact O(N²),
                vectorised over a pairwise delta matrix).
    center    — translates the whole layout so its centroid is the canvas center.
    collide   — pushes apart nodes whose discs overlap; disc radius grows with
                degree (base + degree * scale) so hubs get more room. Each pass
                resolves all overlapping pairs at once from predicted positions.

Then velocities decay by (1 - velocity_decay) and positions advance.

Determinism: start positions are a phyllotaxis spiral around the canvas
center and no random numbers are drawn, so identical inputs always produce
identical coordinates.
"""

import logging
import math

import numpy as np

from spof_atlas.config import DEFAULT_CONFIG, ForceParams, SpofAtlasConfig

logger = logging.getLogger(__name__)

_GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))


def run_force_simulation(
    node_ids: list[str],
    degrees: list[int],
    links: list[tuple[str, str, float]],
    cx: float,
    cy: float,
    params: ForceParams,
    config: SpofAtlasConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Simulate the collaboration layout and return raw (unclamped) positions.

    Args:
        node_ids: Node ids, in output order.
        degrees:  Post-threshold degree for each node (same order).
        links:    (source_id, target_id, spof_score) triples; endpoints must be in node_ids.
        cx, cy:   Canvas center.
        params:   Variant constants (link distance/strength, charge, tick count).
        config:   SpofAtlasConfig. Uses the collide, alpha and velocity settings.

    Returns:
        (N, 2) float array of positions after params.ticks ticks.
    """
    n = len(node_ids)
    if n == 0:
        return np.zeros((0, 2))

    index = {node_id: i for i, node_id in enumerate(node_ids)}
    pos = _phyllotaxis(n, cx, cy, config.initial_radius)
    vel = np.zeros((n, 2))

    # ── Link setup: per-link distance, and bias by endpoint link counts ───────
    src = np.array([index[s] for s, _, _ in links], dtype=int)
    tgt = np.array([index[t] for _, t, _ in links], dtype=int)
    distance = np.array(
        [params.link_distance - score * config.link_distance_spof_scale for _, _, score in links],
        dtype=float,
    )
    link_count = np.bincount(np.concatenate([src, tgt]), minlength=n).astype(float)
    bias = link_count[src] / np.maximum(link_count[src] + link_count[tgt], 1.0) if len(links) else np.zeros(0)
    link_table = list(zip(src.tolist(), tgt.tolist(), distance.tolist(), bias.tolist()))

    radii = config.collide_base_radius + np.asarray(degrees, dtype=float) * config.collide_degree_scale

    alpha = 1.0
    alpha_decay = 1 - config.alpha_min ** (1 / config.alpha_decay_ticks)
    keep = 1 - config.velocity_decay

    for _ in range(params.ticks):
        alpha += (0.0 - alpha) * alpha_decay

        _apply_links(pos, vel, link_table, params.link_strength * alpha)
        _apply_charge(pos, vel, params.charge_strength * alpha)
        _apply_center(pos, cx, cy)
        for _ in range(config.collide_iterations):
            _apply_collide(pos, vel, radii)

        vel *= keep
        pos += vel

    logger.debug(
        "Force simulation finished: %d nodes, %d links, %d ticks (final alpha=%.4f).",
        n,
        len(links),
        params.ticks,
        alpha,
    )
    return pos


def _phyllotaxis(n: int, cx: float, cy: float, initial_radius: float) -> np.ndarray:
    i = np.arange(n, dtype=float)
    radius = initial_radius * np.sqrt(0.5 + i)
    angle = i * _GOLDEN_ANGLE
    return np.column_stack([cx + radius * np.cos(angle), cy + radius * np.sin(angle)])


def _apply_links(pos, vel, link_table, strength):
    # Sequential so each link sees the velocity updates of the ones before it.
    # Plain float lists keep the per-link arithmetic off numpy scalars.
    if not link_table:
        return
    x, y = pos[:, 0].tolist(), pos[:, 1].tolist()
    vx, vy = vel[:, 0].tolist(), vel[:, 1].tolist()
    for s, t, distance, b in link_table:
        dx = x[t] + vx[t] - x[s] - vx[s]
        dy = y[t] + vy[t] - y[s] - vy[s]
        length = math.hypot(dx, dy)
        if length == 0:
            continue
        scale = (length - distance) / length * strength
        dx *= scale
        dy *= scale
        vx[t] -= dx * b
        vy[t] -= dy * b
        vx[s] += dx * (1 - b)
        vy[s] += dy * (1 - b)
    vel[:, 0] = vx
    vel[:, 1] = vy


def _apply_charge(pos, vel, strength):
    delta = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
    dist2 = np.einsum("ijk,ijk->ij", delta, delta)
    # Soften very close pairs the way d3 does (distanceMin = 1).
    dist2 = np.where(dist2 < 1.0, np.sqrt(dist2), dist2)
    np.fill_diagonal(dist2, np.inf)
    coincident = dist2 == 0
    weight = strength / np.where(coincident, 1.0, dist2)
    weight[coincident] = 0.0
    vel += np.einsum("ij,ijk->ik", weight, delta)


def _apply_center(pos, cx, cy):
    pos -= pos.mean(axis=0) - np.array([cx, cy])


def _apply_collide(pos, vel, radii):
    """
    One relaxation pass over every overlapping pair, computed from the
    predicted positions (pos + vel) at the start of the pass.

    Each pair's overlap is split between its two nodes by squared radius, so
    the larger disc moves less.
    """
    predicted = pos + vel
    delta = predicted[:, np.newaxis, :] - predicted[np.newaxis, :, :]
    dist2 = np.einsum("ijk,ijk->ij", delta, delta)
    reach = radii[:, np.newaxis] + radii[np.newaxis, :]
    overlap = (dist2 < reach * reach) & (dist2 > 0)
    if not overlap.any():
        return

    dist = np.sqrt(np.where(overlap, dist2, 1.0))
    push = np.where(overlap, (reach - dist) / dist, 0.0)
    r2 = radii * radii
    share = r2[np.newaxis, :] / (r2[:, np.newaxis] + r2[np.newaxis, :])
    vel += np.einsum("ij,ijk->ik", push * share, delta)
