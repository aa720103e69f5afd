"""Scoring policies for candidate placements.

Every policy takes the turn's :class:`TurnContext` and a legal anchor and
returns an integer. Higher is better for all of them.
"""
from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from .features import (
    TurnContext,
    adjacency,
    claimed_cells,
    denied_space,
    min_distance_sq,
    min_manhattan,
    own_space,
)

Policy = Callable[[TurnContext, int, int], int]

# Territories closer than this (Manhattan) switch rush-then-block to blocking.
RUSH_THRESHOLD = 5


def space_starving(
    ctx: TurnContext,
    top: int,
    left: int,
    denial_weight: int = 100,
    space_weight: int = 10,
    gain_weight: int = 1,
) -> int:
    """Starve the opponent of room first, keep our own room second, then grab land."""
    return (
        denial_weight * denied_space(ctx, top, left)
        + space_weight * own_space(ctx, top, left)
        + gain_weight * claimed_cells(ctx, top, left)
    )


def aggressive(ctx: TurnContext, top: int, left: int) -> int:
    """Expand as fast as possible while closing in on the opponent."""
    touching = adjacency(ctx, top, left)
    dist_sq = min_distance_sq(ctx, top, left)
    closeness = 10000 // (dist_sq + 1) if dist_sq > 0 else 10000
    return (
        claimed_cells(ctx, top, left) * 1000
        + closeness * 5
        + touching.blocking * 300
        + touching.enemy * 50
        + touching.empty * 100
    )


def rush_then_block(
    ctx: TurnContext, top: int, left: int, threshold: int = RUSH_THRESHOLD
) -> int:
    """Run at the opponent while far away, then sit on its border and wall it in.

    The mode depends only on the current distance between the territories, so
    nothing has to be remembered between turns.
    """
    gap = ctx.territory_distance()
    claimed = claimed_cells(ctx, top, left)
    if gap > threshold:
        return -1000 * min_manhattan(ctx, top, left) + claimed
    return 100 * denied_space(ctx, top, left) + 20 * adjacency(ctx, top, left).enemy + claimed


DEFAULT_POLICY = "space-starving"

POLICIES: Dict[str, Policy] = {
    "space-starving": space_starving,
    "aggressive": aggressive,
    "rush-then-block": rush_then_block,
    "rush-then-block-early": partial(rush_then_block, threshold=2),
    "land-grab": partial(space_starving, denial_weight=1, space_weight=1, gain_weight=100),
}


def get_policy(name: str) -> Policy:
    """Return the policy registered as ``name``."""
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"unknown policy {name!r}; choose from {', '.join(POLICIES)}") from None
