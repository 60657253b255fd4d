"""Overlap resolution.

Runs after every other resolver in a step. Pairs closer than the minimum
separation are pushed apart along the line between them. Frozen players
(held by a block, stood up in pass protection, or locked in a tackle) do not
move; the other player takes the whole correction.

A push can open a new overlap with a third player, so sweeps repeat until a
full sweep moves nobody.
"""

from __future__ import annotations

from typing import AbstractSet, Dict, List

from ..core.point import Point
from ..core.field import clamp_to_field

# Direction used to split two players standing on the same spot
_COINCIDENT_AXIS = Point(1.0, 0.0)

# Shortfalls at or below this are treated as resolved
SEPARATION_TOLERANCE = 1e-9

# Hard stop for clusters that cannot be fully separated (e.g. pinned on a sideline)
MAX_SWEEPS = 200


def resolve_overlaps(
    positions: Dict[str, Point],
    order: List[str],
    frozen: AbstractSet[str],
    min_separation: float,
    passes: int,
) -> Dict[str, Point]:
    """Push overlapping players apart.

    Args:
        positions: Player id -> position, before resolution
        order: Pair iteration order (roster order)
        frozen: Ids that must not move
        min_separation: Minimum distance between any two players
        passes: Baseline sweep count. Sweeps continue past it while any
            pair still overlaps, up to MAX_SWEEPS.

    Returns:
        New id -> position map. The input map is not modified.
    """
    resolved = dict(positions)
    ids = [pid for pid in order if pid in resolved]

    for _ in range(max(passes, MAX_SWEEPS)):
        moved = False
        for i, a_id in enumerate(ids):
            for b_id in ids[i + 1:]:
                a_frozen = a_id in frozen
                b_frozen = b_id in frozen
                if a_frozen and b_frozen:
                    continue

                a = resolved[a_id]
                b = resolved[b_id]
                dist = a.distance_to(b)
                shortfall = min_separation - dist
                if shortfall <= SEPARATION_TOLERANCE:
                    continue

                direction = (b - a).normalized() if dist > 0 else _COINCIDENT_AXIS

                if a_frozen:
                    resolved[b_id] = clamp_to_field(b + direction * shortfall)
                elif b_frozen:
                    resolved[a_id] = clamp_to_field(a - direction * shortfall)
                else:
                    half = shortfall / 2
                    resolved[a_id] = clamp_to_field(a - direction * half)
                    resolved[b_id] = clamp_to_field(b + direction * half)
                moved = True

        if not moved:
            break

    return resolved
