"""Pass protection system.

Blockers pick up blitzing rushers at the snap and hold a pocket between the
rusher and the quarterback. A rusher that reaches its blocker is frozen at a
standoff until the ball is thrown.

Freeze state is owned by the simulation context, never by this module.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from ..core.point import Point
from ..core.config import RevealConfig


def claim_rushers(
    blockers: Sequence[Tuple[str, Point]],
    rushers: Sequence[Tuple[str, Point]],
) -> Dict[str, str]:
    """Pair each blocker with the nearest unclaimed rusher.

    Blockers claim in the order given. Distances are measured at start
    positions, so the pairing is fixed for the whole play.

    Returns:
        blocker id -> rusher id
    """
    claims: Dict[str, str] = {}
    claimed: set[str] = set()

    for blocker_id, blocker_pos in blockers:
        best_id: Optional[str] = None
        best_dist = float("inf")
        for rusher_id, rusher_pos in rushers:
            if rusher_id in claimed:
                continue
            dist = blocker_pos.distance_to(rusher_pos)
            if dist < best_dist:
                best_dist = dist
                best_id = rusher_id
        if best_id is None:
            break
        claims[blocker_id] = best_id
        claimed.add(best_id)

    return claims


def protection_anchor(
    qb_pos: Point,
    rusher_pos: Point,
    line_of_scrimmage: float,
    config: RevealConfig,
) -> Point:
    """Point a blocker sets up at between its rusher and the quarterback.

    Sits protection_anchor_fraction of the way from the quarterback to the
    rusher. Never more than protection_max_depth past the line, never closer
    than protection_qb_buffer in front of the quarterback.
    """
    anchor = qb_pos.lerp(rusher_pos, config.protection_anchor_fraction)
    y = min(anchor.y, qb_pos.y - config.protection_qb_buffer)
    y = max(line_of_scrimmage - config.protection_max_depth, y)
    return Point(anchor.x, y)


def freeze_offset(blocker_pos: Point, rusher_pos: Point, config: RevealConfig) -> Point:
    """Offset from the blocker at which an engaged rusher is held.

    Keeps the rusher's current direction from the blocker, at no less than
    the standoff distance. A rusher standing on the blocker is held directly
    upfield (toward the defense).
    """
    delta = rusher_pos - blocker_pos
    dist = delta.length()
    if dist == 0:
        return Point(0.0, -config.protection_standoff)
    return delta.normalized() * max(dist, config.protection_standoff)


def should_freeze(blocker_pos: Point, rusher_pos: Point, config: RevealConfig) -> bool:
    return blocker_pos.distance_to(rusher_pos) <= config.protection_engage_radius
