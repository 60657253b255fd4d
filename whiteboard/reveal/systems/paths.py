"""Path/progress resolver.

Turns a drawn waypoint list and play progress into a position. Movement is
distance-linear: every player gets the same travel budget per play, so a long
route is truncated rather than run faster.
"""

from __future__ import annotations

from typing import Sequence

from ..core.point import Point
from ..core.entities import Player
from ..core.field import clamp_to_field

# Segments shorter than this are treated as zero-length and skipped
MIN_SEGMENT_LENGTH = 1e-9


def path_length(start: Point, path: Sequence[Point]) -> float:
    """Total length of the polyline start -> path[0] -> ... -> path[-1]."""
    total = 0.0
    previous = start
    for waypoint in path:
        total += previous.distance_to(waypoint)
        previous = waypoint
    return total


def point_along_path(start: Point, path: Sequence[Point], max_distance: float) -> Point:
    """Walk the polyline from start at unit speed for max_distance yards.

    Holds at the final waypoint once the path is consumed. An empty path
    (or a non-positive distance) leaves the player at start.
    """
    if not path or max_distance <= 0:
        return start

    remaining = max_distance
    current = start
    for waypoint in path:
        segment = current.distance_to(waypoint)
        if segment < MIN_SEGMENT_LENGTH:
            current = waypoint
            continue
        if remaining <= segment:
            return current.lerp(waypoint, remaining / segment)
        remaining -= segment
        current = waypoint

    return current


def resolve_path_position(
    player: Player,
    start: Point,
    progress: float,
    travel_budget: float,
) -> Point:
    """Position of a path-following player at a given progress.

    Args:
        player: The player whose drawn path is walked
        start: Locked start position for this reveal
        progress: Play progress, clamped to [0, 1]
        travel_budget: Yards available over a full play

    Returns:
        Field-clamped position on the path
    """
    progress = max(0.0, min(1.0, progress))
    return clamp_to_field(point_along_path(start, player.path, travel_budget * progress))
