"""Field geometry and coordinate system.

Single coordinate system used by the reveal engine and the authoring layer.
All measurements in yards.
"""

from __future__ import annotations

from .point import Point


# =============================================================================
# Field Dimensions (yards)
# =============================================================================

FIELD_WIDTH = 53.3          # Sideline to sideline
FIELD_LENGTH = 120.0        # Back of end zone to back of end zone
PLAYABLE_START_YARD = 10.0  # Goal line the offense attacks
PLAYABLE_END_YARD = 110.0   # Offense's own goal line
FIELD_CENTER_X = FIELD_WIDTH / 2

# Authoring grid
SNAP_INCREMENT_YARDS = 0.2

# Flat bands (outside thirds) used to shape underneath zones
LEFT_FLAT_BAND = (6.0, 21.0)
RIGHT_FLAT_BAND = (32.3, 47.0)

# Coordinate system:
#   x = 0 at the left sideline, FIELD_WIDTH at the right
#   y = 0 at the back of the end zone the offense attacks
#   The offense moves toward decreasing y, so a gain is (los - y).


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value between low and high."""
    return max(low, min(high, value))


def clamp_to_field(point: Point) -> Point:
    """Clamp a point to the field boundaries."""
    x = clamp(point.x, 0.0, FIELD_WIDTH)
    y = clamp(point.y, 0.0, FIELD_LENGTH)
    if x == point.x and y == point.y:
        return point
    return Point(x, y)


def is_in_bounds(point: Point) -> bool:
    """Check if a point is within the field boundaries."""
    return 0.0 <= point.x <= FIELD_WIDTH and 0.0 <= point.y <= FIELD_LENGTH


def depth_past_los(point: Point, line_of_scrimmage: float) -> float:
    """Signed yards past the line of scrimmage in the offense's direction."""
    return line_of_scrimmage - point.y


def clamp_ball_spot(yard: float) -> float:
    """Keep a ball spot between the two goal lines."""
    return clamp(yard, PLAYABLE_START_YARD, PLAYABLE_END_YARD)


def _snap_unit(value: float) -> float:
    return round(value / SNAP_INCREMENT_YARDS) * SNAP_INCREMENT_YARDS


def snap_point_to_yard(point: Point) -> Point:
    """Snap a pointer position to the authoring grid.

    Used by the authoring layer to turn pointer input into field points.
    """
    clamped = clamp_to_field(point)
    return Point(_snap_unit(clamped.x), _snap_unit(clamped.y))


def in_flat_band(x: float) -> tuple[float, float] | None:
    """Return the flat band containing x, if any."""
    for band in (LEFT_FLAT_BAND, RIGHT_FLAT_BAND):
        if band[0] <= x <= band[1]:
            return band
    return None
