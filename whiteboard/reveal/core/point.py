"""2D point implementation for the reveal engine.

All positions on the whiteboard field are Points.
Units are yards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable 2D point / vector.

    Coordinate system:
        x = Across the field, 0 at the left sideline
        y = Goal to goal, 0 at the back of the top end zone
        The offense attacks toward decreasing y.

    All units in yards.
    """
    x: float = 0.0
    y: float = 0.0

    # =========================================================================
    # Arithmetic Operations
    # =========================================================================

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    # =========================================================================
    # Vector Operations
    # =========================================================================

    def length(self) -> float:
        """Magnitude of vector."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Point:
        """Unit vector in same direction (zero vector stays zero)."""
        length = self.length()
        if length < 1e-9:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def lerp(self, other: Point, t: float) -> Point:
        """Linear interpolation to another point."""
        return Point(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
        )

    def step_toward(self, target: Point, max_distance: float) -> Point:
        """Move toward target by at most max_distance, never overshooting."""
        if max_distance <= 0:
            return self
        gap = self.distance_to(target)
        if gap <= max_distance:
            return target
        return self.lerp(target, max_distance / gap)

    # =========================================================================
    # Utility
    # =========================================================================

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def rounded(self, decimals: int = 2) -> Point:
        """Return point with rounded components."""
        return Point(round(self.x, decimals), round(self.y, decimals))

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        return cls(float(data["x"]), float(data["y"]))

    def __repr__(self) -> str:
        return f"Point({self.x:.2f}, {self.y:.2f})"

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"

    @classmethod
    def zero(cls) -> Point:
        """Zero vector."""
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, degrees: float, length: float = 1.0) -> Point:
        """Create vector from an angle in degrees and a length."""
        radians = math.radians(degrees)
        return cls(math.cos(radians) * length, math.sin(radians) * length)
