"""Tackle and sack detection.

Contact is purely geometric: the first defender (not held by a block) to get
within tackle radius of the ball carrier ends the play. A contact on the
quarterback before the throw is a sack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Optional, Sequence, Tuple

from ..core.point import Point
from ..core.field import clamp_to_field


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class RunTackleResult:
    """The terminal contact of a play.

    Attributes:
        ball_carrier_id: Player who was brought down
        tackler_id: Defender who made contact
        stop_progress: Play progress at contact
        stop_point: Carrier position at contact
        frozen_positions: Every player's position once the tackle is resolved
        is_sack: Contact on the quarterback before the throw
    """
    ball_carrier_id: str
    tackler_id: str
    stop_progress: float
    stop_point: Point
    frozen_positions: Dict[str, Point] = field(default_factory=dict)
    is_sack: bool = False

    def to_dict(self) -> dict:
        return {
            "ball_carrier_id": self.ball_carrier_id,
            "tackler_id": self.tackler_id,
            "stop_progress": self.stop_progress,
            "stop_point": self.stop_point.to_dict(),
            "frozen_positions": {pid: p.to_dict() for pid, p in self.frozen_positions.items()},
            "is_sack": self.is_sack,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RunTackleResult:
        return cls(
            ball_carrier_id=str(data["ball_carrier_id"]),
            tackler_id=str(data["tackler_id"]),
            stop_progress=float(data["stop_progress"]),
            stop_point=Point.from_dict(data["stop_point"]),
            frozen_positions={
                str(pid): Point.from_dict(p) for pid, p in data["frozen_positions"].items()
            },
            is_sack=bool(data.get("is_sack", False)),
        )


# =============================================================================
# Detection
# =============================================================================

def find_first_contact(
    carrier_pos: Point,
    defenders: Sequence[Tuple[str, Point]],
    excluded: AbstractSet[str],
    tackle_radius: float,
) -> Optional[str]:
    """Defender making contact with the carrier this step, if any.

    Nearest defender wins, ties go to the lower id.
    """
    best: Optional[Tuple[float, str]] = None
    for defender_id, defender_pos in defenders:
        if defender_id in excluded:
            continue
        dist = carrier_pos.distance_to(defender_pos)
        if dist > tackle_radius:
            continue
        key = (dist, defender_id)
        if best is None or key < best:
            best = key
    return best[1] if best else None


def separate_tackler(carrier_pos: Point, tackler_pos: Point, tackle_radius: float) -> Point:
    """Place the tackler exactly tackle_radius from the carrier.

    Keeps the tackler's side of the carrier; a tackler standing on the
    carrier is placed along +x.
    """
    delta = tackler_pos - carrier_pos
    if delta.length() == 0:
        direction = Point(1.0, 0.0)
    else:
        direction = delta.normalized()
    return clamp_to_field(carrier_pos + direction * tackle_radius)
