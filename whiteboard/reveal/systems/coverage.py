"""Coverage system for the reveal engine.

Handles defender movement for both coverage families:
- Man coverage: distance-budgeted chase of the target's live position, with
  stable per-defender jitter once the coverage is tight
- Zone coverage: zone shape derived from the drawn drop, reproducible target
  selection, and a soft pull toward the chosen receiver
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.point import Point
from ..core.entities import Player
from ..core.config import RevealConfig
from ..core.field import FIELD_WIDTH, clamp, clamp_to_field, depth_past_los, in_flat_band
from ..core.hashing import jitter_offset, seeded_index


# =============================================================================
# Zone Shapes
# =============================================================================

class ZoneKind(str, Enum):
    """How a zone area was derived."""
    FLAT = "flat"       # Wide shallow ellipse in an outside third
    DEEP = "deep"       # Deep oval behind a DB drop
    CIRCLE = "circle"   # Everything else


@dataclass(frozen=True)
class ZoneArea:
    """A zone defender's coverage area.

    Circles are stored as ellipses with equal radii.
    """
    defender_id: str
    kind: ZoneKind
    center: Point
    radius_x: float
    radius_y: float

    @property
    def is_ellipse(self) -> bool:
        return self.kind != ZoneKind.CIRCLE

    def contains(self, point: Point) -> bool:
        """Check if a point is inside the zone (boundary included)."""
        nx = (point.x - self.center.x) / self.radius_x
        ny = (point.y - self.center.y) / self.radius_y
        return nx * nx + ny * ny <= 1.0


def _clamp_zone_center(
    center: Point,
    radius_x: float,
    radius_y: float,
    line_of_scrimmage: float,
) -> Point:
    """Keep the zone inside the sidelines and on the defense's side."""
    return Point(
        clamp(center.x, radius_x, FIELD_WIDTH - radius_x),
        clamp(center.y, radius_y, line_of_scrimmage - radius_y),
    )


def derive_zone_area(
    defender: Player,
    start: Point,
    line_of_scrimmage: float,
    config: RevealConfig,
) -> ZoneArea:
    """Derive a zone area from where the defender's drawn drop ends.

    The shape depends on the drop end and the defender's role:
        - flat band (outside third) at shallow depth -> wide shallow ellipse
        - DB dropping at least zone_deep_min_depth -> deep oval
        - anything else -> circle growing mildly with drop distance
    """
    center = defender.path[-1] if defender.path else start
    depth = depth_past_los(center, line_of_scrimmage)

    band = in_flat_band(center.x)
    if band is not None and depth < config.zone_flat_max_depth:
        radius_x = (band[1] - band[0]) / 2
        radius_y = config.zone_flat_radius_y
        return ZoneArea(
            defender_id=defender.id,
            kind=ZoneKind.FLAT,
            center=_clamp_zone_center(center, radius_x, radius_y, line_of_scrimmage),
            radius_x=radius_x,
            radius_y=radius_y,
        )

    if defender.role == "DB" and depth >= config.zone_deep_min_depth:
        radius_x = config.zone_deep_radius_x
        radius_y = config.zone_deep_radius_y
        return ZoneArea(
            defender_id=defender.id,
            kind=ZoneKind.DEEP,
            center=_clamp_zone_center(center, radius_x, radius_y, line_of_scrimmage),
            radius_x=radius_x,
            radius_y=radius_y,
        )

    drop = start.distance_to(center)
    radius = clamp(
        config.zone_circle_base + drop * config.zone_circle_growth,
        config.zone_circle_min,
        config.zone_circle_max,
    )
    return ZoneArea(
        defender_id=defender.id,
        kind=ZoneKind.CIRCLE,
        center=_clamp_zone_center(center, radius, radius, line_of_scrimmage),
        radius_x=radius,
        radius_y=radius,
    )


def zone_commit_seed(defender_id: str, candidate_ids: Sequence[str]) -> str:
    """Seed string for a zone defender's commitment among sorted candidates."""
    return f"{defender_id}:{'|'.join(sorted(candidate_ids))}"


def select_zone_targets(
    areas: Sequence[ZoneArea],
    receivers: Sequence[Tuple[str, Point]],
) -> Dict[str, str]:
    """Commit each zone defender to at most one receiver inside its area.

    Zones are processed in the given order. A receiver taken by an earlier
    zone is no longer a candidate for later zones. The pick among candidates
    is a stable hash, not nearest distance, so it reproduces exactly.

    Returns:
        defender id -> receiver id
    """
    taken: set[str] = set()
    commitments: Dict[str, str] = {}

    for area in areas:
        candidates = sorted(
            rid for rid, pos in receivers
            if rid not in taken and area.contains(pos)
        )
        if not candidates:
            continue
        index = seeded_index(zone_commit_seed(area.defender_id, candidates), len(candidates))
        chosen = candidates[index]
        commitments[area.defender_id] = chosen
        taken.add(chosen)

    return commitments


def pull_toward_receiver(
    offset: Point,
    base: Point,
    receiver_pos: Point,
    fraction: float,
    max_step: float,
) -> Point:
    """Advance a zone defender's pull offset toward its receiver.

    The defender sits at base + offset. Each step closes `fraction` of the
    remaining gap, never more than max_step yards.
    """
    current = base + offset
    gap = receiver_pos - current
    delta = gap * fraction
    length = delta.length()
    if length > max_step:
        delta = delta.normalized() * max_step
    return offset + delta


def is_in_any_zone(point: Point, areas: Sequence[ZoneArea]) -> bool:
    return any(area.contains(point) for area in areas)


# =============================================================================
# Man Coverage
# =============================================================================

@dataclass(frozen=True)
class ManCoverageResult:
    """Result of resolving one man defender for one step."""
    position: Point
    chase_point: Point
    is_tight: bool


def man_jitter(defender_id: str, config: RevealConfig) -> Point:
    """Stable jitter offset for a man defender (same for the whole reveal)."""
    return jitter_offset(defender_id, config.jitter_min, config.jitter_max)


def resolve_man_coverage(
    defender_id: str,
    start: Point,
    target_pos: Optional[Point],
    progress: float,
    config: RevealConfig,
) -> ManCoverageResult:
    """Resolve a man defender's position at a given progress.

    The defender chases the target's live position from its own start, limited
    by the same travel budget as everyone else. Once the chase point is inside
    the vicinity radius the coverage is tight, and the stable jitter offset is
    blended in.

    A missing target means the defender holds at start.
    """
    if target_pos is None:
        return ManCoverageResult(position=start, chase_point=start, is_tight=False)

    budget = config.travel_budget_yards * max(0.0, min(1.0, progress))
    chase = start.step_toward(target_pos, budget)

    if chase.distance_to(target_pos) > config.man_vicinity_radius:
        return ManCoverageResult(position=clamp_to_field(chase), chase_point=chase, is_tight=False)

    blended = chase + man_jitter(defender_id, config) * config.jitter_mix
    return ManCoverageResult(position=clamp_to_field(blended), chase_point=chase, is_tight=True)


def receivers_near_man_defenders(
    receivers: Sequence[Tuple[str, Point]],
    man_positions: List[Point],
    radius: float,
) -> set[str]:
    """Receivers within radius of any man defender."""
    return {
        rid for rid, pos in receivers
        if any(pos.distance_to(d) <= radius for d in man_positions)
    }
