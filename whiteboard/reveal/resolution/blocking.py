"""Run blocking and pursuit.

On a run play each blocker latches onto the first defender that wanders
within reach, and holds him at a fixed offset for the rest of the play.
Every other active defender chases the ball.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..core.point import Point


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class RunBlockEngagement:
    """A blocker/defender pairing discovered during planning.

    Attributes:
        progress: Play progress at which the block was made
        blocker_id: Offensive player holding the block
        blocker_offset: Defender position minus blocker position at contact
    """
    progress: float
    blocker_id: str
    blocker_offset: Point

    def is_active(self, progress: float) -> bool:
        return progress >= self.progress

    def to_dict(self) -> dict:
        return {
            "progress": self.progress,
            "blocker_id": self.blocker_id,
            "blocker_offset": self.blocker_offset.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> RunBlockEngagement:
        return cls(
            progress=float(data["progress"]),
            blocker_id=str(data["blocker_id"]),
            blocker_offset=Point.from_dict(data["blocker_offset"]),
        )


# =============================================================================
# Engagement Discovery
# =============================================================================

def discover_run_blocks(
    blockers: Sequence[Tuple[str, Point]],
    defenders: Sequence[Tuple[str, Point]],
    engagements: Mapping[str, RunBlockEngagement],
    progress: float,
    engage_radius: float,
) -> Dict[str, RunBlockEngagement]:
    """Find new blocks at the current step.

    Each free blocker, in the order given, takes the nearest free defender
    within engage_radius. A blocker or defender is paired at most once; the
    first pairing wins.

    Args:
        blockers: (id, position) of blockers this step
        defenders: (id, position) of defenders this step
        engagements: Existing pairings keyed by defender id
        progress: Current play progress

    Returns:
        New pairings keyed by defender id
    """
    busy_blockers = {e.blocker_id for e in engagements.values()}
    taken = set(engagements)
    found: Dict[str, RunBlockEngagement] = {}

    for blocker_id, blocker_pos in blockers:
        if blocker_id in busy_blockers:
            continue

        nearest_id: Optional[str] = None
        nearest_pos: Optional[Point] = None
        nearest_dist = float("inf")
        for defender_id, defender_pos in defenders:
            if defender_id in taken:
                continue
            dist = blocker_pos.distance_to(defender_pos)
            if dist < nearest_dist:
                nearest_dist = dist
                nearest_id = defender_id
                nearest_pos = defender_pos

        if nearest_id is None or nearest_dist > engage_radius:
            continue

        found[nearest_id] = RunBlockEngagement(
            progress=progress,
            blocker_id=blocker_id,
            blocker_offset=nearest_pos - blocker_pos,
        )
        taken.add(nearest_id)
        busy_blockers.add(blocker_id)

    return found


def pinned_position(blocker_pos: Point, engagement: RunBlockEngagement) -> Point:
    """Where a blocked defender is held."""
    return blocker_pos + engagement.blocker_offset


# =============================================================================
# Pursuit
# =============================================================================

def pursue(position: Point, target: Point, step_budget: float) -> Point:
    """One step of pursuit toward the live target (no prediction)."""
    return position.step_toward(target, step_budget)
