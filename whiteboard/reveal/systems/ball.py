"""Ball and play-type system.

Classifies the play once at the snap, then answers where the ball is and who
holds it at any progress:

Run play:
    QB holds -> linear handoff blend to the runner -> runner carries

Pass play:
    QB holds -> throw committed to the most open receiver after the read
    time -> linear flight to the receiver's live position -> receiver carries
    and fights for extra yards toward the line to gain
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.point import Point
from ..core.entities import Assignment, BallFrame, Player
from ..core.config import RevealConfig
from ..core.field import FIELD_CENTER_X, depth_past_los


# =============================================================================
# Ball Plan
# =============================================================================

@dataclass
class RevealBallPlan:
    """What the ball does this play.

    A run plan is complete at the snap. A pass plan starts empty and the
    throw fields are filled in the moment a receiver comes open.
    """
    is_run_play: bool = False
    run_carrier_id: Optional[str] = None
    completion_target_id: Optional[str] = None
    pass_throw_start_progress: Optional[float] = None
    pass_throw_start_point: Optional[Point] = None

    @property
    def has_throw(self) -> bool:
        return (
            self.completion_target_id is not None
            and self.pass_throw_start_progress is not None
            and self.pass_throw_start_point is not None
        )

    def commit_throw(self, target_id: str, progress: float, start_point: Point) -> None:
        self.completion_target_id = target_id
        self.pass_throw_start_progress = progress
        self.pass_throw_start_point = start_point

    def copy(self) -> RevealBallPlan:
        return RevealBallPlan(
            is_run_play=self.is_run_play,
            run_carrier_id=self.run_carrier_id,
            completion_target_id=self.completion_target_id,
            pass_throw_start_progress=self.pass_throw_start_progress,
            pass_throw_start_point=self.pass_throw_start_point,
        )

    def to_dict(self) -> dict:
        start = self.pass_throw_start_point
        return {
            "is_run_play": self.is_run_play,
            "run_carrier_id": self.run_carrier_id,
            "completion_target_id": self.completion_target_id,
            "pass_throw_start_progress": self.pass_throw_start_progress,
            "pass_throw_start_point": start.to_dict() if start else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RevealBallPlan:
        start = data.get("pass_throw_start_point")
        progress = data.get("pass_throw_start_progress")
        return cls(
            is_run_play=bool(data["is_run_play"]),
            run_carrier_id=data.get("run_carrier_id"),
            completion_target_id=data.get("completion_target_id"),
            pass_throw_start_progress=float(progress) if progress is not None else None,
            pass_throw_start_point=Point.from_dict(start) if start else None,
        )


# =============================================================================
# Classification
# =============================================================================

def find_quarterback(players: Sequence[Player]) -> Optional[Player]:
    """First quarterback in roster order, if any."""
    for player in players:
        if player.is_quarterback:
            return player
    return None


def classify_play(players: Sequence[Player]) -> RevealBallPlan:
    """Build the initial ball plan.

    Any offensive runner makes the play a run, carried by the first runner in
    roster order. Otherwise it is a pass with no throw chosen yet.
    """
    for player in players:
        if player.is_offense and player.assignment == Assignment.RUN:
            return RevealBallPlan(is_run_play=True, run_carrier_id=player.id)
    return RevealBallPlan(is_run_play=False)


# =============================================================================
# Ball State
# =============================================================================

def dead_ball_frame(line_of_scrimmage: float) -> BallFrame:
    """Ball resting on the spot when nobody can take the snap."""
    return BallFrame(position=Point(FIELD_CENTER_X, line_of_scrimmage))


def run_ball_frame(
    progress: float,
    qb: Optional[Tuple[str, Point]],
    runner: Tuple[str, Point],
    config: RevealConfig,
) -> BallFrame:
    """Ball state on a run play.

    The ball has no carrier while it is moving between hands.
    """
    runner_id, runner_pos = runner
    if qb is None or qb[0] == runner_id:
        return BallFrame(position=runner_pos, carrier_id=runner_id)

    qb_id, qb_pos = qb
    if progress < config.handoff_start:
        return BallFrame(position=qb_pos, carrier_id=qb_id)
    if progress >= config.handoff_end:
        return BallFrame(position=runner_pos, carrier_id=runner_id)

    window = config.handoff_end - config.handoff_start
    t = (progress - config.handoff_start) / window
    return BallFrame(position=qb_pos.lerp(runner_pos, t))


def flight_fraction(progress: float, start_progress: float, config: RevealConfig) -> float:
    """How far along its flight the ball is (1.0 means caught)."""
    if config.throw_window <= 0:
        return 1.0
    return max(0.0, min(1.0, (progress - start_progress) / config.throw_window))


def flight_position(start_point: Point, receiver_pos: Point, fraction: float) -> Point:
    """Ball in the air, heading for the receiver's live position."""
    return start_point.lerp(receiver_pos, fraction)


# =============================================================================
# Receiver Selection
# =============================================================================

def nearby_defender_count(point: Point, defenders: Sequence[Point], radius: float) -> int:
    return sum(1 for d in defenders if point.distance_to(d) <= radius)


def rank_open_receivers(
    candidates: Sequence[Tuple[str, Point]],
    defenders: Sequence[Point],
    line_of_scrimmage: float,
    config: RevealConfig,
) -> List[str]:
    """Order open receivers from best to worst.

    Fewest defenders within nearby_radius first, then deepest past the line,
    then by id.

    Args:
        candidates: (receiver id, live position) of receivers not excluded
        defenders: Positions of defenders not frozen by a block
    """
    def sort_key(item: Tuple[str, Point]):
        rid, pos = item
        return (
            nearby_defender_count(pos, defenders, config.nearby_radius),
            -depth_past_los(pos, line_of_scrimmage),
            rid,
        )

    return [rid for rid, _ in sorted(candidates, key=sort_key)]


# =============================================================================
# After The Catch
# =============================================================================

def after_catch_goal(carrier_pos: Point, line_to_gain: float) -> Point:
    """Where the carrier heads: the sticks, or straight downfield past them."""
    if carrier_pos.y > line_to_gain:
        return Point(carrier_pos.x, line_to_gain)
    return Point(carrier_pos.x, carrier_pos.y - 1.0)


def after_catch_step(
    carrier_pos: Point,
    line_to_gain: float,
    travelled: float,
    config: RevealConfig,
) -> Tuple[Point, float]:
    """Advance the carrier one step of after-catch effort.

    Returns:
        (new position, total yards travelled after the catch)
    """
    step = min(config.yac_rate / config.planning_steps, config.yac_max_yards - travelled)
    if step <= 0:
        return carrier_pos, travelled
    goal = after_catch_goal(carrier_pos, line_to_gain)
    moved = carrier_pos.step_toward(goal, step)
    return moved, travelled + carrier_pos.distance_to(moved)


def after_catch_exhausted(travelled: float, config: RevealConfig) -> bool:
    return travelled >= config.yac_max_yards - 1e-9
