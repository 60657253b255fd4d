"""Pre-snap penalties and play outcome evaluation.

The engine reports facts (where the carrier went down, whether a pass was
caught). This module turns those facts into a down-and-distance result and
the round's winner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .core.entities import Player, Team
from .core.field import PLAYABLE_END_YARD, PLAYABLE_START_YARD
from .core.situation import Situation, format_yards

logger = logging.getLogger(__name__)


# =============================================================================
# Enums
# =============================================================================

class OutcomeCause(str, Enum):
    """Why the down ended the way it did."""
    RUN_GAIN = "run-gain"
    RUN_STUFFED = "run-stuffed"
    COMPLETION = "completion"
    INCOMPLETION = "incompletion"
    SACK = "sack"
    PENALTY = "penalty"


class PenaltyKind(str, Enum):
    FALSE_START = "False start"
    OFFSIDES = "Offsides"


# =============================================================================
# Pre-Snap Penalty
# =============================================================================

@dataclass(frozen=True)
class PreSnapPenalty:
    """A pre-snap alignment foul."""
    kind: PenaltyKind
    team: Team
    player_id: str

    @property
    def label(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "team": self.team.value, "player_id": self.player_id}


def detect_pre_snap_penalty(
    players: Sequence[Player],
    line_of_scrimmage: float,
) -> Optional[PreSnapPenalty]:
    """Check the locked alignment before the snap.

    An offensive player past the line (y < los) is a false start. Otherwise a
    defender on the offense's side (y > los) is offsides. The offense is
    checked first.
    """
    for player in players:
        if player.is_offense and player.position.y < line_of_scrimmage:
            return PreSnapPenalty(PenaltyKind.FALSE_START, Team.OFFENSE, player.id)
    for player in players:
        if player.is_defense and player.position.y > line_of_scrimmage:
            return PreSnapPenalty(PenaltyKind.OFFSIDES, Team.DEFENSE, player.id)
    return None


# =============================================================================
# Outcome
# =============================================================================

@dataclass
class PlayOutcome:
    """Result of one down.

    Attributes:
        gained_yards: Yards gained by the offense (negative for a loss)
        cause: Why the down ended
        success: Offense reached the line to gain
        next_situation: Down, distance and spot for the next snap
        message: Human-readable summary
        penalty: The pre-snap foul, for a penalty outcome
        ball_carrier_id: Player whose final spot decided the gain
        tackler_id: Defender who made the stop, if any
    """
    gained_yards: float
    cause: OutcomeCause
    success: bool
    next_situation: Situation
    message: str = ""
    penalty: Optional[PreSnapPenalty] = None
    ball_carrier_id: Optional[str] = None
    tackler_id: Optional[str] = None

    @property
    def is_penalty(self) -> bool:
        return self.cause == OutcomeCause.PENALTY

    @property
    def round_winner(self) -> Optional[Team]:
        """Side that wins the round. A penalty replays the down."""
        if self.is_penalty:
            return None
        return Team.OFFENSE if self.success else Team.DEFENSE

    def to_dict(self) -> dict:
        return {
            "gained_yards": self.gained_yards,
            "cause": self.cause.value,
            "success": self.success,
            "next_situation": self.next_situation.to_dict(),
            "message": self.message,
            "penalty": self.penalty.to_dict() if self.penalty else None,
            "ball_carrier_id": self.ball_carrier_id,
            "tackler_id": self.tackler_id,
            "round_winner": self.round_winner.value if self.round_winner else None,
        }


NO_OPEN_RECEIVER_MESSAGE = (
    "Defense wins the rep. No eligible receiver finished open past the line to gain."
)
SACK_MESSAGE = "Defense wins the rep. Quarterback sacked before the throw."


def penalty_outcome(
    penalty: PreSnapPenalty,
    situation: Situation,
    penalty_yards: float = 5.0,
) -> PlayOutcome:
    """Enforce a pre-snap foul against the offending side and replay the down."""
    los = situation.line_of_scrimmage

    if penalty.team == Team.OFFENSE:
        new_spot = min(PLAYABLE_END_YARD, los + penalty_yards)
        moved = new_spot - los
        next_situation = Situation(
            id=situation.id,
            down=situation.down,
            yards_required=situation.yards_required + moved,
            ball_spot_yard=new_spot,
            description=situation.description,
        )
        direction = "back"
    else:
        new_spot = max(PLAYABLE_START_YARD, los - penalty_yards)
        moved = los - new_spot
        remaining = situation.yards_required - moved
        if remaining <= 0:
            next_situation = situation.reset_for_first_down(new_spot)
        else:
            next_situation = Situation(
                id=situation.id,
                down=situation.down,
                yards_required=remaining,
                ball_spot_yard=new_spot,
                description=situation.description,
            )
        direction = "forward"

    message = (
        f"{penalty.label} on the {penalty.team.value}. "
        f"Ball moved {direction} {format_yards(penalty_yards)} yards."
    )
    logger.info("Pre-snap penalty: %s", message)

    return PlayOutcome(
        gained_yards=0.0,
        cause=OutcomeCause.PENALTY,
        success=False,
        next_situation=next_situation,
        message=message,
        penalty=penalty,
    )


def evaluate_outcome(
    situation: Situation,
    *,
    is_run_play: bool,
    completed: bool,
    is_sack: bool,
    carrier: Optional[Player],
    final_y: Optional[float],
    tackler_id: Optional[str] = None,
) -> PlayOutcome:
    """Score a finished play.

    Args:
        situation: Situation the play was run from
        is_run_play: The play was classified as a run
        completed: A pass reached its receiver
        is_sack: The quarterback went down before the throw
        carrier: Player whose final spot decides the gain
        final_y: Carrier's final field y
        tackler_id: Defender who made the stop
    """
    los = situation.line_of_scrimmage
    carrier_id = carrier.id if carrier else None
    carrier_label = carrier.label if carrier else "Ball carrier"

    if is_sack:
        gained = 0.0
        cause = OutcomeCause.SACK
        success = False
        message = SACK_MESSAGE
    elif is_run_play and carrier is not None and final_y is not None:
        gained = los - final_y
        success = gained >= situation.yards_required
        cause = OutcomeCause.RUN_GAIN if success else OutcomeCause.RUN_STUFFED
        if success:
            message = f"Offense scores! {carrier_label} ran past the sticks."
        else:
            message = (
                f"Defense wins the rep. {carrier_label} was stopped after "
                f"{format_yards(gained)} yards."
            )
    elif completed and carrier is not None and final_y is not None:
        gained = los - final_y
        success = gained >= situation.yards_required
        cause = OutcomeCause.COMPLETION
        if success:
            message = f"Offense scores! {carrier_label} got open beyond the sticks."
        else:
            message = (
                f"Defense wins the rep. {carrier_label} caught it but was held to "
                f"{format_yards(gained)} yards."
            )
    else:
        gained = 0.0
        success = False
        cause = OutcomeCause.INCOMPLETION
        message = NO_OPEN_RECEIVER_MESSAGE

    next_situation, _ = situation.advance(gained)

    logger.info("Outcome: %s (%.2f yards, success=%s)", cause.value, gained, success)

    return PlayOutcome(
        gained_yards=gained,
        cause=cause,
        success=success,
        next_situation=next_situation,
        message=message,
        ball_carrier_id=carrier_id,
        tackler_id=tackler_id,
    )
