"""Match state - round counters and the current situation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..reveal.core.entities import Team
from ..reveal.core.situation import Situation
from ..reveal.outcome import PlayOutcome
from .situations import DEFAULT_SITUATION

logger = logging.getLogger(__name__)


@dataclass
class MatchState:
    """A best-of duel between the two sides.

    Attributes:
        situation: Situation for the next snap
        offense_wins: Rounds won by the offense
        defense_wins: Rounds won by the defense
        rounds_to_win: Round wins that end the match
        history: Outcomes applied so far, penalties included
    """
    situation: Situation = DEFAULT_SITUATION
    offense_wins: int = 0
    defense_wins: int = 0
    rounds_to_win: int = 3
    history: List[PlayOutcome] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.offense_wins >= self.rounds_to_win or self.defense_wins >= self.rounds_to_win

    @property
    def winner(self) -> Optional[Team]:
        if self.offense_wins >= self.rounds_to_win:
            return Team.OFFENSE
        if self.defense_wins >= self.rounds_to_win:
            return Team.DEFENSE
        return None

    @property
    def rounds_played(self) -> int:
        return self.offense_wins + self.defense_wins

    @property
    def result_message(self) -> str:
        if self.winner == Team.OFFENSE:
            return f"Offense wins the match {self.rounds_to_win} plays to glory."
        if self.winner == Team.DEFENSE:
            return "Defense stonewalls the match and wins."
        return f"Offense {self.offense_wins} - Defense {self.defense_wins}"

    def apply_outcome(self, outcome: PlayOutcome) -> Optional[Team]:
        """Record a down and move to the next situation.

        Returns the side awarded the round, or None for a penalty (the down
        is replayed from the new spot).

        Raises:
            RuntimeError: if the match is already over
        """
        if self.is_over:
            raise RuntimeError("Match is over; reset before playing another round")

        self.history.append(outcome)
        self.situation = outcome.next_situation

        winner = outcome.round_winner
        if winner == Team.OFFENSE:
            self.offense_wins += 1
        elif winner == Team.DEFENSE:
            self.defense_wins += 1

        logger.info(
            "Round result: %s (offense %d, defense %d)",
            winner.value if winner else "replay down",
            self.offense_wins,
            self.defense_wins,
        )
        return winner

    def reset(self, situation: Optional[Situation] = None) -> None:
        self.situation = situation or DEFAULT_SITUATION
        self.offense_wins = 0
        self.defense_wins = 0
        self.history.clear()
