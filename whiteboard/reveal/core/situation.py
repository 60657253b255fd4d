"""Down and distance situation for a single reveal."""

from __future__ import annotations

from dataclasses import dataclass

from .field import PLAYABLE_START_YARD, clamp_ball_spot


DOWN_NAMES = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}


def format_yards(yards: float) -> str:
    """Yards for display, at most one decimal place."""
    return f"{round(yards, 1):g}"


@dataclass(frozen=True)
class Situation:
    """
    Down, distance and ball spot for the current round.

    ball_spot_yard is the field y of the line of scrimmage. The offense
    attacks toward PLAYABLE_START_YARD, so the line to gain sits at
    ball_spot_yard - yards_required.
    """

    id: str = "custom"
    down: int = 1
    yards_required: float = 10.0
    ball_spot_yard: float = 35.0
    description: str = ""

    @property
    def line_of_scrimmage(self) -> float:
        return self.ball_spot_yard

    @property
    def line_to_gain(self) -> float:
        """Field y the carrier must reach to convert."""
        return max(PLAYABLE_START_YARD, self.ball_spot_yard - self.yards_required)

    @property
    def yards_to_goal(self) -> float:
        return self.ball_spot_yard - PLAYABLE_START_YARD

    @property
    def is_goal_to_go(self) -> bool:
        return self.yards_to_goal <= self.yards_required

    @property
    def display(self) -> str:
        """Display string like '1st & 10' or '3rd & Goal'."""
        down_str = DOWN_NAMES.get(self.down, f"{self.down}th")
        if self.is_goal_to_go:
            return f"{down_str} & Goal"
        return f"{down_str} & {format_yards(self.yards_required)}"

    def reset_for_first_down(self, ball_spot_yard: float) -> Situation:
        """First and ten (or goal) from a new spot."""
        return Situation(
            id="first-down",
            down=1,
            yards_required=min(10.0, ball_spot_yard - PLAYABLE_START_YARD),
            ball_spot_yard=ball_spot_yard,
        )

    def advance(self, gained_yards: float) -> tuple[Situation, bool]:
        """
        Situation for the next down after a play.

        Args:
            gained_yards: Yards gained on the play (negative for a loss)

        Returns:
            Tuple of (next_situation, achieved_first_down)
        """
        new_spot = clamp_ball_spot(self.ball_spot_yard - gained_yards)
        if gained_yards >= self.yards_required:
            return self.reset_for_first_down(new_spot), True

        return Situation(
            id="next-down",
            down=min(self.down + 1, 4),
            yards_required=self.yards_required - gained_yards,
            ball_spot_yard=new_spot,
        ), False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "down": self.down,
            "yards_required": self.yards_required,
            "ball_spot_yard": self.ball_spot_yard,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Situation:
        return cls(
            id=str(data.get("id", "custom")),
            down=int(data.get("down", 1)),
            yards_required=float(data["yards_required"]),
            ball_spot_yard=float(data["ball_spot_yard"]),
            description=str(data.get("description", "")),
        )
