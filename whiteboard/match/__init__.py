"""Match layer - roster, situations, templates and round keeping."""

from .roster import create_roster, project_formation, apply_saved_team_play
from .situations import DEFAULT_SITUATION, SITUATIONS, down_and_distance_label
from .state import MatchState
from .templates import PLAY_TEMPLATES, apply_play_template, templates_for_team
from .validation import RosterError, validate_roster

__all__ = [
    "create_roster",
    "project_formation",
    "apply_saved_team_play",
    "DEFAULT_SITUATION",
    "SITUATIONS",
    "down_and_distance_label",
    "MatchState",
    "PLAY_TEMPLATES",
    "apply_play_template",
    "templates_for_team",
    "RosterError",
    "validate_roster",
]
