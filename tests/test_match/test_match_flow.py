"""Tests for play templates, preset situations and match scoring."""

import pytest

from whiteboard.match.situations import (
    DEFAULT_SITUATION,
    SITUATIONS,
    down_and_distance_label,
    format_down_label,
    get_situation,
)
from whiteboard.match.state import MatchState
from whiteboard.match.templates import (
    PLAY_TEMPLATES,
    apply_play_template,
    get_template,
    templates_for_team,
)
from whiteboard.reveal.core.entities import Assignment, Player, Team
from whiteboard.reveal.core.point import Point
from whiteboard.reveal.core.situation import Situation
from whiteboard.reveal.outcome import (
    OutcomeCause,
    PenaltyKind,
    PlayOutcome,
    PreSnapPenalty,
    penalty_outcome,
)


def by_id(players):
    return {p.id: p for p in players}


def outcome(success: bool) -> PlayOutcome:
    return PlayOutcome(
        gained_yards=12.0 if success else 2.0,
        cause=OutcomeCause.RUN_GAIN if success else OutcomeCause.RUN_STUFFED,
        success=success,
        next_situation=Situation(down=2, yards_required=8, ball_spot_yard=33),
    )


# =============================================================================
# Templates
# =============================================================================


class TestPlayTemplates:
    """Tests for one-click game plans."""

    def test_two_templates_per_side(self):
        assert [t.id for t in templates_for_team(Team.OFFENSE)] == ["quick-slants", "inside-zone"]
        assert [t.id for t in templates_for_team(Team.DEFENSE)] == ["cover-3", "cover-1-blitz"]
        assert len(PLAY_TEMPLATES) == 4

    def test_get_template_respects_team(self):
        assert get_template("cover-3").team == Team.DEFENSE
        assert get_template("cover-3", Team.OFFENSE) is None

    def test_quick_slants(self, slants_vs_cover3):
        players = by_id(slants_vs_cover3)
        assert players["wr1"].assignment == Assignment.PASS_ROUTE
        assert players["wr1"].path[0] == Point(11.5, 31.5)
        assert players["c"].assignment == Assignment.BLOCK
        assert players["qb"].assignment == Assignment.NONE

    def test_inside_zone_is_a_run(self, zone_run_vs_cover3):
        players = by_id(zone_run_vs_cover3)
        assert players["rb"].assignment == Assignment.RUN
        assert len(players["rb"].path) == 2

    def test_cover_1_blitz(self, slants_vs_cover1):
        players = by_id(slants_vs_cover1)
        assert players["db1"].assignment == Assignment.MAN
        assert players["db1"].man_target_id == "wr1"
        assert players["db1"].path == []
        assert players["lb1"].assignment == Assignment.BLITZ
        assert players["db2"].assignment == Assignment.ZONE

    def test_template_only_touches_its_side(self, roster):
        players = by_id(apply_play_template(roster, Team.OFFENSE, "quick-slants"))
        assert all(p.assignment == Assignment.NONE for p in players.values() if p.is_defense)

    def test_unmentioned_pieces_reset(self, roster):
        extra = Player(id="h", team=Team.OFFENSE, role="RB", position=Point(32, 40),
                       assignment=Assignment.RUN, path=[Point(32, 30)])
        players = by_id(apply_play_template(roster + [extra], Team.OFFENSE, "quick-slants"))
        assert players["h"].assignment == Assignment.NONE
        assert players["h"].path == []

    def test_unknown_template_leaves_roster(self, roster, caplog):
        players = apply_play_template(roster, Team.OFFENSE, "hail-mary")
        assert players == roster
        assert players[0] is not roster[0]
        assert "hail-mary" in caplog.text

    def test_template_dict(self):
        data = get_template("inside-zone").to_dict()
        assert data == {
            "id": "inside-zone",
            "team": "offense",
            "label": "Inside Zone",
            "description": "Core run concept with downhill RB path and line drive blocks.",
        }


# =============================================================================
# Situations
# =============================================================================


class TestSituations:
    """Tests for preset down-and-distance situations."""

    def test_presets(self):
        assert [s.id for s in SITUATIONS] == ["first-and-10", "third-and-6", "red-zone"]
        assert DEFAULT_SITUATION.ball_spot_yard == 35
        assert get_situation("third-and-6").down == 3
        assert get_situation("fourth-and-forever") is None

    @pytest.mark.parametrize("down,label", [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (22, "22nd")])
    def test_down_labels(self, down, label):
        assert format_down_label(down) == label

    def test_down_and_distance(self):
        assert down_and_distance_label(get_situation("third-and-6")) == "3rd & 6"
        assert down_and_distance_label(Situation(down=2, yards_required=7.5)) == "2nd & 7.5"


# =============================================================================
# Match State
# =============================================================================


class TestMatchState:
    """Tests for round keeping."""

    def test_offense_round(self):
        match = MatchState()
        assert match.apply_outcome(outcome(True)) == Team.OFFENSE
        assert match.offense_wins == 1
        assert match.situation.ball_spot_yard == 33
        assert match.rounds_played == 1

    def test_penalty_replays_the_down(self):
        match = MatchState()
        foul = penalty_outcome(PreSnapPenalty(PenaltyKind.FALSE_START, Team.OFFENSE, "lt"), match.situation)
        assert match.apply_outcome(foul) is None
        assert match.rounds_played == 0
        assert match.situation.ball_spot_yard == 40
        assert match.history == [foul]

    def test_first_to_three(self):
        match = MatchState()
        for _ in range(3):
            match.apply_outcome(outcome(False))
        assert match.is_over
        assert match.winner == Team.DEFENSE
        assert match.result_message == "Defense stonewalls the match and wins."

    def test_offense_match_message(self):
        match = MatchState()
        for _ in range(3):
            match.apply_outcome(outcome(True))
        assert match.result_message == "Offense wins the match 3 plays to glory."

    def test_running_score_message(self):
        match = MatchState()
        match.apply_outcome(outcome(True))
        match.apply_outcome(outcome(False))
        assert not match.is_over
        assert match.winner is None
        assert match.result_message == "Offense 1 - Defense 1"

    def test_no_rounds_after_the_match(self):
        match = MatchState(rounds_to_win=1)
        match.apply_outcome(outcome(True))
        with pytest.raises(RuntimeError):
            match.apply_outcome(outcome(True))

    def test_reset(self):
        match = MatchState()
        match.apply_outcome(outcome(True))
        match.reset()
        assert match.rounds_played == 0
        assert match.history == []
        assert match.situation == DEFAULT_SITUATION
