"""Tests for down-and-distance, pre-snap penalties and play outcomes."""

import pytest

from whiteboard.reveal.core.entities import Player, Team
from whiteboard.reveal.core.point import Point
from whiteboard.reveal.core.situation import Situation, format_yards
from whiteboard.reveal.outcome import (
    NO_OPEN_RECEIVER_MESSAGE,
    SACK_MESSAGE,
    OutcomeCause,
    PenaltyKind,
    PreSnapPenalty,
    detect_pre_snap_penalty,
    evaluate_outcome,
    penalty_outcome,
)


@pytest.fixture
def rb() -> Player:
    return Player(id="rb", label="RB", team=Team.OFFENSE, role="RB", position=Point(29, 41))


# =============================================================================
# Situation
# =============================================================================


class TestSituation:
    """Tests for down-and-distance bookkeeping."""

    def test_line_to_gain(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        assert situation.line_to_gain == 25

    def test_line_to_gain_stops_at_goal(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=15)
        assert situation.line_to_gain == 10
        assert situation.is_goal_to_go

    def test_display(self):
        assert Situation(down=3, yards_required=6, ball_spot_yard=45).display == "3rd & 6"
        assert Situation(down=2, yards_required=4.25, ball_spot_yard=45).display == "2nd & 4.2"
        assert Situation(down=1, yards_required=8, ball_spot_yard=16).display == "1st & Goal"

    def test_format_yards(self):
        assert format_yards(10.0) == "10"
        assert format_yards(3.46) == "3.5"
        assert format_yards(-4.0) == "-4"

    def test_conversion_resets_to_first_down(self):
        situation = Situation(down=3, yards_required=6, ball_spot_yard=45)
        next_situation, converted = situation.advance(7.5)
        assert converted
        assert next_situation.down == 1
        assert next_situation.ball_spot_yard == pytest.approx(37.5)
        assert next_situation.yards_required == pytest.approx(10.0)

    def test_short_gain_next_down(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        next_situation, converted = situation.advance(3.0)
        assert not converted
        assert next_situation.down == 2
        assert next_situation.yards_required == pytest.approx(7.0)
        assert next_situation.ball_spot_yard == pytest.approx(32.0)

    def test_down_stays_at_fourth(self):
        situation = Situation(down=4, yards_required=2, ball_spot_yard=35)
        next_situation, _ = situation.advance(0.0)
        assert next_situation.down == 4

    def test_first_down_near_goal_is_goal_to_go(self):
        situation = Situation(down=2, yards_required=5, ball_spot_yard=20)
        next_situation, converted = situation.advance(6.0)
        assert converted
        assert next_situation.ball_spot_yard == pytest.approx(14.0)
        assert next_situation.yards_required == pytest.approx(4.0)

    def test_spot_clamped_to_goal_line(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=15)
        next_situation, converted = situation.advance(12.0)
        assert converted
        assert next_situation.ball_spot_yard == 10.0
        assert next_situation.yards_required == 0.0

    def test_dict_round_trip(self):
        situation = Situation(id="third-and-6", down=3, yards_required=6, ball_spot_yard=45, description="x")
        assert Situation.from_dict(situation.to_dict()) == situation


# =============================================================================
# Pre-Snap Penalties
# =============================================================================


class TestPreSnapPenalty:
    """Tests for alignment fouls."""

    def test_clean_alignment(self, roster):
        assert detect_pre_snap_penalty(roster, 35.0) is None

    def test_offense_past_the_line_is_false_start(self, roster):
        roster[2].position = Point(22, 34)
        penalty = detect_pre_snap_penalty(roster, 35.0)
        assert penalty == PreSnapPenalty(PenaltyKind.FALSE_START, Team.OFFENSE, "lt")

    def test_defense_on_offense_side_is_offsides(self, roster):
        roster[11].position = Point(20, 36)
        penalty = detect_pre_snap_penalty(roster, 35.0)
        assert penalty.kind == PenaltyKind.OFFSIDES
        assert penalty.team == Team.DEFENSE
        assert penalty.player_id == "dl1"

    def test_offense_checked_first(self, roster):
        roster[11].position = Point(20, 36)
        roster[0].position = Point(26, 34)
        assert detect_pre_snap_penalty(roster, 35.0).team == Team.OFFENSE

    def test_on_the_line_is_legal(self, roster):
        roster[2].position = Point(22, 35)
        roster[11].position = Point(20, 35)
        assert detect_pre_snap_penalty(roster, 35.0) is None

    def test_false_start_moves_ball_back(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        outcome = penalty_outcome(PreSnapPenalty(PenaltyKind.FALSE_START, Team.OFFENSE, "lt"), situation)
        assert outcome.message == "False start on the offense. Ball moved back 5 yards."
        assert outcome.cause == OutcomeCause.PENALTY
        assert outcome.gained_yards == 0.0
        assert outcome.next_situation.ball_spot_yard == 40
        assert outcome.next_situation.yards_required == 15
        assert outcome.next_situation.down == 1
        assert outcome.round_winner is None
        assert outcome.is_penalty

    def test_offsides_moves_ball_forward(self):
        situation = Situation(down=2, yards_required=8, ball_spot_yard=35)
        outcome = penalty_outcome(PreSnapPenalty(PenaltyKind.OFFSIDES, Team.DEFENSE, "dl1"), situation)
        assert outcome.message == "Offsides on the defense. Ball moved forward 5 yards."
        assert outcome.next_situation.ball_spot_yard == 30
        assert outcome.next_situation.yards_required == 3
        assert outcome.next_situation.down == 2

    def test_offsides_can_give_a_first_down(self):
        situation = Situation(down=3, yards_required=4, ball_spot_yard=35)
        outcome = penalty_outcome(PreSnapPenalty(PenaltyKind.OFFSIDES, Team.DEFENSE, "dl1"), situation)
        assert outcome.next_situation.down == 1
        assert outcome.next_situation.ball_spot_yard == 30
        assert outcome.next_situation.yards_required == 10

    def test_false_start_capped_at_own_goal(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=108)
        outcome = penalty_outcome(PreSnapPenalty(PenaltyKind.FALSE_START, Team.OFFENSE, "lt"), situation)
        assert outcome.next_situation.ball_spot_yard == 110
        assert outcome.next_situation.yards_required == 12


# =============================================================================
# Play Outcome
# =============================================================================


class TestEvaluateOutcome:
    """Tests for scoring a finished play."""

    def test_run_gaining_exactly_the_distance_converts(self, rb):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        outcome = evaluate_outcome(situation, is_run_play=True, completed=False, is_sack=False,
                                   carrier=rb, final_y=25.0)
        assert outcome.gained_yards == 10.0
        assert outcome.success
        assert outcome.cause == OutcomeCause.RUN_GAIN
        assert outcome.message == "Offense scores! RB ran past the sticks."
        assert outcome.next_situation.down == 1
        assert outcome.next_situation.ball_spot_yard == 25.0
        assert outcome.round_winner == Team.OFFENSE

    def test_run_stopped_short(self, rb):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        outcome = evaluate_outcome(situation, is_run_play=True, completed=False, is_sack=False,
                                   carrier=rb, final_y=32.0, tackler_id="lb2")
        assert not outcome.success
        assert outcome.cause == OutcomeCause.RUN_STUFFED
        assert outcome.message == "Defense wins the rep. RB was stopped after 3 yards."
        assert outcome.tackler_id == "lb2"
        assert outcome.next_situation.down == 2
        assert outcome.next_situation.yards_required == pytest.approx(7.0)
        assert outcome.round_winner == Team.DEFENSE

    def test_completion_short_of_the_sticks(self):
        wr = Player(id="wr2", label="WR2", team=Team.OFFENSE, role="WR")
        situation = Situation(down=3, yards_required=6, ball_spot_yard=45)
        outcome = evaluate_outcome(situation, is_run_play=False, completed=True, is_sack=False,
                                   carrier=wr, final_y=41.0)
        assert outcome.cause == OutcomeCause.COMPLETION
        assert not outcome.success
        assert outcome.message == "Defense wins the rep. WR2 caught it but was held to 4 yards."
        assert outcome.next_situation.down == 4

    def test_completion_past_the_sticks(self):
        wr = Player(id="wr2", label="WR2", team=Team.OFFENSE, role="WR")
        situation = Situation(down=3, yards_required=6, ball_spot_yard=45)
        outcome = evaluate_outcome(situation, is_run_play=False, completed=True, is_sack=False,
                                   carrier=wr, final_y=38.0)
        assert outcome.success
        assert outcome.message == "Offense scores! WR2 got open beyond the sticks."

    def test_incompletion(self):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        outcome = evaluate_outcome(situation, is_run_play=False, completed=False, is_sack=False,
                                   carrier=None, final_y=None)
        assert outcome.cause == OutcomeCause.INCOMPLETION
        assert outcome.gained_yards == 0.0
        assert outcome.message == NO_OPEN_RECEIVER_MESSAGE
        assert outcome.next_situation.down == 2
        assert outcome.next_situation.ball_spot_yard == 35

    def test_sack_gains_nothing(self):
        qb = Player(id="qb", label="QB", team=Team.OFFENSE, role="QB")
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        outcome = evaluate_outcome(situation, is_run_play=False, completed=False, is_sack=True,
                                   carrier=qb, final_y=39.0, tackler_id="dl2")
        assert outcome.cause == OutcomeCause.SACK
        assert outcome.gained_yards == 0.0
        assert not outcome.success
        assert outcome.message == SACK_MESSAGE
        assert outcome.next_situation.down == 2
        assert outcome.next_situation.ball_spot_yard == 35
        assert outcome.next_situation.yards_required == 10

    def test_outcome_dict(self, rb):
        situation = Situation(down=1, yards_required=10, ball_spot_yard=35)
        outcome = evaluate_outcome(situation, is_run_play=True, completed=False, is_sack=False,
                                   carrier=rb, final_y=25.0)
        data = outcome.to_dict()
        assert data["cause"] == "run-gain"
        assert data["round_winner"] == "offense"
        assert data["next_situation"]["down"] == 1
        assert data["penalty"] is None
