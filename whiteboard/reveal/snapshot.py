"""Reveal snapshot - everything needed to replay a reveal bit-for-bit.

A snapshot is captured after the planning pass. Replaying it re-runs the
visible loop with every decision (blocks, throw, terminal contact) already
fixed, so the frames and the outcome come out identical.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .core.point import Point
from .core.entities import Player, clone_players
from .core.situation import Situation
from .systems.ball import RevealBallPlan
from .resolution.blocking import RunBlockEngagement
from .resolution.tackle import RunTackleResult


SNAPSHOT_VERSION = 1


class SnapshotError(ValueError):
    """Raised when a snapshot record is malformed or inconsistent."""


@dataclass
class RevealSnapshot:
    """Replay record for one reveal.

    Attributes:
        start_players: Locked roster (assignments and paths) at the snap
        start_positions: Player id -> position at the snap
        run_block_engagements: Defender id -> block found during planning
        ball_plan: Play classification and the committed throw, if any
        run_tackle_result: Terminal contact found during planning, if any
        situation: Down, distance and spot the play was run from
    """
    start_players: List[Player]
    start_positions: Dict[str, Point]
    run_block_engagements: Dict[str, RunBlockEngagement] = field(default_factory=dict)
    ball_plan: RevealBallPlan = field(default_factory=RevealBallPlan)
    run_tackle_result: Optional[RunTackleResult] = None
    situation: Situation = field(default_factory=Situation)

    def copy_players(self) -> List[Player]:
        return clone_players(self.start_players)

    def validate(self) -> None:
        """Check internal references. Raises SnapshotError."""
        ids = [p.id for p in self.start_players]
        known = set(ids)
        if len(known) != len(ids):
            raise SnapshotError("Snapshot roster has duplicate player ids")

        missing = known - set(self.start_positions)
        if missing:
            raise SnapshotError(f"Snapshot is missing start positions for: {sorted(missing)}")

        plan = self.ball_plan
        if plan.is_run_play and plan.run_carrier_id not in known:
            raise SnapshotError(f"Unknown run carrier: {plan.run_carrier_id}")
        if plan.completion_target_id is not None:
            if plan.completion_target_id not in known:
                raise SnapshotError(f"Unknown completion target: {plan.completion_target_id}")
            if not plan.has_throw:
                raise SnapshotError("Completion target recorded without a throw start")

        for defender_id, engagement in self.run_block_engagements.items():
            if defender_id not in known or engagement.blocker_id not in known:
                raise SnapshotError(f"Block references unknown players: {engagement.blocker_id} on {defender_id}")

        tackle = self.run_tackle_result
        if tackle is not None:
            if tackle.ball_carrier_id not in known or tackle.tackler_id not in known:
                raise SnapshotError("Tackle references unknown players")
            if set(tackle.frozen_positions) != known:
                raise SnapshotError("Tackle frozen positions do not match the roster")

    def to_dict(self) -> dict:
        """JSON-ready dict. Floats are kept at full precision."""
        return {
            "version": SNAPSHOT_VERSION,
            "start_players": [p.to_dict() for p in self.start_players],
            "start_positions": {pid: p.to_dict() for pid, p in self.start_positions.items()},
            "run_block_engagements": {
                did: e.to_dict() for did, e in self.run_block_engagements.items()
            },
            "ball_plan": self.ball_plan.to_dict(),
            "run_tackle_result": self.run_tackle_result.to_dict() if self.run_tackle_result else None,
            "situation": self.situation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> RevealSnapshot:
        """Rebuild a snapshot. Raises SnapshotError on malformed records."""
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot must be a mapping")

        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise SnapshotError(f"Unsupported snapshot version: {version}")

        try:
            tackle = data.get("run_tackle_result")
            snapshot = cls(
                start_players=[Player.from_dict(p) for p in data["start_players"]],
                start_positions={
                    str(pid): Point.from_dict(p) for pid, p in data["start_positions"].items()
                },
                run_block_engagements={
                    str(did): RunBlockEngagement.from_dict(e)
                    for did, e in data.get("run_block_engagements", {}).items()
                },
                ball_plan=RevealBallPlan.from_dict(data["ball_plan"]),
                run_tackle_result=RunTackleResult.from_dict(tackle) if tackle else None,
                situation=Situation.from_dict(data["situation"]),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Malformed snapshot: {e}") from e

        snapshot.validate()
        return snapshot
