"""Simulation context.

All state that lives across steps of one reveal: positions from the previous
step, block pairings, pass-protection freezes, zone pulls, the covered-target
set and ball progress. The orchestrator creates a fresh context for every
reveal and every replay; resolvers never keep state of their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .core.point import Point
from .core.entities import Assignment, BallFrame, Player, PlayPhase
from .core.config import RevealConfig
from .core.events import EventBus, EventType
from .core.situation import Situation
from .systems.ball import RevealBallPlan, find_quarterback
from .systems.coverage import ZoneArea, derive_zone_area
from .systems.protection import claim_rushers
from .resolution.blocking import RunBlockEngagement
from .resolution.tackle import RunTackleResult


class SimulationMode(str, Enum):
    """How plan-dependent decisions are made.

    DISCOVERING: the planning pass. Blocks, the throw and the terminal
        contact are found as they happen and written into the context.
    FIXED: the visible loop and replays. Those decisions are read from the
        plan found earlier.
    """
    DISCOVERING = "discovering"
    FIXED = "fixed"


@dataclass
class SimulationContext:
    """Cross-step state for a single reveal."""
    config: RevealConfig
    situation: Situation
    players: List[Player]
    ball_plan: RevealBallPlan
    mode: SimulationMode = SimulationMode.DISCOVERING
    engagements: Dict[str, RunBlockEngagement] = field(default_factory=dict)
    tackle: Optional[RunTackleResult] = None
    event_bus: Optional[EventBus] = None

    # Built once from the locked roster
    players_by_id: Dict[str, Player] = field(default_factory=dict)
    start_positions: Dict[str, Point] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)
    quarterback_id: Optional[str] = None
    zone_areas: Dict[str, ZoneArea] = field(default_factory=dict)
    protection_claims: Dict[str, str] = field(default_factory=dict)   # blocker -> rusher

    # Per-step state
    step: int = 0
    positions: Dict[str, Point] = field(default_factory=dict)
    ball: Optional[BallFrame] = None
    phase: PlayPhase = PlayPhase.PRE_SNAP
    frozen_ids: frozenset[str] = frozenset()

    # Pass protection
    rusher_freezes: Dict[str, Point] = field(default_factory=dict)    # rusher -> offset from blocker
    rushers_released: bool = False

    # Coverage
    zone_pulls: Dict[str, Point] = field(default_factory=dict)
    zone_commitments: Dict[str, str] = field(default_factory=dict)
    covered_target_ids: set[str] = field(default_factory=set)

    # Ball
    throw_started: bool = False
    completed: bool = False
    handoff_done: bool = False
    yac_travelled: float = 0.0

    # Events already announced by the visible loop
    announced: set[str] = field(default_factory=set)

    @classmethod
    def create(
        cls,
        players: Sequence[Player],
        situation: Situation,
        config: RevealConfig,
        *,
        ball_plan: RevealBallPlan,
        mode: SimulationMode = SimulationMode.DISCOVERING,
        engagements: Optional[Dict[str, RunBlockEngagement]] = None,
        tackle: Optional[RunTackleResult] = None,
        event_bus: Optional[EventBus] = None,
        start_positions: Optional[Dict[str, Point]] = None,
    ) -> SimulationContext:
        """Build a context from a locked roster."""
        roster = list(players)
        starts = dict(start_positions) if start_positions else {p.id: p.position for p in roster}
        qb = find_quarterback(roster)
        los = situation.line_of_scrimmage

        ctx = cls(
            config=config,
            situation=situation,
            players=roster,
            ball_plan=ball_plan,
            mode=mode,
            engagements=dict(engagements or {}),
            tackle=tackle,
            event_bus=event_bus,
            players_by_id={p.id: p for p in roster},
            start_positions=starts,
            order=[p.id for p in roster],
            quarterback_id=qb.id if qb else None,
        )
        ctx.positions = dict(starts)

        if not ball_plan.is_run_play:
            ctx.zone_areas = {
                p.id: derive_zone_area(p, starts[p.id], los, config)
                for p in roster
                if p.is_defense and p.assignment == Assignment.ZONE
            }
            ctx.protection_claims = claim_rushers(
                [(p.id, starts[p.id]) for p in ctx.blockers()],
                [(p.id, starts[p.id]) for p in roster
                 if p.is_defense and p.assignment == Assignment.BLITZ],
            )

        return ctx

    # =========================================================================
    # Lookups
    # =========================================================================

    @property
    def progress(self) -> float:
        return self.config.progress_at(self.step)

    @property
    def is_discovering(self) -> bool:
        return self.mode == SimulationMode.DISCOVERING

    def offense(self) -> List[Player]:
        return [p for p in self.players if p.is_offense]

    def defense(self) -> List[Player]:
        return [p for p in self.players if p.is_defense]

    def blockers(self) -> List[Player]:
        return [p for p in self.players if p.is_offense and p.assignment == Assignment.BLOCK]

    def route_runners(self) -> List[Player]:
        """Eligible receivers running a pass route."""
        return [p for p in self.players if p.is_eligible and p.assignment == Assignment.PASS_ROUTE]

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        if player_id is None:
            return None
        return self.players_by_id.get(player_id)

    def rusher_blocker(self, rusher_id: str) -> Optional[str]:
        for blocker_id, claimed in self.protection_claims.items():
            if claimed == rusher_id:
                return blocker_id
        return None

    # =========================================================================
    # Events
    # =========================================================================

    def emit(
        self,
        event_type: EventType,
        player_id: Optional[str] = None,
        target_id: Optional[str] = None,
        description: str = "",
        **data,
    ) -> None:
        """Emit an event if this context has a bus (the planning pass has none)."""
        if self.event_bus is None:
            return
        self.event_bus.emit_simple(
            event_type,
            self.step,
            self.progress,
            player_id=player_id,
            target_id=target_id,
            description=description,
            **data,
        )

    def announce_once(self, key: str) -> bool:
        """True the first time a key is seen."""
        if key in self.announced:
            return False
        self.announced.add(key)
        return True
