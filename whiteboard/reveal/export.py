"""Export reveal frames to JSON for visualization."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .core.events import Event
from .orchestrator import Frame, RevealResult


@dataclass
class PlayerFrame:
    """Single frame of player state."""
    id: str
    label: str
    team: str
    role: str
    x: float
    y: float
    frozen: bool = False


@dataclass
class BallState:
    x: float
    y: float
    carrier_id: Optional[str] = None


@dataclass
class EventFrame:
    """Event that occurred since the previous frame."""
    step: int
    progress: float
    type: str
    player_id: Optional[str]
    target_id: Optional[str]
    description: str


@dataclass
class ExportFrame:
    """Complete frame of reveal state."""
    index: int
    step: int
    progress: float
    phase: str
    players: List[PlayerFrame]
    ball: BallState
    events: List[EventFrame]


@dataclass
class RevealExport:
    """Complete reveal export."""
    metadata: Dict[str, Any]
    paths: Dict[str, List[Dict[str, float]]]  # player_id -> drawn waypoints
    frames: List[ExportFrame]
    outcome: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: str) -> None:
        """Save to file."""
        with open(path, 'w') as f:
            f.write(self.to_json())


def _event_frame(event: Event) -> EventFrame:
    return EventFrame(
        step=event.step,
        progress=event.progress,
        type=event.type.value,
        player_id=event.player_id,
        target_id=event.target_id,
        description=event.description,
    )


def frame_to_dict(frame: Frame) -> Dict[str, Any]:
    """Compact dict for a single frame (used by the HTTP layer)."""
    return {
        "index": frame.index,
        "step": frame.step,
        "progress": frame.progress,
        "phase": frame.phase.value,
        "positions": {pid: pos.to_dict() for pid, pos in frame.positions.items()},
        "ball": {
            "position": frame.ball.position.to_dict(),
            "carrier_id": frame.ball.carrier_id,
        },
        "frozen_ids": sorted(frame.frozen_ids),
    }


def export_reveal(result: RevealResult, metadata: Optional[Dict[str, Any]] = None) -> RevealExport:
    """Build an export from a finished reveal.

    Events are attached to the first frame at or after the step they
    happened on.
    """
    players = result.snapshot.start_players if result.snapshot else []
    pending = sorted(result.events, key=lambda e: e.step)
    cursor = 0

    frames: List[ExportFrame] = []
    for frame in result.frames:
        events: List[EventFrame] = []
        while cursor < len(pending) and pending[cursor].step <= frame.step:
            events.append(_event_frame(pending[cursor]))
            cursor += 1

        frames.append(ExportFrame(
            index=frame.index,
            step=frame.step,
            progress=frame.progress,
            phase=frame.phase.value,
            players=[
                PlayerFrame(
                    id=p.id,
                    label=p.label,
                    team=p.team.value,
                    role=p.role,
                    x=frame.positions[p.id].x,
                    y=frame.positions[p.id].y,
                    frozen=p.id in frame.frozen_ids,
                )
                for p in players
            ],
            ball=BallState(
                x=frame.ball.position.x,
                y=frame.ball.position.y,
                carrier_id=frame.ball.carrier_id,
            ),
            events=events,
        ))

    # Anything after the last frame (play end) rides on the final frame
    if frames and cursor < len(pending):
        frames[-1].events.extend(_event_frame(e) for e in pending[cursor:])

    return RevealExport(
        metadata=metadata or {},
        paths={p.id: [w.to_dict() for w in p.path] for p in players if p.path},
        frames=frames,
        outcome=result.outcome.to_dict(),
    )
