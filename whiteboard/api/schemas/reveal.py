"""Pydantic schemas for the reveal API."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from whiteboard.reveal.core.entities import Assignment, Team


class PointSchema(BaseModel):
    """Field position in yards."""

    x: float = Field(ge=0.0, le=53.3)
    y: float = Field(ge=0.0, le=120.0)


class PlayerSchema(BaseModel):
    """A locked piece with its assignment for the down."""

    id: str = Field(min_length=1)
    label: str = ""
    team: Team
    role: str = ""
    position: PointSchema
    assignment: Assignment = Assignment.NONE
    path: list[PointSchema] = Field(default_factory=list)
    man_target_id: Optional[str] = None


class SituationSchema(BaseModel):
    """Down, distance and ball spot."""

    id: str = "custom"
    down: int = Field(default=1, ge=1, le=4)
    yards_required: float = Field(default=10.0, ge=0.0)
    ball_spot_yard: float = Field(default=35.0, ge=10.0, le=110.0)
    description: str = ""


class RevealRequest(BaseModel):
    """Request to reveal two locked game plans."""

    players: list[PlayerSchema] = Field(min_length=1)
    situation: SituationSchema = Field(default_factory=SituationSchema)


class ReplayRequest(BaseModel):
    """Request to replay a captured snapshot."""

    snapshot: dict[str, Any]


class BallSchema(BaseModel):
    position: PointSchema
    carrier_id: Optional[str] = None


class FrameSchema(BaseModel):
    """One animation tick."""

    index: int
    step: int
    progress: float
    phase: str
    positions: dict[str, PointSchema]
    ball: BallSchema
    frozen_ids: list[str] = Field(default_factory=list)


class PenaltySchema(BaseModel):
    kind: str
    team: str
    player_id: str


class OutcomeSchema(BaseModel):
    """Result of the down."""

    gained_yards: float
    cause: str
    success: bool
    next_situation: SituationSchema
    message: str
    penalty: Optional[PenaltySchema] = None
    ball_carrier_id: Optional[str] = None
    tackler_id: Optional[str] = None
    round_winner: Optional[str] = None


class EventSchema(BaseModel):
    type: str
    step: int
    progress: float
    player_id: Optional[str] = None
    target_id: Optional[str] = None
    data: dict[str, Any] = Field(default_factory=dict)
    description: str = ""


class RevealResponse(BaseModel):
    """Frames, outcome and replay record of a reveal."""

    frames: list[FrameSchema]
    outcome: OutcomeSchema
    snapshot: Optional[dict[str, Any]] = None
    covered_target_ids: list[str] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


class PlayTemplateSchema(BaseModel):
    id: str
    team: str
    label: str
    description: str
