"""REST API router for reveals and replays."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from whiteboard.api.schemas.reveal import (
    PlayerSchema,
    PlayTemplateSchema,
    ReplayRequest,
    RevealRequest,
    RevealResponse,
    SituationSchema,
)
from whiteboard.match.templates import PLAY_TEMPLATES, templates_for_team
from whiteboard.match.validation import RosterError, validate_roster
from whiteboard.reveal import RevealOrchestrator, RevealResult, RevealSnapshot, SnapshotError
from whiteboard.reveal.core.entities import Player, Team
from whiteboard.reveal.core.point import Point
from whiteboard.reveal.core.situation import Situation
from whiteboard.reveal.export import frame_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reveal", tags=["reveal"])


def _schema_to_player(schema: PlayerSchema) -> Player:
    return Player(
        id=schema.id,
        label=schema.label,
        team=schema.team,
        role=schema.role,
        position=Point(schema.position.x, schema.position.y),
        assignment=schema.assignment,
        path=[Point(p.x, p.y) for p in schema.path],
        man_target_id=schema.man_target_id,
    )


def _schema_to_situation(schema: SituationSchema) -> Situation:
    return Situation(
        id=schema.id,
        down=schema.down,
        yards_required=schema.yards_required,
        ball_spot_yard=schema.ball_spot_yard,
        description=schema.description,
    )


def _result_to_response(result: RevealResult) -> RevealResponse:
    """Convert a RevealResult to the response schema."""
    return RevealResponse(
        frames=[frame_to_dict(f) for f in result.frames],
        outcome=result.outcome.to_dict(),
        snapshot=result.snapshot.to_dict() if result.snapshot else None,
        covered_target_ids=result.covered_target_ids,
        events=[e.to_dict() for e in result.events],
    )


@router.post("", response_model=RevealResponse)
async def run_reveal(request: RevealRequest) -> RevealResponse:
    """Reveal both locked game plans and resolve the down."""
    players = [_schema_to_player(p) for p in request.players]
    try:
        validate_roster(players)
    except RosterError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    situation = _schema_to_situation(request.situation)
    result = RevealOrchestrator().reveal(players, situation)
    return _result_to_response(result)


@router.post("/replay", response_model=RevealResponse)
async def replay_reveal(request: ReplayRequest) -> RevealResponse:
    """Replay a captured snapshot frame for frame."""
    try:
        snapshot = RevealSnapshot.from_dict(request.snapshot)
    except SnapshotError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    result = RevealOrchestrator().replay(snapshot)
    return _result_to_response(result)


@router.get("/templates", response_model=list[PlayTemplateSchema])
async def list_templates(
    team: Optional[Team] = Query(default=None, description="Only templates for this side"),
) -> list[PlayTemplateSchema]:
    """List the available play templates."""
    templates = templates_for_team(team) if team else PLAY_TEMPLATES
    return [PlayTemplateSchema(**t.to_dict()) for t in templates]
