"""Pydantic schemas for API requests and responses."""

from whiteboard.api.schemas.reveal import (
    PlayerSchema,
    PlayTemplateSchema,
    ReplayRequest,
    RevealRequest,
    RevealResponse,
    SituationSchema,
)

__all__ = [
    "PlayerSchema",
    "PlayTemplateSchema",
    "ReplayRequest",
    "RevealRequest",
    "RevealResponse",
    "SituationSchema",
]
