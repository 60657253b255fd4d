"""API routers for different resource types."""

from whiteboard.api.routers.reveal import router as reveal_router

__all__ = [
    "reveal_router",
]
