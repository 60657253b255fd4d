"""Event system for reveal state changes.

Events are emitted by the orchestrator's visible loop and can be subscribed
to by renderers, logging or tests.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class EventType(str, Enum):
    """Types of events that can occur during a reveal."""

    # =========================================================================
    # Play Lifecycle
    # =========================================================================
    PENALTY = "penalty"
    SNAP = "snap"
    HANDOFF = "handoff"
    THROW = "throw"
    CATCH = "catch"
    TACKLE = "tackle"
    SACK = "sack"
    PLAY_END = "play_end"

    # =========================================================================
    # Blocking / Coverage
    # =========================================================================
    BLOCK_ENGAGED = "block_engaged"
    RUSHER_FROZEN = "rusher_frozen"
    TIGHT_COVERAGE = "tight_coverage"


@dataclass
class Event:
    """An event that occurred during a reveal.

    Attributes:
        type: The type of event
        step: Simulation step when the event occurred
        progress: Play progress (0-1) when the event occurred
        player_id: Primary player involved (if any)
        target_id: Secondary player involved (if any)
        data: Additional event-specific data
        description: Human-readable description
    """
    type: EventType
    step: int
    progress: float
    player_id: Optional[str] = None
    target_id: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def __str__(self) -> str:
        parts = [f"[{self.progress:.3f}]", self.type.value]
        if self.player_id:
            parts.append(f"by {self.player_id}")
        if self.target_id:
            parts.append(f"-> {self.target_id}")
        if self.description:
            parts.append(f"- {self.description}")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "step": self.step,
            "progress": self.progress,
            "player_id": self.player_id,
            "target_id": self.target_id,
            "data": dict(self.data),
            "description": self.description,
        }


EventHandler = Callable[[Event], None]


class EventBus:
    """Pub/sub event bus for reveal events.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.TACKLE, on_tackle)
        bus.subscribe_all(renderer.on_event)
        bus.emit(Event(type=EventType.SNAP, step=0, progress=0.0))
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[EventHandler]] = defaultdict(list)
        self._global_handlers: list[EventHandler] = []
        self._history: list[Event] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to a specific event type."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def emit(self, event: Event) -> None:
        """Record an event and notify subscribers."""
        self._history.append(event)
        for handler in self._handlers[event.type]:
            handler(event)
        for handler in self._global_handlers:
            handler(event)

    def emit_simple(
        self,
        event_type: EventType,
        step: int,
        progress: float,
        player_id: Optional[str] = None,
        target_id: Optional[str] = None,
        description: str = "",
        **data: Any,
    ) -> Event:
        """Emit an event with less boilerplate."""
        event = Event(
            type=event_type,
            step=step,
            progress=progress,
            player_id=player_id,
            target_id=target_id,
            description=description,
            data=data,
        )
        self.emit(event)
        return event

    @property
    def history(self) -> list[Event]:
        return self._history

    def clear_history(self) -> None:
        self._history.clear()

    def get_events_by_type(self, event_type: EventType) -> list[Event]:
        return [e for e in self._history if e.type == event_type]

    def format_history(self) -> str:
        return "\n".join(str(e) for e in self._history)

    def __len__(self) -> int:
        return len(self._history)

    def __bool__(self) -> bool:
        """EventBus is always truthy (even with empty history)."""
        return True
