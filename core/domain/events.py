"""
Domain event primitives.

License and admin handlers publish an event after every state change
they commit. Subscribers (audit log, notifications) run after the
write and never decide whether the change happened.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Something that happened to a license or an admin account.

    ``aggregate_id`` is the id of the license or account the event is
    about. Concrete events add their own payload attributes after
    calling ``super().__init__``.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    def __post_init__(self):
        if not self.event_id:
            object.__setattr__(self, "event_id", uuid4())
        if not self.occurred_at:
            object.__setattr__(self, "occurred_at", datetime.now(timezone.utc))

    def log_context(self) -> Dict[str, Any]:
        """Identifiers attached to audit log records."""
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


class EventHandler(ABC):
    """Subscriber reacting to published events."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """React to one event. Failures are contained by the bus."""


class EventBus(ABC):
    """Publishes events to the handlers subscribed to their type."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to every handler of its type."""

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Register ``handler`` for events of ``event_type``."""
