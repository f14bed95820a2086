"""
Base Domain Classes

Building blocks shared by the facility and scheduling contexts:
- Entity: Objects with identity (an availability exception row, a facility)
- ValueObject: Immutable objects compared by value (intervals, money, configs)
- Aggregate: Consistency boundary that records domain events
- DomainEvent: Something that happened and is published after commit
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List
from uuid import UUID, uuid4


@dataclass
class Entity(ABC):
    """
    Base class for all entities

    Identity is whatever the store assigns. Entities not yet persisted
    have ``id=None`` and are only equal to themselves.
    """
    id: Any = None

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        return hash((self.__class__.__name__, self.id if self.id is not None else id(self)))


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass(eq=False)
class Aggregate(Entity):
    """
    Base class for aggregate roots

    Collects domain events that the unit of work publishes once the
    surrounding transaction has committed.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False, compare=False)

    def add_event(self, event: 'DomainEvent'):
        """Record a domain event to be published"""
        self._events.append(event)

    def clear_events(self):
        """Forget collected events (called once they are handed to the UoW)"""
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Copy of collected events"""
        return self._events.copy()


@dataclass
class DomainEvent:
    """
    Base class for domain events

    ``aggregate_id`` is the facility the event belongs to; every
    scheduling write is scoped to exactly one facility.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: Any = None

    def to_dict(self) -> dict:
        """Convert event to a JSON-friendly dictionary for logging"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.__class__.__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id is not None else None,
        }
