"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Generic, TypeVar

from events.domain import (
    Event,
    EventFilters,
    EventId,
    EventStatus,
    NewEvent,
    NewNotification,
    Notification,
    NotificationId,
)

EntityT = TypeVar("EntityT")
IdT = TypeVar("IdT")
NewT = TypeVar("NewT")


class Store(ABC, Generic[EntityT, IdT, NewT]):
    """CRUD operations shared by every entity store.

    ``changes`` passed to ``update`` are keyed by domain field name.
    """

    @abstractmethod
    def find_all(self) -> list[EntityT]:
        """Return every row in the store's default ordering."""
        ...

    @abstractmethod
    def find_by_id(self, entity_id: IdT) -> EntityT | None:
        """Return an entity by ID, or None if not found."""
        ...

    @abstractmethod
    def create(self, data: NewT) -> EntityT:
        """Insert a new row and return it."""
        ...

    @abstractmethod
    def update(self, entity_id: IdT, changes: Mapping[str, Any]) -> EntityT | None:
        """Apply a partial update, returning None if the row does not exist."""
        ...

    @abstractmethod
    def delete(self, entity_id: IdT) -> bool:
        """Delete a row, returning whether it existed."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Return the total number of rows."""
        ...

    @abstractmethod
    def atomic(self) -> AbstractContextManager[Any]:
        """Return a context manager that commits or rolls back all writes inside it."""
        ...


class EventStore(Store[Event, EventId, NewEvent]):
    """Interface for event persistence operations."""

    @abstractmethod
    def search(self, filters: EventFilters, offset: int, limit: int) -> list[Event]:
        """Return one slice of matching events ordered by created_at descending."""
        ...

    @abstractmethod
    def count_matching(self, filters: EventFilters) -> int:
        """Count all events matching the filters, ignoring pagination."""
        ...

    @abstractmethod
    def find_by_status(self, status: EventStatus) -> list[Event]:
        """Return events with the given status."""
        ...

    @abstractmethod
    def find_by_date_range(self, start: datetime, end: datetime) -> list[Event]:
        """Return events starting within [start, end], ordered by start_date ascending."""
        ...

    @abstractmethod
    def find_with_unread_notifications(self) -> list[Event]:
        """Return events that have at least one unread notification."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...


class NotificationStore(Store[Notification, NotificationId, NewNotification]):
    """Interface for notification persistence operations."""

    @abstractmethod
    def find_by_event_id(self, event_id: EventId) -> list[Notification]:
        """Return an event's notifications ordered by created_at ascending."""
        ...

    @abstractmethod
    def find_unread_by_event_id(self, event_id: EventId) -> list[Notification]:
        """Return an event's unread notifications ordered by created_at ascending."""
        ...

    @abstractmethod
    def mark_as_read(self, notification_id: NotificationId) -> Notification | None:
        """Set the read flag on one notification."""
        ...

    @abstractmethod
    def mark_all_read_for_event(self, event_id: EventId) -> list[Notification]:
        """Set the read flag on every unread notification of an event and return them."""
        ...

    @abstractmethod
    def count_unread_by_event_id(self, event_id: EventId) -> int:
        """Count an event's unread notifications."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if the owning event exists."""
        ...
