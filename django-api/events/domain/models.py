"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from events.domain.value_objects import EventId, EventStatus, NotificationId, NotificationType

T = TypeVar("T")


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    description: str | None
    status: EventStatus
    start_date: datetime
    end_date: datetime | None
    location: str | None
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime
    notification_count: int = 0
    unread_notification_count: int = 0

    @property
    def has_unread_notifications(self) -> bool:
        return self.unread_notification_count > 0


@dataclass(frozen=True)
class NewEvent:
    """Values needed to insert an Event."""

    name: str
    start_date: datetime
    description: str | None = None
    status: EventStatus = EventStatus.DRAFT
    end_date: datetime | None = None
    location: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Notification:
    """Domain representation of a Notification."""

    id: NotificationId
    event_id: EventId
    title: str
    message: str | None
    type: NotificationType
    is_read: bool
    created_at: datetime


@dataclass(frozen=True)
class NewNotification:
    """Values needed to insert a Notification."""

    event_id: EventId
    title: str
    message: str | None = None
    type: NotificationType = NotificationType.INFO
    is_read: bool = False


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a filtered listing plus the total number of matches."""

    data: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25
