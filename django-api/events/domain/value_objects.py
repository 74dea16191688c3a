"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Self
from uuid import UUID


class EventStatus(str, Enum):
    """Workflow status of an event."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class NotificationType(str, Enum):
    """Category of a notification, used to style the badge."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class NotificationId:
    """Unique identifier for a Notification."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DateRange:
    """Start/end pair where the end, if present, is strictly after the start."""

    start: datetime
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end <= self.start:
            raise ValueError("End date must be after start date")


@dataclass(frozen=True)
class EventFilters:
    """Search criteria for listing events.

    ``search`` matches name or any tag, case-insensitively. Both filters
    combine with AND.
    """

    search: str | None = None
    status: EventStatus | None = None


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int
    page_size: int

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be at least 1")
        if self.page_size < 1:
            raise ValueError("pageSize must be at least 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
