"""Shared service helpers: ID parsing, existence checks, operation logging."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from events.domain import EventId, NotificationId
from events.domain.errors import DomainError, InvalidEventIdError, InvalidNotificationIdError

T = TypeVar("T")

logger = logging.getLogger("events.services")


def utcnow() -> datetime:
    return datetime.now(UTC)


def parse_event_id(value: str | EventId) -> EventId:
    """Return an EventId, raising InvalidEventIdError for malformed input."""
    if isinstance(value, EventId):
        return value
    try:
        return EventId.from_string(value)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidEventIdError() from exc


def parse_notification_id(value: str | NotificationId) -> NotificationId:
    """Return a NotificationId, raising InvalidNotificationIdError for malformed input."""
    if isinstance(value, NotificationId):
        return value
    try:
        return NotificationId.from_string(value)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidNotificationIdError() from exc


class BaseService(Generic[T]):
    """Base for entity services.

    Subclasses set ``entity_name`` and ``not_found_error``.
    """

    entity_name: str = "Entity"
    not_found_error: Callable[[str], DomainError]

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock

    def _assert_exists(self, entity: T | None, entity_id: object) -> T:
        if entity is None:
            raise self.not_found_error(str(entity_id))
        return entity

    def _log(self, operation: str, **details: Any) -> None:
        logger.info(
            "%s.%s",
            self.entity_name.lower(),
            operation,
            extra={"service": f"{self.entity_name}Service", "operation": operation, **details},
        )
