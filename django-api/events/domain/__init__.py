from events.domain.models import Event, NewEvent, NewNotification, Notification, Page
from events.domain.value_objects import (
    DateRange,
    EventFilters,
    EventId,
    EventStatus,
    NotificationId,
    NotificationType,
    PageRequest,
)

__all__ = [
    "Event",
    "NewEvent",
    "Notification",
    "NewNotification",
    "Page",
    "EventId",
    "NotificationId",
    "EventStatus",
    "NotificationType",
    "EventFilters",
    "DateRange",
    "PageRequest",
]
