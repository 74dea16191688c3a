"""Notification service - read/unread state and lifecycle notifications.

Notifications hang off an event. Only the read flag is ever mutated after
creation; rows are removed by cascade when their event is deleted.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum

from events.domain import EventId, NewNotification, Notification, NotificationId, NotificationType
from events.domain.errors import EventNotFoundError, InvalidArgumentError, NotificationNotFoundError
from events.services.base import BaseService, parse_event_id, parse_notification_id, utcnow
from events.stores.interfaces import NotificationStore


class LifecycleAction(str, Enum):
    """Event lifecycle actions that produce a canned notification."""

    CREATED = "created"
    UPDATED = "updated"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    DUPLICATED = "duplicated"


LIFECYCLE_NOTIFICATIONS: dict[LifecycleAction, tuple[str, str, NotificationType]] = {
    LifecycleAction.CREATED: ("Event Created", 'Event "{name}" has been created', NotificationType.INFO),
    LifecycleAction.UPDATED: ("Event Updated", 'Event "{name}" has been updated', NotificationType.INFO),
    LifecycleAction.PUBLISHED: ("Event Published", 'Event "{name}" has been published', NotificationType.SUCCESS),
    LifecycleAction.ARCHIVED: ("Event Archived", 'Event "{name}" has been archived', NotificationType.WARNING),
    LifecycleAction.DUPLICATED: (
        "Event Duplicated",
        'Event "{name}" has been created as a copy',
        NotificationType.INFO,
    ),
}


def parse_notification_type(value: str | NotificationType) -> NotificationType:
    try:
        return NotificationType(value)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in NotificationType)
        raise InvalidArgumentError(f"Invalid notification type. Must be one of: {allowed}") from exc


class NotificationService(BaseService[Notification]):
    """Service for event notifications."""

    entity_name = "Notification"
    not_found_error = NotificationNotFoundError

    def __init__(self, store: NotificationStore, clock: Callable[[], datetime] = utcnow) -> None:
        super().__init__(clock=clock)
        self._store = store

    def _existing_event_id(self, event_id: str | EventId) -> EventId:
        eid = parse_event_id(event_id)
        if not self._store.event_exists(eid):
            raise EventNotFoundError(str(eid))
        return eid

    def get_notification(self, notification_id: str | NotificationId) -> Notification:
        """Return a notification by ID.

        Raises:
            InvalidNotificationIdError: If the ID is not a valid UUID.
            NotificationNotFoundError: If the notification does not exist.
        """
        nid = parse_notification_id(notification_id)
        return self._assert_exists(self._store.find_by_id(nid), nid)

    def create_for_event(
        self,
        event_id: str | EventId,
        title: str,
        message: str | None = None,
        type: str | NotificationType = NotificationType.INFO,
    ) -> Notification:
        """Create an unread notification attached to an event.

        Raises:
            InvalidArgumentError: If ``type`` is not info, warning, error or success.
            EventNotFoundError: If the event does not exist.
        """
        notification_type = parse_notification_type(type)
        eid = self._existing_event_id(event_id)
        created = self._store.create(
            NewNotification(
                event_id=eid,
                title=title,
                message=message,
                type=notification_type,
                is_read=False,
            )
        )
        self._log("create", event_id=str(eid), notification_id=str(created.id), title=title)
        return created

    def create_lifecycle_notification(
        self,
        event_id: str | EventId,
        event_name: str,
        action: str | LifecycleAction,
    ) -> Notification:
        """Create the canned notification for a lifecycle action."""
        try:
            lifecycle_action = LifecycleAction(action)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown lifecycle action: {action}") from exc
        title, message, notification_type = LIFECYCLE_NOTIFICATIONS[lifecycle_action]
        return self.create_for_event(event_id, title, message.format(name=event_name), notification_type)

    def mark_as_read(self, notification_id: str | NotificationId) -> Notification:
        """Mark one notification read. Already-read notifications are returned unchanged."""
        notification = self.get_notification(notification_id)
        if notification.is_read:
            return notification
        updated = self._assert_exists(self._store.mark_as_read(notification.id), notification.id)
        self._log("mark_as_read", notification_id=str(notification.id))
        return updated

    def mark_all_read_for_event(self, event_id: str | EventId) -> list[Notification]:
        """Mark every unread notification of an event read and return those flipped."""
        eid = self._existing_event_id(event_id)
        updated = self._store.mark_all_read_for_event(eid)
        self._log("mark_all_read", event_id=str(eid), count=len(updated))
        return updated

    def find_by_event_id(self, event_id: str | EventId) -> list[Notification]:
        return self._store.find_by_event_id(self._existing_event_id(event_id))

    def find_unread_by_event_id(self, event_id: str | EventId) -> list[Notification]:
        return self._store.find_unread_by_event_id(self._existing_event_id(event_id))

    def count_unread_by_event_id(self, event_id: str | EventId) -> int:
        return self._store.count_unread_by_event_id(self._existing_event_id(event_id))
