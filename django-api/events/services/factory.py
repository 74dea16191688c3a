"""Factory functions wiring services to the Django ORM stores.

Handlers build services here; tests construct services directly with
in-memory stores.
"""

from events.services.event_service import EventService
from events.services.notification_service import NotificationService
from events.services.quick_actions import QuickActionDispatcher
from events.stores.django_store import DjangoEventStore, DjangoNotificationStore


def create_notification_service() -> NotificationService:
    return NotificationService(store=DjangoNotificationStore())


def create_event_service(notifications: NotificationService | None = None) -> EventService:
    return EventService(
        store=DjangoEventStore(),
        notifications=notifications or create_notification_service(),
    )


def create_quick_action_dispatcher(events: EventService | None = None) -> QuickActionDispatcher:
    return QuickActionDispatcher(events or create_event_service())
