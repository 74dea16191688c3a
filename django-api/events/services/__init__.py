from events.services.event_service import EventService
from events.services.notification_service import LifecycleAction, NotificationService
from events.services.quick_actions import QuickAction, QuickActionDispatcher

__all__ = [
    "EventService",
    "NotificationService",
    "LifecycleAction",
    "QuickAction",
    "QuickActionDispatcher",
]
