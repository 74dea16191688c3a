from events.handlers.views import (
    EventArchiveView,
    EventCancelView,
    EventDetailView,
    EventDuplicateView,
    EventListView,
    EventNotificationListView,
    EventNotificationsReadAllView,
    EventPublishView,
    EventQuickActionView,
    EventUnreadCountView,
    NotificationReadView,
    UpcomingEventListView,
)

__all__ = [
    "EventListView",
    "UpcomingEventListView",
    "EventDetailView",
    "EventPublishView",
    "EventArchiveView",
    "EventDuplicateView",
    "EventCancelView",
    "EventQuickActionView",
    "EventNotificationListView",
    "EventUnreadCountView",
    "EventNotificationsReadAllView",
    "NotificationReadView",
]
