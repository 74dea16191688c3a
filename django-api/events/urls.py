from django.urls import path

from events.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/upcoming", UpcomingEventListView.as_view(), name="event-upcoming"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/publish", EventPublishView.as_view(), name="event-publish"),
    path("events/<str:event_id>/archive", EventArchiveView.as_view(), name="event-archive"),
    path("events/<str:event_id>/duplicate", EventDuplicateView.as_view(), name="event-duplicate"),
    path("events/<str:event_id>/cancel", EventCancelView.as_view(), name="event-cancel"),
    path(
        "events/<str:event_id>/quick-actions",
        EventQuickActionView.as_view(),
        name="event-quick-actions",
    ),
    path(
        "events/<str:event_id>/notifications",
        EventNotificationListView.as_view(),
        name="event-notifications",
    ),
    path(
        "events/<str:event_id>/notifications/unread-count",
        EventUnreadCountView.as_view(),
        name="event-notifications-unread-count",
    ),
    path(
        "events/<str:event_id>/notifications/read-all",
        EventNotificationsReadAllView.as_view(),
        name="event-notifications-read-all",
    ),
    path(
        "notifications/<str:notification_id>/read",
        NotificationReadView.as_view(),
        name="notification-read",
    ),
]
