"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (see handlers/errors.py)
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.handlers.serializers import (
    CancelEventSerializer,
    DuplicateEventSerializer,
    EventCreateSerializer,
    EventDeleteQuerySerializer,
    EventListQuerySerializer,
    EventSerializer,
    EventUpdateSerializer,
    NotificationCreateSerializer,
    NotificationSerializer,
    QuickActionSerializer,
    serialize_page,
)
from events.services import EventService, NotificationService, QuickAction, QuickActionDispatcher
from events.services.factory import (
    create_event_service,
    create_notification_service,
    create_quick_action_dispatcher,
)


def _validated(serializer_class, data, **kwargs) -> dict:
    serializer = serializer_class(data=data, **kwargs)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class EventView(APIView):
    """Base view giving access to the event services.

    The services are built once per request, before the handler runs.
    """

    events: EventService
    notifications: NotificationService
    quick_actions: QuickActionDispatcher

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        self.notifications = create_notification_service()
        self.events = create_event_service(self.notifications)
        self.quick_actions = create_quick_action_dispatcher(self.events)


class EventListView(EventView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        params = _validated(EventListQuerySerializer, request.query_params)
        page = self.events.list_events(
            page=params["page"],
            page_size=params["page_size"],
            search=params.get("q"),
            status=params.get("status"),
        )
        return Response(serialize_page(page))

    def post(self, request: Request) -> Response:
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        created = self.events.create_event(serializer.to_domain())
        return Response(EventSerializer(created).data, status=status.HTTP_201_CREATED)


class UpcomingEventListView(EventView):
    """Handler for GET /api/events/upcoming"""

    def get(self, request: Request) -> Response:
        events = self.events.list_upcoming_events()
        return Response({"data": EventSerializer(events, many=True).data})


class EventDetailView(EventView):
    """Handler for GET/PUT/PATCH/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = self.events.get_event(event_id)
        return Response(EventSerializer(event).data)

    def put(self, request: Request, event_id: str) -> Response:
        changes = _validated(EventUpdateSerializer, request.data, partial=True)
        updated = self.events.update_event(event_id, changes)
        return Response(EventSerializer(updated).data)

    def patch(self, request: Request, event_id: str) -> Response:
        return self.put(request, event_id)

    def delete(self, request: Request, event_id: str) -> Response:
        params = _validated(EventDeleteQuerySerializer, request.query_params)
        if params["permanent"]:
            self.events.remove_event(event_id)
        else:
            self.events.archive_event(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventPublishView(EventView):
    """Handler for POST /api/events/{event_id}/publish"""

    def post(self, request: Request, event_id: str) -> Response:
        return Response(EventSerializer(self.events.publish_event(event_id)).data)


class EventArchiveView(EventView):
    """Handler for POST /api/events/{event_id}/archive"""

    def post(self, request: Request, event_id: str) -> Response:
        return Response(EventSerializer(self.events.archive_event(event_id)).data)


class EventDuplicateView(EventView):
    """Handler for POST /api/events/{event_id}/duplicate"""

    def post(self, request: Request, event_id: str) -> Response:
        overrides = _validated(DuplicateEventSerializer, request.data)
        duplicated = self.events.duplicate_event(event_id)
        if overrides:
            duplicated = self.events.update_event(duplicated.id, overrides)
        return Response(EventSerializer(duplicated).data, status=status.HTTP_201_CREATED)


class EventCancelView(EventView):
    """Handler for POST /api/events/{event_id}/cancel"""

    def post(self, request: Request, event_id: str) -> Response:
        body = _validated(CancelEventSerializer, request.data)
        cancelled = self.events.cancel_event(
            event_id,
            reason=body.get("reason"),
            occurrence=body.get("occurrence"),
        )
        return Response(EventSerializer(cancelled).data)


class EventQuickActionView(EventView):
    """Handler for POST /api/events/{event_id}/quick-actions"""

    def post(self, request: Request, event_id: str) -> Response:
        body = _validated(QuickActionSerializer, request.data)
        payload = body.get("payload")
        # only edit reads the payload
        if body["action"] == QuickAction.EDIT and payload:
            payload = _validated(EventUpdateSerializer, payload, partial=True)
        event = self.quick_actions.dispatch(event_id, body["action"], payload)
        return Response(EventSerializer(event).data)


class EventNotificationListView(EventView):
    """Handler for GET/POST /api/events/{event_id}/notifications"""

    def get(self, request: Request, event_id: str) -> Response:
        if request.query_params.get("unread", "").lower() in ("1", "true"):
            notifications = self.notifications.find_unread_by_event_id(event_id)
        else:
            notifications = self.notifications.find_by_event_id(event_id)
        return Response({"data": NotificationSerializer(notifications, many=True).data})

    def post(self, request: Request, event_id: str) -> Response:
        body = _validated(NotificationCreateSerializer, request.data)
        created = self.notifications.create_for_event(
            event_id,
            title=body["title"],
            message=body.get("message"),
            type=body["type"],
        )
        return Response(NotificationSerializer(created).data, status=status.HTTP_201_CREATED)


class EventUnreadCountView(EventView):
    """Handler for GET /api/events/{event_id}/notifications/unread-count"""

    def get(self, request: Request, event_id: str) -> Response:
        return Response({"count": self.notifications.count_unread_by_event_id(event_id)})


class EventNotificationsReadAllView(EventView):
    """Handler for POST /api/events/{event_id}/notifications/read-all"""

    def post(self, request: Request, event_id: str) -> Response:
        updated = self.notifications.mark_all_read_for_event(event_id)
        return Response({"data": NotificationSerializer(updated, many=True).data})


class NotificationReadView(EventView):
    """Handler for POST /api/notifications/{notification_id}/read"""

    def post(self, request: Request, notification_id: str) -> Response:
        notification = self.notifications.mark_as_read(notification_id)
        return Response(NotificationSerializer(notification).data)
