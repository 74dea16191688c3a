"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Lifecycle operations write the event and its notification inside one
``store.atomic()`` block, so either both rows land or neither does.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from events.domain import (
    DateRange,
    Event,
    EventFilters,
    EventId,
    EventStatus,
    NewEvent,
    NotificationType,
    Page,
    PageRequest,
)
from events.domain.errors import (
    EventNotFoundError,
    EventValidationError,
    InvalidArgumentError,
    InvalidTransitionError,
)
from events.services.base import BaseService, parse_event_id, utcnow
from events.services.notification_service import LifecycleAction, NotificationService
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 25
UPCOMING_HORIZON = datetime(2099, 12, 31, tzinfo=UTC)
COPY_SUFFIX = " (Copy)"

UPDATABLE_FIELDS = frozenset(
    {"name", "description", "status", "start_date", "end_date", "location", "tags"}
)
# Changes to these fields produce an "Event Updated" notification.
NOTIFY_ON_UPDATE = frozenset({"status", "name", "start_date"})


def parse_status(value: str | EventStatus) -> EventStatus:
    try:
        return EventStatus(value)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in EventStatus)
        raise InvalidArgumentError(f"Invalid status. Must be one of: {allowed}") from exc


def validate_event_dates(start_date: datetime | None, end_date: datetime | None) -> None:
    """Raise EventValidationError unless end_date is absent or after start_date."""
    if start_date is None:
        raise EventValidationError("Start date is required", field="startDate")
    try:
        DateRange(start=start_date, end=end_date)
    except ValueError as exc:
        raise EventValidationError(str(exc), field="endDate") from exc


class EventService(BaseService[Event]):
    """Service for event catalog and lifecycle operations."""

    entity_name = "Event"
    not_found_error = EventNotFoundError

    def __init__(
        self,
        store: EventStore,
        notifications: NotificationService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(clock=clock)
        self._store = store
        self._notifications = notifications

    def _get(self, event_id: EventId) -> Event:
        return self._assert_exists(self._store.find_by_id(event_id), event_id)

    def list_events(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        status: str | EventStatus | None = None,
    ) -> Page[Event]:
        """Return one page of events matching the search text and status.

        ``search`` matches the name or any tag, case-insensitively.
        ``total`` counts every match, not only the current page.

        Raises:
            InvalidArgumentError: For a non-positive page/page_size or unknown status.
        """
        try:
            request = PageRequest(page=page, page_size=page_size)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from exc
        filters = EventFilters(
            search=search or None,
            status=parse_status(status) if status else None,
        )
        events = self._store.search(filters, offset=request.offset, limit=request.page_size)
        total = self._store.count_matching(filters)
        return Page(data=events, total=total, page=request.page, page_size=request.page_size)

    def get_event(self, event_id: str | EventId) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        return self._get(parse_event_id(event_id))

    def create_event(self, data: NewEvent) -> Event:
        """Create an event (draft unless a status is given) and record a notification.

        Raises:
            EventValidationError: If end_date is not after start_date.
        """
        validate_event_dates(data.start_date, data.end_date)
        if data.status is None:
            data = replace(data, status=EventStatus.DRAFT)
        with self._store.atomic():
            created = self._store.create(data)
            self._notifications.create_lifecycle_notification(created.id, created.name, LifecycleAction.CREATED)
        self._log("create", event_id=str(created.id), status=created.status.value)
        return self._get(created.id)

    def update_event(self, event_id: str | EventId, changes: Mapping[str, Any]) -> Event:
        """Apply a partial update.

        Dates are re-validated against the merged values when either changes.
        Only changes to status, name or start_date record a notification.
        ``updated_at`` is always refreshed.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            InvalidArgumentError: For unknown fields or an invalid status.
            EventValidationError: If the merged end date is not after the start date.
        """
        eid = parse_event_id(event_id)
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidArgumentError(f"Unknown event fields: {', '.join(sorted(unknown))}")
        values = dict(changes)
        if "status" in values:
            values["status"] = parse_status(values["status"])
        if "tags" in values:
            values["tags"] = tuple(values["tags"] or ())

        with self._store.atomic():
            existing = self._get(eid)
            if "start_date" in values or "end_date" in values:
                validate_event_dates(
                    values.get("start_date", existing.start_date),
                    values.get("end_date", existing.end_date),
                )
            values["updated_at"] = self._clock()
            updated = self._assert_exists(self._store.update(eid, values), eid)
            if NOTIFY_ON_UPDATE & set(changes):
                self._notifications.create_lifecycle_notification(eid, updated.name, LifecycleAction.UPDATED)
        self._log("update", event_id=str(eid), fields=sorted(changes))
        return self._get(eid)

    def remove_event(self, event_id: str | EventId) -> None:
        """Permanently delete an event. Its notifications are removed by cascade."""
        eid = parse_event_id(event_id)
        if not self._store.delete(eid):
            raise EventNotFoundError(str(eid))
        self._log("remove", event_id=str(eid))

    def publish_event(self, event_id: str | EventId) -> Event:
        """Move a draft event to published.

        Raises:
            InvalidTransitionError: If the event is not a draft.
        """
        eid = parse_event_id(event_id)
        with self._store.atomic():
            event = self._get(eid)
            if event.status is not EventStatus.DRAFT:
                raise InvalidTransitionError("Only draft events can be published")
            self._store.update(eid, {"status": EventStatus.PUBLISHED, "updated_at": self._clock()})
            self._notifications.create_lifecycle_notification(eid, event.name, LifecycleAction.PUBLISHED)
        self._log("publish", event_id=str(eid))
        return self._get(eid)

    def archive_event(self, event_id: str | EventId) -> Event:
        """Archive (soft delete) an event.

        Raises:
            InvalidTransitionError: If the event is already archived.
        """
        eid = parse_event_id(event_id)
        with self._store.atomic():
            event = self._get(eid)
            if event.status is EventStatus.ARCHIVED:
                raise InvalidTransitionError("Event is already archived")
            self._store.update(eid, {"status": EventStatus.ARCHIVED, "updated_at": self._clock()})
            self._notifications.create_lifecycle_notification(eid, event.name, LifecycleAction.ARCHIVED)
        self._log("archive", event_id=str(eid), previous_status=event.status.value)
        return self._get(eid)

    def duplicate_event(self, event_id: str | EventId) -> Event:
        """Copy an event into a new draft. Notifications are not copied."""
        eid = parse_event_id(event_id)
        with self._store.atomic():
            source = self._get(eid)
            duplicated = self._store.create(
                NewEvent(
                    name=f"{source.name}{COPY_SUFFIX}",
                    description=source.description,
                    status=EventStatus.DRAFT,
                    start_date=source.start_date,
                    end_date=source.end_date,
                    location=source.location,
                    tags=source.tags,
                )
            )
            self._notifications.create_lifecycle_notification(
                duplicated.id, duplicated.name, LifecycleAction.DUPLICATED
            )
        self._log("duplicate", event_id=str(duplicated.id), source_id=str(eid))
        return self._get(duplicated.id)

    def cancel_event(
        self,
        event_id: str | EventId,
        reason: str | None = None,
        occurrence: datetime | None = None,
    ) -> Event:
        """Cancel an event by archiving it.

        A reason, when given, is recorded in a warning notification.
        Single-occurrence cancellation is not supported: ``occurrence`` is
        accepted but the whole event is archived.
        """
        eid = parse_event_id(event_id)
        if occurrence is not None:
            logger.info(
                "Occurrence cancellation requested, archiving whole event",
                extra={"event_id": str(eid), "occurrence": occurrence.isoformat()},
            )
        with self._store.atomic():
            self.archive_event(eid)
            if reason:
                self._notifications.create_for_event(
                    eid,
                    "Event Cancelled",
                    f"Event was cancelled. Reason: {reason}",
                    NotificationType.WARNING,
                )
        self._log("cancel", event_id=str(eid), has_reason=bool(reason))
        return self._get(eid)

    def list_upcoming_events(self, now: datetime | None = None) -> list[Event]:
        """Return events starting from now onwards, soonest first."""
        return self._store.find_by_date_range(now or self._clock(), UPCOMING_HORIZON)

    def list_events_by_status(self, status: str | EventStatus) -> list[Event]:
        return self._store.find_by_status(parse_status(status))

    def list_events_with_unread(self) -> list[Event]:
        return self._store.find_with_unread_notifications()
