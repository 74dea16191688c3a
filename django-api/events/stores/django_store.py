"""Django ORM implementation of the event and notification stores.

Each store queries the ORM and converts rows to domain models.
"""

from collections.abc import Mapping
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, ClassVar, TypeVar

from django.db import models, transaction
from django.db.models import Count, Q, QuerySet

from events import models as orm
from events.domain import (
    Event,
    EventFilters,
    EventId,
    EventStatus,
    NewEvent,
    NewNotification,
    Notification,
    NotificationId,
    NotificationType,
)
from events.stores.interfaces import EventStore, NotificationStore, Store

EntityT = TypeVar("EntityT")
IdT = TypeVar("IdT", bound=EventId | NotificationId)
NewT = TypeVar("NewT")


class DjangoStore(Store[EntityT, IdT, NewT]):
    """Generic CRUD over one ORM model.

    Subclasses bind ``model`` and implement the row/domain conversions.
    """

    model: ClassVar[type[models.Model]]

    def _queryset(self) -> QuerySet:
        return self.model.objects.all()

    def _to_domain(self, row: models.Model) -> EntityT:
        raise NotImplementedError

    def _insert_values(self, data: NewT) -> dict[str, Any]:
        raise NotImplementedError

    def _column_changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        return dict(changes)

    def find_all(self) -> list[EntityT]:
        return [self._to_domain(row) for row in self._queryset()]

    def find_by_id(self, entity_id: IdT) -> EntityT | None:
        row = self._queryset().filter(pk=entity_id.value).first()
        return self._to_domain(row) if row is not None else None

    def create(self, data: NewT) -> EntityT:
        row = self.model.objects.create(**self._insert_values(data))
        return self._to_domain(self._queryset().get(pk=row.pk))

    def update(self, entity_id: IdT, changes: Mapping[str, Any]) -> EntityT | None:
        updated = self.model.objects.filter(pk=entity_id.value).update(**self._column_changes(changes))
        if not updated:
            return None
        return self.find_by_id(entity_id)

    def delete(self, entity_id: IdT) -> bool:
        _, per_model = self.model.objects.filter(pk=entity_id.value).delete()
        return per_model.get(self.model._meta.label, 0) > 0

    def count(self) -> int:
        return self.model.objects.count()

    def atomic(self) -> AbstractContextManager[Any]:
        return transaction.atomic()


class DjangoEventStore(DjangoStore[Event, EventId, NewEvent], EventStore):
    """Event store backed by the Django ORM.

    Notification totals are annotated on every read rather than stored.
    """

    model = orm.Event

    def _queryset(self) -> QuerySet:
        return orm.Event.objects.annotate(
            notification_total=Count("notifications"),
            unread_total=Count("notifications", filter=Q(notifications__is_read=0)),
        ).order_by("-created_at", "id")

    def _to_domain(self, row: orm.Event) -> Event:
        return Event(
            id=EventId(value=row.id),
            name=row.name,
            description=row.description,
            status=EventStatus(row.status),
            start_date=row.start_date,
            end_date=row.end_date,
            location=row.location,
            tags=tuple(row.tags or ()),
            created_at=row.created_at,
            updated_at=row.updated_at,
            notification_count=getattr(row, "notification_total", 0),
            unread_notification_count=getattr(row, "unread_total", 0),
        )

    def _insert_values(self, data: NewEvent) -> dict[str, Any]:
        return {
            "name": data.name,
            "description": data.description,
            "status": data.status.value,
            "start_date": data.start_date,
            "end_date": data.end_date,
            "location": data.location,
            "tags": list(data.tags),
        }

    def _column_changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        columns = dict(changes)
        if "status" in columns:
            columns["status"] = EventStatus(columns["status"]).value
        if "tags" in columns:
            columns["tags"] = list(columns["tags"] or ())
        return columns

    @staticmethod
    def _apply_filters(queryset: QuerySet, filters: EventFilters) -> QuerySet:
        # tags are matched element by element, see events/lookups.py
        if filters.search:
            queryset = queryset.filter(
                Q(name__icontains=filters.search) | Q(tags__any_icontains=filters.search)
            )
        if filters.status is not None:
            queryset = queryset.filter(status=filters.status.value)
        return queryset

    def search(self, filters: EventFilters, offset: int, limit: int) -> list[Event]:
        rows = self._apply_filters(self._queryset(), filters)[offset : offset + limit]
        return [self._to_domain(row) for row in rows]

    def count_matching(self, filters: EventFilters) -> int:
        return self._apply_filters(orm.Event.objects.all(), filters).count()

    def find_by_status(self, status: EventStatus) -> list[Event]:
        return [self._to_domain(row) for row in self._queryset().filter(status=status.value)]

    def find_by_date_range(self, start: datetime, end: datetime) -> list[Event]:
        rows = self._queryset().filter(start_date__gte=start, start_date__lte=end).order_by("start_date", "id")
        return [self._to_domain(row) for row in rows]

    def find_with_unread_notifications(self) -> list[Event]:
        return [self._to_domain(row) for row in self._queryset().filter(unread_total__gt=0)]

    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()


class DjangoNotificationStore(DjangoStore[Notification, NotificationId, NewNotification], NotificationStore):
    """Notification store backed by the Django ORM."""

    model = orm.Notification

    def _queryset(self) -> QuerySet:
        return orm.Notification.objects.order_by("created_at", "id")

    def _to_domain(self, row: orm.Notification) -> Notification:
        return Notification(
            id=NotificationId(value=row.id),
            event_id=EventId(value=row.event_id),
            title=row.title,
            message=row.message,
            type=NotificationType(row.type),
            is_read=bool(row.is_read),
            created_at=row.created_at,
        )

    def _insert_values(self, data: NewNotification) -> dict[str, Any]:
        return {
            "event_id": data.event_id.value,
            "title": data.title,
            "message": data.message,
            "type": data.type.value,
            "is_read": int(data.is_read),
        }

    def _column_changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        columns = dict(changes)
        if "is_read" in columns:
            columns["is_read"] = int(bool(columns["is_read"]))
        if "type" in columns:
            columns["type"] = NotificationType(columns["type"]).value
        if "event_id" in columns:
            columns["event_id"] = columns["event_id"].value
        return columns

    def find_by_event_id(self, event_id: EventId) -> list[Notification]:
        rows = self._queryset().filter(event_id=event_id.value)
        return [self._to_domain(row) for row in rows]

    def find_unread_by_event_id(self, event_id: EventId) -> list[Notification]:
        rows = self._queryset().filter(event_id=event_id.value, is_read=0)
        return [self._to_domain(row) for row in rows]

    def mark_as_read(self, notification_id: NotificationId) -> Notification | None:
        return self.update(notification_id, {"is_read": True})

    def mark_all_read_for_event(self, event_id: EventId) -> list[Notification]:
        with transaction.atomic():
            unread_ids = list(
                orm.Notification.objects.filter(event_id=event_id.value, is_read=0).values_list("id", flat=True)
            )
            if not unread_ids:
                return []
            orm.Notification.objects.filter(pk__in=unread_ids).update(is_read=1)
            rows = self._queryset().filter(pk__in=unread_ids)
            return [self._to_domain(row) for row in rows]

    def count_unread_by_event_id(self, event_id: EventId) -> int:
        return orm.Notification.objects.filter(event_id=event_id.value, is_read=0).count()

    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()
