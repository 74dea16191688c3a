"""Serializers for request input and for transforming domain models to API responses.

Field names are the camelCase keys of the API; ``source`` maps them onto
domain attribute names, so ``validated_data`` is keyed by domain field.
"""

import math

from django.conf import settings
from rest_framework import serializers

from events.domain import Event, EventStatus, NewEvent, Page

STATUS_CHOICES = [status.value for status in EventStatus]
CREATE_STATUS_CHOICES = [EventStatus.DRAFT.value, EventStatus.PUBLISHED.value]


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    status = serializers.CharField(source="status.value")
    startDate = serializers.DateTimeField(source="start_date")
    endDate = serializers.DateTimeField(source="end_date", allow_null=True)
    location = serializers.CharField(allow_null=True)
    tags = serializers.ListField(child=serializers.CharField())
    notificationCount = serializers.IntegerField(source="notification_count")
    unreadNotifications = serializers.BooleanField(source="has_unread_notifications")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class NotificationSerializer(serializers.Serializer):
    """Serializer for Notification domain model."""

    id = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    title = serializers.CharField()
    message = serializers.CharField(allow_null=True)
    type = serializers.CharField(source="type.value")
    isRead = serializers.BooleanField(source="is_read")
    createdAt = serializers.DateTimeField(source="created_at")


def serialize_page(page: Page[Event]) -> dict:
    """Build the page object; totalPages is derived here, never stored."""
    return {
        "data": EventSerializer(page.data, many=True).data,
        "total": page.total,
        "page": page.page,
        "pageSize": page.page_size,
        "totalPages": math.ceil(page.total / page.page_size),
    }


class EventListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    pageSize = serializers.IntegerField(
        source="page_size",
        min_value=1,
        max_value=settings.EVENTS_MAX_PAGE_SIZE,
        default=settings.EVENTS_DEFAULT_PAGE_SIZE,
    )
    q = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)


class EventDeleteQuerySerializer(serializers.Serializer):
    permanent = serializers.BooleanField(default=False)


class EventCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=CREATE_STATUS_CHOICES, required=False)
    startDate = serializers.DateTimeField(source="start_date")
    endDate = serializers.DateTimeField(source="end_date", required=False, allow_null=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    tags = serializers.ListField(child=serializers.CharField(max_length=64), required=False)

    def to_domain(self) -> NewEvent:
        data = self.validated_data
        return NewEvent(
            name=data["name"],
            description=data.get("description"),
            status=EventStatus(data.get("status", EventStatus.DRAFT.value)),
            start_date=data["start_date"],
            end_date=data.get("end_date"),
            location=data.get("location"),
            tags=tuple(data.get("tags", ())),
        )


class EventUpdateSerializer(serializers.Serializer):
    """Partial update body. Only keys present in the request end up in validated_data."""

    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)
    startDate = serializers.DateTimeField(source="start_date", required=False)
    endDate = serializers.DateTimeField(source="end_date", required=False, allow_null=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    tags = serializers.ListField(child=serializers.CharField(max_length=64), required=False)


class DuplicateEventSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=64), required=False)


class CancelEventSerializer(serializers.Serializer):
    occurrence = serializers.DateTimeField(required=False, allow_null=True)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


class QuickActionSerializer(serializers.Serializer):
    action = serializers.CharField()
    payload = serializers.DictField(required=False, allow_null=True)


class NotificationCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    type = serializers.CharField(required=False, default="info")
