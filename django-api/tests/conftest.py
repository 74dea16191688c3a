"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest
from rest_framework.test import APIClient

from events.domain import EventStatus, NewEvent
from events.services import EventService, NotificationService
from tests.fakes import InMemoryDatabase, InMemoryEventStore, InMemoryNotificationStore

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def notification_store(memory_db: InMemoryDatabase) -> InMemoryNotificationStore:
    return InMemoryNotificationStore(memory_db)


@pytest.fixture
def notification_service(notification_store: InMemoryNotificationStore) -> NotificationService:
    return NotificationService(store=notification_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def event_service(memory_db: InMemoryDatabase, notification_service: NotificationService) -> EventService:
    return EventService(
        store=InMemoryEventStore(memory_db),
        notifications=notification_service,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def new_event():
    """Build a NewEvent with sensible defaults."""

    def build(**overrides) -> NewEvent:
        values = {
            "name": "Tech Conference",
            "start_date": datetime(2025, 1, 10, 9, 0, tzinfo=UTC),
            "end_date": datetime(2025, 1, 10, 17, 0, tzinfo=UTC),
            "status": EventStatus.DRAFT,
            "location": "Main Hall",
            "tags": ("technology", "networking"),
            "description": "Annual conference",
        }
        values.update(overrides)
        return NewEvent(**values)

    return build
