"""Integration tests for the events HTTP API.

Run with: pytest tests/test_event_catalog.py -v
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from events import models as orm
from events.handlers import views

START = datetime(2025, 1, 10, 9, 0, tzinfo=UTC)


def make_event(name: str = "Tech Conference", *, status: str = "draft", tags=(), age=timedelta()) -> orm.Event:
    created_at = datetime(2025, 1, 1, tzinfo=UTC) - age
    return orm.Event.objects.create(
        name=name,
        status=status,
        start_date=START,
        end_date=START + timedelta(hours=8),
        tags=list(tags),
        created_at=created_at,
        updated_at=created_at,
    )


def titles(event: orm.Event) -> list[str]:
    return list(event.notifications.order_by("created_at").values_list("title", flat=True))


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events_returns_paginated_results(self, api_client: APIClient):
        """Given five events, page 2 of size 2 has two rows and three pages in total."""
        for i in range(5):
            make_event(f"Event {i}", age=timedelta(minutes=i))

        response = api_client.get("/api/events", {"page": 2, "pageSize": 2})

        assert response.status_code == 200
        body = response.json()
        assert [e["name"] for e in body["data"]] == ["Event 2", "Event 3"]
        assert body["total"] == 5
        assert body["page"] == 2
        assert body["pageSize"] == 2
        assert body["totalPages"] == 3

    def test_list_events_empty_catalog(self, api_client: APIClient):
        """Given no events, returns empty list."""
        response = api_client.get("/api/events")

        assert response.status_code == 200
        assert response.json() == {"data": [], "total": 0, "page": 1, "pageSize": 25, "totalPages": 0}

    def test_list_events_search(self, api_client: APIClient):
        """Searching "conf" matches the conference by name only."""
        make_event("Tech Conference")
        make_event("Sales Kickoff", tags=["sales"])

        body = api_client.get("/api/events", {"q": "conf"}).json()

        assert [e["name"] for e in body["data"]] == ["Tech Conference"]
        assert body["total"] == 1

    def test_list_events_search_matches_each_tag(self, api_client: APIClient):
        make_event("Morning Meetup", tags=["Café", "breakfast"])
        make_event("Untagged")

        assert api_client.get("/api/events", {"q": "café"}).json()["total"] == 1
        assert api_client.get("/api/events", {"q": "["}).json()["total"] == 0

    def test_list_events_status_filter(self, api_client: APIClient):
        make_event("Draft one")
        make_event("Live one", status="published")

        body = api_client.get("/api/events", {"status": "published"}).json()

        assert [e["name"] for e in body["data"]] == ["Live one"]

    def test_list_events_event_shape(self, api_client: APIClient):
        event = make_event(tags=["technology"])
        orm.Notification.objects.create(event=event, title="Unread")

        item = api_client.get("/api/events").json()["data"][0]

        assert item["id"] == str(event.id)
        assert item["status"] == "draft"
        assert item["tags"] == ["technology"]
        assert item["notificationCount"] == 1
        assert item["unreadNotifications"] is True
        assert item["startDate"].startswith("2025-01-10T09:00:00")
        assert set(item) == {
            "id",
            "name",
            "description",
            "status",
            "startDate",
            "endDate",
            "location",
            "tags",
            "notificationCount",
            "unreadNotifications",
            "createdAt",
            "updatedAt",
        }

    @pytest.mark.parametrize(
        "params",
        [{"page": 0}, {"pageSize": 0}, {"pageSize": 1000}, {"status": "cancelled"}, {"page": "abc"}],
    )
    def test_list_events_invalid_query(self, api_client: APIClient, params):
        response = api_client.get("/api/events", params)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert body["fieldErrors"]

    def test_upcoming_events(self, api_client: APIClient):
        orm.Event.objects.create(name="Far future", start_date=datetime(2090, 1, 1, tzinfo=UTC))
        orm.Event.objects.create(name="Long ago", start_date=datetime(2000, 1, 1, tzinfo=UTC))

        body = api_client.get("/api/events/upcoming").json()

        assert [e["name"] for e in body["data"]] == ["Far future"]


@pytest.mark.django_db
class TestEventCreate:
    """Tests for POST /api/events"""

    def test_create_event(self, api_client: APIClient):
        response = api_client.post(
            "/api/events",
            {"name": "Launch", "startDate": "2025-01-10T09:00:00Z", "tags": ["product"]},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "draft"
        assert body["notificationCount"] == 1
        assert titles(orm.Event.objects.get(pk=body["id"])) == ["Event Created"]

    def test_create_event_end_before_start(self, api_client: APIClient):
        """End before start fails validation and persists nothing."""
        response = api_client.post(
            "/api/events",
            {"name": "Launch", "startDate": "2025-01-10T00:00:00Z", "endDate": "2025-01-09T00:00:00Z"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json() == {
            "code": "VALIDATION_FAILED",
            "message": "End date must be after start date",
            "fieldErrors": [{"field": "endDate", "message": "End date must be after start date"}],
        }
        assert orm.Event.objects.count() == 0

    def test_create_event_missing_name(self, api_client: APIClient):
        response = api_client.post("/api/events", {"startDate": "2025-01-10T09:00:00Z"}, format="json")

        assert response.status_code == 400
        assert {"field": "name", "message": "This field is required."} in response.json()["fieldErrors"]

    def test_create_event_rejects_archived_status(self, api_client: APIClient):
        response = api_client.post(
            "/api/events",
            {"name": "Launch", "startDate": "2025-01-10T09:00:00Z", "status": "archived"},
            format="json",
        )

        assert response.status_code == 400


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET/PUT/PATCH/DELETE /api/events/{id}"""

    def test_get_event_returns_details(self, api_client: APIClient):
        """Given event exists, returns event details."""
        event = make_event()

        response = api_client.get(f"/api/events/{event.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Tech Conference"

    def test_get_event_not_found(self, api_client: APIClient):
        """Given event does not exist, returns 404."""
        response = api_client.get(f"/api/events/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"code": "EVENT_NOT_FOUND", "message": "Event not found"}

    def test_get_event_invalid_id_format(self, api_client: APIClient):
        """Given invalid UUID, returns 400."""
        response = api_client.get("/api/events/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"

    def test_update_event(self, api_client: APIClient):
        event = make_event()

        response = api_client.put(f"/api/events/{event.id}", {"name": "Renamed"}, format="json")

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert titles(event) == ["Event Updated"]

    def test_patch_location_is_silent(self, api_client: APIClient):
        event = make_event()

        response = api_client.patch(f"/api/events/{event.id}", {"location": "Annex"}, format="json")

        assert response.status_code == 200
        assert response.json()["location"] == "Annex"
        assert titles(event) == []

    def test_update_event_invalid_dates(self, api_client: APIClient):
        event = make_event()

        response = api_client.put(f"/api/events/{event.id}", {"endDate": "2024-01-01T00:00:00Z"}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_FAILED"

    def test_update_event_not_found(self, api_client: APIClient):
        response = api_client.put(f"/api/events/{uuid4()}", {"name": "Ghost"}, format="json")
        assert response.status_code == 404

    def test_delete_archives_by_default(self, api_client: APIClient):
        event = make_event()

        response = api_client.delete(f"/api/events/{event.id}")

        assert response.status_code == 204
        event.refresh_from_db()
        assert event.status == "archived"

    def test_delete_permanent(self, api_client: APIClient):
        event = make_event()
        orm.Notification.objects.create(event=event, title="Hello")

        response = api_client.delete(f"/api/events/{event.id}?permanent=true")

        assert response.status_code == 204
        assert orm.Event.objects.count() == 0
        assert orm.Notification.objects.count() == 0

    def test_delete_not_found(self, api_client: APIClient):
        assert api_client.delete(f"/api/events/{uuid4()}?permanent=true").status_code == 404


@pytest.mark.django_db
class TestEventWorkflow:
    """Tests for publish, archive, duplicate, cancel and quick actions."""

    def test_publish_draft(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(f"/api/events/{event.id}/publish")

        assert response.status_code == 200
        assert response.json()["status"] == "published"
        assert titles(event) == ["Event Published"]

    def test_publish_non_draft_is_rejected(self, api_client: APIClient):
        event = make_event(status="published")

        response = api_client.post(f"/api/events/{event.id}/publish")

        assert response.status_code == 400
        assert response.json() == {"code": "INVALID_TRANSITION", "message": "Only draft events can be published"}

    def test_archive_twice_is_rejected(self, api_client: APIClient):
        event = make_event()

        assert api_client.post(f"/api/events/{event.id}/archive").status_code == 200
        response = api_client.post(f"/api/events/{event.id}/archive")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TRANSITION"

    def test_duplicate_event(self, api_client: APIClient):
        event = make_event(status="published", tags=["technology"])

        response = api_client.post(f"/api/events/{event.id}/duplicate")

        assert response.status_code == 201
        body = response.json()
        assert body["id"] != str(event.id)
        assert body["status"] == "draft"
        assert body["name"] == "Tech Conference (Copy)"
        assert body["tags"] == ["technology"]

    def test_duplicate_event_with_overrides(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(
            f"/api/events/{event.id}/duplicate", {"name": "Tech Conference 2026", "tags": ["2026"]}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Tech Conference 2026"
        assert response.json()["tags"] == ["2026"]

    def test_cancel_event_with_reason(self, api_client: APIClient):
        event = make_event(status="published")

        response = api_client.post(
            f"/api/events/{event.id}/cancel",
            {"reason": "Venue flooded", "occurrence": "2025-01-10T09:00:00Z"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "archived"
        assert titles(event) == ["Event Archived", "Event Cancelled"]

    @pytest.mark.parametrize(
        "action,expected_status",
        [("view", "published"), ("edit", "published"), ("cancel", "archived")],
    )
    def test_quick_actions(self, api_client: APIClient, action, expected_status):
        event = make_event(status="published")

        response = api_client.post(f"/api/events/{event.id}/quick-actions", {"action": action}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == expected_status

    def test_quick_action_edit_with_payload(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(
            f"/api/events/{event.id}/quick-actions",
            {"action": "edit", "payload": {"location": "Annex", "endDate": None}},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["location"] == "Annex"
        assert response.json()["endDate"] is None

    def test_quick_action_duplicate(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(f"/api/events/{event.id}/quick-actions", {"action": "duplicate"}, format="json")

        assert response.status_code == 200
        assert response.json()["name"] == "Tech Conference (Copy)"

    def test_quick_action_unknown(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(f"/api/events/{event.id}/quick-actions", {"action": "explode"}, format="json")

        assert response.status_code == 400
        assert response.json() == {"code": "INVALID_ARGUMENT", "message": "Invalid action: explode"}

    @pytest.mark.parametrize("action,expected_status", [("view", "draft"), ("cancel", "archived")])
    def test_quick_action_ignores_payload_unless_editing(self, api_client: APIClient, action, expected_status):
        """A payload that would fail edit validation does not block other actions."""
        event = make_event()

        response = api_client.post(
            f"/api/events/{event.id}/quick-actions",
            {"action": action, "payload": {"startDate": "not a date"}},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == expected_status

    def test_quick_action_edit_validates_payload(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(
            f"/api/events/{event.id}/quick-actions",
            {"action": "edit", "payload": {"startDate": "not a date"}},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["fieldErrors"][0]["field"] == "startDate"

    def test_services_are_built_once_per_request(self, api_client: APIClient, monkeypatch):
        """Duplicate with overrides uses the same event service for both steps."""
        built = []
        original = views.create_event_service

        def counting_factory(*args, **kwargs):
            service = original(*args, **kwargs)
            built.append(service)
            return service

        monkeypatch.setattr(views, "create_event_service", counting_factory)
        event = make_event()

        response = api_client.post(f"/api/events/{event.id}/duplicate", {"name": "Renamed copy"}, format="json")

        assert response.status_code == 201
        assert len(built) == 1


@pytest.mark.django_db
class TestNotifications:
    """Tests for the notification endpoints."""

    def test_list_notifications(self, api_client: APIClient):
        event = make_event()
        orm.Notification.objects.create(event=event, title="Read", is_read=1)
        orm.Notification.objects.create(event=event, title="Unread")

        all_items = api_client.get(f"/api/events/{event.id}/notifications").json()["data"]
        unread = api_client.get(f"/api/events/{event.id}/notifications", {"unread": "true"}).json()["data"]

        assert [n["title"] for n in all_items] == ["Read", "Unread"]
        assert [n["title"] for n in unread] == ["Unread"]
        assert unread[0]["isRead"] is False
        assert unread[0]["eventId"] == str(event.id)

    def test_list_notifications_missing_event(self, api_client: APIClient):
        assert api_client.get(f"/api/events/{uuid4()}/notifications").status_code == 404

    def test_create_notification(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(
            f"/api/events/{event.id}/notifications",
            {"title": "Speaker Confirmed", "type": "success"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["type"] == "success"
        assert response.json()["isRead"] is False

    def test_create_notification_invalid_type(self, api_client: APIClient):
        event = make_event()

        response = api_client.post(
            f"/api/events/{event.id}/notifications", {"title": "Oops", "type": "critical"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ARGUMENT"

    def test_unread_count_and_read_all(self, api_client: APIClient):
        event = make_event()
        orm.Notification.objects.create(event=event, title="One")
        orm.Notification.objects.create(event=event, title="Two")

        assert api_client.get(f"/api/events/{event.id}/notifications/unread-count").json() == {"count": 2}

        response = api_client.post(f"/api/events/{event.id}/notifications/read-all")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2
        assert api_client.get(f"/api/events/{event.id}/notifications/unread-count").json() == {"count": 0}

    def test_mark_notification_read_twice(self, api_client: APIClient):
        notification = orm.Notification.objects.create(event=make_event(), title="One")

        first = api_client.post(f"/api/notifications/{notification.id}/read")
        second = api_client.post(f"/api/notifications/{notification.id}/read")

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()
        assert second.json()["isRead"] is True

    def test_mark_notification_read_not_found(self, api_client: APIClient):
        response = api_client.post(f"/api/notifications/{uuid4()}/read")

        assert response.status_code == 404
        assert response.json()["code"] == "NOTIFICATION_NOT_FOUND"
