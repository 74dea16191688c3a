"""Load sample events and notifications for local development."""

from datetime import UTC, datetime, timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from events.models import Event, Notification


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


SAMPLE_EVENTS = [
    {
        "name": "Annual Tech Conference 2024",
        "description": (
            "A comprehensive technology conference featuring industry leaders and emerging "
            "trends in software development, AI, and digital transformation."
        ),
        "status": Event.Status.PUBLISHED,
        "start_date": _at("2024-12-15T09:00:00"),
        "end_date": _at("2024-12-17T18:00:00"),
        "location": "San Francisco Convention Center",
        "tags": ["technology", "conference", "networking"],
    },
    {
        "name": "Marketing Workshop Series",
        "description": (
            "Weekly workshop series covering digital marketing strategies, social media "
            "optimization, and customer engagement techniques."
        ),
        "status": Event.Status.PUBLISHED,
        "start_date": _at("2024-11-01T14:00:00"),
        "end_date": _at("2024-11-29T16:00:00"),
        "location": "Downtown Business Hub",
        "tags": ["marketing", "workshop", "professional development"],
    },
    {
        "name": "Holiday Party Planning Committee",
        "description": (
            "Draft event for organizing the annual company holiday celebration. "
            "Still finalizing venue and catering options."
        ),
        "status": Event.Status.DRAFT,
        "start_date": _at("2024-12-20T19:00:00"),
        "end_date": _at("2024-12-20T23:00:00"),
        "location": "TBD",
        "tags": ["holiday", "party", "company"],
    },
    {
        "name": "Q1 Sales Kickoff 2025",
        "description": (
            "Quarterly sales team meeting to review performance, set new targets, and "
            "introduce product updates for the upcoming quarter."
        ),
        "status": Event.Status.DRAFT,
        "start_date": _at("2025-01-08T10:00:00"),
        "end_date": _at("2025-01-08T15:00:00"),
        "location": "Corporate Headquarters",
        "tags": ["sales", "quarterly", "business"],
    },
    {
        "name": "Summer Internship Program 2023",
        "description": (
            "Completed summer internship program that provided hands-on experience for "
            "college students in various departments."
        ),
        "status": Event.Status.ARCHIVED,
        "start_date": _at("2023-06-01T09:00:00"),
        "end_date": _at("2023-08-31T17:00:00"),
        "location": "Multiple Office Locations",
        "tags": ["internship", "education", "summer"],
        "age": timedelta(days=182),
    },
    {
        "name": "Product Launch Webinar",
        "description": (
            "Virtual presentation showcasing the latest product features and demonstrating "
            "new capabilities to customers and stakeholders."
        ),
        "status": Event.Status.PUBLISHED,
        "start_date": _at("2024-11-15T13:00:00"),
        "end_date": _at("2024-11-15T14:30:00"),
        "location": "Virtual Event Platform",
        "tags": ["product", "webinar", "launch"],
    },
]

# (event name, title, message, is_read, age)
SAMPLE_NOTIFICATIONS = [
    (
        "Annual Tech Conference 2024",
        "Speaker Confirmed",
        "Keynote speaker John Smith has confirmed his attendance for the opening session.",
        0,
        timedelta(days=2),
    ),
    (
        "Annual Tech Conference 2024",
        "Venue Update",
        "Additional breakout rooms have been secured for the conference workshops.",
        0,
        timedelta(days=1),
    ),
    (
        "Annual Tech Conference 2024",
        "Registration Milestone",
        "We have reached 500 registrations for the tech conference!",
        1,
        timedelta(days=3),
    ),
    (
        "Marketing Workshop Series",
        "Material Ready",
        "All workshop materials and handouts are now available for download.",
        0,
        timedelta(hours=12),
    ),
    (
        "Q1 Sales Kickoff 2025",
        "Agenda Draft",
        "First draft of the meeting agenda is ready for review.",
        0,
        timedelta(hours=6),
    ),
    (
        "Q1 Sales Kickoff 2025",
        "Room Booking",
        "Conference room has been reserved for the sales kickoff meeting.",
        1,
        timedelta(days=1),
    ),
    (
        "Product Launch Webinar",
        "Technical Check",
        "Pre-event technical testing completed successfully.",
        0,
        timedelta(hours=4),
    ),
    (
        "Product Launch Webinar",
        "Demo Ready",
        "Product demonstration slides and demo environment are prepared.",
        0,
        timedelta(hours=8),
    ),
    (
        "Product Launch Webinar",
        "Registration Update",
        "Current webinar registration count: 247 attendees.",
        1,
        timedelta(days=1),
    ),
    (
        "Product Launch Webinar",
        "Promotion Complete",
        "Social media promotion campaign has been executed across all channels.",
        0,
        timedelta(hours=2),
    ),
]


class Command(BaseCommand):
    help = "Load sample events and notifications."

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete all existing events (and their notifications) first.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["clear"]:
            deleted, _ = Event.objects.all().delete()
            self.stdout.write(f"Deleted {deleted} rows")

        now = timezone.now()
        events_by_name = {}
        for sample in SAMPLE_EVENTS:
            values = dict(sample)
            created_at = now - values.pop("age", timedelta())
            events_by_name[values["name"]] = Event.objects.create(
                **values, created_at=created_at, updated_at=created_at
            )

        for event_name, title, message, is_read, age in SAMPLE_NOTIFICATIONS:
            Notification.objects.create(
                event=events_by_name[event_name],
                title=title,
                message=message,
                is_read=is_read,
                created_at=now - age,
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(SAMPLE_EVENTS)} events and {len(SAMPLE_NOTIFICATIONS)} notifications"
            )
        )
