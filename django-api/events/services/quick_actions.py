"""Quick actions: one entry point mapping a short action tag to an event operation."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from events.domain import Event, EventId
from events.domain.errors import InvalidArgumentError
from events.services.event_service import EventService


class QuickAction(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    DUPLICATE = "duplicate"
    CANCEL = "cancel"


class QuickActionDispatcher:
    """Dispatch quick actions to EventService.

    ``edit`` without a payload behaves like ``view``; ``cancel`` archives.
    """

    def __init__(self, events: EventService) -> None:
        self._events = events

    def dispatch(
        self,
        event_id: str | EventId,
        action: str | QuickAction,
        payload: Mapping[str, Any] | None = None,
    ) -> Event:
        """Run a quick action.

        Raises:
            InvalidArgumentError: If the action tag is not recognised.
        """
        try:
            quick_action = QuickAction(action)
        except ValueError as exc:
            raise InvalidArgumentError(f"Invalid action: {action}") from exc

        if quick_action is QuickAction.EDIT and payload:
            return self._events.update_event(event_id, payload)
        if quick_action is QuickAction.DUPLICATE:
            return self._events.duplicate_event(event_id)
        if quick_action is QuickAction.CANCEL:
            return self._events.archive_event(event_id)
        return self._events.get_event(event_id)
