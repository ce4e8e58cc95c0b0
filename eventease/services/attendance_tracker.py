"""In-memory attendance bookkeeping.

``AttendanceTracker`` keeps one roster per event and applies registration,
check-in, cancellation and no-show transitions to it. Operations never raise:
a rejected request returns ``False`` (or an empty result) and leaves state
untouched, and only successful mutations fire ``changed``.

Status operations act on the first record for a user id. A user who cancelled
and registered again therefore still resolves to the cancelled record.
Cancelling does not promote anyone from the waitlist.
"""
import logging
from datetime import UTC, datetime
from typing import Any

from eventease.core.config import settings
from eventease.models import AttendanceStatus, AttendeeRecord, EventAttendance
from eventease.services.notifier import Callback, ChangeSignal, Subscription

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """Event rosters keyed by event id."""

    def __init__(self):
        self.changed = ChangeSignal("attendance.changed")
        self._events: dict[int, EventAttendance] = {}

    def subscribe(self, callback: Callback) -> Subscription:
        return self.changed.subscribe(callback)

    def unsubscribe(self, subscription: Subscription) -> bool:
        return self.changed.unsubscribe(subscription)

    # Event management

    def create_event(
        self,
        event_id: int,
        event_name: str,
        event_date: datetime,
        capacity: int | None = None,
    ) -> bool:
        """
        Create an empty roster for ``event_id``.

        Creating an event that already exists is a no-op and returns False
        without notifying. ``capacity`` defaults to ``settings.default_capacity``.
        """
        if event_id in self._events:
            logger.debug(f"Event {event_id} already exists, not recreating")
            return False

        self._events[event_id] = EventAttendance(
            event_id=event_id,
            event_name=event_name,
            event_date=event_date,
            capacity=settings.default_capacity if capacity is None else capacity,
        )
        logger.info(f"Created event {event_id} ({event_name!r})")
        self.changed.emit()
        return True

    def get_event_attendance(self, event_id: int) -> EventAttendance | None:
        return self._events.get(event_id)

    def get_all_events(self) -> list[EventAttendance]:
        return list(self._events.values())

    def find_attendee(self, event_id: int, user_id: str) -> AttendeeRecord | None:
        """Return the first record for ``user_id``, cancelled or not."""
        event = self._events.get(event_id)
        if event is None:
            return None
        return next((a for a in event.attendees if a.user_id == user_id), None)

    def has_active_registration(self, event_id: int, user_id: str) -> bool:
        """True if any non-cancelled record for ``user_id`` exists."""
        event = self._events.get(event_id)
        if event is None:
            return False
        return any(a.user_id == user_id and a.is_active for a in event.attendees)

    # Registration

    def register_attendee(
        self, event_id: int, user_id: str, user_name: str, email: str
    ) -> bool:
        """
        Register ``user_id`` for an event.

        Rejected if the event is unknown or the user already holds an active
        (non-cancelled) record. The new record is Registered while spots are
        available and Waitlisted otherwise.
        """
        event = self._events.get(event_id)
        if event is None:
            logger.debug(f"Register {user_id!r}: unknown event {event_id}")
            return False

        if self.has_active_registration(event_id, user_id):
            logger.debug(f"Register {user_id!r}: already registered for {event_id}")
            return False

        status = (
            AttendanceStatus.REGISTERED
            if event.available_spots > 0
            else AttendanceStatus.WAITLISTED
        )
        event.attendees.append(
            AttendeeRecord(
                user_id=user_id,
                user_name=user_name,
                email=email,
                registration_date=datetime.now(UTC),
                status=status,
            )
        )
        logger.info(f"Registered {user_id!r} for event {event_id} as {status.value}")
        self.changed.emit()
        return True

    # Status transitions

    def check_in_attendee(self, event_id: int, user_id: str) -> bool:
        attendee = self.find_attendee(event_id, user_id)
        if attendee is None or attendee.status == AttendanceStatus.CANCELLED:
            logger.debug(f"Check-in rejected for {user_id!r} at event {event_id}")
            return False

        attendee.status = AttendanceStatus.CHECKED_IN
        attendee.check_in_time = datetime.now(UTC)
        self.changed.emit()
        return True

    def cancel_registration(self, event_id: int, user_id: str) -> bool:
        attendee = self.find_attendee(event_id, user_id)
        if attendee is None:
            logger.debug(f"Cancel rejected for {user_id!r} at event {event_id}")
            return False

        attendee.status = AttendanceStatus.CANCELLED
        self.changed.emit()
        return True

    def mark_no_show(self, event_id: int, user_id: str) -> bool:
        attendee = self.find_attendee(event_id, user_id)
        if attendee is None or attendee.status == AttendanceStatus.CHECKED_IN:
            logger.debug(f"No-show rejected for {user_id!r} at event {event_id}")
            return False

        attendee.status = AttendanceStatus.NO_SHOW
        self.changed.emit()
        return True

    def add_note(self, event_id: int, user_id: str, note: str | None) -> bool:
        attendee = self.find_attendee(event_id, user_id)
        if attendee is None:
            return False

        attendee.notes = note
        self.changed.emit()
        return True

    # Queries

    def get_attendees(
        self, event_id: int, status: AttendanceStatus | None = None
    ) -> list[AttendeeRecord]:
        """Attendees in registration order, optionally filtered by status."""
        event = self._events.get(event_id)
        if event is None:
            return []
        if status is None:
            return list(event.attendees)
        return [a for a in event.attendees if a.status == status]

    def get_event_statistics(self, event_id: int) -> dict[str, Any]:
        """Per-status counts, attendance rate and free spots; {} if unknown."""
        event = self._events.get(event_id)
        if event is None:
            return {}

        return {
            "total_registered": event.registered_count,
            "checked_in": event.checked_in_count,
            "no_shows": event.no_show_count,
            "cancelled": event.cancelled_count,
            "waitlisted": event.waitlist_count,
            "attendance_rate": event.attendance_rate_label,
            "available_spots": event.available_spots,
        }
