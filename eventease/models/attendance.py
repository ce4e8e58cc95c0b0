"""Attendance models for event rosters.

This module defines the in-memory records kept by the attendance tracker:
one ``EventAttendance`` per event holding the ordered list of
``AttendeeRecord`` entries. These are plain data models (no tables); all
counts and rates are derived from the attendee list on access and never
stored.
"""

from datetime import UTC, datetime
from enum import Enum

from sqlmodel import Field, SQLModel


class AttendanceStatus(str, Enum):
    """Lifecycle state of a single registration."""
    REGISTERED = "registered"
    CHECKED_IN = "checked_in"
    NO_SHOW = "no_show"
    CANCELLED = "cancelled"
    WAITLISTED = "waitlisted"


class AttendeeRecord(SQLModel):
    """One registration attempt by a user for an event.

    Records are appended on registration and afterwards only change status.
    A user who cancels and registers again gets a second record; the
    cancelled one is kept as history.

    Attributes:
        user_id: Identifier of the registering user.
        user_name: Display name at the time of registration.
        email: Contact address at the time of registration.
        registration_date: When the record was created (UTC).
        check_in_time: When the attendee checked in, if they did.
        status: Current lifecycle state.
        notes: Free-form organiser notes.
    """
    user_id: str
    user_name: str = ""
    email: str = ""
    registration_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    check_in_time: datetime | None = None
    status: AttendanceStatus = Field(default=AttendanceStatus.REGISTERED)
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status != AttendanceStatus.CANCELLED


class EventAttendance(SQLModel):
    """Attendance roster for one event.

    Attributes:
        event_id: Identifier of the event.
        event_name: Human-readable event name.
        event_date: When the event takes place.
        capacity: Number of active registrations accepted before new
            registrations are waitlisted.
        attendees: Every registration attempt, in registration order.
    """
    event_id: int
    event_name: str = ""
    event_date: datetime
    capacity: int = 100
    attendees: list[AttendeeRecord] = Field(default_factory=list)

    def count(self, status: AttendanceStatus) -> int:
        return sum(1 for a in self.attendees if a.status == status)

    @property
    def registered_count(self) -> int:
        return self.count(AttendanceStatus.REGISTERED)

    @property
    def checked_in_count(self) -> int:
        return self.count(AttendanceStatus.CHECKED_IN)

    @property
    def waitlist_count(self) -> int:
        return self.count(AttendanceStatus.WAITLISTED)

    @property
    def no_show_count(self) -> int:
        return self.count(AttendanceStatus.NO_SHOW)

    @property
    def cancelled_count(self) -> int:
        return self.count(AttendanceStatus.CANCELLED)

    @property
    def active_count(self) -> int:
        return sum(1 for a in self.attendees if a.is_active)

    @property
    def available_spots(self) -> int:
        # Waitlisted records hold a spot too; only cancellations free one.
        return max(0, self.capacity - self.active_count)

    @property
    def attendance_rate(self) -> float:
        """Checked-in attendees as a percentage of registered ones."""
        registered = self.registered_count
        if registered == 0:
            return 0.0
        return self.checked_in_count / registered * 100

    @property
    def attendance_rate_label(self) -> str:
        """Attendance rate to one decimal place with a ``%`` suffix."""
        return f"{self.attendance_rate:.1f}%"
