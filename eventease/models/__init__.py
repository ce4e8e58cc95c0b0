from eventease.models.attendance import AttendanceStatus, AttendeeRecord, EventAttendance
from eventease.models.events import AttendeeCreate, EventCreate, NoteUpdate
from eventease.models.session import SessionDataValue, SessionState, UserIdentity

__all__ = [
    "AttendanceStatus",
    "AttendeeCreate",
    "AttendeeRecord",
    "EventAttendance",
    "EventCreate",
    "NoteUpdate",
    "SessionDataValue",
    "SessionState",
    "UserIdentity",
]
