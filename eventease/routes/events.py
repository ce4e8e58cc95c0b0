"""Event routes for rosters, registrations and check-in."""
from fastapi import APIRouter, Depends, HTTPException

from eventease.core.context import SessionContext
from eventease.core.dependencies import get_context
from eventease.models import (
    AttendanceStatus,
    AttendeeCreate,
    AttendeeRecord,
    EventAttendance,
    EventCreate,
    NoteUpdate,
)
from eventease.services import AttendanceTracker

router = APIRouter(prefix="/events", tags=["events"])


def event_summary(event: EventAttendance) -> dict:
    """
    Event fields plus the derived counts, without the attendee list.

    ``attendance_rate`` uses the same formatted string as the statistics
    route, e.g. ``"66.7%"``.
    """
    return {
        "event_id": event.event_id,
        "event_name": event.event_name,
        "event_date": event.event_date,
        "capacity": event.capacity,
        "registered_count": event.registered_count,
        "checked_in_count": event.checked_in_count,
        "waitlist_count": event.waitlist_count,
        "available_spots": event.available_spots,
        "attendance_rate": event.attendance_rate_label,
    }


def require_event(tracker: AttendanceTracker, event_id: int) -> EventAttendance:
    event = tracker.get_event_attendance(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def require_attendee(
    tracker: AttendanceTracker, event_id: int, user_id: str
) -> AttendeeRecord:
    require_event(tracker, event_id)
    attendee = tracker.find_attendee(event_id, user_id)
    if not attendee:
        raise HTTPException(status_code=404, detail="Attendee not found")
    return attendee


@router.post("", status_code=201)
async def create_event(
    payload: EventCreate, context: SessionContext = Depends(get_context)
):
    """
    Create an event roster.

    Returns 409 if an event with the same id already exists; the existing
    event is left untouched.
    """
    created = context.attendance.create_event(
        payload.event_id, payload.event_name, payload.event_date, payload.capacity
    )
    if not created:
        raise HTTPException(status_code=409, detail="Event already exists")
    return event_summary(context.attendance.get_event_attendance(payload.event_id))


@router.get("")
async def list_events(context: SessionContext = Depends(get_context)):
    """List all events in creation order with their derived counts."""
    return [event_summary(e) for e in context.attendance.get_all_events()]


@router.get("/{event_id}")
async def event_detail(event_id: int, context: SessionContext = Depends(get_context)):
    """Return one event with its full attendee list."""
    event = require_event(context.attendance, event_id)
    return {**event_summary(event), "attendees": event.attendees}


@router.get("/{event_id}/statistics")
async def event_statistics(
    event_id: int, context: SessionContext = Depends(get_context)
):
    require_event(context.attendance, event_id)
    return context.attendance.get_event_statistics(event_id)


@router.get("/{event_id}/attendees", response_model=list[AttendeeRecord])
async def list_attendees(
    event_id: int,
    status: AttendanceStatus | None = None,
    context: SessionContext = Depends(get_context),
):
    """
    List attendees in registration order.

    Pass ``status`` to keep only records in that state. Unknown events yield
    an empty list.
    """
    return context.attendance.get_attendees(event_id, status)


@router.post("/{event_id}/attendees", status_code=201, response_model=AttendeeRecord)
async def register_attendee(
    event_id: int,
    payload: AttendeeCreate,
    context: SessionContext = Depends(get_context),
):
    """
    Register a user for an event.

    The record is waitlisted when the event is full. Returns 404 for an
    unknown event and 409 when the user already has an active registration.
    When the session's own user registers, the event id is also recorded in
    the session.
    """
    tracker = context.attendance
    event = require_event(tracker, event_id)

    if not tracker.register_attendee(
        event_id, payload.user_id, payload.user_name, payload.email
    ):
        raise HTTPException(status_code=409, detail="User is already registered")

    if payload.user_id == context.session.user_id:
        context.session.register_for_event(event_id)

    return event.attendees[-1]


@router.post("/{event_id}/attendees/{user_id}/check-in", response_model=AttendeeRecord)
async def check_in_attendee(
    event_id: int, user_id: str, context: SessionContext = Depends(get_context)
):
    """Check an attendee in. Returns 400 if their registration was cancelled."""
    attendee = require_attendee(context.attendance, event_id, user_id)
    if not context.attendance.check_in_attendee(event_id, user_id):
        raise HTTPException(status_code=400, detail="Cannot check in a cancelled registration")
    return attendee


@router.post("/{event_id}/attendees/{user_id}/cancel", response_model=AttendeeRecord)
async def cancel_registration(
    event_id: int, user_id: str, context: SessionContext = Depends(get_context)
):
    """
    Cancel a registration.

    Frees the spot but does not promote anyone from the waitlist. When the
    session's own user is left without an active registration, the event id
    is removed from the session.
    """
    tracker = context.attendance
    attendee = require_attendee(tracker, event_id, user_id)
    tracker.cancel_registration(event_id, user_id)

    if user_id == context.session.user_id and not tracker.has_active_registration(
        event_id, user_id
    ):
        context.session.unregister_from_event(event_id)

    return attendee


@router.post("/{event_id}/attendees/{user_id}/no-show", response_model=AttendeeRecord)
async def mark_no_show(
    event_id: int, user_id: str, context: SessionContext = Depends(get_context)
):
    """Mark an attendee as a no-show. Returns 400 if they already checked in."""
    attendee = require_attendee(context.attendance, event_id, user_id)
    if not context.attendance.mark_no_show(event_id, user_id):
        raise HTTPException(status_code=400, detail="Attendee already checked in")
    return attendee


@router.post("/{event_id}/attendees/{user_id}/notes", response_model=AttendeeRecord)
async def update_notes(
    event_id: int,
    user_id: str,
    payload: NoteUpdate,
    context: SessionContext = Depends(get_context),
):
    attendee = require_attendee(context.attendance, event_id, user_id)
    context.attendance.add_note(event_id, user_id, payload.notes)
    return attendee
