"""Session routes for the current client's identity and session data."""
from fastapi import APIRouter, Depends, HTTPException, Response

from eventease.core.config import settings
from eventease.core.context import SessionContext, SessionRegistry
from eventease.core.dependencies import get_context, get_registry, get_session_id
from eventease.models import SessionDataValue, SessionState, UserIdentity

router = APIRouter(prefix="/session", tags=["session"])


def session_state(context: SessionContext) -> SessionState:
    tracker = context.session
    return SessionState(
        session_id=context.session_id,
        user_id=tracker.user_id,
        user_name=tracker.user_name,
        is_authenticated=tracker.is_authenticated,
        registered_event_ids=list(tracker.registered_event_ids),
        session_start_time=tracker.session_start_time,
        session_duration_seconds=tracker.session_duration.total_seconds(),
    )


@router.get("", response_model=SessionState)
async def get_session_state(context: SessionContext = Depends(get_context)):
    """
    Return the caller's session.

    Starts a new session (and sets the session cookie) if the caller does not
    have one yet.
    """
    return session_state(context)


@router.put("/user", response_model=SessionState)
async def identify_user(
    identity: UserIdentity, context: SessionContext = Depends(get_context)
):
    """
    Set the current user's id and name.

    There is no credential check: a non-empty user id is all it takes for
    the session to count as authenticated. Sending null clears a field.
    """
    context.session.set_user_id(identity.user_id)
    context.session.set_user_name(identity.user_name)
    return session_state(context)


@router.post("/clear", response_model=SessionState)
async def clear_session(context: SessionContext = Depends(get_context)):
    """Reset identity, registrations and data, keeping the session start time."""
    context.session.clear_session()
    return session_state(context)


@router.delete("")
async def end_session(
    response: Response,
    session_id: str | None = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    """
    End the caller's session and drop the session cookie.

    Does not start a session: without a live session cookie this reports
    ``ended: false`` and changes nothing else.
    """
    context = registry.get(session_id)
    response.delete_cookie(settings.session_cookie_name)
    if context is None:
        return {"ended": False, "session_id": None}

    registry.end(context.session_id)
    return {"ended": True, "session_id": context.session_id}


@router.put("/events/{event_id}")
async def register_for_event(
    event_id: int, context: SessionContext = Depends(get_context)
):
    """Record that the current user registered for an event."""
    added = context.session.register_for_event(event_id)
    return {"event_id": event_id, "registered": True, "changed": added}


@router.delete("/events/{event_id}")
async def unregister_from_event(
    event_id: int, context: SessionContext = Depends(get_context)
):
    """Forget a registration recorded in the session."""
    removed = context.session.unregister_from_event(event_id)
    return {"event_id": event_id, "registered": False, "changed": removed}


@router.get("/events/{event_id}")
async def is_registered_for_event(
    event_id: int, context: SessionContext = Depends(get_context)
):
    return {
        "event_id": event_id,
        "registered": context.session.is_registered_for_event(event_id),
    }


@router.put("/data/{key}")
async def set_session_data(
    key: str, body: SessionDataValue, context: SessionContext = Depends(get_context)
):
    """Store an arbitrary JSON value under ``key``."""
    context.session.set_session_data(key, body.value)
    return {"key": key, "value": body.value}


@router.get("/data/{key}")
async def get_session_data(key: str, context: SessionContext = Depends(get_context)):
    """Return the value stored under ``key``. Returns 404 if it is not set."""
    found, value = context.session.try_get_session_data(key)
    if not found:
        raise HTTPException(status_code=404, detail="Session data not found")
    return {"key": key, "value": value}


@router.delete("/data/{key}")
async def remove_session_data(
    key: str, context: SessionContext = Depends(get_context)
):
    if not context.session.remove_session_data(key):
        raise HTTPException(status_code=404, detail="Session data not found")
    return {"key": key, "removed": True}
