"""FastAPI dependencies resolving the caller's session context."""
from fastapi import Depends, Request

from eventease.core.config import settings
from eventease.core.context import SessionContext, SessionRegistry


def get_registry(request: Request) -> SessionRegistry:
    """Dependency for getting the application's session registry."""
    return request.app.state.registry


def get_session_id(request: Request) -> str | None:
    """Session id sent by the client, if any."""
    return request.cookies.get(settings.session_cookie_name)


def get_context(
    request: Request,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionContext:
    """
    Dependency for getting the caller's session context.

    Clients are identified by a cookie. A missing or unknown cookie starts a
    new context; its id is left on ``request.state`` for the session cookie
    middleware, which sets the cookie on every response, errors included.
    """
    session_id = get_session_id(request)
    context = registry.get_or_start(session_id)
    if context.session_id != session_id:
        request.state.new_session_id = context.session_id
    return context
