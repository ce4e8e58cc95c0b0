"""Request and response schemas for the session routes."""

from datetime import datetime
from typing import Any

from sqlmodel import Field, SQLModel


class UserIdentity(SQLModel):
    """Identity fields sent by the client when a user identifies."""
    user_id: str | None = None
    user_name: str | None = None


class SessionState(SQLModel):
    """Snapshot of a session tracker returned to the client."""
    session_id: str
    user_id: str | None = None
    user_name: str | None = None
    is_authenticated: bool = False
    registered_event_ids: list[int] = Field(default_factory=list)
    session_start_time: datetime
    session_duration_seconds: float = 0.0


class SessionDataValue(SQLModel):
    """Body of a session data write; any JSON value is accepted."""
    value: Any = None
