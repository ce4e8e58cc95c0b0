"""Request schemas for the event routes."""

from datetime import datetime

from sqlmodel import Field, SQLModel


class EventCreate(SQLModel):
    """Body of ``POST /events``. Capacity falls back to the configured default."""
    event_id: int
    event_name: str
    event_date: datetime
    capacity: int | None = Field(default=None, ge=0)


class AttendeeCreate(SQLModel):
    """Body of ``POST /events/{event_id}/attendees``."""
    user_id: str
    user_name: str = ""
    email: str = ""


class NoteUpdate(SQLModel):
    notes: str | None = None
