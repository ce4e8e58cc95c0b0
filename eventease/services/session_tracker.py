"""Per-client session state.

``SessionTracker`` holds who the current user is, which events they have
registered for, and a bag of ad-hoc session data. It is a client-side
mirror only; the attendance tracker remains the source of truth for
registrations. Every effective mutation fires ``changed``.
"""
import logging
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from eventease.services.notifier import Callback, ChangeSignal, Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _matches(value: Any, expected_type: type) -> bool:
    # bool is an int subclass; a stored flag is not a number.
    if isinstance(value, bool) and expected_type is not bool and expected_type is not object:
        return False
    return isinstance(value, expected_type)


class SessionTracker:
    """Identity, registered event ids and session data for one client."""

    def __init__(self):
        self.changed = ChangeSignal("session.changed")
        self._user_id: str | None = None
        self._user_name: str | None = None
        self._registered_event_ids: set[int] = set()
        self._session_data: dict[str, Any] = {}
        self._session_start_time = datetime.now(UTC)

    def subscribe(self, callback: Callback) -> Subscription:
        return self.changed.subscribe(callback)

    def unsubscribe(self, subscription: Subscription) -> bool:
        return self.changed.unsubscribe(subscription)

    # User identification

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def user_name(self) -> str | None:
        return self._user_name

    @property
    def is_authenticated(self) -> bool:
        return bool(self._user_id)

    def set_user_id(self, value: str | None) -> None:
        if self._user_id != value:
            self._user_id = value
            self.changed.emit()

    def set_user_name(self, value: str | None) -> None:
        if self._user_name != value:
            self._user_name = value
            self.changed.emit()

    # Event registration tracking

    @property
    def registered_event_ids(self) -> tuple[int, ...]:
        """Snapshot of registered event ids, sorted for stable output."""
        return tuple(sorted(self._registered_event_ids))

    def register_for_event(self, event_id: int) -> bool:
        if event_id in self._registered_event_ids:
            return False
        self._registered_event_ids.add(event_id)
        self.changed.emit()
        return True

    def unregister_from_event(self, event_id: int) -> bool:
        if event_id not in self._registered_event_ids:
            return False
        self._registered_event_ids.discard(event_id)
        self.changed.emit()
        return True

    def is_registered_for_event(self, event_id: int) -> bool:
        return event_id in self._registered_event_ids

    # Session data

    def set_session_data(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``. Always notifies, even if unchanged."""
        self._session_data[key] = value
        self.changed.emit()

    def get_session_data(
        self, key: str, expected_type: type[T] = object, default: T | None = None
    ) -> T | None:
        """
        Return the value stored under ``key``.

        Returns ``default`` when the key is missing or the stored value is not
        an instance of ``expected_type``; a type mismatch counts as not found.
        """
        found, value = self.try_get_session_data(key, expected_type)
        return value if found else default

    def try_get_session_data(
        self, key: str, expected_type: type[T] = object
    ) -> tuple[bool, T | None]:
        if key in self._session_data:
            value = self._session_data[key]
            if _matches(value, expected_type):
                return True, value
            logger.debug(
                f"Session data {key!r} is {type(value).__name__}, "
                f"not {getattr(expected_type, '__name__', expected_type)}"
            )
        return False, None

    def remove_session_data(self, key: str) -> bool:
        if key not in self._session_data:
            return False
        del self._session_data[key]
        self.changed.emit()
        return True

    # Session lifecycle

    def clear_session(self) -> None:
        """Reset identity, registrations and data. The start time is kept."""
        self._user_id = None
        self._user_name = None
        self._registered_event_ids.clear()
        self._session_data.clear()
        self.changed.emit()

    @property
    def session_start_time(self) -> datetime:
        return self._session_start_time

    @property
    def session_duration(self) -> timedelta:
        return datetime.now(UTC) - self._session_start_time
