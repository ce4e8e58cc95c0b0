from eventease.services.attendance_tracker import AttendanceTracker
from eventease.services.notifier import ChangeSignal, Subscription
from eventease.services.session_tracker import SessionTracker

__all__ = ["AttendanceTracker", "ChangeSignal", "SessionTracker", "Subscription"]
