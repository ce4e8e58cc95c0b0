"""Tests for the session tracker."""

from datetime import timedelta

from eventease.services import SessionTracker


class TestIdentity:
    """Tests for user id/name handling."""

    def test_set_user_id_notifies_once(self, session_tracker: SessionTracker, recorder):
        """Test that setting the same user id twice only notifies once."""
        session_tracker.subscribe(recorder)

        session_tracker.set_user_id("abc")
        assert recorder.calls == 1

        session_tracker.set_user_id("abc")
        assert recorder.calls == 1
        assert session_tracker.user_id == "abc"

    def test_set_user_name(self, session_tracker: SessionTracker, recorder):
        session_tracker.subscribe(recorder)

        session_tracker.set_user_name("Ada")
        session_tracker.set_user_name("Ada")
        session_tracker.set_user_name("Grace")

        assert recorder.calls == 2
        assert session_tracker.user_name == "Grace"

    def test_is_authenticated(self, session_tracker: SessionTracker):
        """Test that any non-empty user id counts as authenticated."""
        assert session_tracker.is_authenticated is False

        session_tracker.set_user_id("")
        assert session_tracker.is_authenticated is False

        session_tracker.set_user_id("u1")
        assert session_tracker.is_authenticated is True

        session_tracker.set_user_id(None)
        assert session_tracker.is_authenticated is False


class TestEventRegistration:
    """Tests for the registered event id mirror."""

    def test_register_then_unregister(self, session_tracker: SessionTracker, recorder):
        """Test that register/unregister each notify exactly once."""
        session_tracker.subscribe(recorder)

        assert session_tracker.register_for_event(5) is True
        assert recorder.calls == 1
        assert session_tracker.is_registered_for_event(5) is True

        assert session_tracker.unregister_from_event(5) is True
        assert recorder.calls == 2
        assert session_tracker.registered_event_ids == ()

    def test_duplicate_register_is_noop(self, session_tracker: SessionTracker, recorder):
        session_tracker.register_for_event(5)
        session_tracker.subscribe(recorder)

        assert session_tracker.register_for_event(5) is False
        assert recorder.calls == 0
        assert session_tracker.registered_event_ids == (5,)

    def test_unregister_unknown_is_noop(self, session_tracker: SessionTracker, recorder):
        session_tracker.subscribe(recorder)

        assert session_tracker.unregister_from_event(42) is False
        assert recorder.calls == 0

    def test_membership_query_has_no_side_effect(
        self, session_tracker: SessionTracker, recorder
    ):
        session_tracker.subscribe(recorder)
        assert session_tracker.is_registered_for_event(3) is False
        assert recorder.calls == 0

    def test_registered_event_ids_is_snapshot(self, session_tracker: SessionTracker):
        session_tracker.register_for_event(2)
        snapshot = session_tracker.registered_event_ids
        session_tracker.register_for_event(1)

        assert snapshot == (2,)
        assert session_tracker.registered_event_ids == (1, 2)


class TestSessionData:
    """Tests for the typed session data bag."""

    def test_set_always_notifies(self, session_tracker: SessionTracker, recorder):
        """Test that writing the same value again still notifies."""
        session_tracker.subscribe(recorder)

        session_tracker.set_session_data("theme", "dark")
        session_tracker.set_session_data("theme", "dark")

        assert recorder.calls == 2

    def test_get_with_matching_type(self, session_tracker: SessionTracker):
        session_tracker.set_session_data("page", 3)

        assert session_tracker.get_session_data("page", int) == 3
        assert session_tracker.get_session_data("page") == 3

    def test_get_type_mismatch_returns_default(self, session_tracker: SessionTracker):
        """Test that a type mismatch is treated as not found."""
        session_tracker.set_session_data("page", "3")

        assert session_tracker.get_session_data("page", int) is None
        assert session_tracker.get_session_data("page", int, default=1) == 1

    def test_bool_is_not_an_int(self, session_tracker: SessionTracker):
        session_tracker.set_session_data("flag", True)

        assert session_tracker.get_session_data("flag", int) is None
        assert session_tracker.get_session_data("flag", bool) is True

    def test_get_missing_key(self, session_tracker: SessionTracker):
        assert session_tracker.get_session_data("missing") is None
        assert session_tracker.get_session_data("missing", str, default="x") == "x"

    def test_try_get(self, session_tracker: SessionTracker):
        session_tracker.set_session_data("filters", ["music"])

        assert session_tracker.try_get_session_data("filters", list) == (True, ["music"])
        assert session_tracker.try_get_session_data("filters", dict) == (False, None)
        assert session_tracker.try_get_session_data("nope") == (False, None)

    def test_stored_none_is_found(self, session_tracker: SessionTracker):
        session_tracker.set_session_data("cleared", None)

        assert session_tracker.try_get_session_data("cleared") == (True, None)

    def test_remove(self, session_tracker: SessionTracker, recorder):
        """Test that removing notifies only when the key existed."""
        session_tracker.set_session_data("theme", "dark")
        session_tracker.subscribe(recorder)

        assert session_tracker.remove_session_data("theme") is True
        assert session_tracker.remove_session_data("theme") is False
        assert recorder.calls == 1


class TestSessionLifecycle:
    """Tests for clearing the session and its timing."""

    def test_clear_session(self, session_tracker: SessionTracker, recorder):
        """Test that clearing resets everything except the start time."""
        started = session_tracker.session_start_time
        session_tracker.set_user_id("u1")
        session_tracker.set_user_name("Ada")
        session_tracker.register_for_event(1)
        session_tracker.set_session_data("k", "v")
        session_tracker.subscribe(recorder)

        session_tracker.clear_session()

        assert recorder.calls == 1
        assert session_tracker.user_id is None
        assert session_tracker.user_name is None
        assert session_tracker.registered_event_ids == ()
        assert session_tracker.get_session_data("k") is None
        assert session_tracker.session_start_time == started

    def test_clear_empty_session_still_notifies(
        self, session_tracker: SessionTracker, recorder
    ):
        session_tracker.subscribe(recorder)
        session_tracker.clear_session()
        assert recorder.calls == 1

    def test_session_duration(self, session_tracker: SessionTracker):
        duration = session_tracker.session_duration
        assert isinstance(duration, timedelta)
        assert duration >= timedelta(0)

    def test_unsubscribe(self, session_tracker: SessionTracker, recorder):
        subscription = session_tracker.subscribe(recorder)
        assert session_tracker.unsubscribe(subscription) is True

        session_tracker.set_user_id("u1")
        assert recorder.calls == 0
