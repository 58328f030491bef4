"""
Tests for SessionService identity tracking.
"""
from unittest.mock import Mock

import pytest

from src.application.events.events import IdentityChanged
from src.shared.application.services.session_service import Identity, SessionService


def test_starts_signed_out():
    session = SessionService()
    assert not session.is_signed_in
    assert session.current_user_id is None


def test_sign_in_and_out(event_bus):
    events = []
    event_bus.subscribe(IdentityChanged, events.append)
    session = SessionService(event_bus=event_bus)

    identity = session.sign_in("  alice ", "Alice")
    assert identity == Identity("alice", "Alice")
    assert session.current_user_id == "alice"

    session.sign_out()
    assert session.current_identity is None

    assert [e.data["user_id"] for e in events] == ["alice", None]


@pytest.mark.parametrize("user_id", ["", "   ", None])
def test_empty_user_rejected(user_id):
    with pytest.raises(ValueError):
        SessionService().sign_in(user_id)


def test_subscribers_notified_once_per_change():
    session = SessionService()
    callback = Mock()
    session.subscribe(callback)

    session.sign_in("alice")
    session.sign_in("alice")
    session.sign_out()
    session.sign_out()

    assert [c.args[0] for c in callback.call_args_list] == [Identity("alice"), None]


def test_unsubscribe():
    session = SessionService()
    callback = Mock()
    unsubscribe = session.subscribe(callback)

    unsubscribe()
    unsubscribe()
    session.sign_in("bob")

    callback.assert_not_called()


def test_failing_subscriber_does_not_block_others():
    session = SessionService()
    later = Mock()
    session.subscribe(Mock(side_effect=RuntimeError("boom")))
    session.subscribe(later)

    session.sign_in("carol")

    later.assert_called_once()
