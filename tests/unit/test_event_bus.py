"""
Tests for the EventBus.
"""
from unittest.mock import Mock

from src.application.events.event_bus import EventBus
from src.application.events.events import SceneAppended, SceneDeleted


def test_publish_reaches_subscribers_of_that_type():
    bus = EventBus()
    deleted = Mock()
    appended = Mock()
    bus.subscribe(SceneDeleted, deleted)
    bus.subscribe("SceneAppended", appended)

    event = SceneDeleted(project_id="p1", data={"scene_id": "s1"})
    bus.publish(event)

    deleted.assert_called_once_with(event)
    appended.assert_not_called()


def test_subscribe_is_idempotent():
    bus = EventBus()
    handler = Mock()
    bus.subscribe(SceneDeleted, handler)
    bus.subscribe("SceneDeleted", handler)

    assert bus.get_subscriber_count(SceneDeleted) == 1


def test_unsubscribe():
    bus = EventBus()
    handler = Mock()
    bus.subscribe(SceneAppended, handler)
    bus.unsubscribe(SceneAppended, handler)

    bus.publish(SceneAppended())

    handler.assert_not_called()
    assert bus.get_subscriber_count(SceneAppended) == 0


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    second = Mock()
    bus.subscribe(SceneDeleted, Mock(side_effect=ValueError("bad handler")))
    bus.subscribe(SceneDeleted, second)

    bus.publish(SceneDeleted())

    second.assert_called_once()


def test_handler_may_unsubscribe_while_called():
    bus = EventBus()
    calls = []

    def once(event):
        calls.append(event)
        bus.unsubscribe(SceneDeleted, once)

    bus.subscribe(SceneDeleted, once)
    bus.publish(SceneDeleted())
    bus.publish(SceneDeleted())

    assert len(calls) == 1


def test_clear():
    bus = EventBus()
    bus.subscribe(SceneDeleted, Mock())
    bus.clear()
    assert bus.get_subscriber_count(SceneDeleted) == 0
