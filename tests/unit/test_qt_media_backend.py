"""
Tests for QtMediaBackend's unit conversion and notification relay.

The QMediaPlayer is replaced with a Mock so no audio device is needed.
"""
from unittest.mock import Mock, patch

import pytest

from src.features.playback.domain.media_interface import MediaInterface
from src.features.playback.infrastructure.qt_media_backend import QtMediaBackend


@pytest.fixture
def backend():
    with patch.object(QtMediaBackend, "_init_player"):
        backend = QtMediaBackend()
    backend._player = Mock()
    backend._audio_output = Mock()
    return backend


def test_implements_media_interface(backend):
    assert isinstance(backend, MediaInterface)


def test_position_relayed_in_seconds(backend):
    on_time = Mock()
    backend.set_notifications(on_time, Mock())

    backend._on_position_changed(1500)

    on_time.assert_called_once_with(1.5)


def test_zero_duration_is_not_metadata(backend):
    on_metadata = Mock()
    backend.set_notifications(Mock(), on_metadata)

    backend._on_duration_changed(0)
    assert backend.get_duration() is None
    on_metadata.assert_not_called()

    backend._on_duration_changed(120000)
    assert backend.get_duration() == 120.0
    on_metadata.assert_called_once_with(120.0)


def test_seek_in_milliseconds(backend):
    backend.set_position(2.25)
    backend._player.setPosition.assert_called_once_with(2250)


def test_volume_goes_to_audio_output(backend):
    backend.set_volume(0.4)
    backend._audio_output.setVolume.assert_called_once_with(0.4)


def test_requests_fail_without_player(backend):
    backend.cleanup()

    assert not backend.available
    with pytest.raises(RuntimeError):
        backend.pause()
    assert backend.get_position() == 0.0
    assert backend.is_playing() is False
