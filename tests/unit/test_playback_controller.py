"""
Unit tests for PlaybackController.

The medium is the FakeMediaBackend from conftest; time and duration only
change when the test emits them.
"""
import math

import pytest

from src.features.playback.application.playback_controller import PlaybackController
from src.features.playback.domain.media_interface import MediaInterface
from src.shared.domain.errors import PlaybackError


@pytest.fixture
def controller(qapp, media_backend):
    controller = PlaybackController(backend=media_backend)
    yield controller
    controller.cleanup()


@pytest.fixture
def loaded(controller, media_backend):
    controller.load_source("file:///show/track.wav")
    media_backend.emit_metadata(120.0)
    return controller


def record(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_fake_backend_satisfies_interface(media_backend):
    assert isinstance(media_backend, MediaInterface)


class TestLoad:
    def test_duration_unknown_until_metadata(self, controller, media_backend):
        controller.load_source("track.wav")

        assert controller.duration is None
        assert controller.current_time == 0.0

        media_backend.emit_metadata(42.5)
        assert controller.duration == 42.5

    def test_new_source_resets_transport(self, loaded, media_backend):
        loaded.play()
        media_backend.emit_time(30.0)
        paused = record(loaded.playback_paused)

        loaded.load_source("other.wav")

        assert not loaded.is_playing
        assert loaded.current_time == 0.0
        assert loaded.duration is None
        assert loaded.last_known_duration == 120.0
        assert len(paused) == 1

    def test_empty_source_rejected(self, controller):
        with pytest.raises(PlaybackError):
            controller.load_source("")

    def test_backend_rejection_keeps_previous_source(self, loaded, media_backend):
        media_backend.fail_on = "load"

        with pytest.raises(PlaybackError):
            loaded.load_source("broken.wav")

        assert loaded.source_ref == "file:///show/track.wav"
        assert loaded.duration == 120.0

    @pytest.mark.parametrize("duration", [-1.0, math.nan, math.inf])
    def test_invalid_metadata_ignored(self, controller, duration):
        controller.load_source("track.wav")
        controller.on_metadata_ready(duration)
        assert controller.duration is None


class TestPlayPause:
    def test_play_and_pause(self, loaded):
        started = record(loaded.playback_started)
        paused = record(loaded.playback_paused)

        loaded.play()
        assert loaded.is_playing
        loaded.pause()
        assert not loaded.is_playing

        assert len(started) == 1
        assert len(paused) == 1

    def test_toggle(self, loaded):
        loaded.toggle_playback()
        assert loaded.is_playing
        loaded.toggle_playback()
        assert not loaded.is_playing

    def test_play_without_source(self, controller):
        with pytest.raises(PlaybackError):
            controller.play()
        assert not controller.is_playing

    def test_rejected_play_leaves_state_unchanged(self, loaded, media_backend):
        media_backend.fail_on = "play"
        started = record(loaded.playback_started)

        with pytest.raises(PlaybackError):
            loaded.play()

        assert not loaded.is_playing
        assert started == []

    def test_rejected_pause_leaves_state_unchanged(self, loaded, media_backend):
        loaded.play()
        media_backend.fail_on = "pause"

        with pytest.raises(PlaybackError):
            loaded.pause()

        assert loaded.is_playing

    def test_repeated_play_is_idempotent(self, loaded):
        started = record(loaded.playback_started)
        loaded.play()
        loaded.play()
        assert len(started) == 1


class TestSeek:
    def test_seek_within_bounds(self, loaded, media_backend):
        assert loaded.seek(45.0) == 45.0
        assert loaded.current_time == 45.0
        assert media_backend.position == 45.0

    @pytest.mark.parametrize("target,expected", [(-5.0, 0.0), (500.0, 120.0), (120.0, 120.0)])
    def test_seek_clamps(self, loaded, target, expected):
        assert loaded.seek(target) == expected

    def test_seek_before_metadata_uses_last_known_duration(self, loaded):
        loaded.load_source("next.wav")
        assert loaded.seek(500.0) == 120.0

    def test_seek_without_any_duration_only_clamps_at_zero(self, controller):
        controller.load_source("track.wav")
        assert controller.seek(500.0) == 500.0
        assert controller.seek(-1.0) == 0.0

    def test_seek_nan_rejected(self, loaded):
        with pytest.raises(PlaybackError):
            loaded.seek(math.nan)

    def test_seek_relative(self, loaded):
        loaded.seek(10.0)
        assert loaded.seek_relative(5.0) == 15.0
        assert loaded.seek_relative(-30.0) == 0.0
        loaded.seek(118.0)
        assert loaded.seek_relative(5.0) == 120.0

    def test_seek_relative_requires_duration(self, controller):
        controller.load_source("track.wav")
        with pytest.raises(PlaybackError):
            controller.seek_relative(5.0)

    def test_rejected_seek_keeps_position(self, loaded, media_backend):
        loaded.seek(10.0)
        media_backend.fail_on = "set_position"

        with pytest.raises(PlaybackError):
            loaded.seek(50.0)

        assert loaded.current_time == 10.0

    def test_seek_emits_position(self, loaded):
        positions = record(loaded.position_changed)
        loaded.seek(12.5)
        assert positions == [(12.5,)]


class TestVolume:
    @pytest.mark.parametrize("requested,expected", [(0.5, 0.5), (-1.0, 0.0), (3.0, 1.0)])
    def test_volume_clamped(self, controller, media_backend, requested, expected):
        assert controller.set_volume(requested) == expected
        assert controller.volume == expected
        assert media_backend.volume == expected

    def test_nan_volume_rejected(self, controller):
        with pytest.raises(ValueError):
            controller.set_volume(math.nan)
        assert controller.volume == 1.0

    def test_rejected_volume_change_keeps_volume(self, controller, media_backend):
        changes = record(controller.volume_changed)
        media_backend.fail_on = "set_volume"

        with pytest.raises(PlaybackError):
            controller.set_volume(0.3)

        assert controller.volume == 1.0
        assert changes == []

    def test_unchanged_volume_not_emitted(self, controller):
        changes = record(controller.volume_changed)
        controller.set_volume(1.0)
        controller.set_volume(0.25)
        assert changes == [(0.25,)]


class TestRelays:
    def test_time_advance_is_relayed(self, loaded, media_backend):
        positions = record(loaded.position_changed)

        media_backend.emit_time(3.5)

        assert loaded.current_time == 3.5
        assert positions == [(3.5,)]

    def test_time_advance_clamped_to_duration(self, loaded, media_backend):
        media_backend.emit_time(130.0)
        assert loaded.current_time == 120.0

    def test_state_snapshot(self, loaded):
        loaded.seek(60.0)
        state = loaded.state()

        assert state.has_source
        assert state.progress == 0.5
        assert not state.is_playing


def test_without_backend_state_is_tracked_locally(qapp):
    controller = PlaybackController()
    controller.load_source("track.wav")
    controller.on_metadata_ready(10.0)

    controller.play()
    assert controller.is_playing
    assert controller.seek(20.0) == 10.0
