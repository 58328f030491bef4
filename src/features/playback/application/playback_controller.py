"""
Playback Controller

Single authority for play/pause state, volume, current time and duration of
one audio source. The keyframe timeline reads its duration and current time.

Time and duration are relayed from the medium (on_time_advance,
on_metadata_ready); the controller never advances time by itself.
"""
import math
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from src.features.playback.domain.media_interface import MediaInterface
from src.features.playback.domain.playback_state import PlaybackState
from src.shared.domain.errors import PlaybackError
from src.utils.message import Log


class PlaybackController(QObject):
    """
    Transport state for a single audio source.

    Signals:
        position_changed(seconds): Current time changed
        duration_changed(seconds): Source metadata loaded
        playback_started(): Playback started
        playback_paused(): Playback paused
        volume_changed(volume): Volume changed
        source_loaded(source_ref): A new source replaced the previous one
    """

    position_changed = pyqtSignal(float)
    duration_changed = pyqtSignal(float)
    playback_started = pyqtSignal()
    playback_paused = pyqtSignal()
    volume_changed = pyqtSignal(float)
    source_loaded = pyqtSignal(str)

    def __init__(self, backend: Optional[MediaInterface] = None, volume: float = 1.0, parent=None):
        super().__init__(parent)

        self._backend: Optional[MediaInterface] = None
        self._source_ref: Optional[str] = None
        self._is_playing = False
        self._volume = _clamp_volume(volume)
        self._current_time = 0.0
        self._duration: Optional[float] = None
        self._last_known_duration: Optional[float] = None

        if backend is not None:
            self.set_media_backend(backend)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> Optional[float]:
        """Duration in seconds, None until metadata is ready."""
        return self._duration

    @property
    def last_known_duration(self) -> Optional[float]:
        return self._last_known_duration

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def source_ref(self) -> Optional[str]:
        return self._source_ref

    def state(self) -> PlaybackState:
        return PlaybackState(
            source_ref=self._source_ref,
            is_playing=self._is_playing,
            volume=self._volume,
            current_time=self._current_time,
            duration=self._duration,
        )

    # =========================================================================
    # Backend
    # =========================================================================

    def set_media_backend(self, backend: Optional[MediaInterface]) -> None:
        """
        Connect the playable-media capability.

        Args:
            backend: Object implementing MediaInterface, or None to disconnect
        """
        if self._is_playing:
            self.pause()

        self._backend = backend
        if backend is None:
            Log.info("PlaybackController: Media backend disconnected")
            return

        backend.set_notifications(self.on_time_advance, self.on_metadata_ready)
        backend.set_volume(self._volume)
        Log.info(f"PlaybackController: Media backend connected ({type(backend).__name__})")

    # =========================================================================
    # Transport
    # =========================================================================

    def load_source(self, source_ref: str) -> None:
        """
        Replace the current source and reset transport state.

        Raises:
            PlaybackError: If the backend rejected the source
        """
        if not source_ref:
            raise PlaybackError("No audio source given")

        if self._backend is not None:
            try:
                self._backend.load(source_ref)
            except Exception as e:
                Log.error(f"PlaybackController: Failed to load {source_ref}: {e}")
                raise PlaybackError(f"Cannot load audio source {source_ref}: {e}") from e

        was_playing = self._is_playing
        self._source_ref = source_ref
        self._is_playing = False
        self._current_time = 0.0
        self._duration = None

        if was_playing:
            self.playback_paused.emit()
        self.source_loaded.emit(source_ref)
        self.position_changed.emit(0.0)
        Log.info(f"PlaybackController: Loaded source {source_ref}")

    def play(self) -> None:
        """
        Start or resume playback.

        Raises:
            PlaybackError: If no source is loaded or the medium refused;
                is_playing is left unchanged
        """
        if self._is_playing:
            return
        if self._source_ref is None:
            raise PlaybackError("Cannot play: no audio source loaded")

        if self._backend is not None:
            try:
                self._backend.play()
            except Exception as e:
                Log.warning(f"PlaybackController: Play rejected: {e}")
                raise PlaybackError(f"Cannot play: {e}") from e

        self._is_playing = True
        self.playback_started.emit()
        Log.debug(f"PlaybackController: Play from {self._current_time:.3f}s")

    def pause(self) -> None:
        """
        Pause playback.

        Raises:
            PlaybackError: If the medium refused; is_playing is left unchanged
        """
        if not self._is_playing:
            return

        if self._backend is not None:
            try:
                self._backend.pause()
            except Exception as e:
                Log.warning(f"PlaybackController: Pause rejected: {e}")
                raise PlaybackError(f"Cannot pause: {e}") from e

        self._is_playing = False
        self.playback_paused.emit()
        Log.debug(f"PlaybackController: Pause at {self._current_time:.3f}s")

    def toggle_playback(self) -> None:
        """Toggle between play and pause"""
        if self._is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, seconds: float) -> float:
        """
        Seek to a position, clamped to [0, duration].

        Before metadata is ready the position is clamped against the last
        known duration, or only at 0 when none was ever known.

        Returns:
            The position actually sought to
        """
        if seconds is None or math.isnan(seconds):
            raise PlaybackError("Seek target must be a number")

        bound = self._duration if self._duration is not None else self._last_known_duration
        target = max(0.0, seconds)
        if bound is not None:
            target = min(target, bound)
        return self._apply_seek(target)

    def seek_relative(self, offset: float) -> float:
        """
        Move the position by offset seconds, clamped to [0, duration].

        Raises:
            PlaybackError: If no duration was ever known
        """
        bound = self._duration if self._duration is not None else self._last_known_duration
        if bound is None:
            raise PlaybackError("Cannot seek relative: audio duration is not known yet")
        return self._apply_seek(max(0.0, min(self._current_time + offset, bound)))

    def set_volume(self, volume: float) -> float:
        """
        Set the volume, clamped to [0, 1].

        Returns:
            The volume actually set

        Raises:
            PlaybackError: If the medium rejected the change (volume unchanged)
        """
        if volume is None or math.isnan(volume):
            raise ValueError("Volume must be a number")

        volume = _clamp_volume(volume)
        if self._backend is not None:
            try:
                self._backend.set_volume(volume)
            except Exception as e:
                Log.warning(f"PlaybackController: Volume change rejected: {e}")
                raise PlaybackError(f"Cannot set volume: {e}") from e
        if volume != self._volume:
            self._volume = volume
            self.volume_changed.emit(volume)
        return volume

    # =========================================================================
    # Relayed notifications
    # =========================================================================

    def on_time_advance(self, seconds: float) -> None:
        """Current time reported by the playing medium."""
        seconds = max(0.0, seconds)
        if self._duration is not None:
            seconds = min(seconds, self._duration)
        self._current_time = seconds
        self.position_changed.emit(seconds)

    def on_metadata_ready(self, duration: float) -> None:
        """Duration reported once the medium has loaded its metadata."""
        if duration is None or not math.isfinite(duration) or duration < 0:
            Log.warning(f"PlaybackController: Ignoring invalid duration {duration}")
            return

        self._duration = duration
        self._last_known_duration = duration
        if self._current_time > duration:
            self._current_time = duration
            self.position_changed.emit(duration)
        self.duration_changed.emit(duration)
        Log.info(f"PlaybackController: Duration {duration:.2f}s")

    # =========================================================================
    # Internals
    # =========================================================================

    def _apply_seek(self, target: float) -> float:
        if self._backend is not None:
            try:
                self._backend.set_position(target)
            except Exception as e:
                Log.warning(f"PlaybackController: Seek rejected: {e}")
                raise PlaybackError(f"Cannot seek to {target:.3f}s: {e}") from e

        self._current_time = target
        self.position_changed.emit(target)
        Log.debug(f"PlaybackController: Seek to {target:.3f}s")
        return target

    def cleanup(self) -> None:
        """Clean up resources"""
        if self._is_playing and self._backend is not None:
            try:
                self._backend.pause()
            except Exception as e:
                Log.debug(f"PlaybackController: Error pausing during cleanup: {e}")
        self._is_playing = False
        self._backend = None
        Log.debug("PlaybackController: Cleanup complete")


def _clamp_volume(volume: float) -> float:
    return max(0.0, min(float(volume), 1.0))
