"""
Qt Multimedia media backend.

Implements MediaInterface on QMediaPlayer. QMediaPlayer reports position
and duration in milliseconds; they are forwarded to the controller in
seconds.
"""
import os
from typing import Callable, Optional

from src.utils.message import Log


class QtMediaBackend:
    """
    Audio playback through PyQt6.QtMultimedia.

    Requires a running QApplication (or QCoreApplication) for media loading.
    """

    def __init__(self):
        self._player = None
        self._audio_output = None
        self._source_ref: Optional[str] = None
        self._duration: Optional[float] = None
        self._on_time: Optional[Callable[[float], None]] = None
        self._on_metadata: Optional[Callable[[float], None]] = None

        self._init_player()

    def _init_player(self):
        """Initialize Qt Multimedia player"""
        try:
            from PyQt6.QtMultimedia import QMediaPlayer, QAudioOutput

            self._player = QMediaPlayer()
            self._audio_output = QAudioOutput()
            self._audio_output.setVolume(1.0)
            self._player.setAudioOutput(self._audio_output)

            self._player.positionChanged.connect(self._on_position_changed)
            self._player.durationChanged.connect(self._on_duration_changed)
            self._player.errorOccurred.connect(self._on_error)

            Log.info("QtMediaBackend: Qt Multimedia initialized")
        except ImportError:
            Log.warning("QtMediaBackend: Qt Multimedia not available")

    @property
    def available(self) -> bool:
        return self._player is not None

    def set_notifications(self, on_time: Callable[[float], None], on_metadata: Callable[[float], None]) -> None:
        self._on_time = on_time
        self._on_metadata = on_metadata

    # Qt signal handlers

    def _on_position_changed(self, position_ms: int):
        if self._on_time:
            self._on_time(position_ms / 1000.0)

    def _on_duration_changed(self, duration_ms: int):
        # QMediaPlayer reports 0 until the metadata is known
        if duration_ms <= 0:
            return
        self._duration = duration_ms / 1000.0
        if self._on_metadata:
            self._on_metadata(self._duration)

    def _on_error(self, error, error_string: str = ""):
        Log.error(f"QtMediaBackend: Playback error for {self._source_ref}: {error_string or error}")

    # MediaInterface implementation

    def load(self, source_ref: str) -> None:
        """
        Load an audio file path or URL.

        Raises:
            RuntimeError: If Qt Multimedia is not available
        """
        self._require_player()
        from PyQt6.QtCore import QUrl

        self._player.stop()
        self._duration = None
        if os.path.exists(source_ref):
            url = QUrl.fromLocalFile(os.path.abspath(os.path.normpath(source_ref)))
        else:
            url = QUrl(source_ref)
        self._source_ref = source_ref
        self._player.setSource(url)
        Log.info(f"QtMediaBackend: Loaded {source_ref}")

    def play(self) -> None:
        self._require_player()
        from PyQt6.QtMultimedia import QMediaPlayer

        status = self._player.mediaStatus()
        if status in (QMediaPlayer.MediaStatus.NoMedia, QMediaPlayer.MediaStatus.InvalidMedia):
            raise RuntimeError(f"Media not playable ({status.name})")
        self._player.play()

    def pause(self) -> None:
        self._require_player()
        self._player.pause()

    def set_position(self, seconds: float) -> None:
        self._require_player()
        self._player.setPosition(int(seconds * 1000))

    def get_position(self) -> float:
        if self._player:
            return self._player.position() / 1000.0
        return 0.0

    def set_volume(self, volume: float) -> None:
        if self._audio_output:
            self._audio_output.setVolume(volume)

    def is_playing(self) -> bool:
        if self._player:
            from PyQt6.QtMultimedia import QMediaPlayer
            return self._player.playbackState() == QMediaPlayer.PlaybackState.PlayingState
        return False

    def get_duration(self) -> Optional[float]:
        return self._duration

    def _require_player(self):
        if self._player is None:
            raise RuntimeError("Qt Multimedia is not available")

    def cleanup(self):
        """Disconnect signals and release the player"""
        if self._player:
            for signal in (self._player.positionChanged, self._player.durationChanged, self._player.errorOccurred):
                try:
                    signal.disconnect()
                except TypeError as e:
                    Log.debug(f"QtMediaBackend: Signal already disconnected: {e}")
            self._player.pause()
        self._player = None
        self._audio_output = None
        Log.debug("QtMediaBackend: Cleanup complete")
