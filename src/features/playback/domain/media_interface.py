"""
Media Interface

Protocol for the playable-audio capability driven by the playback
controller. Implementations raise on requests they cannot honor.
"""
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class MediaInterface(Protocol):
    """
    Protocol for audio playback engines.

    Implement this interface to connect an audio player to the playback
    controller. Time and metadata are pushed back through the callbacks
    given to set_notifications().
    """

    def load(self, source_ref: str) -> None:
        """Replace the current source. Duration arrives later via on_metadata."""
        ...

    def play(self) -> None:
        """Start or resume playback."""
        ...

    def pause(self) -> None:
        """Pause playback."""
        ...

    def set_position(self, seconds: float) -> None:
        """Seek to a position in seconds."""
        ...

    def get_position(self) -> float:
        ...

    def set_volume(self, volume: float) -> None:
        """Set output volume in [0, 1]."""
        ...

    def is_playing(self) -> bool:
        ...

    def get_duration(self) -> Optional[float]:
        """Total duration in seconds, or None while metadata is loading."""
        ...

    def set_notifications(
        self,
        on_time: Callable[[float], None],
        on_metadata: Callable[[float], None],
    ) -> None:
        """
        Register the controller's relay methods.

        Args:
            on_time: Called with the current time in seconds as the medium plays
            on_metadata: Called with the duration in seconds once it is known
        """
        ...
