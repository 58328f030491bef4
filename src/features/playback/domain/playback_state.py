"""
Playback state snapshot.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlaybackState:
    """
    Immutable view of the playback controller.

    duration is None until the source's metadata has loaded.
    """
    source_ref: Optional[str] = None
    is_playing: bool = False
    volume: float = 1.0
    current_time: float = 0.0
    duration: Optional[float] = None

    @property
    def has_source(self) -> bool:
        return self.source_ref is not None

    @property
    def progress(self) -> float:
        """current_time / duration in [0, 1], 0 while the duration is unknown."""
        if not self.duration:
            return 0.0
        return min(max(self.current_time / self.duration, 0.0), 1.0)
