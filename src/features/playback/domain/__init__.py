"""
Domain layer for playback feature.
"""
from src.features.playback.domain.media_interface import MediaInterface
from src.features.playback.domain.playback_state import PlaybackState

__all__ = [
    'MediaInterface',
    'PlaybackState',
]
