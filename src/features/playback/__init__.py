"""
Playback feature module.

Transport state of the playground's audio track.

Usage:
    from src.features.playback.application import PlaybackController
    from src.features.playback.infrastructure import QtMediaBackend
"""
from src.features.playback.domain import (
    MediaInterface,
    PlaybackState,
)

__all__ = [
    'MediaInterface',
    'PlaybackState',
]
