"""
Application layer for playback feature.
"""
from src.features.playback.application.playback_controller import PlaybackController

__all__ = [
    'PlaybackController',
]
