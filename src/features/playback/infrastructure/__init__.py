"""
Infrastructure layer for playback feature.
"""
from src.features.playback.infrastructure.qt_media_backend import QtMediaBackend

__all__ = [
    'QtMediaBackend',
]
