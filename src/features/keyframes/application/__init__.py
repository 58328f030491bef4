"""
Application layer for keyframes feature.
"""
from src.features.keyframes.application.keyframe_timeline import (
    KeyframeTimeline,
    DEFAULT_KEYFRAME_COLOR,
)

__all__ = [
    'KeyframeTimeline',
    'DEFAULT_KEYFRAME_COLOR',
]
