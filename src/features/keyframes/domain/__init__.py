"""
Domain layer for keyframes feature.
"""
from src.features.keyframes.domain.keyframe import Keyframe
from src.features.keyframes.domain.keyframe_repository import KeyframeRepository

__all__ = [
    'Keyframe',
    'KeyframeRepository',
]
