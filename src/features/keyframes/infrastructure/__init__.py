"""
Infrastructure layer for keyframes feature.
"""
from src.features.keyframes.infrastructure.keyframe_repository_impl import SQLiteKeyframeRepository

__all__ = [
    'SQLiteKeyframeRepository',
]
