"""
Keyframes feature module.

Timestamped markers that tie scenes to points on the audio timeline.
"""
from src.features.keyframes.domain import (
    Keyframe,
    KeyframeRepository,
)

__all__ = [
    'Keyframe',
    'KeyframeRepository',
]
