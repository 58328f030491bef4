"""
Domain layer for scenes feature.

Contains:
- Scene entity and SceneDraft
- SceneRepository interface
"""
from src.features.scenes.domain.scene import Scene, SceneDraft, EDITABLE_FIELDS
from src.features.scenes.domain.scene_repository import SceneRepository

__all__ = [
    'Scene',
    'SceneDraft',
    'EDITABLE_FIELDS',
    'SceneRepository',
]
