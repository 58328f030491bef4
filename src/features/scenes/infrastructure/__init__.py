"""
Infrastructure layer for scenes feature.
"""
from src.features.scenes.infrastructure.scene_repository_impl import SQLiteSceneRepository

__all__ = [
    'SQLiteSceneRepository',
]
