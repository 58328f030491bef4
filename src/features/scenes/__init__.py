"""
Scenes feature module.

Ordered scene cards of a project and the store that keeps their order in
sync with the database.

Usage:
    from src.features.scenes.application import OrderedSceneStore
    from src.features.scenes.infrastructure import SQLiteSceneRepository
"""
from src.features.scenes.domain import (
    Scene,
    SceneDraft,
    SceneRepository,
)

__all__ = [
    'Scene',
    'SceneDraft',
    'SceneRepository',
]
