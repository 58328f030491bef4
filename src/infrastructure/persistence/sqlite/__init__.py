"""
SQLite persistence implementation

Core database utilities. Repository implementations live in feature modules:
- src.features.projects.infrastructure.SQLiteProjectRepository
- src.features.scenes.infrastructure.SQLiteSceneRepository
- src.features.keyframes.infrastructure.SQLiteKeyframeRepository
"""
from src.infrastructure.persistence.sqlite.database import Database

__all__ = [
    'Database',
]
