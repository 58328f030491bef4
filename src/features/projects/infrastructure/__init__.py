"""
Infrastructure layer for projects feature.
"""
from src.features.projects.infrastructure.project_repository_impl import SQLiteProjectRepository

__all__ = [
    'SQLiteProjectRepository',
]
