"""
Projects feature module.

Usage:
    from src.features.projects.domain import Project
    from src.features.projects.infrastructure import SQLiteProjectRepository
"""
from src.features.projects.domain import (
    Project,
    ProjectRepository,
)

__all__ = [
    'Project',
    'ProjectRepository',
]
