"""
Domain layer for projects feature.
"""
from src.features.projects.domain.project import Project
from src.features.projects.domain.project_repository import ProjectRepository

__all__ = [
    'Project',
    'ProjectRepository',
]
