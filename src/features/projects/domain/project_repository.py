"""
Project Repository Interface
"""
from abc import ABC, abstractmethod
from typing import Optional, List

from src.features.projects.domain.project import Project


class ProjectRepository(ABC):
    """Repository interface for project persistence."""

    @abstractmethod
    def create(self, project: Project) -> Project:
        pass

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]:
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> List[Project]:
        """List projects owned by a user, oldest first."""
        pass

    @abstractmethod
    def delete(self, project_id: str) -> None:
        """Delete a project (its scenes and keyframes cascade)."""
        pass
