"""
Scene Repository Interface

The record store contract the scene store reconciles against. Every method
either returns the affected records or raises RepositoryError.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from src.features.scenes.domain.scene import Scene, SceneDraft


class SceneRepository(ABC):
    """
    Repository interface for scene persistence.
    """

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Scene]:
        """
        Select all scenes of a project.

        Returns:
            Scenes ordered by position ascending
        """
        pass

    @abstractmethod
    def create(self, draft: SceneDraft) -> Scene:
        """
        Insert a scene.

        Returns:
            The stored scene, including its generated id
        """
        pass

    @abstractmethod
    def update(self, scene: Scene) -> Scene:
        """
        Update the editable fields of a scene by id.

        Returns:
            The canonical stored row

        Raises:
            EntityNotFoundError: If the scene does not exist
        """
        pass

    @abstractmethod
    def delete(self, scene_id: str) -> None:
        """
        Delete a scene by id.

        Raises:
            EntityNotFoundError: If the scene does not exist
        """
        pass

    @abstractmethod
    def bulk_update_positions(self, project_id: str, positions: Sequence[Tuple[str, int]]) -> List[Scene]:
        """
        Write many (scene_id, position) pairs as one atomic batch.

        Either every pair is written or none is, so a failure never leaves
        duplicated positions behind.

        Returns:
            The updated scenes
        """
        pass
