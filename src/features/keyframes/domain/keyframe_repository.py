"""
Keyframe Repository Interface

Optional durable storage for a project's keyframes.
"""
from abc import ABC, abstractmethod
from typing import List

from src.features.keyframes.domain.keyframe import Keyframe


class KeyframeRepository(ABC):
    """Repository interface for keyframe persistence."""

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Keyframe]:
        """Keyframes of a project in insertion (sequence) order."""
        pass

    @abstractmethod
    def create(self, keyframe: Keyframe) -> Keyframe:
        pass

    @abstractmethod
    def delete_by_project(self, project_id: str) -> int:
        """Delete every keyframe of a project. Returns the number deleted."""
        pass

    @abstractmethod
    def delete_by_scene(self, scene_id: str) -> int:
        """Delete the keyframes referencing a scene. Returns the number deleted."""
        pass
