"""
Scene entity

Represents one card in a project's ordered scene sequence.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

# Fields a user may edit; position is owned by the scene store
EDITABLE_FIELDS = ("title", "description", "comments", "still_url")


@dataclass
class Scene:
    """
    Scene in a project.

    A scene has:
    - Identity (id, assigned by the record store on insert)
    - Owning project
    - Free text (title, description, comments)
    - Optional still image reference (any displayable string, e.g. a data URI)
    - position: dense zero-based rank within the project
    """
    id: str
    project_id: str
    title: str
    position: int
    description: str = ""
    comments: str = ""
    still_url: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if not self.project_id:
            raise ValueError("Project ID cannot be empty")
        if self.title is None or not self.title.strip():
            raise ValueError("Scene title cannot be empty")
        if self.position < 0:
            raise ValueError("Position must be >= 0")

    def with_position(self, position: int) -> "Scene":
        """Copy of this scene at another position."""
        return replace(self, position=position)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "description": self.description,
            "comments": self.comments,
            "still_url": self.still_url,
            "position": self.position,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class SceneDraft:
    """
    Field values for a scene that does not exist yet.

    The record store turns a draft into a Scene, generating its id.
    """
    project_id: str
    title: str
    position: int
    description: str = ""
    comments: str = ""
    still_url: Optional[str] = None

    def __post_init__(self):
        if not self.project_id:
            raise ValueError("Project ID cannot be empty")
        if self.title is None or not self.title.strip():
            raise ValueError("Scene title cannot be empty")

    @classmethod
    def default_for(cls, project_id: str, position: int, **overrides) -> "SceneDraft":
        """Draft with the default placeholder text for a scene appended at position."""
        values = {
            "title": f"Scene {position + 1}",
            "description": "New scene",
            "comments": "",
            "still_url": None,
        }
        values.update({k: v for k, v in overrides.items() if k in EDITABLE_FIELDS})
        return cls(project_id=project_id, position=position, **values)
