"""
Project entity

A project owns an ordered set of scenes and is owned by one user identity.
"""
from dataclasses import dataclass, field
from datetime import datetime
import uuid


@dataclass
class Project:
    """
    Project entity.

    Scenes and keyframes reference it by id; only its owner may read or
    write them.
    """
    id: str
    name: str
    owner_id: str
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if not self.id:
            self.id = str(uuid.uuid4())
        if not self.name or not self.name.strip():
            raise ValueError("Project name cannot be empty")
        if not self.owner_id:
            raise ValueError("Project owner cannot be empty")
        self.name = self.name.strip()

    def is_owned_by(self, user_id: str) -> bool:
        return bool(user_id) and self.owner_id == user_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat(),
        }
