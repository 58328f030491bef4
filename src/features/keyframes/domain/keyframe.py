"""
Keyframe entity

A named, colored marker binding a scene to a point in audio playback time.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import math
import uuid


@dataclass
class Keyframe:
    """
    Keyframe on the audio timeline.

    timestamp is in seconds from the start of the track. sequence records
    insertion order and breaks ties between equal timestamps.
    """
    id: str
    scene_id: str
    name: str
    color: str
    timestamp: float
    sequence: int = 0
    project_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if not self.id:
            self.id = str(uuid.uuid4())
        if not self.scene_id:
            raise ValueError("Keyframe must reference a scene")
        if not self.name or not self.name.strip():
            raise ValueError("Keyframe name cannot be empty")
        if not math.isfinite(self.timestamp) or self.timestamp < 0:
            raise ValueError(f"Keyframe timestamp must be a non-negative number, got {self.timestamp}")
        self.name = self.name.strip()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "scene_id": self.scene_id,
            "name": self.name,
            "color": self.color,
            "timestamp": self.timestamp,
            "sequence": self.sequence,
            "created_at": self.created_at.isoformat(),
        }
