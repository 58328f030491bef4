"""
Domain Events

Events that represent significant occurrences in the domain.
Published only after the record store has confirmed the change (or, for
failures, after local state has been restored).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional


@dataclass
class DomainEvent:
    """Base class for all domain events"""
    name: ClassVar[str] = "DomainEvent"
    project_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


# Scene Events
@dataclass
class ScenesLoaded(DomainEvent):
    """
    Data fields:
        - count: number of scenes loaded
    """
    name: ClassVar[str] = "ScenesLoaded"


@dataclass
class SceneAppended(DomainEvent):
    """
    Data fields:
        - scene_id: ID of the created scene
        - position: position assigned to it
    """
    name: ClassVar[str] = "SceneAppended"


@dataclass
class ScenesReordered(DomainEvent):
    """
    Data fields:
        - order: scene IDs in their confirmed order
        - changed: number of (id, position) pairs written
    """
    name: ClassVar[str] = "ScenesReordered"


@dataclass
class SceneUpdated(DomainEvent):
    name: ClassVar[str] = "SceneUpdated"


@dataclass
class SceneDeleted(DomainEvent):
    """
    Data fields:
        - scene_id: ID of the deleted scene
    """
    name: ClassVar[str] = "SceneDeleted"


@dataclass
class SceneOperationFailed(DomainEvent):
    """
    Raised alongside a typed store error so views can surface it.

    Data fields:
        - operation: "load", "append", "reorder", "update", "delete" or "compact"
        - error: human readable message
    """
    name: ClassVar[str] = "SceneOperationFailed"


# Keyframe Events
@dataclass
class KeyframeAdded(DomainEvent):
    name: ClassVar[str] = "KeyframeAdded"


@dataclass
class KeyframesCleared(DomainEvent):
    name: ClassVar[str] = "KeyframesCleared"


@dataclass
class KeyframesRemoved(DomainEvent):
    """
    Data fields:
        - scene_id: scene whose keyframes were dropped
        - count: number removed
    """
    name: ClassVar[str] = "KeyframesRemoved"


# Session Events
@dataclass
class IdentityChanged(DomainEvent):
    """
    Data fields:
        - user_id: new identity, or None after sign out
    """
    name: ClassVar[str] = "IdentityChanged"
