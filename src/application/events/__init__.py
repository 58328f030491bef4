"""Event system for application layer"""

from src.application.events.events import (
    DomainEvent,
    # Scene events
    ScenesLoaded,
    SceneAppended,
    ScenesReordered,
    SceneUpdated,
    SceneDeleted,
    SceneOperationFailed,
    # Keyframe events
    KeyframeAdded,
    KeyframesCleared,
    KeyframesRemoved,
    # Session events
    IdentityChanged,
)
from src.application.events.event_bus import EventBus

__all__ = [
    'DomainEvent',
    'ScenesLoaded',
    'SceneAppended',
    'ScenesReordered',
    'SceneUpdated',
    'SceneDeleted',
    'SceneOperationFailed',
    'KeyframeAdded',
    'KeyframesCleared',
    'KeyframesRemoved',
    'IdentityChanged',
    'EventBus',
]
