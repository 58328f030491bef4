"""
Keyframe Timeline

Holds the keyframes of the current playground session and projects them
onto the audio timeline of the playback controller.

Keyframes live in session memory. When a KeyframeRepository is attached
they are also durable: add() and clear_all() write through first and only
change memory once the write succeeded.
"""
import math
from typing import Callable, Iterator, List, Optional, Tuple

from src.application.events.event_bus import EventBus
from src.application.events.events import (
    DomainEvent,
    KeyframeAdded,
    KeyframesCleared,
    KeyframesRemoved,
    SceneDeleted,
)
from src.features.keyframes.domain.keyframe import Keyframe
from src.features.keyframes.domain.keyframe_repository import KeyframeRepository
from src.shared.domain.errors import InvalidTimestampError
from src.utils.message import Log

DEFAULT_KEYFRAME_COLOR = "#f59e0b"


class KeyframeTimeline:
    """
    Keyframes anchored to absolute playback time.

    Args:
        project_id: Project the keyframes belong to
        duration_provider: Returns the current audio duration, or None while
            it is not known (typically ``lambda: controller.duration``)
        repository: Optional durable storage
        event_bus: Receives KeyframeAdded / KeyframesCleared / KeyframesRemoved
        default_color: Color used when add() is given none
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        duration_provider: Optional[Callable[[], Optional[float]]] = None,
        repository: Optional[KeyframeRepository] = None,
        event_bus: Optional[EventBus] = None,
        default_color: str = DEFAULT_KEYFRAME_COLOR,
    ):
        if repository is not None and not project_id:
            raise ValueError("A project ID is required to persist keyframes")

        self.project_id = project_id
        self.default_color = default_color
        self._duration_provider = duration_provider or (lambda: None)
        self._repository = repository
        self._event_bus = event_bus
        self._keyframes: List[Keyframe] = []
        self._next_sequence = 0
        self._subscribed_bus: Optional[EventBus] = None

    @property
    def keyframes(self) -> List[Keyframe]:
        """Keyframes in insertion order."""
        return list(self._keyframes)

    @property
    def duration(self) -> Optional[float]:
        return self._duration_provider()

    @property
    def is_persistent(self) -> bool:
        return self._repository is not None

    def __len__(self) -> int:
        return len(self._keyframes)

    def set_duration_provider(self, provider: Callable[[], Optional[float]]) -> None:
        self._duration_provider = provider

    # =========================================================================
    # Mutation
    # =========================================================================

    def load(self, project_id: Optional[str] = None) -> List[Keyframe]:
        """
        Restore keyframes from the attached repository.

        Without a repository this just starts an empty session.
        """
        project_id = project_id or self.project_id
        if self._repository is None:
            self._keyframes = []
            self._next_sequence = 0
            return []

        keyframes = self._repository.list_by_project(project_id)
        self.project_id = project_id
        self._keyframes = sorted(keyframes, key=lambda k: k.sequence)
        self._next_sequence = max((k.sequence for k in self._keyframes), default=-1) + 1
        Log.info(f"KeyframeTimeline: Loaded {len(self._keyframes)} keyframe(s) for project {project_id}")
        return self.keyframes

    def add(self, scene_id: str, name: str, color: Optional[str], timestamp: float) -> Keyframe:
        """
        Place a keyframe for scene_id at timestamp seconds.

        Raises:
            InvalidTimestampError: If the duration is unknown or the timestamp
                is outside [0, duration]
            ValueError: If scene_id or name is empty
        """
        duration = self.duration
        if duration is None or not math.isfinite(duration):
            raise InvalidTimestampError(timestamp, None)
        if timestamp is None or not math.isfinite(timestamp) or not 0 <= timestamp <= duration:
            raise InvalidTimestampError(timestamp, duration)

        keyframe = Keyframe(
            id="",
            project_id=self.project_id,
            scene_id=scene_id,
            name=name,
            color=color or self.default_color,
            timestamp=float(timestamp),
            sequence=self._next_sequence,
        )

        if self._repository is not None:
            try:
                keyframe = self._repository.create(keyframe)
            except Exception as e:
                Log.error(f"KeyframeTimeline: Failed to store keyframe '{keyframe.name}': {e}")
                raise

        self._keyframes.append(keyframe)
        self._next_sequence = keyframe.sequence + 1
        Log.info(f"KeyframeTimeline: Added '{keyframe.name}' at {keyframe.timestamp:.2f}s")
        self._publish(KeyframeAdded(
            project_id=self.project_id,
            data={"keyframe_id": keyframe.id, "scene_id": scene_id, "timestamp": keyframe.timestamp},
        ))
        return keyframe

    def clear_all(self) -> int:
        """
        Discard every keyframe of the session.

        Returns:
            Number of keyframes removed
        """
        if self._repository is not None:
            try:
                self._repository.delete_by_project(self.project_id)
            except Exception as e:
                Log.error(f"KeyframeTimeline: Failed to clear keyframes: {e}")
                raise

        count = len(self._keyframes)
        self._keyframes = []
        Log.info(f"KeyframeTimeline: Cleared {count} keyframe(s)")
        self._publish(KeyframesCleared(project_id=self.project_id, data={"count": count}))
        return count

    def remove_for_scene(self, scene_id: str) -> int:
        """
        Drop the keyframes that reference scene_id.

        Returns:
            Number of keyframes removed
        """
        remaining = [k for k in self._keyframes if k.scene_id != scene_id]
        removed = len(self._keyframes) - len(remaining)
        if removed == 0:
            return 0

        if self._repository is not None:
            self._repository.delete_by_scene(scene_id)

        self._keyframes = remaining
        Log.info(f"KeyframeTimeline: Removed {removed} keyframe(s) of deleted scene {scene_id}")
        self._publish(KeyframesRemoved(
            project_id=self.project_id,
            data={"scene_id": scene_id, "count": removed},
        ))
        return removed

    # =========================================================================
    # Queries
    # =========================================================================

    def ordered_by_time(self) -> List[Keyframe]:
        """Keyframes ascending by timestamp; equal timestamps keep insertion order."""
        return sorted(self._keyframes, key=lambda k: k.timestamp)

    def project_on_axis(self, duration: Optional[float] = None) -> Iterator[Tuple[Keyframe, float]]:
        """
        Yield (keyframe, fraction) pairs with fraction = timestamp / duration.

        Fractions are clamped to [0, 1]. Yields nothing when duration is
        unknown, zero or negative.

        Args:
            duration: Axis length in seconds; defaults to the current duration
        """
        if duration is None:
            duration = self.duration
        if duration is None or not math.isfinite(duration) or duration <= 0:
            return

        for keyframe in self.ordered_by_time():
            yield keyframe, min(max(keyframe.timestamp / duration, 0.0), 1.0)

    def active_keyframe(self, time: float) -> Optional[Keyframe]:
        """The latest keyframe at or before time (the scene showing at the playhead)."""
        active = None
        for keyframe in self.ordered_by_time():
            if keyframe.timestamp > time:
                break
            active = keyframe
        return active

    def keyframe_at(self, time: float, tolerance: float = 0.05) -> Optional[Keyframe]:
        """The keyframe closest to time within tolerance seconds, if any."""
        candidates = [k for k in self._keyframes if abs(k.timestamp - time) <= tolerance]
        if not candidates:
            return None
        return min(candidates, key=lambda k: abs(k.timestamp - time))

    # =========================================================================
    # Event wiring
    # =========================================================================

    def attach_to(self, event_bus: EventBus) -> None:
        """Cascade scene deletions published on event_bus to this timeline."""
        self.detach()
        event_bus.subscribe(SceneDeleted, self._on_scene_deleted)
        self._subscribed_bus = event_bus

    def detach(self) -> None:
        if self._subscribed_bus is not None:
            self._subscribed_bus.unsubscribe(SceneDeleted, self._on_scene_deleted)
            self._subscribed_bus = None

    def _on_scene_deleted(self, event: SceneDeleted) -> None:
        if self.project_id and event.project_id and event.project_id != self.project_id:
            return
        scene_id = event.data.get("scene_id")
        if scene_id:
            self.remove_for_scene(scene_id)

    def _publish(self, event: DomainEvent) -> None:
        if self._event_bus:
            self._event_bus.publish(event)
