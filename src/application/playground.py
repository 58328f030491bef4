"""
Playground Session

Everything one open project needs: its scene store, keyframe timeline,
playback controller and hotkeys, wired together.

Views drive the session through its methods (or handle_key for keyboard
input) and listen on the event bus and the controller's signals.
"""
from typing import Callable, Dict, Optional

from src.application.events.event_bus import EventBus
from src.application.hotkeys import HotkeyMap
from src.features.keyframes.application.keyframe_timeline import KeyframeTimeline
from src.features.keyframes.domain.keyframe import Keyframe
from src.features.playback.application.playback_controller import PlaybackController
from src.features.projects.domain.project import Project
from src.features.scenes.application.scene_store import OrderedSceneStore
from src.features.scenes.domain.scene import Scene
from src.shared.domain.errors import SceneSyncError
from src.utils.message import Log
from src.utils.time_format import format_transport

DEFAULT_SEEK_STEP = 5.0


class PlaygroundSession:
    """
    One open project.

    Args:
        project: The open project
        store: Scene store for the project
        timeline: Keyframe timeline reading the controller's duration
        controller: Playback controller of the project's audio track
        hotkeys: Key bindings; defaults to the standard shortcuts
        confirm_delete: Asked before a scene is deleted; returning False
            cancels. None deletes without asking
        seek_step: Seconds moved by the seek hotkeys
    """

    def __init__(
        self,
        project: Project,
        store: OrderedSceneStore,
        timeline: KeyframeTimeline,
        controller: PlaybackController,
        hotkeys: Optional[HotkeyMap] = None,
        confirm_delete: Optional[Callable[[Scene], bool]] = None,
        seek_step: float = DEFAULT_SEEK_STEP,
        event_bus: Optional[EventBus] = None,
    ):
        self.project = project
        self.store = store
        self.timeline = timeline
        self.controller = controller
        self.hotkeys = hotkeys or HotkeyMap()
        self.confirm_delete = confirm_delete
        self.seek_step = seek_step
        self.selected_scene_id: Optional[str] = None
        self.last_error: Optional[SceneSyncError] = None
        self._event_bus = event_bus

        self.timeline.set_duration_provider(lambda: self.controller.duration)
        if event_bus is not None:
            self.timeline.attach_to(event_bus)

        self._bind_hotkeys()

    def _bind_hotkeys(self) -> None:
        handlers: Dict[str, Callable[[], object]] = {
            "add_scene": self.add_scene,
            "delete_scene": self.delete_selected_scene,
            "seek_backward": lambda: self.controller.seek_relative(-self.seek_step),
            "seek_forward": lambda: self.controller.seek_relative(self.seek_step),
            "toggle_playback": self.controller.toggle_playback,
        }
        for action, handler in handlers.items():
            if action in self.hotkeys.actions:
                self.hotkeys.bind(action, handler)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self) -> None:
        """Load the project's scenes and keyframes."""
        self.store.load(self.project.id)
        self.timeline.load(self.project.id)
        scenes = self.store.scenes
        self.selected_scene_id = scenes[0].id if scenes else None
        Log.info(f"PlaygroundSession: Opened '{self.project.name}' ({len(scenes)} scene(s))")

    def close(self) -> None:
        self.timeline.detach()
        self.controller.cleanup()
        Log.info(f"PlaygroundSession: Closed '{self.project.name}'")

    # =========================================================================
    # Scenes
    # =========================================================================

    @property
    def selected_scene(self) -> Optional[Scene]:
        if self.selected_scene_id is None:
            return None
        return self.store.get(self.selected_scene_id)

    def select_scene(self, scene_id: Optional[str]) -> None:
        if scene_id is not None and self.store.get(scene_id) is None:
            raise KeyError(f"Scene {scene_id} is not in project {self.project.id}")
        self.selected_scene_id = scene_id

    def add_scene(self, **defaults) -> Scene:
        scene = self.store.append(self.project.id, defaults)
        self.selected_scene_id = scene.id
        return scene

    def delete_scene(self, scene_id: str) -> bool:
        """
        Delete a scene after confirmation, then close the position gap.

        Returns:
            False if the user cancelled, True once deleted
        """
        scene = self.store.get(scene_id)
        if scene is None:
            raise KeyError(f"Scene {scene_id} is not in project {self.project.id}")
        if self.confirm_delete is not None and not self.confirm_delete(scene):
            Log.debug(f"PlaygroundSession: Deletion of '{scene.title}' cancelled")
            return False

        self.store.delete(scene_id)
        if self.selected_scene_id == scene_id:
            self.selected_scene_id = None
        self.store.compact()
        return True

    def delete_selected_scene(self) -> bool:
        if self.selected_scene is None:
            self.selected_scene_id = None
            return False
        return self.delete_scene(self.selected_scene_id)

    def move_scene(self, scene_id: str, target_scene_id: str):
        return self.store.move_scene(scene_id, target_scene_id)

    # =========================================================================
    # Keyframes
    # =========================================================================

    def add_keyframe(self, name: str, color: Optional[str] = None, timestamp: Optional[float] = None) -> Keyframe:
        """
        Mark the selected scene at timestamp (default: the playhead).

        Raises:
            KeyError: If no scene is selected
            InvalidTimestampError: If the audio duration is unknown or the
                timestamp is out of range
        """
        scene = self.selected_scene
        if scene is None:
            raise KeyError("No scene selected")
        if timestamp is None:
            timestamp = self.controller.current_time
        return self.timeline.add(scene.id, name, color, timestamp)

    def clear_keyframes(self) -> int:
        return self.timeline.clear_all()

    def scene_at_playhead(self) -> Optional[Scene]:
        """Scene of the latest keyframe at or before the current time."""
        keyframe = self.timeline.active_keyframe(self.controller.current_time)
        if keyframe is None:
            return None
        return self.store.get(keyframe.scene_id)

    # =========================================================================
    # Input / display
    # =========================================================================

    def handle_key(self, combo: str) -> bool:
        """
        Dispatch a key press.

        Failures of the bound action are logged and kept in last_error
        instead of propagating into the view's event loop.

        Returns:
            True if the key was bound to an action
        """
        try:
            return self.hotkeys.handle(combo)
        except SceneSyncError as e:
            self.last_error = e
            Log.warning(f"PlaygroundSession: '{combo}' failed: {e}")
            return True

    def transport_label(self) -> str:
        return format_transport(self.controller.current_time, self.controller.duration)
