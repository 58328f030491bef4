"""
Application Bootstrap

Wires the database, repositories, event bus and session together, and
builds a PlaygroundSession per open project.
"""
import atexit
from typing import Callable, Optional

from src.application.events.event_bus import EventBus
from src.application.hotkeys import HotkeyMap
from src.application.playground import PlaygroundSession
from src.features.keyframes.application.keyframe_timeline import DEFAULT_KEYFRAME_COLOR, KeyframeTimeline
from src.features.keyframes.infrastructure import SQLiteKeyframeRepository
from src.features.playback.application.playback_controller import PlaybackController
from src.features.playback.domain.media_interface import MediaInterface
from src.features.projects.domain.project import Project
from src.features.projects.infrastructure import SQLiteProjectRepository
from src.features.scenes.application.scene_store import OrderedSceneStore
from src.features.scenes.domain.scene import Scene
from src.features.scenes.infrastructure import SQLiteSceneRepository
from src.infrastructure.persistence.sqlite.database import Database
from src.shared.application.services.session_service import SessionService
from src.shared.application.services.still_image_source import StillImageSource
from src.shared.domain.errors import AccessDeniedError, FetchError
from src.utils.message import Log
from src.utils.settings import Settings


class ServiceContainer:
    """Shared services for one process: storage, events, identity and settings."""

    def __init__(
        self,
        database: Database,
        event_bus: EventBus,
        settings: Settings,
        session: SessionService,
        project_repo: SQLiteProjectRepository,
        scene_repo: SQLiteSceneRepository,
        keyframe_repo: SQLiteKeyframeRepository,
        still_images: StillImageSource,
    ):
        self.database = database
        self.event_bus = event_bus
        self.settings = settings
        self.session = session
        self.project_repo = project_repo
        self.scene_repo = scene_repo
        self.keyframe_repo = keyframe_repo
        self.still_images = still_images
        self._closed = False

    def create_scene_store(self) -> OrderedSceneStore:
        return OrderedSceneStore(
            self.scene_repo,
            project_repository=self.project_repo,
            session=self.session,
            event_bus=self.event_bus,
        )

    def open_playground(
        self,
        project_id: str,
        media_backend: Optional[MediaInterface] = None,
        confirm_delete: Optional[Callable[[Scene], bool]] = None,
    ) -> PlaygroundSession:
        """
        Build and open a playground session for a project.

        Raises:
            FetchError: If the project does not exist or cannot be loaded
            AccessDeniedError: If the signed-in user does not own it
        """
        project: Optional[Project] = self.project_repo.get(project_id)
        if project is None:
            raise FetchError(f"Project {project_id} not found", project_id=project_id)
        if not project.is_owned_by(self.session.current_user_id):
            raise AccessDeniedError(project_id, self.session.current_user_id)

        keyframe_repo = self.keyframe_repo if self.settings.get("persist_keyframes", True) else None
        timeline = KeyframeTimeline(
            project_id=project.id,
            repository=keyframe_repo,
            event_bus=self.event_bus,
            default_color=self.settings.get("default_keyframe_color") or DEFAULT_KEYFRAME_COLOR,
        )
        controller = PlaybackController(backend=media_backend, volume=self.settings.default_volume)
        if not self.settings.get("confirm_scene_deletion", True):
            confirm_delete = None

        session = PlaygroundSession(
            project=project,
            store=self.create_scene_store(),
            timeline=timeline,
            controller=controller,
            hotkeys=HotkeyMap(),
            confirm_delete=confirm_delete,
            seek_step=self.settings.seek_step_seconds,
            event_bus=self.event_bus,
        )
        session.open()
        return session

    def cleanup(self) -> None:
        """Close the database and drop event subscriptions."""
        if self._closed:
            return
        Log.info("ServiceContainer: Starting cleanup")

        self.event_bus.clear()
        if self.database:
            try:
                self.database.close()
            except Exception as e:
                Log.warning(f"ServiceContainer: Error closing database: {e}")

        self._closed = True
        Log.info("ServiceContainer: Cleanup complete")


def initialize_services(
    db_path: str = None,
    settings: Optional[Settings] = None,
    register_atexit: bool = True,
) -> ServiceContainer:
    """
    Open the database and build the service container.

    Args:
        db_path: Path to SQLite database file.
                If None, uses the settings' database path (platform data directory by default).
        settings: Settings to use; loaded from the user config directory if None
        register_atexit: Close the database on interpreter exit

    Returns:
        Ready ServiceContainer
    """
    settings = settings or Settings()
    Log.set_level(settings.get("log_level", "INFO"))

    if db_path is None:
        db_path = settings.database_path

    Log.info(f"Initializing services with database: {db_path}")

    # Foundation
    database = Database(db_path)
    event_bus = EventBus()
    session = SessionService(event_bus=event_bus)

    # Repositories
    project_repo = SQLiteProjectRepository(database)
    scene_repo = SQLiteSceneRepository(database)
    keyframe_repo = SQLiteKeyframeRepository(database)

    container = ServiceContainer(
        database=database,
        event_bus=event_bus,
        settings=settings,
        session=session,
        project_repo=project_repo,
        scene_repo=scene_repo,
        keyframe_repo=keyframe_repo,
        still_images=StillImageSource(),
    )
    Log.info("Service container created successfully")

    if register_atexit:
        def cleanup_handler():
            try:
                container.cleanup()
            except Exception as e:
                Log.warning(f"Bootstrap: Error in atexit cleanup handler: {e}")
        atexit.register(cleanup_handler)

    return container
