"""
Shared pytest fixtures.

Lives at the repository root so `src` is importable without installing.
"""
import os
import tempfile

# Keep test runs out of the user's data directory and log folder
os.environ.setdefault("SCENESYNC_FILE_LOGGING", "0")
os.environ.setdefault("SCENESYNC_DATA_DIR", tempfile.mkdtemp(prefix="scenesync-tests-"))

import uuid
from dataclasses import replace
from typing import Dict, List, Optional

import pytest

from src.application.events.event_bus import EventBus
from src.features.projects.domain.project import Project
from src.features.projects.domain.project_repository import ProjectRepository
from src.features.scenes.domain.scene import Scene, SceneDraft
from src.features.scenes.domain.scene_repository import SceneRepository
from src.infrastructure.persistence.sqlite.database import Database
from src.shared.infrastructure.persistence.base_repository import EntityNotFoundError


# =============================================================================
# In-memory repositories
# =============================================================================

class InMemoryProjectRepository(ProjectRepository):
    def __init__(self):
        self._store: Dict[str, Project] = {}

    def create(self, project: Project) -> Project:
        self._store[project.id] = project
        return project

    def get(self, project_id: str) -> Optional[Project]:
        return self._store.get(project_id)

    def list_by_owner(self, owner_id: str) -> List[Project]:
        return [p for p in self._store.values() if p.owner_id == owner_id]

    def delete(self, project_id: str) -> None:
        self._store.pop(project_id, None)


class InMemorySceneRepository(SceneRepository):
    """
    Scene record store kept in a dict.

    Set fail_with[method_name] to an exception to make the next call to that
    method raise it (before touching any row).
    """

    def __init__(self):
        self._rows: Dict[str, Scene] = {}
        self.fail_with: Dict[str, Exception] = {}
        self.bulk_calls: List[List[tuple]] = []

    def _maybe_fail(self, method: str) -> None:
        error = self.fail_with.pop(method, None)
        if error is not None:
            raise error

    def list_by_project(self, project_id: str) -> List[Scene]:
        self._maybe_fail("list_by_project")
        rows = [s for s in self._rows.values() if s.project_id == project_id]
        return sorted(rows, key=lambda s: s.position)

    def create(self, draft: SceneDraft) -> Scene:
        self._maybe_fail("create")
        scene = Scene(
            id=str(uuid.uuid4()),
            project_id=draft.project_id,
            title=draft.title,
            description=draft.description,
            comments=draft.comments,
            still_url=draft.still_url,
            position=draft.position,
        )
        self._rows[scene.id] = scene
        return scene

    def update(self, scene: Scene) -> Scene:
        self._maybe_fail("update")
        existing = self._rows.get(scene.id)
        if existing is None:
            raise EntityNotFoundError("Scene", scene.id)
        stored = replace(
            existing,
            title=scene.title,
            description=scene.description,
            comments=scene.comments,
            still_url=scene.still_url,
        )
        self._rows[scene.id] = stored
        return stored

    def delete(self, scene_id: str) -> None:
        self._maybe_fail("delete")
        if scene_id not in self._rows:
            raise EntityNotFoundError("Scene", scene_id)
        del self._rows[scene_id]

    def bulk_update_positions(self, project_id, positions):
        self._maybe_fail("bulk_update_positions")
        self.bulk_calls.append(list(positions))
        for scene_id, position in positions:
            self._rows[scene_id] = self._rows[scene_id].with_position(position)
        return [self._rows[scene_id] for scene_id, _ in positions]

    def stored_order(self, project_id: str) -> List[str]:
        return [s.title for s in self.list_by_project(project_id)]


# =============================================================================
# Fake media backend
# =============================================================================

class FakeMediaBackend:
    """
    MediaInterface test double.

    Set fail_on to a method name ("play", "pause", "load", "set_position",
    "set_volume") to make that request raise RuntimeError.
    """

    def __init__(self):
        self.fail_on: Optional[str] = None
        self.source_ref: Optional[str] = None
        self.playing = False
        self.position = 0.0
        self.volume = 1.0
        self.duration: Optional[float] = None
        self.on_time = None
        self.on_metadata = None

    def _check(self, method: str) -> None:
        if self.fail_on == method:
            raise RuntimeError(f"{method} refused")

    def load(self, source_ref: str) -> None:
        self._check("load")
        self.source_ref = source_ref
        self.playing = False
        self.duration = None

    def play(self) -> None:
        self._check("play")
        self.playing = True

    def pause(self) -> None:
        self._check("pause")
        self.playing = False

    def set_position(self, seconds: float) -> None:
        self._check("set_position")
        self.position = seconds

    def get_position(self) -> float:
        return self.position

    def set_volume(self, volume: float) -> None:
        self._check("set_volume")
        self.volume = volume

    def is_playing(self) -> bool:
        return self.playing

    def get_duration(self) -> Optional[float]:
        return self.duration

    def set_notifications(self, on_time, on_metadata) -> None:
        self.on_time = on_time
        self.on_metadata = on_metadata

    # Simulate the medium
    def emit_metadata(self, duration: float) -> None:
        self.duration = duration
        self.on_metadata(duration)

    def emit_time(self, seconds: float) -> None:
        self.position = seconds
        self.on_time(seconds)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def scene_repo():
    return InMemorySceneRepository()


@pytest.fixture
def project_repo():
    return InMemoryProjectRepository()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def media_backend():
    return FakeMediaBackend()


@pytest.fixture
def seed_scenes(scene_repo):
    """Insert scenes with the given titles at positions 0..N-1."""
    def _seed(project_id: str, titles: List[str]) -> List[Scene]:
        return [
            scene_repo.create(SceneDraft(project_id=project_id, title=title, position=index))
            for index, title in enumerate(titles)
        ]
    return _seed


@pytest.fixture
def test_db(tmp_path):
    """Temporary file-backed database."""
    db = Database(str(tmp_path / "scenesync-test.db"))
    yield db
    db.close()


@pytest.fixture(scope="session")
def qapp():
    """Ensure a Qt application exists for PyQt signals."""
    from PyQt6.QtCore import QCoreApplication
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
