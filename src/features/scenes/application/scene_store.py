"""
Ordered Scene Store

Keeps the in-memory, position-ordered scene sequence of one project in sync
with the record store.

- append/update/delete are confirmed first: local state only changes once
  the record store returned the affected row.
- reorder/compact are optimistic: the new order is visible immediately and
  the changed positions are written as one batch. A failed batch restores
  the order that was showing right before that reorder.

Every remote failure is logged, published as SceneOperationFailed and raised
as the matching typed error. The store itself never enters an error state;
it stays READY with its last consistent snapshot.
"""
import sqlite3
from dataclasses import replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type

from src.application.events.event_bus import EventBus
from src.application.events.events import (
    DomainEvent,
    ScenesLoaded,
    SceneAppended,
    ScenesReordered,
    SceneUpdated,
    SceneDeleted,
    SceneOperationFailed,
)
from src.features.projects.domain.project_repository import ProjectRepository
from src.features.scenes.application.ordering import (
    array_move,
    changed_positions,
    is_dense,
    next_position,
    renumber,
)
from src.features.scenes.domain.scene import Scene, SceneDraft
from src.features.scenes.domain.scene_repository import SceneRepository
from src.shared.application.reconciliation import CommitOutcome, Reconciler, Snapshot
from src.shared.application.services.session_service import SessionService
from src.shared.domain.errors import (
    AccessDeniedError,
    CreateError,
    DeleteError,
    FetchError,
    ReorderError,
    SceneStoreError,
    UpdateError,
)
from src.shared.infrastructure.persistence.base_repository import RepositoryError
from src.utils.message import Log

# Failures raised by record store implementations
STORE_ERRORS = (RepositoryError, sqlite3.Error)

_OPERATION_ERRORS: Dict[str, Type[SceneStoreError]] = {
    "load": FetchError,
    "append": CreateError,
    "reorder": ReorderError,
    "compact": ReorderError,
    "update": UpdateError,
    "delete": DeleteError,
}


class StoreStatus(Enum):
    UNLOADED = auto()
    LOADING = auto()
    READY = auto()


class OrderedSceneStore:
    """
    Canonical scene order for one loaded project.

    Usage:
        store = OrderedSceneStore(scene_repo, project_repo, session, event_bus)
        store.load(project_id)
        store.append(project_id)
        store.reorder(0, 2)
    """

    def __init__(
        self,
        repository: SceneRepository,
        project_repository: Optional[ProjectRepository] = None,
        session: Optional[SessionService] = None,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Args:
            repository: Record store for scenes
            project_repository: Used with session to check project ownership;
                ownership is not checked when either is None
            session: Current identity provider
            event_bus: Receives confirmed changes and failures
        """
        self._repository = repository
        self._projects = project_repository
        self._session = session
        self._event_bus = event_bus
        self._reconciler: Reconciler[Scene] = Reconciler("SceneStore")
        self._status = StoreStatus.UNLOADED
        self._project_id: Optional[str] = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def status(self) -> StoreStatus:
        return self._status

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def scenes(self) -> List[Scene]:
        """Scenes in display order, including an unconfirmed reorder."""
        return list(self._reconciler.local)

    @property
    def confirmed_scenes(self) -> List[Scene]:
        """Scenes as last acknowledged by the record store."""
        return list(self._reconciler.confirmed)

    def __len__(self) -> int:
        return len(self._reconciler.local)

    def get(self, scene_id: str) -> Optional[Scene]:
        for scene in self._reconciler.local:
            if scene.id == scene_id:
                return scene
        return None

    def index_of(self, scene_id: str) -> Optional[int]:
        for index, scene in enumerate(self._reconciler.local):
            if scene.id == scene_id:
                return index
        return None

    # =========================================================================
    # Operations
    # =========================================================================

    def load(self, project_id: str) -> List[Scene]:
        """
        Fetch the project's scenes ordered by position and replace local state.

        Raises:
            FetchError: If the record store failed; prior state is kept
            AccessDeniedError: If the current identity does not own the project
        """
        if not project_id:
            raise FetchError("Project ID is required")

        previous_status = self._status
        self._status = StoreStatus.LOADING
        try:
            self._check_access(project_id, "load")
            try:
                scenes = self._repository.list_by_project(project_id)
            except STORE_ERRORS as e:
                raise self._failure("load", f"Failed to load scenes of project {project_id}", e,
                                    project_id=project_id) from e
        except Exception:
            self._status = previous_status
            raise

        ordered = sorted(scenes, key=lambda scene: scene.position)
        self._reconciler.reset(ordered)
        self._project_id = project_id
        self._status = StoreStatus.READY

        if not is_dense(ordered):
            Log.warning(f"SceneStore: Project {project_id} has gaps in scene positions")
        Log.info(f"SceneStore: Loaded {len(ordered)} scene(s) for project {project_id}")
        self._publish(ScenesLoaded(project_id=project_id, data={"count": len(ordered)}))
        return self.scenes

    def append(self, project_id: Optional[str] = None, defaults: Optional[Dict[str, Any]] = None) -> Scene:
        """
        Create a scene at the end of the sequence.

        Nothing is inserted locally until the record store returned the new
        row with its generated id.

        Args:
            project_id: Must be the loaded project (defaults to it)
            defaults: Overrides for title, description, comments, still_url

        Raises:
            CreateError: On invalid input or record store failure
        """
        self._require_ready("append")
        project_id = project_id or self._project_id
        if project_id != self._project_id:
            raise CreateError(f"Project {project_id} is not the loaded project", project_id=project_id)
        self._check_access(project_id, "append")

        with self._reconciler.exclusive():
            position = next_position(self._reconciler.local)
            try:
                draft = SceneDraft.default_for(project_id, position, **(defaults or {}))
            except ValueError as e:
                raise CreateError(str(e), project_id=project_id) from e

            try:
                created = self._repository.create(draft)
            except STORE_ERRORS as e:
                raise self._failure("append", "Failed to create scene", e) from e

            self._reconciler.apply_confirmed(lambda scenes: list(scenes) + [created])

        Log.info(f"SceneStore: Appended '{created.title}' at position {created.position}")
        self._publish(SceneAppended(
            project_id=project_id,
            data={"scene_id": created.id, "position": created.position},
        ))
        return created

    def reorder(self, from_index: int, to_index: int) -> List[Scene]:
        """
        Move the scene at from_index to to_index and renumber every position.

        The new order is applied locally before the write. Dropping a scene
        on its own index is detected and writes nothing.

        Returns:
            Scenes in their new order

        Raises:
            ReorderError: On out-of-range indices, or when the batched write
                failed (local order is then restored to what it was right
                before this call)
        """
        self._require_ready("reorder")
        self._check_access(self._project_id, "reorder")

        count = len(self._reconciler.local)
        if not (0 <= from_index < count and 0 <= to_index < count):
            raise ReorderError(
                f"Cannot move index {from_index} to {to_index} with {count} scene(s)",
                project_id=self._project_id,
            )
        if from_index == to_index:
            Log.debug(f"SceneStore: Scene at index {from_index} dropped on itself, nothing to write")
            return self.scenes

        snapshot = self._reconciler.apply(
            lambda scenes: renumber(array_move(scenes, from_index, to_index))
        )
        Log.debug(f"SceneStore: Moved index {from_index} -> {to_index} (change {snapshot.token})")
        return self._commit_positions(snapshot, "reorder")

    def move_scene(self, scene_id: str, target_scene_id: str) -> List[Scene]:
        """
        Move a scene onto the slot of another scene (drag-and-drop form).

        Raises:
            ReorderError: If either scene is not in the loaded project
        """
        self._require_ready("reorder")
        from_index = self.index_of(scene_id)
        to_index = self.index_of(target_scene_id)
        if from_index is None or to_index is None:
            missing = scene_id if from_index is None else target_scene_id
            raise ReorderError(f"Scene {missing} is not in the loaded project", project_id=self._project_id)
        return self.reorder(from_index, to_index)

    def update(self, scene: Scene) -> Scene:
        """
        Write the editable fields of a scene.

        The canonical row returned by the record store replaces the local
        entry; the scene keeps its current place in the order.

        Raises:
            UpdateError: If the scene is unknown or the write failed
        """
        self._require_ready("update")
        if scene.project_id != self._project_id or self.get(scene.id) is None:
            raise UpdateError(f"Scene {scene.id} is not in the loaded project", project_id=self._project_id)
        self._check_access(self._project_id, "update")

        with self._reconciler.exclusive():
            try:
                canonical = self._repository.update(scene)
            except STORE_ERRORS as e:
                raise self._failure("update", f"Failed to update scene {scene.id}", e) from e

            self._reconciler.apply_confirmed(
                lambda scenes: [
                    replace(canonical, position=s.position) if s.id == canonical.id else s
                    for s in scenes
                ]
            )

        Log.info(f"SceneStore: Updated '{canonical.title}'")
        self._publish(SceneUpdated(project_id=self._project_id, data={"scene_id": canonical.id}))
        return self.get(canonical.id)

    def delete(self, scene_id: str) -> None:
        """
        Delete a scene remotely, then locally.

        Positions of the remaining scenes are left as they are; call
        compact() to close the gap.

        Raises:
            DeleteError: If the scene is unknown or the delete failed
        """
        self._require_ready("delete")
        if self.get(scene_id) is None:
            raise DeleteError(f"Scene {scene_id} is not in the loaded project", project_id=self._project_id)
        self._check_access(self._project_id, "delete")

        with self._reconciler.exclusive():
            try:
                self._repository.delete(scene_id)
            except STORE_ERRORS as e:
                raise self._failure("delete", f"Failed to delete scene {scene_id}", e) from e

            self._reconciler.apply_confirmed(lambda scenes: [s for s in scenes if s.id != scene_id])

        Log.info(f"SceneStore: Deleted scene {scene_id}")
        self._publish(SceneDeleted(project_id=self._project_id, data={"scene_id": scene_id}))

    def compact(self) -> List[Scene]:
        """
        Renumber positions to 0..N-1 in the current order.

        Writes nothing when positions are already dense.

        Raises:
            ReorderError: If the batched write failed
        """
        self._require_ready("compact")
        if is_dense(self._reconciler.local):
            return self.scenes
        self._check_access(self._project_id, "compact")

        snapshot = self._reconciler.apply(renumber)
        return self._commit_positions(snapshot, "compact")

    # =========================================================================
    # Internals
    # =========================================================================

    def _commit_positions(self, snapshot: Snapshot[Scene], operation: str) -> List[Scene]:
        written: List[int] = []
        try:
            outcome = self._reconciler.commit(
                snapshot, lambda confirmed, target: written.append(self._write_positions(confirmed, target))
            )
        except STORE_ERRORS as e:
            raise self._failure(operation, "Failed to write scene positions", e) from e

        if outcome is CommitOutcome.DISCARDED:
            raise ReorderError(
                "Move was undone when an overlapping move failed to write",
                project_id=self._project_id,
            )
        if outcome is CommitOutcome.CONFIRMED:
            self._publish(ScenesReordered(
                project_id=self._project_id,
                data={
                    "order": [scene.id for scene in snapshot.after],
                    "changed": written[0],
                },
            ))
        return self.scenes

    def _write_positions(self, confirmed, target) -> int:
        """Write the changed (id, position) pairs and return how many there were."""
        pairs = changed_positions(confirmed, target)
        if not pairs:
            return 0
        self._repository.bulk_update_positions(self._project_id, pairs)
        Log.info(f"SceneStore: Wrote {len(pairs)} position(s) for project {self._project_id}")
        return len(pairs)

    def _require_ready(self, operation: str) -> None:
        if self._status is not StoreStatus.READY:
            raise _OPERATION_ERRORS[operation](f"Cannot {operation}: no project loaded")

    def _check_access(self, project_id: str, operation: str) -> None:
        if self._session is None or self._projects is None:
            return

        try:
            project = self._projects.get(project_id)
        except STORE_ERRORS as e:
            raise self._failure(operation, f"Failed to look up project {project_id}", e,
                                project_id=project_id) from e

        if project is None:
            raise _OPERATION_ERRORS[operation](f"Project {project_id} not found", project_id=project_id)

        user_id = self._session.current_user_id
        if not project.is_owned_by(user_id):
            Log.warning(f"SceneStore: Denied {operation} on project {project_id} for {user_id or 'anonymous'}")
            raise AccessDeniedError(project_id, user_id)

    def _failure(
        self,
        operation: str,
        message: str,
        cause: Exception,
        project_id: Optional[str] = None,
    ) -> SceneStoreError:
        project_id = project_id or self._project_id
        Log.error(f"SceneStore: {message}: {cause}")
        self._publish(SceneOperationFailed(
            project_id=project_id,
            data={"operation": operation, "error": str(cause)},
        ))
        return _OPERATION_ERRORS[operation](f"{message}: {cause}", project_id=project_id)

    def _publish(self, event: DomainEvent) -> None:
        if self._event_bus:
            self._event_bus.publish(event)
