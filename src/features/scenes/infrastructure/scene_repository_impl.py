"""
SQLite implementation of SceneRepository
"""
import uuid
from datetime import datetime
from typing import List, Dict, Any, Sequence, Tuple

from src.features.scenes.domain.scene import Scene, SceneDraft
from src.features.scenes.domain.scene_repository import SceneRepository
from src.shared.infrastructure.persistence.base_repository import (
    BaseRepository,
    EntityNotFoundError,
)
from src.utils.message import Log


class SQLiteSceneRepository(BaseRepository[Scene], SceneRepository):
    """SQLite implementation of SceneRepository"""

    entity_name = "Scene"
    table_name = "scenes"

    def _row_to_entity(self, row) -> Scene:
        return Scene(
            id=row["id"],
            project_id=row["project_id"],
            title=row["title"],
            description=row["description"] or "",
            comments=row["comments"] or "",
            still_url=row["still_url"],
            position=row["position"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def _entity_to_row(self, entity: Scene) -> Dict[str, Any]:
        return {
            "id": entity.id,
            "project_id": entity.project_id,
            "title": entity.title,
            "description": entity.description,
            "comments": entity.comments,
            "still_url": entity.still_url,
            "position": entity.position,
            "created_at": entity.created_at.isoformat(),
            "updated_at": entity.updated_at.isoformat(),
        }

    def list_by_project(self, project_id: str) -> List[Scene]:
        return self.select_where("project_id = ?", (project_id,), order_by="position ASC, created_at ASC")

    def create(self, draft: SceneDraft) -> Scene:
        now = datetime.utcnow()
        scene = Scene(
            id=str(uuid.uuid4()),
            project_id=draft.project_id,
            title=draft.title,
            description=draft.description,
            comments=draft.comments,
            still_url=draft.still_url,
            position=draft.position,
            created_at=now,
            updated_at=now,
        )
        return self.insert(scene)

    def update(self, scene: Scene) -> Scene:
        existing = self.require_exists(scene.id)

        changes = [
            name for name in ("title", "description", "comments", "still_url")
            if getattr(existing, name) != getattr(scene, name)
        ]
        columns = ["title", "description", "comments", "still_url", "updated_at"]
        updated_at = datetime.utcnow()
        with self._guard("update"), self.db.transaction() as conn:
            conn.execute(
                self._build_update_sql(columns),
                (scene.title, scene.description, scene.comments, scene.still_url,
                 updated_at.isoformat(), scene.id)
            )

        self._log_update(scene, changes)
        return self.require_exists(scene.id)

    def delete(self, scene_id: str) -> None:
        self.delete_by_id(scene_id)

    def bulk_update_positions(self, project_id: str, positions: Sequence[Tuple[str, int]]) -> List[Scene]:
        if not positions:
            return []

        updated_at = datetime.utcnow().isoformat()
        sql = self._build_update_sql(["position", "updated_at"]) + " AND project_id = ?"
        with self._guard("reorder"), self.db.transaction() as conn:
            for scene_id, position in positions:
                cursor = conn.execute(sql, (position, updated_at, scene_id, project_id))
                if cursor.rowcount == 0:
                    # Raising inside the transaction rolls back every pair already written
                    raise EntityNotFoundError(self.entity_name, scene_id, f"project {project_id}")

        Log.info(f"Repositioned {len(positions)} scene(s) in project {project_id}")
        ids = [scene_id for scene_id, _ in positions]
        placeholders = ", ".join(["?"] * len(ids))
        return self.select_where(
            f"project_id = ? AND id IN ({placeholders})",
            (project_id, *ids),
            order_by="position ASC",
        )
