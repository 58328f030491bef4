"""
SQLite implementation of KeyframeRepository
"""
from datetime import datetime
from typing import List, Dict, Any

from src.features.keyframes.domain.keyframe import Keyframe
from src.features.keyframes.domain.keyframe_repository import KeyframeRepository
from src.shared.infrastructure.persistence.base_repository import BaseRepository
from src.utils.message import Log


class SQLiteKeyframeRepository(BaseRepository[Keyframe], KeyframeRepository):
    """SQLite implementation of KeyframeRepository"""

    entity_name = "Keyframe"
    table_name = "keyframes"

    def _row_to_entity(self, row) -> Keyframe:
        return Keyframe(
            id=row["id"],
            project_id=row["project_id"],
            scene_id=row["scene_id"],
            name=row["name"],
            color=row["color"],
            timestamp=row["timestamp"],
            sequence=row["sequence"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def _entity_to_row(self, entity: Keyframe) -> Dict[str, Any]:
        return {
            "id": entity.id,
            "project_id": entity.project_id,
            "scene_id": entity.scene_id,
            "name": entity.name,
            "color": entity.color,
            "timestamp": entity.timestamp,
            "sequence": entity.sequence,
            "created_at": entity.created_at.isoformat(),
        }

    def list_by_project(self, project_id: str) -> List[Keyframe]:
        return self.select_where("project_id = ?", (project_id,), order_by="sequence ASC")

    def create(self, keyframe: Keyframe) -> Keyframe:
        if not keyframe.project_id:
            raise ValueError("Keyframe must belong to a project to be stored")
        return self.insert(keyframe)

    def delete_by_project(self, project_id: str) -> int:
        return self._delete_where("project_id = ?", (project_id,))

    def delete_by_scene(self, scene_id: str) -> int:
        return self._delete_where("scene_id = ?", (scene_id,))

    def _delete_where(self, where: str, params: tuple) -> int:
        with self._guard("delete"), self.db.transaction() as conn:
            cursor = conn.execute(f"DELETE FROM {self.table_name} WHERE {where}", params)
            deleted = cursor.rowcount
        Log.info(f"Deleted {deleted} {self.entity_name}(s) where {where.replace(' = ?', '')} = {params[0]}")
        return deleted
