"""
SQLite implementation of ProjectRepository
"""
from datetime import datetime
from typing import Optional, List, Dict, Any

from src.features.projects.domain.project import Project
from src.features.projects.domain.project_repository import ProjectRepository
from src.shared.infrastructure.persistence.base_repository import BaseRepository


class SQLiteProjectRepository(BaseRepository[Project], ProjectRepository):
    """SQLite implementation of ProjectRepository"""

    entity_name = "Project"
    table_name = "projects"

    def _row_to_entity(self, row) -> Project:
        return Project(
            id=row["id"],
            name=row["name"],
            owner_id=row["owner_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def _entity_to_row(self, entity: Project) -> Dict[str, Any]:
        return {
            "id": entity.id,
            "name": entity.name,
            "owner_id": entity.owner_id,
            "created_at": entity.created_at.isoformat(),
        }

    def create(self, project: Project) -> Project:
        return self.insert(project)

    def get(self, project_id: str) -> Optional[Project]:
        return self.get_by_id(project_id)

    def list_by_owner(self, owner_id: str) -> List[Project]:
        return self.select_where("owner_id = ?", (owner_id,), order_by="created_at ASC")

    def delete(self, project_id: str) -> None:
        self.delete_by_id(project_id)
