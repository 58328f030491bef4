"""
Shared infrastructure persistence implementations.
"""
from src.shared.infrastructure.persistence.base_repository import (
    BaseRepository,
    RepositoryError,
    EntityNotFoundError,
)

__all__ = [
    'BaseRepository',
    'RepositoryError',
    'EntityNotFoundError',
]
