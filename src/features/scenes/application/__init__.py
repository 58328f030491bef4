"""
Application layer for scenes feature.
"""
from src.features.scenes.application.scene_store import OrderedSceneStore, StoreStatus
from src.features.scenes.application.ordering import (
    array_move,
    renumber,
    changed_positions,
    is_dense,
    next_position,
)

__all__ = [
    'OrderedSceneStore',
    'StoreStatus',
    'array_move',
    'renumber',
    'changed_positions',
    'is_dense',
    'next_position',
]
