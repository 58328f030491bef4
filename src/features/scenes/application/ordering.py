"""
Scene ordering helpers.

Pure functions over scene sequences: array-move, dense renumbering and the
diff of positions that has to be written back.
"""
from typing import Dict, List, Sequence, Tuple

from src.features.scenes.domain.scene import Scene


def array_move(items: Sequence, from_index: int, to_index: int) -> List:
    """
    Remove the element at from_index and reinsert it at to_index.

    Elements in between shift by one towards the vacated slot.

    Raises:
        IndexError: If either index is outside the sequence
    """
    count = len(items)
    if not 0 <= from_index < count:
        raise IndexError(f"from_index {from_index} out of range for {count} item(s)")
    if not 0 <= to_index < count:
        raise IndexError(f"to_index {to_index} out of range for {count} item(s)")

    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def renumber(scenes: Sequence[Scene]) -> List[Scene]:
    """Give every scene the position equal to its index."""
    return [
        scene if scene.position == index else scene.with_position(index)
        for index, scene in enumerate(scenes)
    ]


def changed_positions(confirmed: Sequence[Scene], target: Sequence[Scene]) -> List[Tuple[str, int]]:
    """
    (scene_id, position) pairs of target that differ from confirmed.

    Scenes absent from confirmed are always included.
    """
    known: Dict[str, int] = {scene.id: scene.position for scene in confirmed}
    return [
        (scene.id, scene.position)
        for scene in target
        if known.get(scene.id) != scene.position
    ]


def is_dense(scenes: Sequence[Scene]) -> bool:
    """True when positions are exactly 0..N-1."""
    return sorted(scene.position for scene in scenes) == list(range(len(scenes)))


def next_position(scenes: Sequence[Scene]) -> int:
    """
    Position for an appended scene.

    The current count, or one past the highest position when deletions have
    left gaps, so an append never collides with an existing position.
    """
    if not scenes:
        return 0
    return max(len(scenes), max(scene.position for scene in scenes) + 1)
