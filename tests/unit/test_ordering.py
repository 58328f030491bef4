"""
Tests for the pure scene ordering helpers.
"""
import pytest

from src.features.scenes.application.ordering import (
    array_move,
    changed_positions,
    is_dense,
    next_position,
    renumber,
)
from src.features.scenes.domain.scene import Scene


def make_scenes(*positions):
    return [
        Scene(id=f"s{i}", project_id="p", title=f"S{i}", position=position)
        for i, position in enumerate(positions)
    ]


class TestArrayMove:
    def test_move_forward_shifts_intermediates_back(self):
        assert array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]

    def test_move_backward_shifts_intermediates_forward(self):
        assert array_move(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]

    def test_same_index_returns_copy(self):
        items = ["a", "b"]
        moved = array_move(items, 1, 1)
        assert moved == items
        assert moved is not items

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            array_move(["a"], 0, 1)
        with pytest.raises(IndexError):
            array_move([], 0, 0)


class TestRenumber:
    def test_positions_follow_index(self):
        scenes = renumber(make_scenes(4, 0, 9))
        assert [s.position for s in scenes] == [0, 1, 2]
        assert [s.id for s in scenes] == ["s0", "s1", "s2"]

    def test_unchanged_scenes_are_reused(self):
        original = make_scenes(0, 5)
        scenes = renumber(original)
        assert scenes[0] is original[0]
        assert scenes[1] is not original[1]


def test_changed_positions_only_reports_differences():
    confirmed = make_scenes(0, 1, 2)
    target = renumber([confirmed[1], confirmed[0], confirmed[2]])

    assert changed_positions(confirmed, target) == [("s1", 0), ("s0", 1)]


def test_changed_positions_includes_unknown_scenes():
    target = make_scenes(0)
    assert changed_positions([], target) == [("s0", 0)]


@pytest.mark.parametrize("positions,expected", [
    ((), True),
    ((0, 1, 2), True),
    ((2, 0, 1), True),
    ((0, 2), False),
    ((0, 0), False),
])
def test_is_dense(positions, expected):
    assert is_dense(make_scenes(*positions)) is expected


@pytest.mark.parametrize("positions,expected", [
    ((), 0),
    ((0, 1, 2), 3),
    ((0, 2), 3),
])
def test_next_position(positions, expected):
    assert next_position(make_scenes(*positions)) == expected
