import pytest

from hivegame.position import (
    Direction,
    DirectionMap,
    HiveError,
    Position,
    PositionOutOfBounds,
    RotationOutOfBounds,
)

U8_MAX = 255


def test_position_is_adjacent_0_0():
    a = Position(0, 0)
    assert a.is_adjacent(Position(0, 1))
    assert a.is_adjacent(Position(1, 0))
    assert not a.is_adjacent(Position(1, 1))
    assert not a.is_adjacent(Position(0, 2))
    assert not a.is_adjacent(Position(2, 0))
    assert not a.is_adjacent(Position(2, 2))


def test_position_is_adjacent_1_1():
    a = Position(1, 1)
    for p in [(0, 1), (0, 2), (1, 2), (2, 0), (2, 1), (1, 0)]:
        assert a.is_adjacent(Position(*p))
    assert not a.is_adjacent(Position(0, 0))
    assert not a.is_adjacent(Position(2, 2))


def test_position_is_adjacent_2_2():
    a = Position(2, 2)
    for p in [(1, 2), (1, 3), (2, 3), (2, 1), (3, 1), (3, 2)]:
        assert a.is_adjacent(Position(*p))
    assert not a.is_adjacent(Position(1, 1))
    assert not a.is_adjacent(Position(3, 3))


def test_neighbors_0_0():
    n = Position(0, 0).neighbors(U8_MAX)
    assert next(n) == (Direction.RIGHT, Position(0, 1))
    assert next(n) == (Direction.BOTTOM_RIGHT, Position(1, 0))
    assert next(n, None) is None


def test_neighbors_1_1():
    assert list(Position(1, 1).neighbors(U8_MAX)) == [
        (Direction.TOP_LEFT, Position(0, 1)),
        (Direction.TOP_RIGHT, Position(0, 2)),
        (Direction.RIGHT, Position(1, 2)),
        (Direction.BOTTOM_RIGHT, Position(2, 1)),
        (Direction.BOTTOM_LEFT, Position(2, 0)),
        (Direction.LEFT, Position(1, 0)),
    ]


def test_neighbors_2_3():
    assert list(Position(2, 3).neighbors(U8_MAX)) == [
        (Direction.TOP_LEFT, Position(1, 3)),
        (Direction.TOP_RIGHT, Position(1, 4)),
        (Direction.RIGHT, Position(2, 4)),
        (Direction.BOTTOM_RIGHT, Position(3, 3)),
        (Direction.BOTTOM_LEFT, Position(3, 2)),
        (Direction.LEFT, Position(2, 2)),
    ]


def test_neighbors_are_adjacent_and_match_neighbor():
    center = Position(5, 7)
    for direction, pos in center.neighbors(26):
        assert center.is_adjacent(pos)
        assert center.neighbor(direction, 26) == pos


def test_neighbors_at_far_corner():
    result = list(Position(25, 25).neighbors(26))
    assert result == [
        (Direction.TOP_LEFT, Position(24, 25)),
        (Direction.LEFT, Position(25, 24)),
    ]


def test_neighbor_off_board():
    assert Position(0, 0).neighbor(Direction.TOP_LEFT, 26) is None
    assert Position(0, 0).neighbor(Direction.LEFT, 26) is None
    assert Position(0, 5).neighbor(Direction.TOP_RIGHT, 26) is None
    assert Position(25, 5).neighbor(Direction.BOTTOM_RIGHT, 26) is None
    assert Position(5, 25).neighbor(Direction.RIGHT, 26) is None
    assert Position(5, 0).neighbor(Direction.BOTTOM_LEFT, 26) is None


def test_neighbor_values():
    p = Position(3, 3)
    assert p.neighbor(Direction.TOP_RIGHT, 26) == Position(2, 4)
    assert p.neighbor(Direction.RIGHT, 26) == Position(3, 4)
    assert p.neighbor(Direction.BOTTOM_RIGHT, 26) == Position(4, 3)
    assert p.neighbor(Direction.BOTTOM_LEFT, 26) == Position(4, 2)
    assert p.neighbor(Direction.LEFT, 26) == Position(3, 2)
    assert p.neighbor(Direction.TOP_LEFT, 26) == Position(2, 3)


def test_direction_rotation():
    assert Direction.TOP_LEFT.rotate_clockwise() is Direction.TOP_RIGHT
    assert Direction.TOP_RIGHT.rotate_counter_clockwise() is Direction.TOP_LEFT
    for d in Direction:
        assert d.rotate_clockwise().rotate_counter_clockwise() is d
        r = d
        for _ in range(6):
            r = r.rotate_clockwise()
        assert r is d


def test_direction_map():
    m = DirectionMap()
    assert m.get(Direction.LEFT) is None
    assert not m.contains_key(Direction.LEFT)
    m.set(Direction.LEFT, 7)
    assert m.get(Direction.LEFT) == 7
    assert m.contains_key(Direction.LEFT)
    assert not m.contains_key(Direction.RIGHT)


def test_cube_coords():
    assert Position(3, 5).to_cube_coords() == (3, 5, -8)


def test_rotate_around_center():
    center = Position(16, 16)
    assert center.rotate_clockwise_around_center(center, 26) == center
    assert Position(16, 17).rotate_clockwise_around_center(center, 26) == Position(15, 17)


def test_six_rotations_return_home():
    center = Position(12, 12)
    start = Position(14, 11)
    p = start
    for _ in range(6):
        p = p.rotate_clockwise_around_center(center, 26)
    assert p == start


def test_rotation_out_of_bounds():
    with pytest.raises(RotationOutOfBounds):
        Position(0, 1).rotate_clockwise_around_center(Position(0, 0), 26)
    with pytest.raises(PositionOutOfBounds):
        Position(0, 0).rotate_clockwise_around_center(Position(1, 0), 26)
    with pytest.raises(HiveError):
        Position(0, 1).rotate_clockwise_around_center(Position(0, 0), 26)


def test_display_and_order():
    assert str(Position(3, 4)) == "(3, 4)"
    assert Position(1, 9) < Position(2, 0)
    assert tuple(Position(4, 5)) == (4, 5)
    assert Position() == Position(0, 0)