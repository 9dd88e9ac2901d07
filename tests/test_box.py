import pytest

from voronoi_terrain.box import Box, Intersection, Side
from voronoi_terrain.vector2 import Vector2


@pytest.fixture
def box():
    return Box(0.0, 0.0, 1.0, 1.0)


def test_side_order(box):
    assert list(Side) == [Side.LEFT, Side.BOTTOM, Side.RIGHT, Side.TOP]
    centre = Vector2(0.5, 0.5)
    values = [
        box.first_intersection(centre, direction).side.value
        for direction in (
            Vector2(-1.0, 0.0),
            Vector2(0.0, -1.0),
            Vector2(1.0, 0.0),
            Vector2(0.0, 1.0),
        )
    ]
    assert values == [0, 1, 2, 3]


def test_contains(box):
    assert box.contains(Vector2(0.5, 0.5))
    assert box.contains(Vector2(0.0, 1.0))
    assert not box.contains(Vector2(-0.1, 0.5))
    assert not box.contains(Vector2(0.5, 1.1))


@pytest.mark.parametrize(
    "direction, side, point",
    [
        (Vector2(1.0, 0.0), Side.RIGHT, Vector2(1.0, 0.5)),
        (Vector2(-1.0, 0.0), Side.LEFT, Vector2(0.0, 0.5)),
        (Vector2(0.0, 1.0), Side.TOP, Vector2(0.5, 1.0)),
        (Vector2(0.0, -1.0), Side.BOTTOM, Vector2(0.5, 0.0)),
    ],
)
def test_first_intersection_axis_directions(box, direction, side, point):
    result = box.first_intersection(Vector2(0.5, 0.5), direction)
    assert result.side == side
    assert result.point == point


def test_first_intersection_diagonal_hits_nearer_side(box):
    result = box.first_intersection(Vector2(0.5, 0.5), Vector2(1.0, 0.25))
    assert result.side == Side.RIGHT
    assert result.point.x == 1.0
    assert box.contains(result.point)


def test_first_intersection_zero_direction_is_default(box):
    assert box.first_intersection(Vector2(0.5, 0.5), Vector2()) == Intersection()


def test_segment_inside_has_no_intersections(box):
    assert box.intersections(Vector2(0.2, 0.2), Vector2(0.8, 0.8)) == []


def test_segment_leaving_through_right(box):
    result = box.intersections(Vector2(0.5, 0.5), Vector2(1.5, 0.5))
    assert len(result) == 1
    assert result[0].side == Side.RIGHT
    assert result[0].point == Vector2(1.0, 0.5)


def test_segment_crossing_twice_sorted_nearest_first(box):
    result = box.intersections(Vector2(1.5, 0.5), Vector2(-0.5, 0.5))
    assert [i.side for i in result] == [Side.RIGHT, Side.LEFT]
    assert result[0].point == Vector2(1.0, 0.5)
    assert result[1].point == Vector2(0.0, 0.5)


def test_segment_crossing_twice_other_direction(box):
    result = box.intersections(Vector2(0.5, -0.5), Vector2(0.5, 1.5))
    assert [i.side for i in result] == [Side.BOTTOM, Side.TOP]
    assert result[0].point == Vector2(0.5, 0.0)
    assert result[1].point == Vector2(0.5, 1.0)


def test_segment_outside_misses(box):
    assert box.intersections(Vector2(-1.0, 2.0), Vector2(2.0, 2.0)) == []


def test_vertical_segment_left_of_box(box):
    assert box.intersections(Vector2(-1.0, 0.0), Vector2(-1.0, 1.0)) == []