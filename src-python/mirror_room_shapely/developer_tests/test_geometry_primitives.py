"""
===============================================================================
GEOMETRY PRIMITIVES - Feature Verification
===============================================================================

Tests the building blocks shared by the image generator and the ray path
reconstructor:

1. Point coercion and RoomGeometry (walls, containment, clamping)
2. Point / vector / room-origin reflection, including involution
3. MirrorConfig parsing and the room flag transform
4. Finite-wall mirror crossing detection

Run with:
    python -m mirror_room_shapely.developer_tests.test_geometry_primitives

Or with pytest:
    pytest src-python/mirror_room_shapely/developer_tests -v
===============================================================================
"""

import sys
from itertools import product
from pathlib import Path

import numpy as np

# Add the src-python directory to the path
src_path = Path(__file__).resolve().parents[2]
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from shapely.geometry import Point as ShapelyPoint

from mirror_room_shapely.core.constants import MIRROR_SIDES
from mirror_room_shapely.core.exceptions import InvalidConfigurationError
from mirror_room_shapely.core.geometry import Point, RoomGeometry, geometry, to_point
from mirror_room_shapely.core.mirror_config import MirrorConfig
from mirror_room_shapely.core.virtual_image import reflect_across_mirror
from mirror_room_shapely.core.crossings import find_mirror_crossing, find_all_mirror_crossings


TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def assert_point_close(actual, expected, tol=TOLERANCE, msg=""):
    expected = to_point(expected)
    assert_close(actual.x, expected.x, tol, f"{msg} x")
    assert_close(actual.y, expected.y, tol, f"{msg} y")


# =============================================================================
# POINTS AND ROOM
# =============================================================================

def test_to_point_accepts_common_shapes():
    print("\nTest: to_point coercion")
    assert to_point((1, 2)) == Point(1, 2)
    assert to_point([1, 2]) == Point(1, 2)
    assert to_point({'x': 1, 'y': 2}) == Point(1, 2)
    assert to_point(ShapelyPoint(1, 2)) == Point(1.0, 2.0)
    assert to_point(np.array([1.0, 2.0])) == Point(1.0, 2.0)
    assert type(to_point(np.array([1.0, 2.0])).x) is float

    original = Point(3, 4)
    copied = to_point(original)
    assert copied == original and copied is not original

    for bad in ("abc", (1, 2, 3), {'x': 1}, None, np.zeros(3)):
        try:
            to_point(bad)
            raise AssertionError(f"Should have rejected {bad!r}")
        except InvalidConfigurationError:
            pass
    print("  PASS")


def test_invalid_configuration_is_a_value_error():
    try:
        to_point("nope")
        raise AssertionError("Should have raised")
    except ValueError as e:
        assert "point" in str(e)


def test_room_walls_and_containment():
    print("\nTest: RoomGeometry walls")
    room = RoomGeometry()
    assert (room.width, room.height) == (200, 200)
    assert room.wall_coordinate('top') == 0
    assert room.wall_coordinate('right') == 200
    assert room.wall_coordinate('bottom') == 200
    assert room.wall_coordinate('left') == 0
    # Walls of a room translated to another origin
    assert room.wall_coordinate('bottom', (0, -200)) == 0
    assert room.wall_coordinate('right', (200, 0)) == 400

    right = room.wall_segment('right')
    assert list(right.coords) == [(200.0, 0.0), (200.0, 200.0)]
    assert_close(right.length, 200.0)
    assert room.wall_length('top') == 200

    assert room.contains((0, 0))
    assert room.contains((100, 75))
    assert not room.contains((201, 5))
    assert_close(room.polygon((-200, 0)).area, 40000.0)

    assert room.clamp((5, 500), padding=20) == Point(20, 180)
    assert room.clamp((100, 100), padding=20) == Point(100, 100)
    print("  PASS")


def test_room_rejects_non_positive_size():
    try:
        RoomGeometry(0, 200)
        raise AssertionError("Should have raised")
    except InvalidConfigurationError:
        pass


def test_non_square_room():
    room = RoomGeometry(300, 100)
    assert geometry.reflect_point((50, 40), 'right', room) == Point(550, 40)
    assert geometry.reflect_point((50, 40), 'bottom', room) == Point(50, 160)


# =============================================================================
# REFLECTION
# =============================================================================

def test_reflect_point_per_side():
    print("\nTest: reflect_point")
    p = Point(100, 75)
    assert geometry.reflect_point(p, 'top') == Point(100, -75)
    assert geometry.reflect_point(p, 'bottom') == Point(100, 325)
    assert geometry.reflect_point(p, 'left') == Point(-100, 75)
    assert geometry.reflect_point(p, 'right') == Point(300, 75)
    # Input is untouched
    assert p == Point(100, 75)
    print("  PASS")


def test_reflection_is_involutive():
    print("\nTest: reflection involution")
    for side in MIRROR_SIDES:
        p = Point(37.5, 120.25)
        twice = geometry.reflect_point(geometry.reflect_point(p, side), side)
        assert_point_close(twice, p, msg=side)

        once = reflect_across_mirror(p, 'triangle', side, 1)
        back = reflect_across_mirror(
            once.position, 'triangle', side, 2,
            base_flips=(once.flipped_x, once.flipped_y),
            parent_sequence=once.mirror_sequence,
        )
        assert_point_close(back.position, p, msg=side)
        assert back.flipped_x is False and back.flipped_y is False, side
        assert back.mirror_sequence == (side, side)
    print("  PASS")


def test_reflect_across_mirror_flips():
    image = reflect_across_mirror((100, 75), 'triangle', 'top', 1)
    assert image.position == Point(100, -75)
    assert image.flipped_y is True and image.flipped_x is False
    assert image.id == 'triangle-d1-top'
    assert_close(image.opacity, 0.7)

    image = reflect_across_mirror((100, 75), 'viewer', 'right', 1)
    assert image.flipped_x is True and image.flipped_y is False
    assert image.label == 'viewer via right'


def test_reflect_across_mirror_rejects_unknown_inputs():
    for args in (((0, 0), 'lamp', 'top', 1), ((0, 0), 'triangle', 'front', 1)):
        try:
            reflect_across_mirror(*args)
            raise AssertionError(f"Should have rejected {args}")
        except InvalidConfigurationError:
            pass


def test_reflect_vector():
    assert geometry.reflect_vector((3, 4), 'top') == Point(3, -4)
    assert geometry.reflect_vector((3, 4), 'bottom') == Point(3, -4)
    assert geometry.reflect_vector((3, 4), 'left') == Point(-3, 4)
    assert geometry.reflect_vector((3, 4), 'right') == Point(-3, 4)


def test_reflect_room_origin():
    print("\nTest: room origin reflection")
    assert geometry.reflect_room_origin((0, 0), 'top') == Point(0, -200)
    assert geometry.reflect_room_origin((0, 0), 'right') == Point(200, 0)
    assert geometry.reflect_room_origin((0, 0), 'bottom') == Point(0, 200)
    assert geometry.reflect_room_origin((0, 0), 'left') == Point(-200, 0)
    # The room above, reflected across the bottom wall, lands two rooms below
    assert geometry.reflect_room_origin((0, -200), 'bottom') == Point(0, 400)
    for side in MIRROR_SIDES:
        origin = Point(-200, 400)
        twice = geometry.reflect_room_origin(geometry.reflect_room_origin(origin, side), side)
        assert twice == origin, side
    print("  PASS")


def test_path_length_and_linestring():
    path = [(0, 0), (3, 4), (3, 10)]
    assert_close(geometry.path_length(path), 11.0)
    assert_close(geometry.path_length([(1, 1)]), 0.0)
    line = geometry.ray_path_linestring(path)
    assert_close(line.length, 11.0)


# =============================================================================
# MIRROR CONFIG
# =============================================================================

def test_mirror_config_parsing():
    print("\nTest: MirrorConfig parsing")
    config = MirrorConfig.from_value([True, False, False, True])
    assert config.active_sides() == ('top', 'left')
    assert config.count == 2
    assert config.to_list() == [True, False, False, True]
    assert config.to_dict() == {'top': True, 'right': False, 'bottom': False, 'left': True}

    assert MirrorConfig.from_value({'right': True}) == MirrorConfig(right=True)
    assert MirrorConfig.from_sides('bottom', 'top') == MirrorConfig(top=True, bottom=True)
    assert MirrorConfig.from_value(config) is config

    from_numpy = MirrorConfig.from_value(np.array([True, False, False, True]))
    assert from_numpy == config
    assert all(type(flag) is bool for flag in from_numpy.to_list())
    assert type(MirrorConfig(np.bool_(True)).top) is bool

    for bad in ([True, False, False], [True] * 5, [1, 0, 0, 0], {'front': True}, "tblr"):
        try:
            MirrorConfig.from_value(bad)
            raise AssertionError(f"Should have rejected {bad!r}")
        except InvalidConfigurationError:
            pass
    print("  PASS")


def test_mirror_config_edits():
    config = MirrorConfig()
    assert config.count == 0
    config = config.with_mirror('right', True).toggled('top')
    assert config.active_sides() == ('top', 'right')
    assert config.toggled('top').active_sides() == ('right',)
    assert config.is_active('right') and not config.is_active('left')


def test_room_flag_transform():
    print("\nTest: room flag transform")
    config = MirrorConfig(top=True, right=False, bottom=False, left=True)
    assert config.reflected('top') == MirrorConfig(top=False, right=False, bottom=True, left=True)
    assert config.reflected('bottom') == config.reflected('top')
    assert config.reflected('left') == MirrorConfig(top=True, right=True, bottom=False, left=False)

    for flags in product([False, True], repeat=4):
        config = MirrorConfig(*flags)
        for side in MIRROR_SIDES:
            assert config.reflected(side).reflected(side) == config, (flags, side)
    print("  PASS")


# =============================================================================
# CROSSINGS
# =============================================================================

def test_crossing_basic():
    print("\nTest: find_mirror_crossing")
    crossing = find_mirror_crossing((100, -75), (100, 175), 'top')
    assert crossing is not None
    assert crossing.side == 'top'
    assert_close(crossing.t, 0.3)
    assert_point_close(crossing.point, (100, 0))
    print("  PASS")


def test_crossing_excludes_endpoints():
    # Segment ends on the wall
    assert find_mirror_crossing((100, 75), (100, 0), 'top') is None
    # Segment starts on the wall
    assert find_mirror_crossing((100, 0), (100, 100), 'top') is None
    # Segment does not reach the wall
    assert find_mirror_crossing((100, 75), (100, 10), 'top') is None


def test_crossing_parallel_segment():
    assert find_mirror_crossing((-50, 50), (250, 50), 'top') is None
    assert find_mirror_crossing((50, -50), (50, 250), 'left') is None


def test_crossing_is_limited_to_finite_wall():
    print("\nTest: finite walls")
    # The infinite line y=0 is crossed at x=-40, outside the wall
    assert find_mirror_crossing((-100, -75), (100, 175), 'top') is None
    crossing = find_mirror_crossing((-100, -75), (100, 175), 'left')
    assert crossing is not None
    assert_close(crossing.t, 0.5)
    assert_point_close(crossing.point, (0, 50))
    # Wall ends are inclusive
    crossing = find_mirror_crossing((-100, 100), (100, -100), 'left')
    assert crossing is not None
    assert_point_close(crossing.point, (0, 0))
    # Rounding just past a wall end is snapped back onto the wall
    crossing = find_mirror_crossing((-0.1, 0.3), (0.2, -0.6), 'left')
    assert crossing is not None
    assert 0 <= crossing.point.y < 1e-9
    # A real miss by a thousandth is still a miss
    assert find_mirror_crossing((-100, 99.999), (100, -100.001), 'left') is None
    print("  PASS")


def test_all_crossings_sorted_and_filtered():
    print("\nTest: find_all_mirror_crossings")
    both = MirrorConfig(right=True, left=True)
    crossings = find_all_mirror_crossings((-50, 100), (250, 100), both)
    assert [c.side for c in crossings] == ['left', 'right']
    assert crossings[0].t < crossings[1].t
    assert_point_close(crossings[0].point, (0, 100))
    assert_point_close(crossings[1].point, (200, 100))

    # Reversed segment reverses the order
    crossings = find_all_mirror_crossings((250, 100), (-50, 100), both)
    assert [c.side for c in crossings] == ['right', 'left']

    # Inactive walls are never reported
    assert [c.side for c in find_all_mirror_crossings((-50, 100), (250, 100), [False, True, False, False])] == ['right']
    assert find_all_mirror_crossings((-50, 100), (250, 100), MirrorConfig()) == []
    print("  PASS")


# =============================================================================
# RUNNER
# =============================================================================

def run_all_tests():
    tests = [
        ("to_point coercion", test_to_point_accepts_common_shapes),
        ("config error is ValueError", test_invalid_configuration_is_a_value_error),
        ("room walls", test_room_walls_and_containment),
        ("room size validation", test_room_rejects_non_positive_size),
        ("non-square room", test_non_square_room),
        ("reflect_point", test_reflect_point_per_side),
        ("reflection involution", test_reflection_is_involutive),
        ("reflect_across_mirror flips", test_reflect_across_mirror_flips),
        ("reflect_across_mirror validation", test_reflect_across_mirror_rejects_unknown_inputs),
        ("reflect_vector", test_reflect_vector),
        ("room origin reflection", test_reflect_room_origin),
        ("path length", test_path_length_and_linestring),
        ("MirrorConfig parsing", test_mirror_config_parsing),
        ("MirrorConfig edits", test_mirror_config_edits),
        ("room flag transform", test_room_flag_transform),
        ("crossing", test_crossing_basic),
        ("crossing endpoints", test_crossing_excludes_endpoints),
        ("crossing parallel", test_crossing_parallel_segment),
        ("crossing finite wall", test_crossing_is_limited_to_finite_wall),
        ("all crossings", test_all_crossings_sorted_and_filtered),
    ]

    passed = 0
    errors = []
    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)
    for name, error in errors:
        print(f"  - {name}: {error}")
    return not errors


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
