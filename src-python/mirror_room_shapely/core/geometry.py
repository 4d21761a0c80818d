"""
Copyright 2026 mirror-room-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np
from shapely.geometry import Point as ShapelyPoint, LineString, Polygon, box

from .constants import (
    ROOM_WIDTH,
    ROOM_HEIGHT,
    MIRROR_SIDES,
    HORIZONTAL_SIDES,
)
from .exceptions import InvalidConfigurationError


class Point:
    """
    A point in 2D space.
    Can be converted to/from Shapely Point objects.
    Also used as a 2D vector by the reflection helpers.
    """
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    def copy(self) -> 'Point':
        return Point(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    # Mutable value type
    __hash__ = None

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


def to_point(value: Any) -> Point:
    """
    Coerce a caller-supplied position into a fresh Point.

    Accepts a Point, a Shapely Point, a dict with 'x' and 'y' keys, an
    (x, y) sequence or a numpy array of shape (2,). The result never
    aliases the input.

    Raises:
        InvalidConfigurationError: If the value cannot be read as a point.
    """
    if isinstance(value, Point):
        return value.copy()
    if isinstance(value, ShapelyPoint):
        return Point.from_shapely(value)
    if isinstance(value, dict):
        if 'x' in value and 'y' in value:
            return Point(value['x'], value['y'])
        raise InvalidConfigurationError(
            f"Point dict needs 'x' and 'y' keys, got {sorted(value.keys())}"
        )
    if isinstance(value, np.ndarray) and value.shape == (2,):
        return Point(float(value[0]), float(value[1]))
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Point(value[0], value[1])
    raise InvalidConfigurationError(f"Cannot interpret {value!r} as a point")


def validate_side(side: str) -> str:
    """Return side unchanged, or raise if it is not a mirror side."""
    if side not in MIRROR_SIDES:
        raise InvalidConfigurationError(
            f"Invalid mirror side '{side}'. "
            f"Valid options: {MIRROR_SIDES}"
        )
    return side


@dataclass(frozen=True)
class RoomGeometry:
    """
    The axis-aligned rectangular room.

    The real room has its origin at (0, 0) and walls at x=0, x=width,
    y=0 and y=height. Virtual rooms are the same rectangle translated to
    another origin.

    Attributes:
        width: Room width (default: 200)
        height: Room height (default: 200)
    """
    width: float = ROOM_WIDTH
    height: float = ROOM_HEIGHT

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(
                f"Room size must be positive, got {self.width}x{self.height}"
            )

    def wall_coordinate(self, side: str, origin: Any = (0, 0)) -> float:
        """
        World coordinate of a wall for a room whose origin is `origin`.

        Args:
            side: 'top', 'right', 'bottom' or 'left'
            origin: Room origin (top-left corner), defaults to the real room

        Returns:
            The y coordinate for 'top'/'bottom', the x coordinate for
            'left'/'right'.
        """
        validate_side(side)
        o = to_point(origin)
        if side == 'top':
            return o.y
        if side == 'bottom':
            return o.y + self.height
        if side == 'left':
            return o.x
        return o.x + self.width

    def wall_segment(self, side: str, origin: Any = (0, 0)) -> LineString:
        """The finite wall of `side` as a Shapely LineString."""
        o = to_point(origin)
        c = self.wall_coordinate(side, o)
        if side in HORIZONTAL_SIDES:
            return LineString([(o.x, c), (o.x + self.width, c)])
        return LineString([(c, o.y), (c, o.y + self.height)])

    def wall_length(self, side: str) -> float:
        validate_side(side)
        return self.width if side in HORIZONTAL_SIDES else self.height

    def polygon(self, origin: Any = (0, 0)) -> Polygon:
        """The room rectangle at `origin` as a Shapely box."""
        o = to_point(origin)
        return box(o.x, o.y, o.x + self.width, o.y + self.height)

    def contains(self, point: Any, origin: Any = (0, 0)) -> bool:
        """True if the point lies inside the room or on its boundary."""
        return self.polygon(origin).covers(to_point(point).to_shapely())

    def clamp(self, point: Any, padding: float = 0.0) -> Point:
        """Clamp a point into the room, keeping `padding` from every wall."""
        p = to_point(point)
        return Point(
            max(padding, min(self.width - padding, p.x)),
            max(padding, min(self.height - padding, p.y)),
        )


DEFAULT_ROOM = RoomGeometry()


class Geometry:
    """
    Geometry primitives shared by the image generator and the ray path
    reconstructor. All operations return fresh Points.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        return Point(x, y)

    @staticmethod
    def reflect_point(point: Any, side: str, room: RoomGeometry = DEFAULT_ROOM) -> Point:
        """
        Reflect a point across one wall of the real room.

        top -> (x, -y), bottom -> (x, 2H - y),
        left -> (-x, y), right -> (2W - x, y)

        Args:
            point: The point to reflect
            side: Mirror side
            room: Room geometry

        Returns:
            The reflected point
        """
        validate_side(side)
        p = to_point(point)
        if side == 'top':
            return Point(p.x, -p.y)
        if side == 'bottom':
            return Point(p.x, 2 * room.height - p.y)
        if side == 'left':
            return Point(-p.x, p.y)
        return Point(2 * room.width - p.x, p.y)

    @staticmethod
    def reflect_vector(vector: Any, side: str) -> Point:
        """
        Reflect a direction vector across a wall's axis.

        Horizontal mirrors negate the y component, vertical mirrors the x
        component.
        """
        validate_side(side)
        v = to_point(vector)
        if side in HORIZONTAL_SIDES:
            return Point(v.x, -v.y)
        return Point(-v.x, v.y)

    @staticmethod
    def reflect_room_origin(origin: Any, side: str, room: RoomGeometry = DEFAULT_ROOM) -> Point:
        """
        Origin of a room rectangle after reflecting it across a real wall.

        The reflected rectangle's far corner becomes its new origin, so a
        reflection across y=0 maps origin y to -y - H and one across y=H
        maps it to H - y.
        """
        validate_side(side)
        o = to_point(origin)
        if side == 'top':
            return Point(o.x, -o.y - room.height)
        if side == 'bottom':
            return Point(o.x, room.height - o.y)
        if side == 'left':
            return Point(-o.x - room.width, o.y)
        return Point(room.width - o.x, o.y)

    @staticmethod
    def distance(p1: Any, p2: Any) -> float:
        a = to_point(p1)
        b = to_point(p2)
        return math.hypot(a.x - b.x, a.y - b.y)

    @staticmethod
    def path_length(points: Sequence[Any]) -> float:
        """
        Total length of a polyline.

        Args:
            points: Ordered path vertices (at least one)

        Returns:
            Sum of the segment lengths (0.0 for a single point)
        """
        if len(points) < 2:
            return 0.0
        coords = np.array([to_point(p).as_tuple() for p in points], dtype=float)
        steps = np.diff(coords, axis=0)
        return float(np.hypot(steps[:, 0], steps[:, 1]).sum())

    @staticmethod
    def ray_path_linestring(points: Sequence[Any]) -> LineString:
        """Convert a ray path to a Shapely LineString (for drawing or queries)."""
        return LineString([to_point(p).as_tuple() for p in points])


# Create a singleton instance for convenience
geometry = Geometry()
