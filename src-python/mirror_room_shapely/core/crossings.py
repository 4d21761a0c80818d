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

Mirror crossing detection.

Mirrors are the finite walls of the real room, not infinite lines: a
crossing only counts when it lands on the wall segment itself, and only
strictly inside the tested segment (the endpoints are excluded).
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from .constants import CROSSING_EPSILON, PARALLEL_THRESHOLD, WALL_END_TOLERANCE, HORIZONTAL_SIDES
from .geometry import Point, RoomGeometry, DEFAULT_ROOM, to_point, validate_side
from .mirror_config import MirrorConfig


@dataclass
class MirrorCrossing:
    """
    A point where a segment crosses a mirror.

    Attributes:
        point: Crossing point on the wall
        side: Mirror side that was crossed
        t: Line parameter along the tested segment (0 = start, 1 = end)
    """
    point: Point
    side: str
    t: float


def find_mirror_crossing(
    start: Any,
    end: Any,
    side: str,
    room: RoomGeometry = DEFAULT_ROOM,
    epsilon: float = CROSSING_EPSILON
) -> Optional[MirrorCrossing]:
    """
    Find where the segment start -> end crosses one wall.

    Args:
        start: Segment start
        end: Segment end
        side: Mirror side to test
        room: Room geometry
        epsilon: Crossings with t outside (epsilon, 1 - epsilon) are ignored

    Returns:
        The crossing, or None if the segment is parallel to the wall, does
        not reach it, touches it only at an endpoint, or crosses the wall's
        line outside the finite wall. Crossings within WALL_END_TOLERANCE
        past a wall end are snapped onto that end.
    """
    validate_side(side)
    a = to_point(start)
    b = to_point(end)
    dx = b.x - a.x
    dy = b.y - a.y
    wall = room.wall_coordinate(side)

    if side in HORIZONTAL_SIDES:
        if abs(dy) <= PARALLEL_THRESHOLD:
            return None
        t = (wall - a.y) / dy
        if not (epsilon < t < 1 - epsilon):
            return None
        x = a.x + t * dx
        if not (-WALL_END_TOLERANCE <= x <= room.width + WALL_END_TOLERANCE):
            return None
        x = min(max(x, 0), room.width)
        return MirrorCrossing(point=Point(x, wall), side=side, t=t)

    if abs(dx) <= PARALLEL_THRESHOLD:
        return None
    t = (wall - a.x) / dx
    if not (epsilon < t < 1 - epsilon):
        return None
    y = a.y + t * dy
    if not (-WALL_END_TOLERANCE <= y <= room.height + WALL_END_TOLERANCE):
        return None
    y = min(max(y, 0), room.height)
    return MirrorCrossing(point=Point(wall, y), side=side, t=t)


def find_all_mirror_crossings(
    start: Any,
    end: Any,
    mirrors: MirrorConfig,
    room: RoomGeometry = DEFAULT_ROOM,
    epsilon: float = CROSSING_EPSILON
) -> List[MirrorCrossing]:
    """
    All crossings of the segment with the active mirrors, sorted by t.

    Args:
        start: Segment start
        end: Segment end
        mirrors: Mirror configuration (or anything MirrorConfig.from_value accepts)
        room: Room geometry
        epsilon: Endpoint exclusion margin on t

    Returns:
        Crossings in ascending t order (closest to start first)
    """
    config = MirrorConfig.from_value(mirrors)
    crossings = []
    for side in config.active_sides():
        crossing = find_mirror_crossing(start, end, side, room, epsilon)
        if crossing is not None:
            crossings.append(crossing)
    crossings.sort(key=lambda c: c.t)
    return crossings
