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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from shapely.geometry import Polygon

from .constants import OPACITY_STEP, SOURCE_TYPES, HORIZONTAL_SIDES
from .exceptions import InvalidConfigurationError
from .geometry import Point, RoomGeometry, DEFAULT_ROOM, geometry, to_point
from .mirror_config import MirrorConfig


def opacity_for_depth(depth: int) -> float:
    """Cosmetic opacity hint for a depth: 1 - depth * 0.3 (not clamped)."""
    return 1.0 - depth * OPACITY_STEP


def make_image_id(source_type: str, depth: int, mirror_sequence: Tuple[str, ...]) -> str:
    """
    Identifier such as 'triangle-d2-top-left'.

    The id is built from the mirror sequence for display and identity;
    code that needs the sequence reads VirtualImage.mirror_sequence.
    """
    return '-'.join([source_type, f"d{depth}", *mirror_sequence])


def validate_source_type(source_type: str) -> str:
    if source_type not in SOURCE_TYPES:
        raise InvalidConfigurationError(
            f"Invalid source type '{source_type}'. "
            f"Valid options: {SOURCE_TYPES}"
        )
    return source_type


@dataclass
class VirtualImage:
    """
    A mirror image of the triangle or the viewer.

    Attributes:
        id: Identifier built from source type, depth and mirror sequence
        source_type: 'triangle' or 'viewer'
        position: World position (may lie outside the real room)
        flipped_x: Cumulative parity of reflections across left/right
        flipped_y: Cumulative parity of reflections across top/bottom
        depth: Number of reflections (>= 1 for generated images)
        opacity: Rendering hint, 1 - depth * 0.3
        mirror_sequence: Mirror sides in bounce order, source to viewer
        ray_path: Optional reconstructed path, attached by MirrorRoom
    """
    id: str
    source_type: str
    position: Point
    flipped_x: bool
    flipped_y: bool
    depth: int
    opacity: float
    mirror_sequence: Tuple[str, ...] = ()
    ray_path: Optional[List[Point]] = None

    @property
    def label(self) -> str:
        """Display label, e.g. 'triangle via top -> left'."""
        if not self.mirror_sequence:
            return f"{self.source_type} (real)"
        return f"{self.source_type} via {' -> '.join(self.mirror_sequence)}"

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'source_type': self.source_type,
            'position': self.position.to_dict(),
            'flipped_x': self.flipped_x,
            'flipped_y': self.flipped_y,
            'depth': self.depth,
            'opacity': self.opacity,
            'mirror_sequence': list(self.mirror_sequence),
        }
        if self.ray_path is not None:
            data['ray_path'] = [p.to_dict() for p in self.ray_path]
        return data


@dataclass
class VirtualRoom:
    """
    The room rectangle as seen through a chain of reflections.

    Attributes:
        position: World offset of the room's own origin (top-left corner)
        mirrors: Mirror flags of this virtual room, after the side swaps
        depth: Number of reflections (the real room, depth 0, is never emitted)
        opacity: Rendering hint, 1 - depth * 0.3
        mirror_sequence: The first chain of sides that produced this room
    """
    position: Point
    mirrors: MirrorConfig
    depth: int
    opacity: float
    mirror_sequence: Tuple[str, ...] = ()

    def polygon(self, room: RoomGeometry = DEFAULT_ROOM) -> Polygon:
        """The area this room covers in world coordinates."""
        return room.polygon(self.position)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'position': self.position.to_dict(),
            'mirrors': self.mirrors.to_list(),
            'depth': self.depth,
            'opacity': self.opacity,
            'mirror_sequence': list(self.mirror_sequence),
        }


@dataclass
class VirtualImageResult:
    """
    Output of the image generator.

    Unpacks as (virtual_objects, virtual_rooms).
    """
    virtual_objects: List[VirtualImage] = field(default_factory=list)
    virtual_rooms: List[VirtualRoom] = field(default_factory=list)

    def __iter__(self) -> Iterator[list]:
        return iter((self.virtual_objects, self.virtual_rooms))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'virtual_objects': [o.to_dict() for o in self.virtual_objects],
            'virtual_rooms': [r.to_dict() for r in self.virtual_rooms],
        }


def reflect_across_mirror(
    position: Any,
    source_type: str,
    side: str,
    depth: int,
    room: RoomGeometry = DEFAULT_ROOM,
    base_flips: Optional[Tuple[bool, bool]] = None,
    parent_sequence: Tuple[str, ...] = ()
) -> VirtualImage:
    """
    Reflect any point across any wall of the real room.

    Reflecting across top/bottom toggles flipped_y, across left/right
    toggles flipped_x.

    Args:
        position: Point being reflected (the real object or a previous image)
        source_type: 'triangle' or 'viewer'
        side: Mirror side
        depth: Depth of the resulting image
        room: Room geometry
        base_flips: (flipped_x, flipped_y) carried from the previous image
        parent_sequence: Mirror sequence of the previous image

    Returns:
        A new VirtualImage
    """
    validate_source_type(source_type)
    flipped_x, flipped_y = base_flips if base_flips is not None else (False, False)
    if side in HORIZONTAL_SIDES:
        flipped_y = not flipped_y
    else:
        flipped_x = not flipped_x

    sequence = tuple(parent_sequence) + (side,)
    return VirtualImage(
        id=make_image_id(source_type, depth, sequence),
        source_type=source_type,
        position=geometry.reflect_point(to_point(position), side, room),
        flipped_x=flipped_x,
        flipped_y=flipped_y,
        depth=depth,
        opacity=opacity_for_depth(depth),
        mirror_sequence=sequence,
    )
