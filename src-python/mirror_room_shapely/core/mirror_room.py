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

from typing import Any, Dict, List, Optional

from .constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_TRIANGLE_POSITION,
    DEFAULT_VIEWER_POSITION,
    OBJECT_PADDING,
    SOURCE_TYPES,
)
from .geometry import Point, RoomGeometry, DEFAULT_ROOM, to_point
from .image_generator import VirtualImageGenerator, validate_depth
from .mirror_config import MirrorConfig
from .ray_path import RayPathReconstructor
from .virtual_image import VirtualImageResult, VirtualRoom, validate_source_type


class MirrorRoom:
    """
    Authoring state of a mirror room: mirror flags, the triangle and the
    viewer, and the reflection depth the images are computed to.

    The engine itself is stateless; this object only holds the values the
    engine is queried with and recomputes everything on every call.

    Attributes:
        room (RoomGeometry): Room size
        mirrors (MirrorConfig): Current mirror flags
        max_reflection_depth (int): Depth passed to the generator
        selected_image_id (str or None): Image whose ray path is attached
            by get_virtual_objects()
        warning (str or None): Set when the last query hit a non-fatal problem
        verbose (int): Verbosity passed to the generator and reconstructor
    """

    def __init__(
        self,
        room: RoomGeometry = DEFAULT_ROOM,
        mirrors: Any = None,
        max_reflection_depth: int = DEFAULT_MAX_DEPTH,
        verbose: int = 0
    ) -> None:
        self.room: RoomGeometry = room
        self.mirrors: MirrorConfig = MirrorConfig.from_value(mirrors) if mirrors is not None else MirrorConfig()
        self._max_reflection_depth: int = validate_depth(max_reflection_depth)
        self._positions: Dict[str, Point] = {
            'triangle': to_point(DEFAULT_TRIANGLE_POSITION),
            'viewer': to_point(DEFAULT_VIEWER_POSITION),
        }
        self.selected_image_id: Optional[str] = None
        self.warning: Optional[str] = None
        self.verbose: int = verbose

    @property
    def max_reflection_depth(self) -> int:
        return self._max_reflection_depth

    @max_reflection_depth.setter
    def max_reflection_depth(self, value: int) -> None:
        self._max_reflection_depth = validate_depth(value)

    # Mirrors

    def set_mirror(self, side: str, enabled: bool) -> None:
        self.mirrors = self.mirrors.with_mirror(side, enabled)

    def toggle_mirror(self, side: str) -> None:
        self.mirrors = self.mirrors.toggled(side)

    def get_mirrors(self) -> Dict[str, bool]:
        return self.mirrors.to_dict()

    # Objects

    def move_object(self, source_type: str, position: Any, padding: float = OBJECT_PADDING) -> Point:
        """
        Move the triangle or the viewer, clamped inside the room.

        Args:
            source_type: 'triangle' or 'viewer'
            position: Requested position
            padding: Minimum distance kept from every wall

        Returns:
            The position actually stored (a copy)
        """
        validate_source_type(source_type)
        self._positions[source_type] = self.room.clamp(position, padding)
        return self._positions[source_type].copy()

    def get_object_position(self, source_type: str) -> Point:
        validate_source_type(source_type)
        return self._positions[source_type].copy()

    def get_objects(self) -> Dict[str, Point]:
        return {source_type: self._positions[source_type].copy() for source_type in SOURCE_TYPES}

    def is_point_in_room(self, point: Any) -> bool:
        return self.room.contains(point)

    # Virtual images

    def select_virtual_image_for_ray(self, image_id: Optional[str]) -> None:
        """Select the image whose ray path is computed, or None to clear."""
        self.selected_image_id = image_id

    def get_virtual_objects(self) -> VirtualImageResult:
        """
        Generate the virtual images and rooms for the current state.

        When an image is selected, its reconstructed ray path is attached
        as `ray_path`. A selection that matches no generated image (for
        instance after its mirror was switched off) sets `warning`.
        """
        self.warning = None
        generator = VirtualImageGenerator(room=self.room, verbose=self.verbose)
        result = generator.generate(self.get_objects(), self.mirrors, self.max_reflection_depth)

        if self.selected_image_id is not None:
            selected = next(
                (o for o in result.virtual_objects if o.id == self.selected_image_id), None
            )
            if selected is None:
                self.warning = f"Selected image '{self.selected_image_id}' is not visible"
            else:
                reconstructor = RayPathReconstructor(room=self.room, verbose=self.verbose)
                selected.ray_path = reconstructor.reconstruct(
                    selected,
                    self._positions[selected.source_type],
                    self._positions['viewer'],
                    self.mirrors,
                )
        return result

    def get_virtual_rooms(self) -> List[VirtualRoom]:
        generator = VirtualImageGenerator(room=self.room, verbose=self.verbose)
        return generator.generate(self.get_objects(), self.mirrors, self.max_reflection_depth).virtual_rooms

    def __repr__(self) -> str:
        active = ', '.join(self.mirrors.active_sides()) or 'none'
        return (f"MirrorRoom({self.room.width}x{self.room.height}, mirrors=[{active}], "
                f"triangle={self._positions['triangle']}, viewer={self._positions['viewer']}, "
                f"max_depth={self.max_reflection_depth})")
