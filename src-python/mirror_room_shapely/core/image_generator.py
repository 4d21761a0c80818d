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

Virtual image generator (method of images).

Each active mirror reflects the real triangle and viewer once (depth 1).
Every image of depth d-1 is then reflected across every active mirror to
give depth d, and the room rectangle is tiled the same way.
"""

import numbers
from typing import Any, Dict, List, Mapping, Set, Tuple

import numpy as np

from .constants import SOURCE_TYPES, MAX_SUPPORTED_DEPTH
from .exceptions import InvalidConfigurationError
from .geometry import Point, RoomGeometry, DEFAULT_ROOM, geometry, to_point
from .mirror_config import MirrorConfig
from .virtual_image import (
    VirtualImage,
    VirtualRoom,
    VirtualImageResult,
    opacity_for_depth,
    reflect_across_mirror,
)


def parse_sources(sources: Mapping[str, Any]) -> Dict[str, Point]:
    """
    Read the real object positions from a sources mapping.

    Each entry may be a point (Point, (x, y), {'x', 'y'}) or an object
    record shaped as {'position': point}.

    Returns:
        {'triangle': Point, 'viewer': Point}, fresh copies

    Raises:
        InvalidConfigurationError: If an entry is missing or unreadable.
    """
    if not isinstance(sources, Mapping):
        raise InvalidConfigurationError(
            f"Sources must be a mapping with keys {SOURCE_TYPES}, got {type(sources).__name__}"
        )
    parsed = {}
    for source_type in SOURCE_TYPES:
        if source_type not in sources:
            raise InvalidConfigurationError(f"Missing source '{source_type}'")
        value = sources[source_type]
        if isinstance(value, Mapping) and 'position' in value:
            value = value['position']
        parsed[source_type] = to_point(value)
    return parsed


def validate_depth(max_depth: Any) -> int:
    """
    Reject non-integer, negative and over-cap depths.

    Any integral type is accepted (numpy integers included) and returned
    as a plain int; booleans are not depths.
    """
    if isinstance(max_depth, (bool, np.bool_)) or not isinstance(max_depth, numbers.Integral):
        raise InvalidConfigurationError(
            f"max_depth must be an int, got {max_depth!r}"
        )
    if max_depth < 0:
        raise InvalidConfigurationError(f"max_depth must be >= 0, got {max_depth}")
    if max_depth > MAX_SUPPORTED_DEPTH:
        raise InvalidConfigurationError(
            f"max_depth {max_depth} exceeds the supported maximum {MAX_SUPPORTED_DEPTH}"
        )
    return int(max_depth)


class VirtualImageGenerator:
    """
    Computes every virtual room and object image up to a reflection depth.

    The generator holds no state between calls; the room geometry and the
    verbosity are fixed at construction.

    Attributes:
        room (RoomGeometry): Room the mirrors belong to
        verbose (int): Verbosity level
            0 = silent
            1 = per-depth summary
            2 = every generated room and image
    """

    def __init__(self, room: RoomGeometry = DEFAULT_ROOM, verbose: int = 0) -> None:
        self.room: RoomGeometry = room
        self.verbose: int = verbose

    def generate(
        self,
        sources: Mapping[str, Any],
        mirrors: Any,
        max_depth: int,
        dedupe_images: bool = False
    ) -> VirtualImageResult:
        """
        Generate virtual rooms and images for depths 1..max_depth.

        Args:
            sources: Mapping with 'triangle' and 'viewer' positions
            mirrors: MirrorConfig, 4-entry boolean sequence or side dict
            max_depth: Maximum reflection depth (0 gives empty results)
            dedupe_images: If True, drop images whose (source_type, position)
                was already produced; by default every reflection chain
                keeps its own image

        Returns:
            VirtualImageResult with images and rooms in generation order

        Raises:
            InvalidConfigurationError: Invalid mirrors, sources or depth
        """
        config = MirrorConfig.from_value(mirrors)
        depth_limit = validate_depth(max_depth)
        real = parse_sources(sources)
        result = VirtualImageResult()

        if depth_limit == 0 or config.count == 0:
            if self.verbose >= 1:
                print(f"### GENERATOR nothing to reflect (max_depth={depth_limit}, "
                      f"active={config.active_sides()})")
            return result

        # The real room occupies (0, 0); chains that fold back onto it are not emitted
        seen_rooms: Set[Tuple[float, float]] = {(0, 0)}
        seen_images: Set[Tuple[str, float, float]] = {
            (source_type, *real[source_type].as_tuple()) for source_type in SOURCE_TYPES
        }

        # Depth 1: the real room and the real objects seen through one mirror
        rooms = self._reflect_rooms([self._real_room(config)], config, 1, seen_rooms)
        images: List[VirtualImage] = []
        for side in config.active_sides():
            for source_type in SOURCE_TYPES:
                images.append(reflect_across_mirror(
                    real[source_type], source_type, side, 1, self.room
                ))
        images = self._keep_images(images, dedupe_images, seen_images)
        result.virtual_rooms.extend(rooms)
        result.virtual_objects.extend(images)
        self._report(1, rooms, images)

        # Depth 2..max_depth: reflect the previous depth again
        for depth in range(2, depth_limit + 1):
            rooms = self._reflect_rooms(rooms, config, depth, seen_rooms)
            next_images = []
            for prev in images:
                for side in config.active_sides():
                    next_images.append(reflect_across_mirror(
                        prev.position,
                        prev.source_type,
                        side,
                        depth,
                        self.room,
                        base_flips=(prev.flipped_x, prev.flipped_y),
                        parent_sequence=prev.mirror_sequence,
                    ))
            images = self._keep_images(next_images, dedupe_images, seen_images)
            result.virtual_rooms.extend(rooms)
            result.virtual_objects.extend(images)
            self._report(depth, rooms, images)

        return result

    def _real_room(self, config: MirrorConfig) -> VirtualRoom:
        return VirtualRoom(position=Point(0, 0), mirrors=config, depth=0, opacity=1.0)

    def _reflect_rooms(
        self,
        previous: List[VirtualRoom],
        config: MirrorConfig,
        depth: int,
        seen: Set[Tuple[float, float]]
    ) -> List[VirtualRoom]:
        """Reflect each room across every active mirror, first position wins."""
        rooms = []
        for prev in previous:
            for side in config.active_sides():
                origin = geometry.reflect_room_origin(prev.position, side, self.room)
                key = origin.as_tuple()
                if key in seen:
                    continue
                seen.add(key)
                rooms.append(VirtualRoom(
                    position=origin,
                    mirrors=prev.mirrors.reflected(side),
                    depth=depth,
                    opacity=opacity_for_depth(depth),
                    mirror_sequence=prev.mirror_sequence + (side,),
                ))
        return rooms

    def _keep_images(
        self,
        images: List[VirtualImage],
        dedupe: bool,
        seen: Set[Tuple[str, float, float]]
    ) -> List[VirtualImage]:
        if not dedupe:
            return images
        kept = []
        for image in images:
            key = (image.source_type, *image.position.as_tuple())
            if key in seen:
                continue
            seen.add(key)
            kept.append(image)
        return kept

    def _report(self, depth: int, rooms: List[VirtualRoom], images: List[VirtualImage]) -> None:
        if self.verbose >= 1:
            print(f"### GENERATOR depth {depth}: {len(rooms)} rooms, {len(images)} images")
        if self.verbose >= 2:
            for room in rooms:
                print(f"  room {'-'.join(room.mirror_sequence)} at "
                      f"({room.position.x}, {room.position.y}) mirrors={room.mirrors.to_list()}")
            for image in images:
                print(f"  {image.id} at ({image.position.x}, {image.position.y}) "
                      f"flipped=({image.flipped_x}, {image.flipped_y})")


def generate_virtual_images(
    sources: Mapping[str, Any],
    mirror_config: Any,
    max_depth: int,
    room: RoomGeometry = DEFAULT_ROOM,
    dedupe_images: bool = False,
    verbose: int = 0
) -> VirtualImageResult:
    """
    Compute all virtual images and rooms up to max_depth.

    Convenience wrapper around VirtualImageGenerator.generate().

    Example:
        >>> result = generate_virtual_images(
        ...     {'triangle': (100, 75), 'viewer': (100, 175)},
        ...     [True, False, False, False],
        ...     max_depth=1,
        ... )
        >>> [(o.id, o.position) for o in result.virtual_objects]
        [('triangle-d1-top', Point(x=100, y=-75)), ('viewer-d1-top', Point(x=100, y=-175))]
    """
    generator = VirtualImageGenerator(room=room, verbose=verbose)
    return generator.generate(sources, mirror_config, max_depth, dedupe_images=dedupe_images)
