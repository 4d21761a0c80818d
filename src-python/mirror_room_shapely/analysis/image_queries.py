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

Query helpers over generator output.

These are lookups over a flat list of VirtualImage records; none of them
parse image ids.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..core.geometry import RoomGeometry, DEFAULT_ROOM, validate_side
from ..core.virtual_image import VirtualImage, VirtualRoom, validate_source_type


def get_image_by_id(images: Iterable[VirtualImage], image_id: str) -> VirtualImage:
    """
    Find a virtual image by its id.

    Raises:
        ValueError: If no image has that id.
    """
    images = list(images)
    for image in images:
        if image.id == image_id:
            return image
    available = [image.id for image in images]
    raise ValueError(
        f"No virtual image with id '{image_id}'. "
        f"Available ids: {available if available else '(none)'}"
    )


def get_images_by_source(images: Iterable[VirtualImage], source_type: str) -> List[VirtualImage]:
    validate_source_type(source_type)
    return [image for image in images if image.source_type == source_type]


def get_images_by_depth(images: Iterable[VirtualImage], depth: int) -> List[VirtualImage]:
    return [image for image in images if image.depth == depth]


def get_images_by_mirror_sequence(
    images: Iterable[VirtualImage],
    sequence: Sequence[str],
    source_type: Optional[str] = None
) -> List[VirtualImage]:
    """
    Images produced by exactly this chain of mirror sides.

    Args:
        images: Images to search
        sequence: Mirror sides in bounce order, e.g. ('top', 'left')
        source_type: Optionally restrict to 'triangle' or 'viewer'

    Returns:
        Matching images (one per source type unless images were deduplicated)
    """
    wanted = tuple(validate_side(side) for side in sequence)
    if source_type is not None:
        validate_source_type(source_type)
    return [
        image for image in images
        if image.mirror_sequence == wanted
        and (source_type is None or image.source_type == source_type)
    ]


def locate_image_room(
    image: VirtualImage,
    rooms: Iterable[VirtualRoom],
    room: RoomGeometry = DEFAULT_ROOM
) -> Optional[VirtualRoom]:
    """
    The virtual room whose rectangle covers the image position.

    Rooms are checked in order, so with shared boundaries the earliest
    (shallowest) room wins. Returns None for images inside the real room
    or outside every generated room.
    """
    point = image.position.to_shapely()
    for candidate in rooms:
        if candidate.polygon(room).covers(point):
            return candidate
    return None
