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

Batch ray path helpers built on the reconstructor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..core.constants import PATH_LENGTH_TOLERANCE
from ..core.exceptions import RayPathError
from ..core.geometry import Point, RoomGeometry, DEFAULT_ROOM, geometry
from ..core.image_generator import parse_sources
from ..core.ray_path import RayPathReconstructor
from ..core.virtual_image import VirtualImage, VirtualImageResult


def _images(result: Any) -> List[VirtualImage]:
    if isinstance(result, VirtualImageResult):
        return result.virtual_objects
    return list(result)


def compute_all_ray_paths(
    result: Any,
    sources: Mapping[str, Any],
    mirrors: Any,
    room: RoomGeometry = DEFAULT_ROOM,
    strict: bool = False,
    tolerance: float = PATH_LENGTH_TOLERANCE
) -> Dict[str, List[Point]]:
    """
    Reconstruct the ray path of every image, keyed by image id.

    Each image is traced from the real object it shows (triangle images
    from the triangle, viewer images from the viewer) to the viewer.

    Args:
        result: VirtualImageResult or a list of VirtualImage
        sources: The sources mapping the images were generated from
        mirrors: Mirror configuration
        room: Room geometry
        strict: Passed to the reconstructor
        tolerance: Path length tolerance

    Raises:
        RayPathError: The first image that fails reconstruction
    """
    real = parse_sources(sources)
    reconstructor = RayPathReconstructor(room=room, strict=strict, tolerance=tolerance)
    return {
        image.id: reconstructor.reconstruct(image, real[image.source_type], real['viewer'], mirrors)
        for image in _images(result)
    }


@dataclass
class PathLengthAudit:
    """
    Path length check for one image.

    Attributes:
        image_id: Image id
        bounce_count: Number of bounce points on the path, a corner counting
            once (None if reconstruction failed)
        path_length: Folded path length (None if reconstruction failed)
        virtual_distance: Straight distance from the image to the viewer
        ok: True if the path was reconstructed within tolerance
        error: Error message when reconstruction failed
    """
    image_id: str
    bounce_count: Optional[int]
    path_length: Optional[float]
    virtual_distance: float
    ok: bool
    error: Optional[str] = None


def audit_path_lengths(
    result: Any,
    sources: Mapping[str, Any],
    mirrors: Any,
    room: RoomGeometry = DEFAULT_ROOM,
    strict: bool = False,
    tolerance: float = PATH_LENGTH_TOLERANCE
) -> List[PathLengthAudit]:
    """
    Check the path length invariant for every image without stopping at
    the first failure.

    Returns:
        One PathLengthAudit per image, in image order
    """
    real = parse_sources(sources)
    reconstructor = RayPathReconstructor(room=room, strict=strict, tolerance=tolerance)
    rows = []
    for image in _images(result):
        distance = geometry.distance(image.position, real['viewer'])
        try:
            path = reconstructor.reconstruct(image, real[image.source_type], real['viewer'], mirrors)
        except RayPathError as exc:
            rows.append(PathLengthAudit(
                image_id=image.id,
                bounce_count=None,
                path_length=None,
                virtual_distance=distance,
                ok=False,
                error=str(exc),
            ))
            continue
        rows.append(PathLengthAudit(
            image_id=image.id,
            bounce_count=len(path) - 2,
            path_length=geometry.path_length(path),
            virtual_distance=distance,
            ok=True,
        ))
    return rows
