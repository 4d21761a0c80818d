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

Mirror Room Shapely
===================

Method-of-images engine for a rectangular room whose four walls may be
mirrors. Computes every virtual copy of a light source (the triangle) and
of the viewer up to a reflection depth, and recovers the physical bounce
path behind any virtual image.

Main modules:
- core: Geometry primitives, image generator, ray path reconstructor,
  MirrorRoom scene state
- analysis: Lookups, batch ray paths, invariant audit and text reports

Quick start:
    from mirror_room_shapely import generate_virtual_images, reconstruct_ray_path

    sources = {'triangle': (100, 75), 'viewer': (100, 175)}
    result = generate_virtual_images(sources, [True, False, False, False], 1)
    image = result.virtual_objects[0]
    path = reconstruct_ray_path(image, (100, 75), (100, 175), [True, False, False, False])
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.geometry import Point, RoomGeometry
from .core.mirror_config import MirrorConfig
from .core.image_generator import generate_virtual_images
from .core.ray_path import reconstruct_ray_path
from .core.mirror_room import MirrorRoom

__all__ = [
    'Point',
    'RoomGeometry',
    'MirrorConfig',
    'generate_virtual_images',
    'reconstruct_ray_path',
    'MirrorRoom',
    '__version__',
]
