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

from . import constants
from .exceptions import (
    MirrorRoomError,
    InvalidConfigurationError,
    RayPathError,
    NoMirrorCrossingError,
    PathLengthMismatchError,
    BounceLimitExceededError,
)
from .geometry import geometry, Geometry, Point, RoomGeometry, DEFAULT_ROOM, to_point
from .mirror_config import MirrorConfig
from .virtual_image import (
    VirtualImage,
    VirtualRoom,
    VirtualImageResult,
    reflect_across_mirror,
    opacity_for_depth,
)
from .crossings import MirrorCrossing, find_mirror_crossing, find_all_mirror_crossings
from .image_generator import VirtualImageGenerator, generate_virtual_images
from .ray_path import RayPathReconstructor, reconstruct_ray_path
from .mirror_room import MirrorRoom

__all__ = [
    'constants',
    'MirrorRoomError', 'InvalidConfigurationError', 'RayPathError',
    'NoMirrorCrossingError', 'PathLengthMismatchError', 'BounceLimitExceededError',
    'geometry', 'Geometry', 'Point', 'RoomGeometry', 'DEFAULT_ROOM', 'to_point',
    'MirrorConfig',
    'VirtualImage', 'VirtualRoom', 'VirtualImageResult',
    'reflect_across_mirror', 'opacity_for_depth',
    'MirrorCrossing', 'find_mirror_crossing', 'find_all_mirror_crossings',
    'VirtualImageGenerator', 'generate_virtual_images',
    'RayPathReconstructor', 'reconstruct_ray_path',
    'MirrorRoom',
]
