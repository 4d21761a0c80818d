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

Analysis utilities over the output of the image generator and the ray
path reconstructor:

- Lookups of images by id, source, depth or mirror sequence
- Which virtual room an image sits in (Shapely)
- Ray paths for every image, and a non-raising path length audit
- XML / text descriptions of a generation result
"""

from .image_queries import (
    get_image_by_id,
    get_images_by_source,
    get_images_by_depth,
    get_images_by_mirror_sequence,
    locate_image_room,
)
from .ray_path_analysis import (
    PathLengthAudit,
    compute_all_ray_paths,
    audit_path_lengths,
)
from .report import describe_virtual_images

__all__ = [
    'get_image_by_id',
    'get_images_by_source',
    'get_images_by_depth',
    'get_images_by_mirror_sequence',
    'locate_image_room',
    'PathLengthAudit',
    'compute_all_ray_paths',
    'audit_path_lengths',
    'describe_virtual_images',
]
