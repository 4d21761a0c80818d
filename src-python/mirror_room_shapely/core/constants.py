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

"""
Constants used throughout the mirror room engine.

They are kept in one module so that the geometry primitives, the image
generator and the ray path reconstructor can share them without circular
imports.
"""

# Default room size (world units). The room spans [0, W] x [0, H]
ROOM_WIDTH = 200
ROOM_HEIGHT = 200

# Mirror sides in the index order of a 4-entry mirror vector.
# top -> y=0, right -> x=W, bottom -> y=H, left -> x=0
MIRROR_SIDES = ('top', 'right', 'bottom', 'left')
HORIZONTAL_SIDES = ('top', 'bottom')
VERTICAL_SIDES = ('right', 'left')

# The two real objects placed in the room
SOURCE_TYPES = ('triangle', 'viewer')

# A crossing is accepted only for t in (CROSSING_EPSILON, 1 - CROSSING_EPSILON);
# a segment that starts or ends on a wall does not cross it
CROSSING_EPSILON = 0.001

# Segments whose extent across a wall is below this are treated as parallel
PARALLEL_THRESHOLD = 0.001

# Crossings past a wall end by at most this much are snapped onto the wall end
WALL_END_TOLERANCE = 1e-9

# During unfolding, crossings closer than this distance to either segment end
# are dropped (each segment ends on the wall of the previous bounce)
ENDPOINT_TOLERANCE = 1e-6

# Two crossings on perpendicular walls closer than this are one corner bounce
CORNER_TOLERANCE = 1e-6

# Allowed difference between a reconstructed path and its unfolded straight line
PATH_LENGTH_TOLERANCE = 0.1

# Cosmetic opacity hint: opacity = 1 - depth * OPACITY_STEP (not clamped)
OPACITY_STEP = 0.3

# Reflection depth
DEFAULT_MAX_DEPTH = 3
MAX_SUPPORTED_DEPTH = 8  # 4^8 chains per source is already ~65k images

# Objects moved by the scene are kept this far away from the walls
OBJECT_PADDING = 20

# Default object placement
DEFAULT_TRIANGLE_POSITION = (100, 75)
DEFAULT_VIEWER_POSITION = (100, 175)
