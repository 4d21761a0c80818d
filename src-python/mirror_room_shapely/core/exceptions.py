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

Exceptions raised by the mirror room engine.

Hierarchy:
- MirrorRoomError (base)
  - InvalidConfigurationError (also a ValueError): bad input, rejected
    before any computation
  - RayPathError: ray path reconstruction failures
    - NoMirrorCrossingError: a reflected image with no mirror crossing
      (only raised in strict mode)
    - PathLengthMismatchError (also an AssertionError): the folded path
      does not have the length of the unfolded straight line
    - BounceLimitExceededError: more bounces than the image depth
"""

from typing import Optional


class MirrorRoomError(Exception):
    """
    Base class for all mirror room errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidConfigurationError(MirrorRoomError, ValueError):
    """
    Invalid input passed to the engine.

    Typical causes: a mirror vector that does not have exactly four
    boolean entries, an unknown mirror side or source type, a negative
    or non-integer reflection depth, or a point that cannot be parsed.
    """
    pass


class RayPathError(MirrorRoomError):
    """Base class for ray path reconstruction errors."""
    pass


class NoMirrorCrossingError(RayPathError):
    """
    A reflected image (depth >= 1) whose line of sight to the viewer
    crosses no active mirror.

    Only raised when reconstruction runs with strict=True; otherwise the
    reconstructor falls back to the direct line and lets the path length
    check decide whether that is consistent.
    """

    def __init__(self, message: str, image_id: Optional[str] = None) -> None:
        self.image_id = image_id
        super().__init__(message)


class PathLengthMismatchError(RayPathError, AssertionError):
    """
    The reconstructed path length differs from the straight-line distance
    between the virtual image and the viewer.

    This signals a geometry or crossing-detection defect.

    Attributes:
        path_length: Length of the reconstructed multi-segment path
        virtual_distance: Distance from the virtual image to the viewer
        tolerance: The tolerance that was exceeded
    """

    def __init__(
        self,
        message: str,
        path_length: float,
        virtual_distance: float,
        tolerance: float
    ) -> None:
        self.path_length = path_length
        self.virtual_distance = virtual_distance
        self.tolerance = tolerance
        super().__init__(message)


class BounceLimitExceededError(RayPathError):
    """The unfolding loop found more bounces than the image depth allows."""
    pass
