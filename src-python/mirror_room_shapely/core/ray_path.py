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

Ray path reconstruction by backward unfolding.

A virtual image seen in a straight line from the viewer corresponds to a
real ray that bounces between the mirrors. Walking the straight line back
from the viewer, the last mirror it crosses is the last physical bounce;
reflecting the remaining part of the line across that mirror gives the
previous leg, and so on until a leg crosses no mirror.
A line through a corner where two mirrors meet bounces off both at once.
"""

from typing import Any, List

from .constants import (
    CORNER_TOLERANCE,
    CROSSING_EPSILON,
    ENDPOINT_TOLERANCE,
    HORIZONTAL_SIDES,
    PATH_LENGTH_TOLERANCE,
)
from .crossings import MirrorCrossing, find_all_mirror_crossings
from .exceptions import (
    BounceLimitExceededError,
    NoMirrorCrossingError,
    PathLengthMismatchError,
)
from .geometry import Point, RoomGeometry, DEFAULT_ROOM, geometry, to_point
from .mirror_config import MirrorConfig
from .virtual_image import VirtualImage


class RayPathReconstructor:
    """
    Recovers the physical bounce path behind a virtual image.

    Attributes:
        room (RoomGeometry): Room the mirrors belong to
        strict (bool): Raise NoMirrorCrossingError when a reflected image
            crosses no mirror, instead of falling back to the direct line
        tolerance (float): Allowed path length mismatch
        verbose (int): Verbosity level
            0 = silent
            1 = bounce summary
            2 = every unfolding step
    """

    def __init__(
        self,
        room: RoomGeometry = DEFAULT_ROOM,
        strict: bool = False,
        tolerance: float = PATH_LENGTH_TOLERANCE,
        verbose: int = 0
    ) -> None:
        self.room: RoomGeometry = room
        self.strict: bool = strict
        self.tolerance: float = tolerance
        self.verbose: int = verbose

    def unfold_bounces(
        self,
        virtual_image: VirtualImage,
        viewer_position: Any,
        mirrors: Any
    ) -> List[MirrorCrossing]:
        """
        Find the mirror bounces along the line from the image to the viewer.

        A line through a room corner where two active mirrors meet is a
        double bounce: both crossings are recorded at the corner and the
        remaining line is reflected across both axes.

        Args:
            virtual_image: The image being looked at (depth >= 1)
            viewer_position: Viewer position
            mirrors: Mirror configuration

        Returns:
            Bounce crossings in travel order, source to viewer (empty if
            the line crosses no active mirror)

        Raises:
            BounceLimitExceededError: The line keeps crossing mirrors after
                depth bounces
        """
        config = MirrorConfig.from_value(mirrors)
        segment_start = to_point(virtual_image.position)
        segment_end = to_point(viewer_position)
        bounces: List[MirrorCrossing] = []

        # At least one bounce per iteration, at most one per reflection of the image
        for _ in range(virtual_image.depth + 1):
            crossings = find_all_mirror_crossings(
                segment_start, segment_end, config, self.room,
                epsilon=self._endpoint_epsilon(segment_start, segment_end)
            )
            if self.verbose >= 2:
                print(f"  segment ({segment_start.x:.4f}, {segment_start.y:.4f}) -> "
                      f"({segment_end.x:.4f}, {segment_end.y:.4f}): {len(crossings)} crossings")
            if not crossings:
                break

            # Largest t is the crossing nearest the viewer side of the segment
            hit = crossings[-2:] if self._is_corner(crossings) else crossings[-1:]
            if len(bounces) + len(hit) > virtual_image.depth:
                raise BounceLimitExceededError(
                    f"Image '{virtual_image.id}' still crosses "
                    f"{[c.side for c in crossings]} after {len(bounces)} of "
                    f"{virtual_image.depth} bounces"
                )

            if len(hit) == 2:
                corner = self._corner_point(hit)
                hit = [MirrorCrossing(point=corner.copy(), side=c.side, t=c.t) for c in hit]
            point = hit[0].point
            if self.verbose >= 2:
                sides = ' + '.join(c.side for c in hit)
                print(f"    bounce on {sides} at ({point.x:.4f}, {point.y:.4f}), t={hit[-1].t:.4f}")

            incoming = Point(point.x - segment_start.x, point.y - segment_start.y)
            for crossing in hit:
                incoming = geometry.reflect_vector(incoming, crossing.side)
            segment_start = Point(point.x - incoming.x, point.y - incoming.y)
            segment_end = point.copy()
            # Kept in reverse travel order until the end
            bounces.extend(reversed(hit))

        bounces.reverse()
        return bounces

    @staticmethod
    def _endpoint_epsilon(start: Point, end: Point) -> float:
        """t window that drops only crossings within ENDPOINT_TOLERANCE of an end."""
        length = geometry.distance(start, end)
        if length <= 0:
            return CROSSING_EPSILON
        return min(CROSSING_EPSILON, ENDPOINT_TOLERANCE / length)

    @staticmethod
    def _is_corner(crossings: List[MirrorCrossing]) -> bool:
        """True if the two last crossings meet at a corner of perpendicular walls."""
        if len(crossings) < 2:
            return False
        a, b = crossings[-2], crossings[-1]
        if (a.side in HORIZONTAL_SIDES) == (b.side in HORIZONTAL_SIDES):
            return False
        return geometry.distance(a.point, b.point) <= CORNER_TOLERANCE

    @staticmethod
    def _corner_point(hit: List[MirrorCrossing]) -> Point:
        horizontal, vertical = sorted(hit, key=lambda c: c.side not in HORIZONTAL_SIDES)
        return Point(vertical.point.x, horizontal.point.y)

    def reconstruct(
        self,
        virtual_image: VirtualImage,
        real_source_position: Any,
        viewer_position: Any,
        mirrors: Any
    ) -> List[Point]:
        """
        Reconstruct the path [source, bounce_1, ..., bounce_k, viewer].

        Args:
            virtual_image: The image the viewer is looking at
            real_source_position: Position of the real object the image shows
            viewer_position: Viewer position
            mirrors: Mirror configuration

        Returns:
            Fresh Points in travel order, source to viewer

        Raises:
            NoMirrorCrossingError: strict mode and a reflected image crosses
                no mirror
            PathLengthMismatchError: The path length differs from the
                image-to-viewer distance by more than the tolerance
            InvalidConfigurationError: Invalid mirrors or points
        """
        source = to_point(real_source_position)
        viewer = to_point(viewer_position)
        config = MirrorConfig.from_value(mirrors)

        if virtual_image.depth == 0:
            return [source, viewer]

        bounces = self.unfold_bounces(virtual_image, viewer, config)
        if not bounces:
            message = (
                f"Image '{virtual_image.id}' at ({virtual_image.position.x}, "
                f"{virtual_image.position.y}) crosses no active mirror on its way to the viewer"
            )
            if self.strict:
                raise NoMirrorCrossingError(message, image_id=virtual_image.id)
            if self.verbose >= 1:
                print(f"### RAY PATH {message}; using the direct line")

        path = [source]
        for bounce in bounces:
            # A corner bounce is two crossings at one point
            if bounce.point != path[-1]:
                path.append(bounce.point)
        path.append(viewer)
        self.check_path_length(path, virtual_image, viewer)

        if self.verbose >= 1:
            sides = ' -> '.join(b.side for b in bounces) or 'direct'
            print(f"### RAY PATH {virtual_image.id}: {len(bounces)} bounces ({sides})")
        return path

    def check_path_length(self, path: List[Point], virtual_image: VirtualImage, viewer: Point) -> float:
        """
        Assert that the folded path is as long as the unfolded straight line.

        Returns:
            The path length

        Raises:
            PathLengthMismatchError: If the lengths differ beyond tolerance
        """
        length = geometry.path_length(path)
        expected = geometry.distance(virtual_image.position, viewer)
        if abs(length - expected) > self.tolerance:
            raise PathLengthMismatchError(
                f"Ray path for '{virtual_image.id}' is {length:.4f} long but the "
                f"virtual image is {expected:.4f} from the viewer "
                f"(tolerance {self.tolerance})",
                path_length=length,
                virtual_distance=expected,
                tolerance=self.tolerance,
            )
        return length


def reconstruct_ray_path(
    virtual_image: VirtualImage,
    real_source_position: Any,
    viewer_position: Any,
    mirror_config: Any,
    room: RoomGeometry = DEFAULT_ROOM,
    strict: bool = False,
    tolerance: float = PATH_LENGTH_TOLERANCE,
    verbose: int = 0
) -> List[Point]:
    """
    Reconstruct the bounce path from the real source to the viewer.

    Convenience wrapper around RayPathReconstructor.reconstruct().

    Example:
        >>> image = reflect_across_mirror((100, 75), 'triangle', 'top', 1)
        >>> reconstruct_ray_path(image, (100, 75), (100, 175), [True, False, False, False])
        [Point(x=100, y=75), Point(x=100.0, y=0), Point(x=100, y=175)]
    """
    reconstructor = RayPathReconstructor(
        room=room, strict=strict, tolerance=tolerance, verbose=verbose
    )
    return reconstructor.reconstruct(virtual_image, real_source_position, viewer_position, mirror_config)
