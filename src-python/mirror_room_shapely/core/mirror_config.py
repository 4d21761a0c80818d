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

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Tuple

import numpy as np

from .constants import MIRROR_SIDES, HORIZONTAL_SIDES
from .exceptions import InvalidConfigurationError
from .geometry import validate_side


@dataclass(frozen=True)
class MirrorConfig:
    """
    Which of the four room walls reflect.

    The index order of the list form is MIRROR_SIDES:
    [top, right, bottom, left].

    Attributes:
        top (bool): Wall at y=0
        right (bool): Wall at x=W
        bottom (bool): Wall at y=H
        left (bool): Wall at x=0
    """
    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    def __post_init__(self) -> None:
        for side in MIRROR_SIDES:
            value = getattr(self, side)
            if not isinstance(value, (bool, np.bool_)):
                raise InvalidConfigurationError(
                    f"Mirror flag '{side}' must be a bool, got {value!r}"
                )
            # Frozen: store numpy booleans as plain bool
            object.__setattr__(self, side, bool(value))

    @classmethod
    def from_value(cls, value: Any) -> 'MirrorConfig':
        """
        Build a MirrorConfig from a MirrorConfig, a 4-entry boolean
        sequence in [top, right, bottom, left] order, or a side -> bool dict.

        Raises:
            InvalidConfigurationError: Wrong number of entries, unknown
                sides or non-boolean flags.
        """
        if isinstance(value, MirrorConfig):
            return value
        if isinstance(value, np.ndarray):
            value = value.tolist()
        if isinstance(value, dict):
            unknown = [k for k in value if k not in MIRROR_SIDES]
            if unknown:
                raise InvalidConfigurationError(
                    f"Unknown mirror sides {unknown}. Valid options: {MIRROR_SIDES}"
                )
            return cls(**{side: value.get(side, False) for side in MIRROR_SIDES})
        if isinstance(value, (list, tuple)):
            if len(value) != len(MIRROR_SIDES):
                raise InvalidConfigurationError(
                    f"Mirror configuration needs exactly {len(MIRROR_SIDES)} "
                    f"entries {MIRROR_SIDES}, got {len(value)}"
                )
            return cls(*value)
        raise InvalidConfigurationError(
            f"Cannot interpret {value!r} as a mirror configuration"
        )

    @classmethod
    def from_sides(cls, *sides: str) -> 'MirrorConfig':
        """MirrorConfig with exactly the given sides active."""
        for side in sides:
            validate_side(side)
        return cls(**{side: side in sides for side in MIRROR_SIDES})

    def is_active(self, side: str) -> bool:
        return getattr(self, validate_side(side))

    def active_sides(self) -> Tuple[str, ...]:
        """Active sides in canonical order."""
        return tuple(side for side in MIRROR_SIDES if getattr(self, side))

    @property
    def count(self) -> int:
        return len(self.active_sides())

    def reflected(self, side: str) -> 'MirrorConfig':
        """
        Flags of a room after it is reflected across `side`.

        A horizontal mirror swaps top/bottom and keeps left/right; a
        vertical mirror swaps left/right and keeps top/bottom. Applying
        the same side twice restores the original flags.
        """
        validate_side(side)
        if side in HORIZONTAL_SIDES:
            return replace(self, top=self.bottom, bottom=self.top)
        return replace(self, left=self.right, right=self.left)

    def with_mirror(self, side: str, enabled: bool) -> 'MirrorConfig':
        validate_side(side)
        return replace(self, **{side: enabled})

    def toggled(self, side: str) -> 'MirrorConfig':
        return self.with_mirror(side, not self.is_active(side))

    def to_list(self) -> List[bool]:
        return [getattr(self, side) for side in MIRROR_SIDES]

    def to_dict(self) -> Dict[str, bool]:
        return {side: getattr(self, side) for side in MIRROR_SIDES}
