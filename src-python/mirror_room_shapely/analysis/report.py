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

Text descriptions of generator output, in XML or human-readable form.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Optional

from ..core.constants import SOURCE_TYPES
from ..core.virtual_image import VirtualImageResult


def _escape_xml(text: Any) -> str:
    """Escape special characters for XML."""
    if text is None:
        return ""
    return (str(text)
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;"))


def _fmt(value: float) -> str:
    return f"{value:.4f}".rstrip('0').rstrip('.')


def describe_virtual_images(
    result: VirtualImageResult,
    format: str = 'xml',
    include_images: bool = False,
    max_images: int = 100
) -> str:
    """
    Generate a formatted description of a generation result.

    Args:
        result: The VirtualImageResult to describe
        format: 'xml' for XML, 'text' for human-readable
        include_images: If True, list individual images
        max_images: Maximum number of images to list (default: 100)

    Returns:
        Formatted description

    Example (XML format):
        >>> print(describe_virtual_images(result))
        <?xml version="1.0" encoding="UTF-8"?>
        <virtual_images>
          <summary>
            <image_count>2</image_count>
            <room_count>1</room_count>
            <max_depth>1</max_depth>
          </summary>
          <by_depth>
            <depth level="1" images="2" rooms="1"/>
          </by_depth>
          <by_source>
            <source type="triangle" images="1"/>
            <source type="viewer" images="1"/>
          </by_source>
        </virtual_images>
    """
    if format == 'xml':
        return _describe_xml(result, include_images, max_images)
    elif format == 'text':
        return _describe_text(result, include_images, max_images)
    raise ValueError(f"Invalid format '{format}'. Valid options: ('xml', 'text')")


def _depths(result: VirtualImageResult) -> List[int]:
    depths = {o.depth for o in result.virtual_objects} | {r.depth for r in result.virtual_rooms}
    return sorted(depths)


def _max_depth(result: VirtualImageResult) -> Optional[int]:
    depths = _depths(result)
    return depths[-1] if depths else None


def _describe_xml(result: VirtualImageResult, include_images: bool, max_images: int) -> str:
    """Generate XML format for a generation result."""
    image_depths = Counter(o.depth for o in result.virtual_objects)
    room_depths = Counter(r.depth for r in result.virtual_rooms)
    sources = Counter(o.source_type for o in result.virtual_objects)
    max_depth = _max_depth(result)

    lines = ['<?xml version="1.0" encoding="UTF-8"?>', '<virtual_images>']

    lines.append('  <summary>')
    lines.append(f'    <image_count>{len(result.virtual_objects)}</image_count>')
    lines.append(f'    <room_count>{len(result.virtual_rooms)}</room_count>')
    lines.append(f'    <max_depth>{max_depth if max_depth is not None else 0}</max_depth>')
    lines.append('  </summary>')

    if max_depth is None:
        lines.append('  <by_depth/>')
    else:
        lines.append('  <by_depth>')
        for depth in _depths(result):
            lines.append(f'    <depth level="{depth}" images="{image_depths[depth]}" '
                         f'rooms="{room_depths[depth]}"/>')
        lines.append('  </by_depth>')

    lines.append('  <by_source>')
    for source_type in SOURCE_TYPES:
        lines.append(f'    <source type="{source_type}" images="{sources[source_type]}"/>')
    lines.append('  </by_source>')

    if include_images:
        shown = result.virtual_objects[:max_images]
        lines.append(f'  <images shown="{len(shown)}" total="{len(result.virtual_objects)}">')
        for image in shown:
            lines.append(
                f'    <image id="{_escape_xml(image.id)}" source="{image.source_type}" '
                f'depth="{image.depth}" x="{_fmt(image.position.x)}" y="{_fmt(image.position.y)}" '
                f'flipped_x="{str(image.flipped_x).lower()}" '
                f'flipped_y="{str(image.flipped_y).lower()}"/>'
            )
        lines.append('  </images>')

    lines.append('</virtual_images>')
    return '\n'.join(lines)


def _describe_text(result: VirtualImageResult, include_images: bool, max_images: int) -> str:
    """Generate human-readable text format for a generation result."""
    lines = []
    lines.append("")
    lines.append("=" * 70)
    lines.append("Virtual Images")
    lines.append("=" * 70)
    lines.append(f"\nImages: {len(result.virtual_objects)}")
    lines.append(f"Rooms: {len(result.virtual_rooms)}")

    lines.append("\nBy depth:")
    for depth in _depths(result):
        images = sum(1 for o in result.virtual_objects if o.depth == depth)
        rooms = sum(1 for r in result.virtual_rooms if r.depth == depth)
        lines.append(f"  depth {depth}: {images} images, {rooms} rooms")

    if include_images:
        lines.append("\nImages:")
        for image in result.virtual_objects[:max_images]:
            lines.append(f"  {image.id}: ({_fmt(image.position.x)}, {_fmt(image.position.y)}) "
                         f"- {image.label}")
        hidden = len(result.virtual_objects) - max_images
        if hidden > 0:
            lines.append(f"  ... {hidden} more")

    lines.append("=" * 70)
    return '\n'.join(lines)
