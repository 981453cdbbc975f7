"""
Wangfill - Paint Targets

Turns a continuous world position into the corner or edge the terrain brush
is painting. World coordinates are Y-up: (0, 0) is the bottom-left of the
tile grid and each tile is `tile_size` units square.
"""

import math
from dataclasses import dataclass
from typing import Union

from .terrain_set import TerrainSetType

# Mixed mode divides a tile into a 3x3 grid of zones at these fractions
MIXED_ZONE_LOW = 0.33
MIXED_ZONE_HIGH = 0.67


@dataclass(frozen=True)
class Corner:
    """Corner intersection shared by up to 4 tiles."""

    corner_x: int
    corner_y: int


@dataclass(frozen=True)
class HorizontalEdge:
    """Edge between tile (tile_x, edge_y - 1) and the tile above it."""

    tile_x: int
    edge_y: int


@dataclass(frozen=True)
class VerticalEdge:
    """Edge between tile (edge_x - 1, tile_y) and the tile to its right."""

    edge_x: int
    tile_y: int


PaintTarget = Union[Corner, HorizontalEdge, VerticalEdge]


def _fract(value: float) -> float:
    """Fractional part wrapped into [0, 1), also for negative values."""
    frac = value - math.trunc(value)
    if frac < 0.0:
        frac += 1.0
    return frac


def _zone(local: float) -> int:
    if local < MIXED_ZONE_LOW:
        return 0
    elif local < MIXED_ZONE_HIGH:
        return 1
    return 2


def get_paint_target(
    world_x: float, world_y: float, tile_size: float, set_type: TerrainSetType
) -> PaintTarget:
    """
    Determine the paint target from a position within a tile.

    Args:
        world_x: World X position (Y-up space)
        world_y: World Y position (Y-up space)
        tile_size: Size of one tile in world units
        set_type: Terrain set topology

    Returns:
        Corner target for corner sets, edge target for edge sets, and either
        for mixed sets depending on the 3x3 zone under the cursor. All
        coordinates are clamped to >= 0; callers check the upper bounds.
    """
    scaled_x = world_x / tile_size
    scaled_y = world_y / tile_size

    tile_x = math.floor(scaled_x)
    tile_y = math.floor(scaled_y)
    local_x = _fract(scaled_x)
    local_y = _fract(scaled_y)

    if set_type == TerrainSetType.CORNER:
        corner_x = tile_x if local_x < 0.5 else tile_x + 1
        corner_y = tile_y if local_y < 0.5 else tile_y + 1
        return Corner(max(corner_x, 0), max(corner_y, 0))

    if set_type == TerrainSetType.EDGE:
        dist_h = abs(local_y - 0.5)
        dist_v = abs(local_x - 0.5)

        if dist_h < dist_v:
            edge_y = tile_y if local_y < 0.5 else tile_y + 1
            return HorizontalEdge(max(tile_x, 0), max(edge_y, 0))
        edge_x = tile_x if local_x < 0.5 else tile_x + 1
        return VerticalEdge(max(edge_x, 0), max(tile_y, 0))

    zone = (_zone(local_x), _zone(local_y))

    if zone == (1, 1):
        # Center zone: nearest corner within the zone
        center_x = (local_x - MIXED_ZONE_LOW) / (MIXED_ZONE_HIGH - MIXED_ZONE_LOW)
        center_y = (local_y - MIXED_ZONE_LOW) / (MIXED_ZONE_HIGH - MIXED_ZONE_LOW)
        corner_x = tile_x if center_x < 0.5 else tile_x + 1
        corner_y = tile_y if center_y < 0.5 else tile_y + 1
        return Corner(max(corner_x, 0), max(corner_y, 0))

    zone_x, zone_y = zone
    if zone_x != 1 and zone_y != 1:
        corner_x = tile_x if zone_x == 0 else tile_x + 1
        corner_y = tile_y if zone_y == 0 else tile_y + 1
        return Corner(max(corner_x, 0), max(corner_y, 0))

    if zone_x == 1:
        edge_y = tile_y if zone_y == 0 else tile_y + 1
        return HorizontalEdge(max(tile_x, 0), max(edge_y, 0))

    edge_x = tile_x if zone_x == 0 else tile_x + 1
    return VerticalEdge(max(edge_x, 0), max(tile_y, 0))
