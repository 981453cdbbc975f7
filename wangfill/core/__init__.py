"""
Core autotiling functionality.

This package contains the positional color model, terrain set description,
the three-phase Wang filler, and paint target resolution / orchestration.
"""

from .wang_id import CellInfo, WangId, WangPosition
from .terrain_set import TerrainSet, TerrainSetType, TileTerrainData
from .wang_filler import WangFiller
from .paint_target import Corner, HorizontalEdge, PaintTarget, VerticalEdge, get_paint_target
from .painting import (
    paint_terrain,
    paint_terrain_at_target,
    paint_terrain_horizontal_edge,
    paint_terrain_vertical_edge,
    preview_terrain_at_target,
    preview_terrain_at_targets,
    update_tile_with_neighbors,
)

__all__ = [
    "CellInfo",
    "WangId",
    "WangPosition",
    "TerrainSet",
    "TerrainSetType",
    "TileTerrainData",
    "WangFiller",
    "PaintTarget",
    "Corner",
    "HorizontalEdge",
    "VerticalEdge",
    "get_paint_target",
    "paint_terrain",
    "paint_terrain_at_target",
    "paint_terrain_horizontal_edge",
    "paint_terrain_vertical_edge",
    "preview_terrain_at_target",
    "preview_terrain_at_targets",
    "update_tile_with_neighbors",
]
