"""Shared pytest fixtures for Wang fill tests."""

from pathlib import Path

import pytest

from wangfill.core.terrain_set import TerrainSet, TerrainSetType
from wangfill.formats.tile_layer import TileLayer


def _corner_tile_id(tl: int, tr: int, bl: int, br: int) -> int:
    """Id of the blob tile with the given corner terrains (0 or 1 each)."""
    return 1 + (tl << 3 | tr << 2 | bl << 1 | br)


@pytest.fixture
def fixtures_dir():
    """Path to JSON test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def edge_terrain_set(fixtures_dir):
    """Load the two-terrain edge set from JSON."""
    return TerrainSet.load(fixtures_dir / "edge_terrain_set.json")


@pytest.fixture
def small_layer(fixtures_dir):
    """Load a 3x2 layer with a mix of tiles and empty cells."""
    return TileLayer.load(fixtures_dir / "small_layer.json")


@pytest.fixture
def edge_set():
    """Edge set with tile 1 = all grass and tile 2 = all dirt."""
    terrain_set = TerrainSet(TerrainSetType.EDGE, ["grass", "dirt"], "edges")
    terrain_set.set_tile_terrain(1, [0, 0, 0, 0])
    terrain_set.set_tile_terrain(2, [1, 1, 1, 1])
    return terrain_set


@pytest.fixture
def corner_tile_id():
    """Map (TL, TR, BL, BR) terrains to the matching tile of `corner_set`."""
    return _corner_tile_id


@pytest.fixture
def corner_set():
    """
    Complete two-terrain corner set (16 blob tiles) plus two weighted variants.

    Tile 17 is a second all-grass tile, tile 18 a second all-dirt tile.
    """
    terrain_set = TerrainSet(TerrainSetType.CORNER, ["grass", "dirt"], "blob")
    for tl in (0, 1):
        for tr in (0, 1):
            for bl in (0, 1):
                for br in (0, 1):
                    terrain_set.set_tile_terrain(_corner_tile_id(tl, tr, bl, br), [tl, tr, bl, br])
    terrain_set.set_tile_terrain(17, [0, 0, 0, 0], probability=0.5)
    terrain_set.set_tile_terrain(18, [1, 1, 1, 1], probability=0.25)
    return terrain_set


@pytest.fixture
def mixed_single_set():
    """Mixed set containing a single tile with terrain 0 everywhere."""
    terrain_set = TerrainSet(TerrainSetType.MIXED, ["grass"], "single")
    terrain_set.set_tile_terrain(1, [0] * 8)
    return terrain_set


@pytest.fixture
def mixed_set():
    """
    Mixed set with three tiles:
        1 = all grass
        2 = dirt corners, grass edges
        3 = all dirt
    """
    terrain_set = TerrainSet(TerrainSetType.MIXED, ["grass", "dirt"], "mixed")
    terrain_set.set_tile_terrain(1, [0] * 8)
    # TL, Top, TR, Right, BR, Bottom, BL, Left
    terrain_set.set_tile_terrain(2, [1, 0, 1, 0, 1, 0, 1, 0])
    terrain_set.set_tile_terrain(3, [1] * 8)
    return terrain_set
